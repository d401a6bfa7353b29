# gesem/api/dashboard/models.py
from datetime import date

from pydantic import BaseModel

from ...core.constants import BillingStatus, IncomePeriod
from ..clients.models import PageMeta
from ..notes.models import Note


class DashboardStats(BaseModel):
    total: int
    active: int
    near_expiry: int
    expired: int


class IncomePoint(BaseModel):
    label: str
    amount: float


class DashboardIncome(BaseModel):
    period: IncomePeriod
    total: float
    chart: list[IncomePoint]


class DashboardAlert(BaseModel):
    id: int
    name: str
    phone: str
    plan: str
    speed: str
    monthly_amount: float
    next_payment_date: date
    status: BillingStatus
    days_until_due: int


class RecentClient(BaseModel):
    id: int
    name: str
    phone: str
    plan: str
    monthly_amount: float
    status: BillingStatus
    days_until_due: int


class DashboardData(BaseModel):
    stats: DashboardStats
    income: DashboardIncome
    alerts: list[DashboardAlert]
    alerts_total: int
    alerts_meta: PageMeta
    clients_recent: list[RecentClient]
    notes: list[Note]
