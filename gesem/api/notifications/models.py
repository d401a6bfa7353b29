# gesem/api/notifications/models.py
from datetime import date, datetime

from pydantic import BaseModel

from ...core.constants import BillingStatus, NotificationChannel
from ..clients.models import PageMeta


class Alert(BaseModel):
    id: int
    name: str
    phone: str
    plan: str
    speed: str
    monthly_amount: float
    next_payment_date: date
    status: BillingStatus
    days_until_due: int


class AlertPage(BaseModel):
    data: list[Alert]
    meta: PageMeta


class NotificationSend(BaseModel):
    client_id: int
    channel: NotificationChannel
    status: BillingStatus | None = None
    message: str | None = None


class NotificationLog(BaseModel):
    id: int
    client_id: int
    channel: NotificationChannel
    message: str
    status: str
    sent_at: datetime
    link: str
