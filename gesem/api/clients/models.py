# gesem/api/clients/models.py
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ...core.constants import BillingStatus


# --- Modelos Pydantic (Paginación) ---
class PageMeta(BaseModel):
    current_page: int
    last_page: int
    per_page: int
    total: int


# --- Modelos Pydantic (Cliente) ---
class ClientBase(BaseModel):
    name: str = Field(max_length=100)
    dni: str = Field(max_length=20)
    phone: str = Field(max_length=20)
    ip: str = Field(max_length=50)
    install_date: date
    installer: str = Field(max_length=100)
    network_name: str = Field(max_length=50)
    network_password: str = Field(max_length=100)
    plan: str = Field(max_length=100)
    department: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    district: str | None = Field(default=None, max_length=100)
    speed: str = Field(max_length=50)
    upload_speed: str | None = Field(default=None, max_length=50)
    download_speed: str | None = Field(default=None, max_length=50)
    charge_speed: str | None = Field(default=None, max_length=50)
    discharge_speed: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=200)
    coordinates: str | None = Field(default=None, max_length=100)
    reference: str | None = Field(default=None, max_length=200)
    next_payment_date: date


class ClientCreate(ClientBase):
    monthly_amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    is_service_active: bool | None = True


class ClientUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    dni: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=20)
    ip: str | None = Field(default=None, max_length=50)
    install_date: date | None = None
    installer: str | None = Field(default=None, max_length=100)
    network_name: str | None = Field(default=None, max_length=50)
    network_password: str | None = Field(default=None, max_length=100)
    plan: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    district: str | None = Field(default=None, max_length=100)
    speed: str | None = Field(default=None, max_length=50)
    upload_speed: str | None = Field(default=None, max_length=50)
    download_speed: str | None = Field(default=None, max_length=50)
    charge_speed: str | None = Field(default=None, max_length=50)
    discharge_speed: str | None = Field(default=None, max_length=50)
    monthly_amount: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    address: str | None = Field(default=None, max_length=200)
    coordinates: str | None = Field(default=None, max_length=100)
    reference: str | None = Field(default=None, max_length=200)
    next_payment_date: date | None = None
    is_service_active: bool | None = None


class Client(ClientBase):
    id: int
    monthly_amount: float
    is_service_active: bool
    status: BillingStatus
    days_until_due: int
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ClientPage(BaseModel):
    data: list[Client]
    meta: PageMeta
