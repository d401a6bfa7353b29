# gesem/models/client.py
"""
Client model for ISP subscriber management.
"""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(SQLModel, table=True):
    """
    Client model representing ISP subscribers. Each client belongs to one owner.

    Fields:
    - id: Auto-increment primary key
    - user_id: Owner account (every query is filtered by it)
    - name, dni, phone: Identity and contact (dni is unique per owner)
    - ip, network_name, network_password: Installed equipment data
    - install_date, installer: Installation record
    - plan, speed, upload/download/charge/discharge_speed: Contracted service
    - department, province, district, address, coordinates, reference: Location
    - monthly_amount: Plan price in soles (> 0)
    - next_payment_date: Next due date; advanced one month per registered payment
    - is_service_active: Manual service toggle
    """

    __tablename__ = "clients"
    __table_args__ = (UniqueConstraint("user_id", "dni", name="uq_clients_user_dni"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100)
    dni: str = Field(nullable=False, max_length=20)
    phone: str = Field(nullable=False, max_length=20)
    ip: str = Field(nullable=False, max_length=50)
    install_date: date = Field(nullable=False)
    installer: str = Field(nullable=False, max_length=100)
    network_name: str = Field(nullable=False, max_length=50)
    network_password: str = Field(nullable=False, max_length=100)
    plan: str = Field(nullable=False, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    province: Optional[str] = Field(default=None, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100)
    speed: str = Field(nullable=False, max_length=50)
    upload_speed: Optional[str] = Field(default=None, max_length=50)
    download_speed: Optional[str] = Field(default=None, max_length=50)
    charge_speed: Optional[str] = Field(default=None, max_length=50)
    discharge_speed: Optional[str] = Field(default=None, max_length=50)
    monthly_amount: Decimal = Field(nullable=False, max_digits=10, decimal_places=2)
    address: Optional[str] = Field(default=None, max_length=200)
    coordinates: Optional[str] = Field(default=None, max_length=100)
    reference: Optional[str] = Field(default=None, max_length=200)
    next_payment_date: date = Field(nullable=False, index=True)
    is_service_active: bool = Field(default=True, nullable=False, index=True)
    created_at: Optional[datetime] = Field(default_factory=_utcnow)
    updated_at: Optional[datetime] = Field(default_factory=_utcnow)
