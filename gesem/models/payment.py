# gesem/models/payment.py
"""
Payment model for client payment tracking.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlmodel import Field, SQLModel


class Payment(SQLModel, table=True):
    """
    Payment model representing client payments. Create/list only.

    Fields:
    - id: Auto-increment primary key
    - user_id: Owner account
    - client_id: Foreign key to clients table (required)
    - amount: Payment amount in soles (> 0)
    - payment_date: Date of payment (defaults to today when registering)
    - period_label: Free text billing period, e.g. 'Marzo 2025'
    """

    __tablename__ = "payments"

    id: int | None = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    client_id: int = Field(foreign_key="clients.id", nullable=False, index=True)
    amount: Decimal = Field(nullable=False, max_digits=10, decimal_places=2)
    payment_date: date = Field(nullable=False, index=True)
    period_label: str | None = Field(default=None, max_length=30)
    created_at: datetime | None = Field(default_factory=lambda: datetime.now(timezone.utc))
