# gesem/api/payments/models.py
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# --- Modelos Pydantic (Pagos) ---
class PaymentCreate(BaseModel):
    client_id: int
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    payment_date: date | None = None
    period_label: str | None = Field(default=None, max_length=30)


class Payment(BaseModel):
    id: int
    client_id: int
    client_name: str = ""
    amount: float
    payment_date: date
    period_label: str | None = None
    model_config = ConfigDict(from_attributes=True)
