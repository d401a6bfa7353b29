# gesem/api/payments/main.py
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.payment_service import PaymentService
from ..clients.main import get_today
from .models import Payment, PaymentCreate

router = APIRouter()


def get_payment_service(session: Session = Depends(get_sync_session)) -> PaymentService:
    return PaymentService(session)


@router.get("/payments", response_model=list[Payment])
def api_list_payments(
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(current_active_user),
):
    return [
        {**payment.model_dump(), "client_name": client_name or ""}
        for payment, client_name in service.list_payments(current_user.id)
    ]


@router.get("/clients/{client_id}/payments", response_model=list[Payment])
def api_list_client_payments(
    client_id: int,
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(current_active_user),
):
    try:
        client, payments = service.get_payments_for_client(current_user.id, client_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [{**p.model_dump(), "client_name": client.name} for p in payments]


@router.post("/payments", response_model=Payment, status_code=status.HTTP_201_CREATED)
def api_register_payment(
    data: PaymentCreate,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    """
    Registra el pago y adelanta un mes la próxima fecha de pago del cliente.
    """
    try:
        payment, client = service.register_payment(
            current_user.id,
            data.client_id,
            data.amount,
            payment_date=data.payment_date,
            period_label=data.period_label,
            today=today,
        )
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="El cliente seleccionado no es válido.")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    log_action(
        "CREATE",
        "payment",
        str(payment.id),
        user=current_user,
        request=request,
        details={"client_id": client.id, "amount": str(payment.amount)},
    )
    return {**payment.model_dump(), "client_name": client.name}
