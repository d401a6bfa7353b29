# gesem/services/payment_service.py
"""
Payment service layer using SQLModel ORM.
Registro de pagos y avance de la próxima fecha de pago del cliente.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlmodel import Session, col, select

from ..models import Client, Payment
from ..utils.dates import add_months, local_today
from ..utils.locale_es import period_label as build_period_label
from ..utils.locale_es import round_money
from .client_service import ClientService

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service layer for Payment operations using SQLModel ORM.
    """

    def __init__(self, session: Session):
        """
        Initialize with a SQLModel session.

        Args:
            session: SQLModel Session instance
        """
        self.session = session
        self.client_service = ClientService(session)

    def list_payments(self, owner_id: uuid.UUID) -> List[Tuple[Payment, str]]:
        """Pagos del propietario con el nombre del cliente, más recientes primero."""
        statement = (
            select(Payment, Client.name)
            .join(Client, Payment.client_id == Client.id)
            .where(Payment.user_id == owner_id)
            .order_by(col(Payment.payment_date).desc(), col(Payment.id).desc())
        )
        return [(payment, name) for payment, name in self.session.exec(statement).all()]

    def get_payments_since(self, owner_id: uuid.UUID, start: date) -> List[Payment]:
        """Pagos con fecha >= start (para el gráfico de ingresos)."""
        statement = (
            select(Payment)
            .where(Payment.user_id == owner_id, Payment.payment_date >= start)
            .order_by(col(Payment.payment_date).desc(), col(Payment.id).desc())
        )
        return list(self.session.exec(statement).all())

    def get_payments_for_client(
        self, owner_id: uuid.UUID, client_id: int
    ) -> Tuple[Client, List[Payment]]:
        """Historial de un cliente, junto con el cliente ya cargado."""
        client = self.client_service.get_client(owner_id, client_id)
        statement = (
            select(Payment)
            .where(Payment.user_id == owner_id, Payment.client_id == client_id)
            .order_by(col(Payment.payment_date).desc(), col(Payment.id).desc())
        )
        return client, list(self.session.exec(statement).all())

    def register_payment(
        self,
        owner_id: uuid.UUID,
        client_id: int,
        amount,
        payment_date: Optional[date] = None,
        period_label: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Tuple[Payment, Client]:
        """
        Registra un pago y adelanta un mes de calendario la próxima fecha de
        pago del cliente. Ambas escrituras van en la misma transacción.

        Args:
            owner_id: Usuario propietario
            client_id: Cliente que paga
            amount: Monto (> 0); no se compara con el precio del plan
            payment_date: Fecha del pago (por defecto, hoy)
            period_label: Periodo (por defecto, 'Mes Año' de la fecha del pago)
            today: Referencia de "hoy" (por defecto, la fecha local)

        Returns:
            (pago creado, cliente con la fecha ya adelantada)

        Raises:
            ValueError: monto no positivo
            FileNotFoundError: cliente inexistente o de otro usuario
        """
        amount = round_money(Decimal(str(amount)))
        if amount <= 0:
            raise ValueError("El monto debe ser mayor a 0.")

        client = self.client_service.get_client(owner_id, client_id)

        payment_date = payment_date or today or local_today()
        if isinstance(payment_date, datetime):
            payment_date = payment_date.date()

        previous_due = client.next_payment_date
        try:
            payment = Payment(
                user_id=owner_id,
                client_id=client.id,
                amount=amount,
                payment_date=payment_date,
                period_label=period_label or build_period_label(payment_date),
            )
            self.session.add(payment)

            client.next_payment_date = add_months(previous_due, 1)
            client.updated_at = datetime.now(timezone.utc)
            self.session.add(client)

            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error registrando pago del cliente {client_id}, se revierte: {e}")
            raise

        self.session.refresh(payment)
        logger.info(
            f"Pago registrado (ID: {payment.id}) para el cliente {client_id}: "
            f"S/ {amount}. Próximo pago {previous_due} -> {client.next_payment_date}."
        )
        return payment, client
