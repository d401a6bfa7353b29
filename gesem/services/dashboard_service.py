# gesem/services/dashboard_service.py
"""
Datos del dashboard: contadores por estado, ingresos del periodo, alertas
paginadas, clientes recientes y notas.

assemble_dashboard() es puro: recibe los registros ya cargados y la fecha de
hoy. DashboardService solo carga los datos del propietario y lo invoca.
"""
import logging
import uuid
from datetime import date
from typing import Any, Dict, Iterable, Optional

from sqlmodel import Session

from ..core.constants import RECENT_CLIENTS_LIMIT, BillingStatus, IncomePeriod
from ..utils.dates import local_today
from .base_service import page_meta, paginate_list
from .billing_status import classify_many
from .client_service import ClientService
from .income_service import aggregate, window_start
from .note_service import NoteService, format_note_date
from .payment_service import PaymentService

logger = logging.getLogger(__name__)

DEFAULT_ALERTS_PER_PAGE = 10


def assemble_dashboard(
    clients: Iterable[Any],
    payments: Iterable[Any],
    notes: Iterable[Any],
    today: date,
    period: IncomePeriod | str = IncomePeriod.MONTHLY,
    alerts_page: int = 1,
    alerts_per_page: int = DEFAULT_ALERTS_PER_PAGE,
    recent_limit: int = RECENT_CLIENTS_LIMIT,
) -> Dict[str, Any]:
    # Orden de alta: desempate estable de las alertas
    ordered = sorted(clients, key=lambda c: c.id)
    states = classify_many(ordered, today)

    stats = {"total": len(ordered)}
    for status in BillingStatus:
        stats[status.value] = sum(1 for s in states.values() if s.status is status)

    alerts = [
        {
            "id": client.id,
            "name": client.name,
            "phone": client.phone,
            "plan": client.plan,
            "speed": client.speed,
            "monthly_amount": client.monthly_amount,
            "next_payment_date": client.next_payment_date,
            "status": states[client.id].status,
            "days_until_due": states[client.id].days_until_due,
        }
        for client in ordered
        if states[client.id].status is not BillingStatus.ACTIVE
    ]
    alerts.sort(key=lambda item: item["days_until_due"])

    alerts_per_page = max(1, alerts_per_page)
    alerts_page = max(1, alerts_page)

    clients_recent = [
        {
            "id": client.id,
            "name": client.name,
            "phone": client.phone,
            "plan": client.plan,
            "monthly_amount": client.monthly_amount,
            "status": states[client.id].status,
            "days_until_due": states[client.id].days_until_due,
        }
        for client in reversed(ordered[-recent_limit:] if recent_limit > 0 else [])
    ]

    return {
        "stats": stats,
        "income": aggregate(payments, period, today).as_dict(),
        "alerts": paginate_list(alerts, alerts_page, alerts_per_page),
        "alerts_total": len(alerts),
        "alerts_meta": page_meta(len(alerts), alerts_page, alerts_per_page),
        "clients_recent": clients_recent,
        "notes": [
            {"id": note.id, "content": note.content, "date": format_note_date(note)}
            for note in notes
        ],
    }


class DashboardService:
    def __init__(self, session: Session):
        self.session = session
        self.client_service = ClientService(session)
        self.payment_service = PaymentService(session)
        self.note_service = NoteService(session)

    def get_dashboard(
        self,
        owner_id: uuid.UUID,
        today: Optional[date] = None,
        period: IncomePeriod | str = IncomePeriod.MONTHLY,
        alerts_page: int = 1,
        alerts_per_page: int = DEFAULT_ALERTS_PER_PAGE,
    ) -> Dict[str, Any]:
        today = today or local_today()
        period = IncomePeriod(period)

        clients = self.client_service.get_clients_for_owner(owner_id)
        payments = self.payment_service.get_payments_since(owner_id, window_start(period, today))
        notes = self.note_service.list_notes(owner_id)
        logger.debug(
            f"Dashboard {owner_id}: {len(clients)} clientes, {len(payments)} pagos en ventana {period.value}."
        )

        return assemble_dashboard(
            clients,
            payments,
            notes,
            today,
            period=period,
            alerts_page=alerts_page,
            alerts_per_page=alerts_per_page,
        )
