# gesem/services/notification_service.py
"""
Avisos de renovación: textos de WhatsApp/SMS, enlaces para abrirlos y
listado paginado de clientes por vencer o vencidos.

No se envía nada desde el servidor: el front abre el enlace generado y aquí
solo se deja un NotificationLog.
"""
import logging
import re
import uuid
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from sqlalchemy import func
from sqlmodel import Session, col, select

from ..core.config import get_settings
from ..core.constants import (
    NEAR_EXPIRY_DAYS,
    BillingStatus,
    NotificationChannel,
    NotificationLogStatus,
)
from ..models import Client, NotificationLog
from ..utils.dates import local_now, local_today
from ..utils.locale_es import format_amount
from .base_service import clamp_per_page
from .billing_status import classify
from .client_service import ClientService

logger = logging.getLogger(__name__)

# encodeURIComponent deja sin escapar estos caracteres
_URI_SAFE = "-_.!~*'()"


# --- Composición de mensajes (funciones puras) ---
def build_whatsapp_message(client, status: BillingStatus | str, signature: str = "GESEM") -> str:
    """Recordatorio (próximo/activo) o aviso de deuda (vencido)."""
    amount = format_amount(client.monthly_amount)
    if BillingStatus(status) is BillingStatus.EXPIRED:
        return (
            f"Hola {client.name}, le informamos que su servicio de internet ({client.plan}) "
            f"ha vencido. Su pago de S/ {amount} está pendiente. "
            f"Por favor regularice su situación. - {signature}"
        )
    due = client.next_payment_date.strftime("%d/%m/%Y")
    return (
        f"Hola {client.name}, le recordamos que su servicio de internet "
        f"({client.plan} - {client.speed}) vence el {due}. "
        f"Monto: S/ {amount}. Gracias - {signature}"
    )


def build_sms_message(client, signature: str = "GESEM") -> str:
    return (
        f"{signature}: Su servicio {client.plan} vence pronto. "
        f"Monto: S/{format_amount(client.monthly_amount)}"
    )


def build_deep_link(
    channel: NotificationChannel | str, phone: str, message: str, country_code: str = "51"
) -> str:
    """wa.me para WhatsApp, esquema sms: para SMS."""
    digits = re.sub(r"\D", "", phone or "")
    text = quote(message, safe=_URI_SAFE)
    if NotificationChannel(channel) is NotificationChannel.SMS:
        return f"sms:+{country_code}{digits}?body={text}"
    return f"https://wa.me/{country_code}{digits}?text={text}"


def alert_item(client: Client, today: date) -> Dict[str, Any]:
    state = classify(client.next_payment_date, today)
    return {
        "id": client.id,
        "name": client.name,
        "phone": client.phone,
        "plan": client.plan,
        "speed": client.speed,
        "monthly_amount": client.monthly_amount,
        "next_payment_date": client.next_payment_date,
        "status": state.status,
        "days_until_due": state.days_until_due,
    }


class NotificationService:
    def __init__(self, session: Session):
        self.session = session
        self.client_service = ClientService(session)
        self.settings = get_settings()

    def list_alerts(
        self,
        owner_id: uuid.UUID,
        today: Optional[date] = None,
        page: int = 1,
        per_page: int = 15,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Clientes que vencen en los próximos 4 días o ya vencieron, ordenados
        por fecha de pago. Paginado en la consulta; el total va aparte.
        """
        today = today or local_today()
        per_page = clamp_per_page(per_page)
        page = max(1, page)
        threshold = today + timedelta(days=NEAR_EXPIRY_DAYS)
        conditions = [Client.user_id == owner_id, Client.next_payment_date <= threshold]

        total = self.session.exec(
            select(func.count()).select_from(Client).where(*conditions)
        ).one()
        statement = (
            select(Client)
            .where(*conditions)
            .order_by(col(Client.next_payment_date), col(Client.id))
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        clients = self.session.exec(statement).all()
        return [alert_item(client, today) for client in clients], total

    def send(
        self,
        owner_id: uuid.UUID,
        client_id: int,
        channel: NotificationChannel | str,
        status: Optional[BillingStatus | str] = None,
        message: Optional[str] = None,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Genera el texto (si no viene dado) y el enlace, y registra el aviso.
        El estado del cliente se calcula con `today`; `now` es la hora del registro.

        Returns:
            dict con el NotificationLog creado y el enlace `link`.
        """
        channel = NotificationChannel(channel)
        client = self.client_service.get_client(owner_id, client_id)
        now = now or local_now()
        signature = self.settings.company_signature

        if not message:
            if channel is NotificationChannel.SMS:
                message = build_sms_message(client, signature)
            else:
                status = status or classify(client.next_payment_date, today or now.date()).status
                message = build_whatsapp_message(client, status, signature)

        try:
            log = NotificationLog(
                user_id=owner_id,
                client_id=client.id,
                channel=channel.value,
                message=message,
                status=NotificationLogStatus.SENT.value,
                sent_at=now.replace(tzinfo=None),
            )
            self.session.add(log)
            self.session.commit()
            self.session.refresh(log)
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error registrando aviso para el cliente {client_id}: {e}")
            raise

        logger.info(f"Aviso {channel.value} registrado (ID: {log.id}) para el cliente {client_id}.")
        return {
            "log": log,
            "link": build_deep_link(
                channel, client.phone, message, self.settings.phone_country_code
            ),
        }
