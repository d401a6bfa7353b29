# gesem/services/billing_status.py
"""
Clasificación del estado de renovación de un cliente.

El estado nunca se guarda: se calcula en cada lectura a partir de
`next_payment_date` y de la fecha "hoy" que recibe el llamador.
"""

from datetime import date, datetime
from typing import Iterable, NamedTuple

from ..core.constants import NEAR_EXPIRY_DAYS, BillingStatus
from ..utils.dates import days_between


class ClientStatus(NamedTuple):
    status: BillingStatus
    days_until_due: int


def classify(next_payment_date: date | datetime, today: date | datetime) -> ClientStatus:
    """
    Estado de un cliente según los días que faltan para su próximo pago.

    - días < 0              -> expired
    - 0 <= días <= 4        -> near_expiry (vence hoy cuenta como próximo)
    - días > 4              -> active
    """
    days = days_between(today, next_payment_date)
    if days < 0:
        return ClientStatus(BillingStatus.EXPIRED, days)
    if days <= NEAR_EXPIRY_DAYS:
        return ClientStatus(BillingStatus.NEAR_EXPIRY, days)
    return ClientStatus(BillingStatus.ACTIVE, days)


def classify_client(client, today: date) -> ClientStatus:
    return classify(client.next_payment_date, today)


def classify_many(clients: Iterable, today: date) -> dict[int, ClientStatus]:
    """Mismo cálculo que classify(), indexado por id de cliente."""
    return {client.id: classify(client.next_payment_date, today) for client in clients}
