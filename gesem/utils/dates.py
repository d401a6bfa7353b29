# gesem/utils/dates.py
"""
Aritmética de fechas para el ciclo de facturación.
Todas las funciones son puras salvo local_today()/local_now().
"""

import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..core.config import get_settings


def as_date(value: date | datetime) -> date:
    """Trunca un datetime a fecha (la hora nunca influye en los cálculos)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Días con signo de start a end: positivo si end está en el futuro."""
    return (as_date(end) - as_date(start)).days


def add_months(value: date, months: int) -> date:
    """
    Suma meses de calendario. Si el día no existe en el mes destino
    se usa el último día de ese mes (31/01 + 1 mes -> 28/02 o 29/02).
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def month_start(value: date) -> date:
    return value.replace(day=1)


def local_now() -> datetime:
    """Hora actual en la zona horaria configurada (America/Lima por defecto)."""
    return datetime.now(ZoneInfo(get_settings().timezone))


def local_today() -> date:
    return local_now().date()
