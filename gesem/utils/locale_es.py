# gesem/utils/locale_es.py
"""
Formato es-PE: nombres de meses, etiquetas de periodo y montos en soles.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

MONTH_ABBREVIATIONS = (
    "ene",
    "feb",
    "mar",
    "abr",
    "may",
    "jun",
    "jul",
    "ago",
    "sep",
    "oct",
    "nov",
    "dic",
)

CENT = Decimal("0.01")


def month_abbreviation(month: int) -> str:
    """1 -> 'Ene', 12 -> 'Dic'."""
    return MONTH_ABBREVIATIONS[month - 1].capitalize()


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1].capitalize()


def period_label(value: date) -> str:
    """Etiqueta de periodo de un pago, p. ej. 'Marzo 2025'."""
    return f"{month_name(value.month)} {value.year}"


def day_label(value: date) -> str:
    return value.strftime("%d/%m")


def round_money(value) -> Decimal:
    """Redondeo half-up al céntimo."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    """59.9 -> '59.90'"""
    return f"{round_money(value):.2f}"
