# gesem/services/income_service.py
"""
Agregación de ingresos por periodo para el gráfico del dashboard.

- weekly:  7 cubetas diarias, de hoy-6 a hoy, etiqueta dd/mm
- monthly: 30 cubetas diarias, de hoy-29 a hoy, etiqueta dd/mm
- annual:  12 cubetas mensuales terminando en el mes actual, etiqueta 'Ene'..'Dic'

Las cubetas sin pagos aparecen con monto 0. Las sumas se hacen en Decimal,
así que el resultado no depende del orden de los pagos.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable

from ..core.constants import IncomePeriod
from ..utils.dates import add_months, as_date, month_start
from ..utils.locale_es import day_label, month_abbreviation, round_money

DAILY_WINDOWS = {
    IncomePeriod.WEEKLY: 7,
    IncomePeriod.MONTHLY: 30,
}
ANNUAL_MONTHS = 12


@dataclass(frozen=True)
class IncomePoint:
    label: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeSummary:
    period: IncomePeriod
    total: Decimal
    chart: tuple[IncomePoint, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "total": self.total,
            "chart": [{"label": p.label, "amount": p.amount} for p in self.chart],
        }


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)


def _bucket_keys(period: IncomePeriod, today: date) -> list:
    if period is IncomePeriod.ANNUAL:
        current = month_start(today)
        return [add_months(current, -offset) for offset in range(ANNUAL_MONTHS - 1, -1, -1)]
    size = DAILY_WINDOWS[period]
    return [today - timedelta(days=offset) for offset in range(size - 1, -1, -1)]


def window_start(period: IncomePeriod | str, today: date) -> date:
    """Primer día (inclusive) de la ventana de agregación."""
    return _bucket_keys(IncomePeriod(period), as_date(today))[0]


def aggregate(
    payments: Iterable[Any],
    period: IncomePeriod | str,
    today: date,
) -> IncomeSummary:
    """
    Agrupa los pagos (objetos o dicts con `amount` y `payment_date`) dentro
    de la ventana del periodo y devuelve la serie etiquetada más el total.

    Raises:
        ValueError: si el periodo no es weekly, monthly ni annual.
    """
    period = IncomePeriod(period)
    today = as_date(today)
    keys = _bucket_keys(period, today)
    start = keys[0]
    annual = period is IncomePeriod.ANNUAL

    sums: dict[date, Decimal] = {key: Decimal("0") for key in keys}
    for payment in payments:
        paid_on = as_date(_field(payment, "payment_date"))
        if paid_on < start or paid_on > today:
            continue
        key = month_start(paid_on) if annual else paid_on
        sums[key] += Decimal(str(_field(payment, "amount")))

    if annual:
        chart = tuple(IncomePoint(month_abbreviation(k.month), round_money(sums[k])) for k in keys)
    else:
        chart = tuple(IncomePoint(day_label(k), round_money(sums[k])) for k in keys)

    total = round_money(sum(sums.values(), Decimal("0")))
    return IncomeSummary(period=period, total=total, chart=chart)
