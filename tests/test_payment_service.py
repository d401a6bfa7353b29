"""Tests del registro de pagos y del avance de la fecha de pago."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlmodel import select

from gesem.core.constants import BillingStatus
from gesem.models import Client, Payment
from gesem.services.billing_status import classify_client
from gesem.services.payment_service import PaymentService

from conftest import TODAY


def test_register_payment_advances_one_month(session, owner, make_client):
    client = make_client(next_payment_date=date(2025, 3, 15))

    payment, updated = PaymentService(session).register_payment(
        owner.id, client.id, "59.90", payment_date=date(2025, 3, 15)
    )

    session.refresh(client)
    assert client.next_payment_date == date(2025, 4, 15)
    assert payment.amount == Decimal("59.90")
    assert payment.client_id == client.id
    assert updated is client
    assert payment.user_id == owner.id
    assert payment.period_label == "Marzo 2025"


@pytest.mark.parametrize(
    "previous, expected",
    [
        (date(2025, 1, 31), date(2025, 2, 28)),
        (date(2024, 1, 31), date(2024, 2, 29)),
        (date(2025, 3, 31), date(2025, 4, 30)),
        (date(2025, 12, 20), date(2026, 1, 20)),
    ],
)
def test_advance_clamps_to_end_of_month(session, owner, make_client, previous, expected):
    client = make_client(next_payment_date=previous)

    PaymentService(session).register_payment(owner.id, client.id, 39.90, today=TODAY)

    session.refresh(client)
    assert client.next_payment_date == expected


def test_advance_is_from_previous_due_date_not_payment_date(session, owner, make_client):
    # Cliente atrasado: vencía en enero y paga en marzo
    client = make_client(next_payment_date=date(2025, 1, 10))

    PaymentService(session).register_payment(owner.id, client.id, "59.90", payment_date=TODAY)

    session.refresh(client)
    assert client.next_payment_date == date(2025, 2, 10)


def test_defaults_date_and_period_label(session, owner, make_client):
    client = make_client()

    payment, _ = PaymentService(session).register_payment(owner.id, client.id, "10", today=date(2025, 9, 3))

    assert payment.payment_date == date(2025, 9, 3)
    assert payment.period_label == "Septiembre 2025"


def test_explicit_period_label_is_kept(session, owner, make_client):
    client = make_client()

    payment, _ = PaymentService(session).register_payment(
        owner.id, client.id, "10", payment_date=TODAY, period_label="Adelanto abril"
    )

    assert payment.period_label == "Adelanto abril"


def test_amount_is_rounded_half_up(session, owner, make_client):
    client = make_client()

    payment, _ = PaymentService(session).register_payment(owner.id, client.id, "59.905", payment_date=TODAY)

    assert payment.amount == Decimal("59.91")


def test_amount_may_differ_from_plan_price(session, owner, make_client):
    client = make_client(monthly_amount=Decimal("59.90"))

    payment, _ = PaymentService(session).register_payment(owner.id, client.id, "20.00", payment_date=TODAY)

    assert payment.amount == Decimal("20.00")


@pytest.mark.parametrize("amount", ["0", "-5", "0.001"])
def test_non_positive_amount_is_rejected(session, owner, make_client, amount):
    client = make_client(next_payment_date=TODAY)

    with pytest.raises(ValueError):
        PaymentService(session).register_payment(owner.id, client.id, amount, payment_date=TODAY)

    session.refresh(client)
    assert client.next_payment_date == TODAY
    assert session.exec(select(Payment)).all() == []


def test_unknown_client_is_not_found(session, owner):
    with pytest.raises(FileNotFoundError):
        PaymentService(session).register_payment(owner.id, 999, "59.90", payment_date=TODAY)


def test_client_of_another_owner_is_not_found(session, owner, other_owner, make_client):
    foreign = make_client(owner_id=other_owner.id, next_payment_date=TODAY)

    with pytest.raises(FileNotFoundError):
        PaymentService(session).register_payment(owner.id, foreign.id, "59.90", payment_date=TODAY)

    session.refresh(foreign)
    assert foreign.next_payment_date == TODAY


def test_failure_rolls_back_payment_and_date(session, owner, make_client, monkeypatch):
    client = make_client(next_payment_date=date(2025, 3, 15))
    client_id = client.id

    def failing_commit():
        session.flush()
        raise RuntimeError("disco lleno")

    monkeypatch.setattr(session, "commit", failing_commit)

    with pytest.raises(RuntimeError):
        PaymentService(session).register_payment(owner.id, client_id, "59.90", payment_date=TODAY)

    monkeypatch.undo()
    assert session.exec(select(Payment)).all() == []
    assert session.get(Client, client_id).next_payment_date == date(2025, 3, 15)


def test_list_payments_includes_client_name(session, owner, other_owner, make_client, make_payment):
    ana = make_client(name="Ana Rojas")
    make_payment(ana, payment_date=date(2025, 3, 1))
    make_payment(ana, payment_date=date(2025, 3, 10))
    foreign = make_client(owner_id=other_owner.id)
    make_payment(foreign, owner_id=other_owner.id)

    rows = PaymentService(session).list_payments(owner.id)

    assert [(p.payment_date, name) for p, name in rows] == [
        (date(2025, 3, 10), "Ana Rojas"),
        (date(2025, 3, 1), "Ana Rojas"),
    ]


def test_payments_for_client(session, owner, make_client, make_payment):
    first = make_client()
    second = make_client()
    make_payment(first)
    make_payment(second)
    make_payment(second)

    client, payments = PaymentService(session).get_payments_for_client(owner.id, second.id)

    assert client.id == second.id
    assert len(payments) == 2


def test_payments_since(session, owner, make_client, make_payment):
    client = make_client()
    make_payment(client, payment_date=date(2025, 2, 13))
    make_payment(client, payment_date=date(2025, 2, 14))

    payments = PaymentService(session).get_payments_since(owner.id, date(2025, 2, 14))

    assert [p.payment_date for p in payments] == [date(2025, 2, 14)]


def test_overdue_client_pays_plan_price(session, owner, make_client):
    client = make_client(monthly_amount=Decimal("59.90"), next_payment_date=TODAY - timedelta(days=10))
    assert classify_client(client, TODAY) == (BillingStatus.EXPIRED, -10)

    PaymentService(session).register_payment(owner.id, client.id, "59.90", payment_date=TODAY)

    session.refresh(client)
    assert client.next_payment_date == date(2025, 4, 5)
    assert client.monthly_amount == Decimal("59.90")
