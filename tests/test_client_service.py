"""Tests del directorio de clientes."""

from datetime import date
from decimal import Decimal

import pytest
from sqlmodel import select

from gesem.models import NotificationLog, Payment
from gesem.services.client_service import ClientService
from gesem.services.notification_service import NotificationService

from conftest import TODAY, client_data


def test_create_client(session, owner):
    client = ClientService(session).create_client(owner.id, client_data(dni="12345678"))

    assert client.id is not None
    assert client.user_id == owner.id
    assert client.is_service_active is True
    assert client.monthly_amount == Decimal("59.90")


def test_dni_is_unique_per_owner(session, owner, other_owner):
    service = ClientService(session)
    service.create_client(owner.id, client_data(dni="12345678"))

    with pytest.raises(ValueError, match="ya existe"):
        service.create_client(owner.id, client_data(dni="12345678"))

    # El mismo DNI en otra cuenta es válido
    other = service.create_client(other_owner.id, client_data(dni="12345678"))
    assert other.user_id == other_owner.id


def test_non_positive_monthly_amount_is_rejected(session, owner):
    with pytest.raises(ValueError):
        ClientService(session).create_client(owner.id, client_data(monthly_amount=Decimal("0")))


def test_owner_cannot_be_overridden_from_data(session, owner, other_owner):
    client = ClientService(session).create_client(
        owner.id, client_data(user_id=other_owner.id)
    )
    assert client.user_id == owner.id


def test_list_clients_paginates_newest_first(session, owner, make_client):
    created = [make_client(name=f"Cliente {i}") for i in range(20)]

    page_one, total = ClientService(session).list_clients(owner.id, page=1, per_page=15)
    page_two, _ = ClientService(session).list_clients(owner.id, page=2, per_page=15)

    assert total == 20
    assert [c.id for c in page_one] == [c.id for c in reversed(created)][:15]
    assert len(page_two) == 5


def test_list_clients_search(session, owner, other_owner, make_client):
    make_client(name="María Flores", dni="70000001", phone="911111111")
    make_client(name="Luis Torres", dni="70000002", phone="922222222")
    make_client(owner_id=other_owner.id, name="María Huamán")
    service = ClientService(session)

    assert [c.name for c in service.list_clients(owner.id, search="maría")[0]] == ["María Flores"]
    assert [c.name for c in service.list_clients(owner.id, search="70000002")[0]] == ["Luis Torres"]
    assert [c.name for c in service.list_clients(owner.id, search="9222")[0]] == ["Luis Torres"]
    assert service.list_clients(owner.id, search="nadie") == ([], 0)


def test_per_page_is_clamped(session, owner, make_client):
    for _ in range(60):
        make_client()

    items, total = ClientService(session).list_clients(owner.id, per_page=500)

    assert total == 60
    assert len(items) == 50


def test_get_client_of_another_owner(session, owner, other_owner, make_client):
    foreign = make_client(owner_id=other_owner.id)

    with pytest.raises(FileNotFoundError):
        ClientService(session).get_client(owner.id, foreign.id)


def test_update_client(session, owner, make_client):
    client = make_client(plan="Plan Hogar 50")

    updated = ClientService(session).update_client(
        owner.id, client.id, {"plan": "Plan Pro 300", "monthly_amount": Decimal("129.90")}
    )

    assert updated.plan == "Plan Pro 300"
    assert updated.monthly_amount == Decimal("129.90")


def test_update_to_existing_dni_fails(session, owner, make_client):
    make_client(dni="11111111")
    second = make_client(dni="22222222")

    with pytest.raises(ValueError, match="ya existe"):
        ClientService(session).update_client(owner.id, second.id, {"dni": "11111111"})


def test_update_keeping_own_dni(session, owner, make_client):
    client = make_client(dni="11111111")

    updated = ClientService(session).update_client(
        owner.id, client.id, {"dni": "11111111", "name": "Nuevo Nombre"}
    )

    assert updated.name == "Nuevo Nombre"


def test_empty_update_is_rejected(session, owner, make_client):
    client = make_client()

    with pytest.raises(ValueError):
        ClientService(session).update_client(owner.id, client.id, {})


def test_toggle_service(session, owner, make_client):
    client = make_client(is_service_active=True)
    service = ClientService(session)

    assert service.toggle_service(owner.id, client.id).is_service_active is False
    assert service.toggle_service(owner.id, client.id).is_service_active is True


def test_toggle_does_not_touch_payment_date(session, owner, make_client):
    client = make_client(next_payment_date=date(2025, 1, 1))

    toggled = ClientService(session).toggle_service(owner.id, client.id)

    assert toggled.next_payment_date == date(2025, 1, 1)


def test_delete_client_removes_payments_and_logs(session, owner, make_client, make_payment):
    client = make_client()
    keep = make_client()
    make_payment(client)
    make_payment(keep)
    NotificationService(session).send(owner.id, client.id, "whatsapp")

    ClientService(session).delete_client(owner.id, client.id)

    assert [p.client_id for p in session.exec(select(Payment)).all()] == [keep.id]
    assert session.exec(select(NotificationLog)).all() == []
    with pytest.raises(FileNotFoundError):
        ClientService(session).get_client(owner.id, client.id)


def test_delete_foreign_client_fails(session, owner, other_owner, make_client):
    foreign = make_client(owner_id=other_owner.id)

    with pytest.raises(FileNotFoundError):
        ClientService(session).delete_client(owner.id, foreign.id)


def test_clients_for_owner_in_creation_order(session, owner, make_client):
    ids = [make_client(next_payment_date=TODAY).id for _ in range(3)]

    assert [c.id for c in ClientService(session).get_clients_for_owner(owner.id)] == ids


@pytest.mark.parametrize("field", ["monthly_amount", "next_payment_date", "name", "is_service_active"])
def test_required_field_cannot_be_cleared(session, owner, make_client, field):
    client = make_client(next_payment_date=TODAY)

    with pytest.raises(ValueError, match="obligatorio"):
        ClientService(session).update_client(owner.id, client.id, {field: None})

    session.refresh(client)
    assert client.next_payment_date == TODAY
    assert client.monthly_amount == Decimal("59.90")
