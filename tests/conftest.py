"""
Pytest configuration and fixtures.

Las variables de entorno se fijan antes de importar cualquier módulo de gesem:
el motor síncrono y la autenticación se configuran al importarse.
"""

import os
import tempfile
import uuid
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

_TMP_DIR = tempfile.mkdtemp(prefix="gesem-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-1234")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.sqlite')}")
os.environ.setdefault("AUDIT_LOG_DIR", os.path.join(_TMP_DIR, "logs"))
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost")
os.environ.setdefault("RATE_LIMIT", "10000/minute")
os.environ.setdefault("APP_ENV", "testing")

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from gesem import models  # noqa: F401
from gesem.models import Client, Note, Payment, User

TODAY = date(2025, 3, 15)


# ============================================================
# Base de datos en memoria
# ============================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def today():
    return TODAY


def _make_user(session: Session, username: str) -> User:
    user = User(
        id=uuid.uuid4(),
        email=f"{username}@gesemperu.com",
        username=username,
        hashed_password="not-a-real-hash",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def owner(session):
    return _make_user(session, "tatiana")


@pytest.fixture
def other_owner(session):
    return _make_user(session, "santiago")


# ============================================================
# Fábricas de registros
# ============================================================

_dni_counter = iter(range(40000000, 49999999))


def client_data(**overrides):
    data = {
        "name": "Juan Quispe",
        "dni": str(next(_dni_counter)),
        "phone": "987654321",
        "ip": "10.0.0.15",
        "install_date": date(2024, 6, 1),
        "installer": "Carlos Tecnico",
        "network_name": "GESEM_AB123",
        "network_password": "clave12345",
        "plan": "Plan Hogar 100",
        "speed": "100 Mbps",
        "monthly_amount": Decimal("59.90"),
        "next_payment_date": TODAY,
        "is_service_active": True,
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_client(session, owner):
    def _make(owner_id=None, **overrides) -> Client:
        client = Client(user_id=owner_id or owner.id, **client_data(**overrides))
        session.add(client)
        session.commit()
        session.refresh(client)
        return client

    return _make


@pytest.fixture
def make_payment(session, owner):
    def _make(client: Client, amount="59.90", payment_date=TODAY, owner_id=None) -> Payment:
        payment = Payment(
            user_id=owner_id or owner.id,
            client_id=client.id,
            amount=Decimal(amount),
            payment_date=payment_date,
            period_label="Marzo 2025",
        )
        session.add(payment)
        session.commit()
        session.refresh(payment)
        return payment

    return _make


@pytest.fixture
def make_note(session, owner):
    def _make(content="Revisar antena", note_date=datetime(2025, 3, 14, 9, 30)) -> Note:
        note = Note(user_id=owner.id, content=content, note_date=note_date)
        session.add(note)
        session.commit()
        session.refresh(note)
        return note

    return _make


# ============================================================
# Objetos sin base de datos (funciones puras)
# ============================================================


def fake_client(id, next_payment_date, **kwargs):
    defaults = {
        "name": f"Cliente {id}",
        "phone": "987654321",
        "plan": "Plan Hogar 50",
        "speed": "50 Mbps",
        "monthly_amount": Decimal("39.90"),
    }
    defaults.update(kwargs)
    return SimpleNamespace(id=id, next_payment_date=next_payment_date, **defaults)


def fake_payment(amount, payment_date):
    return SimpleNamespace(amount=Decimal(str(amount)), payment_date=payment_date)
