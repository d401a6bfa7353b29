# scripts/seed_demo.py
"""
Carga datos de demostración: un usuario, sus clientes y un historial de pagos.

Uso:
    python scripts/seed_demo.py --clients 500 --payments 5000
"""
import argparse
import os
import random
import sys
import uuid
from datetime import timedelta
from decimal import Decimal

sys.path.append(os.getcwd())

from dotenv import load_dotenv

load_dotenv()

from passlib.context import CryptContext
from sqlmodel import Session, select

from gesem.db.engine_sync import create_sync_db_and_tables, sync_engine
from gesem.models import Client, NotificationLog, Payment, User
from gesem.utils.dates import local_today
from gesem.utils.locale_es import period_label

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# (plan, precio, bajada, subida)
PLANS = [
    ("Plan Hogar 50", Decimal("39.90"), "50 Mbps", "25 Mbps"),
    ("Plan Hogar 100", Decimal("59.90"), "100 Mbps", "50 Mbps"),
    ("Plan Negocio 200", Decimal("89.90"), "200 Mbps", "100 Mbps"),
    ("Plan Pro 300", Decimal("129.90"), "300 Mbps", "150 Mbps"),
]
INSTALLERS = ["Carlos Tecnico", "Pedro Instalador", "Maria Soporte"]
DISTRICTS = ["SJL", "Ate", "Surco", "Los Olivos", "VMT", "VES", "Comas"]
FIRST_NAMES = ["Juan", "María", "Luis", "Rosa", "Carlos", "Ana", "Jorge", "Lucía", "Pedro", "Carmen"]
LAST_NAMES = ["Quispe", "Flores", "Sánchez", "Rojas", "Huamán", "Mendoza", "Castillo", "Torres"]


def get_or_create_user(session: Session, email: str, username: str, password: str) -> User:
    user = session.exec(select(User).where(User.email == email)).first()
    if user:
        print(f"Usuario existente: {username}")
        return user

    user = User(
        id=uuid.uuid4(),
        email=email,
        username=username,
        name=username.capitalize(),
        hashed_password=pwd_context.hash(password),
        is_active=True,
        is_superuser=True,
        is_verified=True,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    print(f"✅ Usuario '{username}' creado.")
    return user


def build_client(owner_id: uuid.UUID, index: int, rng: random.Random) -> Client:
    today = local_today()
    plan, price, speed, upload = rng.choice(PLANS)
    return Client(
        user_id=owner_id,
        name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)} {rng.choice(LAST_NAMES)}",
        dni=f"{10000000 + index:08d}",
        phone="9" + "".join(rng.choice("0123456789") for _ in range(8)),
        ip=f"10.{rng.randint(0, 255)}.{rng.randint(0, 255)}.{rng.randint(1, 254)}",
        install_date=today - timedelta(days=rng.randint(0, 730)),
        installer=rng.choice(INSTALLERS),
        network_name=f"GESEM_{rng.randint(10000, 99999)}",
        network_password="".join(rng.choice("abcdefghjkmnpqrstuvwxyz23456789") for _ in range(10)),
        plan=plan,
        department="Lima",
        province="Lima",
        district=rng.choice(DISTRICTS),
        speed=speed,
        upload_speed=upload,
        download_speed=speed,
        charge_speed=upload,
        discharge_speed=speed,
        monthly_amount=price,
        next_payment_date=today + timedelta(days=rng.randint(-10, 30)),
        is_service_active=rng.random() < 0.9,
    )


def seed(clients_count: int, payments_count: int, email: str, username: str, password: str, seed_value: int):
    rng = random.Random(seed_value)
    create_sync_db_and_tables()

    with Session(sync_engine) as session:
        user = get_or_create_user(session, email, username, password)

        # Limpieza previa para un seed consistente
        for model in (NotificationLog, Payment, Client):
            for row in session.exec(select(model).where(model.user_id == user.id)).all():
                session.delete(row)
            session.flush()
        session.commit()

        clients = [build_client(user.id, i, rng) for i in range(clients_count)]
        session.add_all(clients)
        session.commit()
        for client in clients:
            session.refresh(client)
        print(f"✅ {len(clients)} clientes creados.")

        today = local_today()
        for _ in range(payments_count):
            client = rng.choice(clients)
            paid_on = max(today - timedelta(days=rng.randint(0, 540)), client.install_date)
            variation = Decimal(rng.randint(-500, 500)) / 100
            amount = max(Decimal("1.00"), client.monthly_amount + variation)
            session.add(
                Payment(
                    user_id=user.id,
                    client_id=client.id,
                    amount=amount,
                    payment_date=paid_on,
                    period_label=period_label(paid_on),
                )
            )
        session.commit()
        print(f"✅ {payments_count} pagos creados.")


def main():
    parser = argparse.ArgumentParser(description="Datos de demostración para GESEM Manager")
    parser.add_argument("--clients", type=int, default=int(os.getenv("MASSIVE_CLIENTS_COUNT", 500)))
    parser.add_argument("--payments", type=int, default=int(os.getenv("MASSIVE_PAYMENTS_COUNT", 5000)))
    parser.add_argument("--email", default="demo@gesemperu.com")
    parser.add_argument("--username", default="demo")
    parser.add_argument("--password", default="demo12345")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    seed(args.clients, args.payments, args.email, args.username, args.password, args.seed)
    print("Seed completado.")


if __name__ == "__main__":
    main()
