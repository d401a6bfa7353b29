# gesem/db/engine_sync.py
"""
MOTOR SÍNCRONO - Para los servicios de dominio (clientes, pagos, notas, avisos).
Configurado con WAL mode y claves foráneas activas en SQLite.
"""
from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from ..core.config import get_settings

DATABASE_URL = get_settings().sync_database_url
_is_sqlite = DATABASE_URL.startswith("sqlite")

sync_engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


if _is_sqlite:
    @event.listens_for(sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SYNC SQLModel session injection.
    Usage: session: Session = Depends(get_sync_session)
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables():
    """Create all tables with SYNC engine."""
    from .. import models  # noqa: F401  (registra las tablas en el metadata)

    SQLModel.metadata.create_all(sync_engine)
