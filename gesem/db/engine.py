# gesem/db/engine.py
"""
Motor ASÍNCRONO - Solo lo usa fastapi-users (login, registro, /users).
Apunta a la misma base de datos que el motor síncrono, con driver aiosqlite.
"""
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import get_settings

ASYNC_DATABASE_URL = get_settings().async_database_url
_is_sqlite = ASYNC_DATABASE_URL.startswith("sqlite")

engine = create_async_engine(
    ASYNC_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite:

    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_wal(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.close()


async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session
