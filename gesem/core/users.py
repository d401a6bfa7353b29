# gesem/core/users.py
"""
Autenticación con fastapi-users.

Cada usuario es dueño de su cartera: el usuario autenticado que entrega
`current_active_user` es el propietario con el que se filtran todas las
consultas de dominio.
"""
import logging
import uuid
from typing import Optional, Union

from fastapi import Depends, Request
from fastapi_users import BaseUserManager, FastAPIUsers, InvalidPasswordException, UUIDIDMixin
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    CookieTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.password import PasswordHelper
from passlib.context import CryptContext
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.engine import get_session
from ..models.user import User
from ..schemas.user import UserCreate
from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

SECRET = settings.secret_key
if not SECRET:
    raise RuntimeError("FATAL: SECRET_KEY no está configurada (revisa el archivo .env)")

ACCESS_TOKEN_COOKIE_NAME = "gesem_access_token"
MIN_PASSWORD_LENGTH = 8


def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(secret=SECRET, lifetime_seconds=settings.access_token_lifetime)


# Bearer para clientes de la API, cookie para el panel web
auth_backend_jwt = AuthenticationBackend(
    name="jwt",
    transport=BearerTransport(tokenUrl="auth/jwt/login"),
    get_strategy=get_jwt_strategy,
)
auth_backend_cookie = AuthenticationBackend(
    name="cookie",
    transport=CookieTransport(
        cookie_name=ACCESS_TOKEN_COOKIE_NAME,
        cookie_max_age=settings.access_token_lifetime,
        cookie_httponly=True,
        cookie_secure=settings.is_production,
        cookie_samesite="lax",
    ),
    get_strategy=get_jwt_strategy,
)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = SECRET
    verification_token_secret = SECRET

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordException(
                reason=f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."
            )
        if user.username and user.username.lower() in password.lower():
            raise InvalidPasswordException(reason="La contraseña no puede contener el usuario.")

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"Usuario registrado: {user.username} ({user.email})")

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        logger.info(f"Inicio de sesión: {user.username}")


class OwnerUserDatabase(SQLAlchemyUserDatabase):
    """El campo 'username' del login acepta el usuario o el email."""

    async def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(or_(User.username == email, User.email == email))
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()


async def get_user_db(session: AsyncSession = Depends(get_session)):
    yield OwnerUserDatabase(session, User)


# Hashes argon2, los mismos que genera scripts/seed_demo.py
password_helper = PasswordHelper(CryptContext(schemes=["argon2"], deprecated="auto"))


async def get_user_manager(user_db=Depends(get_user_db)):
    yield UserManager(user_db, password_helper)


fastapi_users = FastAPIUsers[User, uuid.UUID](
    get_user_manager,
    [auth_backend_jwt, auth_backend_cookie],
)

current_active_user = fastapi_users.current_user(active=True)
