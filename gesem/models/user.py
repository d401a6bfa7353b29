# gesem/models/user.py
"""
Cuenta de acceso (fastapi-users). Cada usuario es propietario de sus propios
clientes, pagos, notas y avisos: todas las tablas de dominio llevan user_id.
"""
import uuid

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"

    # Campos que exige fastapi-users
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    email: str = Field(unique=True, index=True, nullable=False, max_length=320)
    hashed_password: str = Field(nullable=False, max_length=1024)
    is_active: bool = Field(default=True, nullable=False)
    is_superuser: bool = Field(default=False, nullable=False)
    is_verified: bool = Field(default=False, nullable=False)

    # Login por usuario y nombre visible en el panel
    username: str = Field(index=True, unique=True, nullable=False, max_length=100)
    name: str | None = Field(default=None, max_length=255)
