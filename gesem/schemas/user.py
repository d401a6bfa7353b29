# gesem/schemas/user.py
"""Esquemas de fastapi-users con los campos propios de GESEM."""
import uuid
from typing import Optional

from fastapi_users import schemas
from pydantic import Field


class UserRead(schemas.BaseUser[uuid.UUID]):
    username: str
    name: Optional[str] = None


class UserCreate(schemas.BaseUserCreate):
    username: str = Field(min_length=3, max_length=100)
    name: Optional[str] = Field(default=None, max_length=255)


class UserUpdate(schemas.BaseUserUpdate):
    username: Optional[str] = Field(default=None, min_length=3, max_length=100)
    name: Optional[str] = Field(default=None, max_length=255)
