"""Pydantic schemas package"""
from .user import UserCreate, UserRead, UserUpdate

__all__ = ["UserRead", "UserCreate", "UserUpdate"]
