# gesem/models/note.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class Note(SQLModel, table=True):
    __tablename__ = "notes"

    id: int | None = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    content: str = Field(nullable=False)
    # Hora local de Lima, sin zona horaria
    note_date: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False, index=True)
    )
