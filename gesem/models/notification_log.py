# gesem/models/notification_log.py
"""
Registro de avisos generados (WhatsApp/SMS). El envío real lo hace el navegador
abriendo el enlace; aquí solo queda constancia.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class NotificationLog(SQLModel, table=True):
    __tablename__ = "notification_logs"

    id: int | None = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    client_id: int = Field(foreign_key="clients.id", nullable=False, index=True)
    channel: str = Field(nullable=False, max_length=20)  # whatsapp | sms
    message: str = Field(nullable=False)
    status: str = Field(default="sent", nullable=False, max_length=20)
    # Hora local, sin zona horaria
    sent_at: datetime = Field(sa_column=Column(DateTime(timezone=False), nullable=False))
