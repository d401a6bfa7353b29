# gesem/services/note_service.py
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, col, select

from ..models import Note
from ..utils.dates import local_now
from .base_service import OwnedCRUDService

logger = logging.getLogger(__name__)

NOTE_DATE_FORMAT = "%Y-%m-%d %H:%M"


class NoteService(OwnedCRUDService[Note]):
    """Notas internas del personal, independientes de clientes y pagos."""

    def __init__(self, session: Session):
        super().__init__(session, Note)

    def list_notes(self, owner_id: uuid.UUID) -> List[Note]:
        statement = (
            select(Note)
            .where(Note.user_id == owner_id)
            .order_by(col(Note.note_date).desc(), col(Note.id).desc())
        )
        return list(self.session.exec(statement).all())

    def create_note(
        self, owner_id: uuid.UUID, content: str, now: Optional[datetime] = None
    ) -> Note:
        content = (content or "").strip()
        if not content:
            raise ValueError("La nota no puede estar vacía.")
        # La columna guarda la hora local de pared, sin tzinfo
        note_date = (now or local_now()).replace(tzinfo=None)
        return self.create(owner_id, {"content": content, "note_date": note_date})

    def delete_note(self, owner_id: uuid.UUID, note_id: int) -> None:
        self.delete(owner_id, note_id)
        logger.info(f"Nota {note_id} eliminada.")


def format_note_date(note: Note) -> str:
    return note.note_date.strftime(NOTE_DATE_FORMAT)
