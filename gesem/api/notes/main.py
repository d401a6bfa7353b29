# gesem/api/notes/main.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.note_service import NoteService, format_note_date
from .models import Note, NoteCreate

router = APIRouter()


def get_note_service(session: Session = Depends(get_sync_session)) -> NoteService:
    return NoteService(session)


def serialize_note(note) -> dict:
    return {"id": note.id, "content": note.content, "date": format_note_date(note)}


@router.get("/notes", response_model=list[Note])
def api_list_notes(
    service: NoteService = Depends(get_note_service),
    current_user: User = Depends(current_active_user),
):
    return [serialize_note(n) for n in service.list_notes(current_user.id)]


@router.post("/notes", response_model=Note, status_code=status.HTTP_201_CREATED)
def api_create_note(
    data: NoteCreate,
    service: NoteService = Depends(get_note_service),
    current_user: User = Depends(current_active_user),
):
    try:
        return serialize_note(service.create_note(current_user.id, data.content))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/notes/{note_id}")
def api_delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
    current_user: User = Depends(current_active_user),
):
    try:
        service.delete_note(current_user.id, note_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Nota eliminada correctamente."}
