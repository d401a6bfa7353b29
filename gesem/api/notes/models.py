# gesem/api/notes/models.py
from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    content: str = Field(min_length=1)


class Note(BaseModel):
    id: int
    content: str
    date: str  # 'YYYY-MM-DD HH:MM'
