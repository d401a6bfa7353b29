from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gesem.models import Note
from gesem.services.note_service import NoteService, format_note_date


def test_create_note_stamps_local_time(session, owner):
    note = NoteService(session).create_note(
        owner.id, "  Llamar a proveedor de fibra  ", now=datetime(2025, 3, 15, 14, 5)
    )

    assert note.content == "Llamar a proveedor de fibra"
    assert format_note_date(note) == "2025-03-15 14:05"


@pytest.mark.parametrize("content", ["", "   ", None])
def test_blank_note_is_rejected(session, owner, content):
    with pytest.raises(ValueError):
        NoteService(session).create_note(owner.id, content)


def test_notes_are_listed_newest_first(session, owner, other_owner, make_note):
    make_note("Antigua", note_date=datetime(2025, 3, 1, 9, 0))
    make_note("Reciente", note_date=datetime(2025, 3, 14, 18, 0))
    NoteService(session).create_note(other_owner.id, "De otra cuenta")

    assert [n.content for n in NoteService(session).list_notes(owner.id)] == ["Reciente", "Antigua"]


def test_delete_note(session, owner, other_owner, make_note):
    note = make_note()
    service = NoteService(session)

    with pytest.raises(FileNotFoundError):
        service.delete_note(other_owner.id, note.id)

    service.delete_note(owner.id, note.id)
    assert service.list_notes(owner.id) == []


def test_note_date_survives_reload_as_local_time(session, owner):
    note = NoteService(session).create_note(
        owner.id, "Visita técnica", now=datetime(2025, 3, 15, 23, 40)
    )
    note_id = note.id
    session.expire_all()

    stored = session.get(Note, note_id)

    assert stored.note_date == datetime(2025, 3, 15, 23, 40)
    assert stored.note_date.tzinfo is None


def test_create_note_accepts_aware_now(session, owner):
    lima = ZoneInfo("America/Lima")

    note = NoteService(session).create_note(
        owner.id, "Corte programado", now=datetime(2025, 3, 15, 8, 0, tzinfo=lima)
    )

    assert format_note_date(note) == "2025-03-15 08:00"
