import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from .models import NoteModel


class NotesStore(ABC):
    """Where send_note actions write their text."""

    @abstractmethod
    def create_note(self, module_id: str, record_id: str, text: str) -> None:
        raise NotImplementedError


@dataclass
class StoredNote:
    id: str
    module_id: str
    record_id: str
    content: str


class InMemoryNotesStore(NotesStore):
    def __init__(self) -> None:
        self.notes: List[StoredNote] = []

    def create_note(self, module_id: str, record_id: str, text: str) -> None:
        self.notes.append(StoredNote(id=str(uuid.uuid4()), module_id=module_id, record_id=record_id, content=text))


class SqlAlchemyNotesStore(NotesStore):
    def __init__(self, session: Session) -> None:
        self.session = session

    def create_note(self, module_id: str, record_id: str, text: str) -> None:
        try:
            self.session.add(NoteModel(module_id=module_id, record_id=record_id, content=text))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def notes_for(self, module_id: str, record_id: str) -> List[NoteModel]:
        return (
            self.session.query(NoteModel)
            .filter(NoteModel.module_id == module_id, NoteModel.record_id == record_id)
            .order_by(NoteModel.created_at)
            .all()
        )
