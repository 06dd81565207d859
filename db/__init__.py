from .converters import db_to_pydantic_workflow, pydantic_to_db_workflow
from .models import Base, NoteModel, WorkflowModel
from .notes import InMemoryNotesStore, NotesStore, SqlAlchemyNotesStore, StoredNote
from .repository import InMemoryWorkflowRepository, SqlAlchemyWorkflowRepository, WorkflowRepository

__all__ = [
    "WorkflowRepository",
    "InMemoryWorkflowRepository",
    "SqlAlchemyWorkflowRepository",
    "NotesStore",
    "InMemoryNotesStore",
    "SqlAlchemyNotesStore",
    "StoredNote",
    "WorkflowModel",
    "NoteModel",
    "Base",
    "pydantic_to_db_workflow",
    "db_to_pydantic_workflow",
]
