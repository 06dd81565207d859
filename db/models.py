"""
SQLAlchemy ORM models for persistence layer.
Workflow rules keep their condition groups and actions as JSON columns, the
same shape the rule editor writes. Notes are the timeline entries the
send_note action produces.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class WorkflowModel(Base):
    """
    Database model for a workflow rule, scoped to one module.
    """

    __tablename__ = "workflows"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    module_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)

    # on_create | on_upsert | interval
    trigger_type = Column(String, nullable=False, index=True)
    interval_value = Column(Integer, nullable=True)
    interval_unit = Column(String, nullable=True)
    interval_at = Column(String, nullable=True)
    batch_size = Column(Integer, nullable=True)

    # [{"id": "...", "field": "...", "operator": "...", "value": ...}, ...]
    conditions_all = Column(JSON, default=list, nullable=False)
    conditions_any = Column(JSON, default=list, nullable=False)

    # [{"id": "...", "type": "...", "config": {...}}, ...]
    actions = Column(JSON, default=list, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<WorkflowModel(id={self.id}, module_id={self.module_id}, name={self.name})>"


class NoteModel(Base):
    __tablename__ = "notes"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    module_id = Column(String, nullable=False, index=True)
    record_id = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<NoteModel(id={self.id}, module_id={self.module_id}, record_id={self.record_id})>"
