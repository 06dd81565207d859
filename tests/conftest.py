from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from db import Base, InMemoryNotesStore, InMemoryWorkflowRepository
from engine import ActionDispatcher, WorkflowRuntime
from models import WorkflowRule
from sms import InMemorySmsTransport

FIXED_NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture
def notes_store():
    return InMemoryNotesStore()


@pytest.fixture
def sms_transport():
    return InMemorySmsTransport()


@pytest.fixture
def repository():
    return InMemoryWorkflowRepository()


@pytest.fixture
def dispatcher(notes_store, sms_transport):
    return ActionDispatcher(notes_store=notes_store, sms_transport=sms_transport)


@pytest.fixture
def runtime(repository, dispatcher):
    return WorkflowRuntime(repository, dispatcher, clock=lambda: FIXED_NOW)


def _make_rule(**overrides) -> WorkflowRule:
    payload = {
        "module_id": "invoices",
        "name": "test rule",
        "trigger_type": "on_create",
        "conditions_all": [],
        "conditions_any": [],
        "actions": [],
    }
    payload.update(overrides)
    return WorkflowRule.model_validate(payload)


@pytest.fixture
def make_rule():
    return _make_rule

