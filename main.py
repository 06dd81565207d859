import json
import logging
import sys
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from config import Settings, get_settings
from db import Base, SqlAlchemyNotesStore, SqlAlchemyWorkflowRepository, WorkflowRepository
from engine import ActionDispatcher, WorkflowRuntime
from models import WorkflowEvent, WorkflowRule
from registry import create_default_registries
from sms import MelipayamakSmsTransport
from validations import parse_and_validate_workflow


def orchestrate_rule_payload(payload_text: str, repository: WorkflowRepository) -> str:
    """
    Orchestrate the ingestion of a rule exported by the rule editor:
    1. Parse stringified JSON.
    2. Validate against WorkflowRule schema and registries.
    3. Save to persistence layer.

    Returns the saved workflow id.
    """
    registries = create_default_registries()
    rule: WorkflowRule = parse_and_validate_workflow(json.loads(payload_text), registries)
    return repository.save(rule)


def orchestrate_event(payload_text: str, runtime: WorkflowRuntime) -> None:
    """
    Run automation for one record write described as JSON:
    {"module_id": ..., "event_kind": "create"|"upsert", "current_record": {...}, "previous_record": {...}}
    """
    event = WorkflowEvent.model_validate(json.loads(payload_text))
    runtime.run_event(event)


def open_session(settings: Settings) -> Session:
    engine = create_engine(settings.database_url, future=True)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, future=True)()


def build_runtime(session: Session, settings: Settings) -> WorkflowRuntime:
    dispatcher = ActionDispatcher(
        notes_store=SqlAlchemyNotesStore(session),
        sms_transport=MelipayamakSmsTransport(settings.transport_config()),
    )
    return WorkflowRuntime(SqlAlchemyWorkflowRepository(session), dispatcher)


def _read_payload(args: list[str]) -> str:
    if args:
        return Path(args[0]).read_text(encoding="utf-8")
    return sys.stdin.read()


if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = open_session(settings)

    argv = sys.argv[1:]
    if argv and argv[0] == "--load-rule":
        workflow_id = orchestrate_rule_payload(_read_payload(argv[1:]), SqlAlchemyWorkflowRepository(session))
        print(f"Workflow saved with id: {workflow_id}")
    else:
        payload = _read_payload(argv)
        if not payload.strip():
            print("No event provided. Pass an event JSON file or pipe it on stdin.")
            sys.exit(1)
        orchestrate_event(payload, build_runtime(session, settings))
    session.close()
