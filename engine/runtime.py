import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from db.repository import WorkflowRepository
from models import EventKind, WorkflowEvent

from .dispatcher import ActionDispatcher
from .matcher import fetch_candidate_rules, rule_matches

logger = logging.getLogger("workflow_runtime")


class WorkflowRuntime:
    """
    Entry point called after a module record is created or updated.

    Nothing is cached between calls: rules are fetched per event, so two
    events may be processed concurrently with separate runtimes or sessions.
    """

    def __init__(
        self,
        repository: WorkflowRepository,
        dispatcher: ActionDispatcher,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.repository = repository
        self.dispatcher = dispatcher
        self.clock = clock

    def run_workflows_for_event(
        self,
        module_id: str,
        event_kind: EventKind | str,
        current_record: Mapping[str, Any] | None,
        previous_record: Mapping[str, Any] | None = None,
    ) -> None:
        """Run matching rules. Never raises; failures are only logged."""
        if not module_id or current_record is None:
            return
        try:
            event = WorkflowEvent(
                module_id=module_id,
                event_kind=event_kind,
                current_record=dict(current_record),
                previous_record=dict(previous_record) if previous_record else None,
            )
        except ValueError:
            logger.exception("Invalid workflow event for module %s", module_id)
            return
        self.run_event(event)

    def run_event(self, event: WorkflowEvent) -> None:
        try:
            rules = fetch_candidate_rules(self.repository, event)
        except Exception:
            logger.exception("Workflow fetch failed for module %s", event.module_id)
            return

        now = self.clock()
        for rule in rules:
            try:
                if not rule_matches(rule, event, now):
                    continue
            except Exception:
                logger.exception("Workflow evaluation failed (%s)", rule.label)
                continue
            logger.debug("Workflow %s matched %s event on %s", rule.label, event.event_kind.value, event.module_id)
            self.dispatcher.dispatch(rule, event.module_id, event.current_record)
