from datetime import datetime
from typing import List

from db.repository import WorkflowRepository
from models import EventKind, TriggerType, WorkflowEvent, WorkflowRule

from .conditions import evaluate_groups

TRIGGERS_BY_EVENT = {
    EventKind.CREATE: [TriggerType.ON_CREATE, TriggerType.ON_UPSERT],
    EventKind.UPSERT: [TriggerType.ON_UPSERT],
}


def trigger_types_for_event(event_kind: EventKind | str) -> List[TriggerType]:
    """Creation events reach on_create and on_upsert rules; updates reach on_upsert only."""
    return list(TRIGGERS_BY_EVENT[EventKind(event_kind)])


def rule_matches(rule: WorkflowRule, event: WorkflowEvent, now: datetime | None = None) -> bool:
    return evaluate_groups(
        rule.conditions_all,
        rule.conditions_any,
        event.current_record,
        event.previous_record,
        now,
    )


def fetch_candidate_rules(repository: WorkflowRepository, event: WorkflowEvent) -> List[WorkflowRule]:
    """Active rules scoped to the event's module and trigger class. Re-read on every event."""
    return repository.fetch_rules(event.module_id, trigger_types_for_event(event.event_kind))


def match_rules(
    repository: WorkflowRepository, event: WorkflowEvent, now: datetime | None = None
) -> List[WorkflowRule]:
    return [rule for rule in fetch_candidate_rules(repository, event) if rule_matches(rule, event, now)]
