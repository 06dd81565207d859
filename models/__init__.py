from .workflow import (
    Action,
    ActionKind,
    Condition,
    EventKind,
    IntervalUnit,
    TriggerType,
    WorkflowEvent,
    WorkflowRule,
)

__all__ = [
    "Action",
    "ActionKind",
    "Condition",
    "EventKind",
    "IntervalUnit",
    "TriggerType",
    "WorkflowEvent",
    "WorkflowRule",
]
