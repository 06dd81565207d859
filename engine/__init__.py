from .coercion import normalize_value_by_field_type, stringify, to_comparable
from .conditions import OPERATORS, evaluate_condition, evaluate_groups
from .dispatcher import ActionDispatcher, collect_sms_recipients
from .matcher import match_rules, rule_matches, trigger_types_for_event
from .runtime import WorkflowRuntime
from .templates import render_template

__all__ = [
    "ActionDispatcher",
    "OPERATORS",
    "WorkflowRuntime",
    "collect_sms_recipients",
    "evaluate_condition",
    "evaluate_groups",
    "match_rules",
    "normalize_value_by_field_type",
    "render_template",
    "rule_matches",
    "stringify",
    "to_comparable",
    "trigger_types_for_event",
]
