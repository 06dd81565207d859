from typing import Dict, Mapping

from models import WorkflowRule
from registry import FieldType, Registry, operators_for_field_type


class UnknownRegistryTypeError(ValueError):
    """Raised when a workflow references an unknown trigger, operator, or action type."""


class OperatorNotAllowedError(ValueError):
    """Raised when a condition uses an operator its field type does not support."""


def _validate_against_registries(rule: WorkflowRule, registries: Dict[str, Registry]) -> WorkflowRule:
    trigger_registry = registries["trigger"]
    operator_registry = registries["operator"]
    action_registry = registries["action"]

    if rule.trigger_type.value not in trigger_registry.items:
        raise UnknownRegistryTypeError(f"Unknown trigger type: {rule.trigger_type.value}")

    for condition in rule.conditions_all + rule.conditions_any:
        if condition.operator not in operator_registry.items:
            raise UnknownRegistryTypeError(f"Unknown condition operator: {condition.operator}")

    for action in rule.actions:
        if action.type.value not in action_registry.items:
            raise UnknownRegistryTypeError(f"Unknown action type: {action.type.value}")

    return rule


def _validate_field_types(rule: WorkflowRule, field_types: Mapping[str, FieldType | str]) -> WorkflowRule:
    for condition in rule.conditions_all + rule.conditions_any:
        if condition.field not in field_types:
            continue
        allowed = operators_for_field_type(field_types[condition.field])
        if condition.operator not in allowed:
            raise OperatorNotAllowedError(
                f"Operator {condition.operator} is not allowed for field {condition.field} "
                f"of type {field_types[condition.field]}"
            )
    return rule


def parse_and_validate_workflow(
    payload: dict,
    registries: Dict[str, Registry],
    field_types: Mapping[str, FieldType | str] | None = None,
) -> WorkflowRule:
    """
    Convert parsed JSON (dict) into WorkflowRule and validate registry membership.
    When the module's field types are given, operators are checked against them too.
    Raises ValidationError, UnknownRegistryTypeError or OperatorNotAllowedError on failure.
    """
    rule = WorkflowRule.model_validate(payload)
    _validate_against_registries(rule, registries)
    if field_types:
        _validate_field_types(rule, field_types)
    return rule
