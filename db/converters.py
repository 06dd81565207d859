"""
Conversion utilities between Pydantic models and SQLAlchemy DB models.
"""

from typing import Any, Dict

from models import Action, Condition, WorkflowRule

from .models import WorkflowModel


def _condition_to_dict(condition: Condition) -> Dict[str, Any]:
    return {
        "id": condition.id,
        "field": condition.field,
        "operator": condition.operator,
        "value": condition.value,
    }


def pydantic_to_db_workflow(rule: WorkflowRule, workflow_id: str | None = None) -> WorkflowModel:
    """
    Convert a Pydantic WorkflowRule to a SQLAlchemy WorkflowModel.

    Args:
        rule: Pydantic WorkflowRule to convert
        workflow_id: Optional ID to assign; falls back to rule.id, then to a generated one on save
    """
    actions_list: list[Dict[str, Any]] = [
        {"id": action.id, "type": action.type.value, "config": action.config} for action in rule.actions
    ]

    return WorkflowModel(
        id=workflow_id or rule.id,
        module_id=rule.module_id,
        name=rule.name,
        description=rule.description,
        trigger_type=rule.trigger_type.value,
        interval_value=rule.interval_value,
        interval_unit=rule.interval_unit.value if rule.interval_unit else None,
        interval_at=rule.interval_at,
        batch_size=rule.batch_size,
        conditions_all=[_condition_to_dict(cond) for cond in rule.conditions_all],
        conditions_any=[_condition_to_dict(cond) for cond in rule.conditions_any],
        actions=actions_list,
        is_active=rule.is_active,
    )


def db_to_pydantic_workflow(db_workflow: WorkflowModel) -> WorkflowRule:
    """
    Convert a SQLAlchemy WorkflowModel to a Pydantic WorkflowRule.

    Raises pydantic.ValidationError if the stored JSON no longer fits the schema.
    """
    conditions_all = [Condition.model_validate(cond) for cond in db_workflow.conditions_all or []]
    conditions_any = [Condition.model_validate(cond) for cond in db_workflow.conditions_any or []]
    actions = [Action.model_validate(action) for action in db_workflow.actions or []]

    return WorkflowRule(
        id=db_workflow.id,
        module_id=db_workflow.module_id,
        name=db_workflow.name or "",
        description=db_workflow.description,
        trigger_type=db_workflow.trigger_type,
        interval_value=db_workflow.interval_value,
        interval_unit=db_workflow.interval_unit,
        interval_at=db_workflow.interval_at,
        batch_size=db_workflow.batch_size,
        conditions_all=conditions_all,
        conditions_any=conditions_any,
        actions=actions,
        is_active=bool(db_workflow.is_active),
    )
