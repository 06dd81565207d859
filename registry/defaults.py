from models import ActionKind, TriggerType

from .operators import NUMERIC_VALUE_OPERATORS, OPERATOR_LABELS, VALUELESS_OPERATORS
from .registry import Registry


def create_default_registries() -> dict[str, Registry]:
    """Create the registries for triggers, condition operators and actions."""
    trigger_registry = Registry(name="trigger")
    trigger_registry.register(TriggerType.ON_CREATE.value, "وقتی رکورد جدید ایجاد شد")
    trigger_registry.register(TriggerType.ON_UPSERT.value, "وقتی رکورد ایجاد یا به‌روز شد")
    trigger_registry.register(TriggerType.INTERVAL.value, "بر اساس بازه زمانی", tags=("scheduled",))

    operator_registry = Registry(name="operator")
    for operator, label in OPERATOR_LABELS.items():
        tags = []
        if operator in VALUELESS_OPERATORS:
            tags.append("valueless")
        if operator in NUMERIC_VALUE_OPERATORS:
            tags.append("numeric_value")
        operator_registry.register(operator, label, tags=tags)

    action_registry = Registry(name="action")
    action_registry.register(ActionKind.SEND_NOTE.value, "ارسال یادداشت")
    action_registry.register(ActionKind.SEND_SMS.value, "ارسال پیامک")
    action_registry.register(ActionKind.SEND_EMAIL.value, "ارسال ایمیل")
    action_registry.register(ActionKind.UPDATE_RECORD.value, "به‌روزرسانی رکورد")
    action_registry.register(ActionKind.CREATE_RELATED_RECORD.value, "ایجاد رکورد مرتبط")

    return {
        "trigger": trigger_registry,
        "operator": operator_registry,
        "action": action_registry,
    }
