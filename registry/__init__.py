from .defaults import create_default_registries
from .operators import (
    FieldType,
    OPERATOR_LABELS,
    default_operator,
    operator_needs_value,
    operator_takes_numeric_value,
    operators_for_field_type,
)
from .registry import Registry, RegistryItem

__all__ = [
    "FieldType",
    "OPERATOR_LABELS",
    "Registry",
    "RegistryItem",
    "create_default_registries",
    "default_operator",
    "operator_needs_value",
    "operator_takes_numeric_value",
    "operators_for_field_type",
]
