"""
Fixed operator catalogue for workflow conditions.

Maps every operator identifier to its UI label and every module field type to
the operators a rule author may pick for it. The evaluator does not consult
the field-type mapping; it is used when rules are authored or imported.
"""

from enum import Enum
from typing import Dict, List


class FieldType(str, Enum):
    TEXT = "text"
    LONG_TEXT = "long_text"
    LINK = "link"
    PHONE = "phone"
    NUMBER = "number"
    PRICE = "price"
    PERCENTAGE = "percentage"
    STOCK = "stock"
    SELECT = "select"
    STATUS = "status"
    RELATION = "relation"
    USER = "user"
    MULTI_SELECT = "multi_select"
    TAGS = "tags"
    CHECKBOX = "checkbox"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


OPERATOR_LABELS: Dict[str, str] = {
    "eq": "برابر است با",
    "neq": "برابر نیست با",
    "contains": "شامل است",
    "not_contains": "شامل نیست",
    "starts_with": "شروع می‌شود با",
    "ends_with": "پایان می‌یابد با",
    "gt": "بزرگ‌تر از",
    "gte": "بزرگ‌تر/مساوی",
    "lt": "کوچک‌تر از",
    "lte": "کوچک‌تر/مساوی",
    "in": "در بین",
    "not_in": "خارج از",
    "is_true": "فعال باشد",
    "is_false": "غیرفعال باشد",
    "is_null": "خالی باشد",
    "not_null": "خالی نباشد",
    "changed": "تغییر کرد",
    "changed_from": "تغییر کرد از",
    "changed_to": "تغییر کرد به",
    "is_today": "امروز باشد",
    "is_yesterday": "دیروز باشد",
    "is_tomorrow": "فردا باشد",
    "days_passed_gt": "بیشتر از چند روز گذشته باشد",
    "days_passed_lt": "کمتر از چند روز گذشته باشد",
    "days_remaining_gt": "بیشتر از چند روز مانده باشد",
    "days_remaining_lt": "کمتر از چند روز مانده باشد",
    "hours_passed_gt": "بیشتر از چند ساعت گذشته باشد",
    "hours_passed_lt": "کمتر از چند ساعت گذشته باشد",
    "hours_remaining_gt": "بیشتر از چند ساعت مانده باشد",
    "hours_remaining_lt": "کمتر از چند ساعت مانده باشد",
}

VALUELESS_OPERATORS = frozenset(
    {"is_true", "is_false", "is_null", "not_null", "changed", "is_today", "is_yesterday", "is_tomorrow"}
)

DAY_OPERATORS = ["days_passed_gt", "days_passed_lt", "days_remaining_gt", "days_remaining_lt"]
HOUR_OPERATORS = ["hours_passed_gt", "hours_passed_lt", "hours_remaining_gt", "hours_remaining_lt"]
NUMERIC_VALUE_OPERATORS = frozenset(DAY_OPERATORS + HOUR_OPERATORS)

_CHANGE = ["changed", "changed_from", "changed_to"]
_NULLS = ["is_null", "not_null"]
_COMPARE = ["eq", "neq", "gt", "gte", "lt", "lte"]
_CALENDAR = ["is_today", "is_yesterday", "is_tomorrow"]

TEXT_OPERATORS = ["contains", "not_contains", "starts_with", "ends_with", "eq", "neq"] + _CHANGE + _NULLS
NUMERIC_OPERATORS = _COMPARE + _CHANGE + _NULLS
SELECT_OPERATORS = ["eq", "neq", "in", "not_in"] + _CHANGE + _NULLS
BOOLEAN_OPERATORS = ["is_true", "is_false", "eq", "neq", "changed"]
DATE_OPERATORS = _COMPARE + _CHANGE + _CALENDAR + DAY_OPERATORS + _NULLS
TIME_OPERATORS = _COMPARE + _CHANGE + HOUR_OPERATORS + _NULLS
DATETIME_OPERATORS = _COMPARE + _CHANGE + _CALENDAR + DAY_OPERATORS + HOUR_OPERATORS + _NULLS

OPERATORS_BY_FIELD_TYPE: Dict[FieldType, List[str]] = {
    FieldType.CHECKBOX: BOOLEAN_OPERATORS,
    FieldType.NUMBER: NUMERIC_OPERATORS,
    FieldType.PRICE: NUMERIC_OPERATORS,
    FieldType.PERCENTAGE: NUMERIC_OPERATORS,
    FieldType.STOCK: NUMERIC_OPERATORS,
    FieldType.SELECT: SELECT_OPERATORS,
    FieldType.STATUS: SELECT_OPERATORS,
    FieldType.RELATION: SELECT_OPERATORS,
    FieldType.USER: SELECT_OPERATORS,
    FieldType.MULTI_SELECT: SELECT_OPERATORS,
    FieldType.TAGS: SELECT_OPERATORS,
    FieldType.DATE: DATE_OPERATORS,
    FieldType.TIME: TIME_OPERATORS,
    FieldType.DATETIME: DATETIME_OPERATORS,
}


def _as_field_type(field_type: FieldType | str | None) -> FieldType | None:
    if field_type is None or isinstance(field_type, FieldType):
        return field_type
    try:
        return FieldType(str(field_type))
    except ValueError:
        return None


def operators_for_field_type(field_type: FieldType | str | None) -> List[str]:
    """Operators a condition on a field of this type may use; unknown types get the text set."""
    if field_type is None:
        return ["eq"]
    resolved = _as_field_type(field_type)
    return list(OPERATORS_BY_FIELD_TYPE.get(resolved, TEXT_OPERATORS))


def default_operator(field_type: FieldType | str | None) -> str:
    options = operators_for_field_type(field_type)
    return options[0] if options else "eq"


def operator_needs_value(operator: str | None) -> bool:
    return str(operator or "") not in VALUELESS_OPERATORS


def operator_takes_numeric_value(operator: str | None) -> bool:
    return str(operator or "") in NUMERIC_VALUE_OPERATORS
