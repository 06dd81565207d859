"""
Condition evaluation against a (current, previous) record pair.

Each operator is a function of an ``_Operands`` bundle. Evaluation never
raises on bad data: an unknown operator, an unparseable date or a
non-numeric comparison all yield ``False``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, Mapping

from models import Condition

from .coercion import (
    as_list,
    days_between,
    hours_between,
    is_empty,
    is_truthy,
    parse_datetime,
    stringify,
    to_comparable,
    to_number,
)

logger = logging.getLogger("workflow_runtime")

Record = Mapping[str, Any]


@dataclass(frozen=True)
class _Operands:
    raw: Any
    expected_raw: Any
    current: Any
    previous: Any
    expected: Any
    now: datetime


def _text(value: Any) -> str:
    return stringify(value).lower()


def _members(ops: _Operands) -> list[str]:
    return [stringify(to_comparable(item)) for item in as_list(ops.expected_raw)]


def _threshold(ops: _Operands) -> float:
    # A missing operand counts as zero, anything else non-numeric fails closed.
    if ops.expected_raw is None or ops.expected_raw == "" or ops.expected_raw is False:
        return 0.0
    return to_number(ops.expected_raw)


def _calendar_day(offset_days: int) -> Callable[[_Operands], bool]:
    def check(ops: _Operands) -> bool:
        parsed = parse_datetime(ops.raw, ops.now)
        if parsed is None:
            return False
        return parsed.date() == (ops.now + timedelta(days=offset_days)).date()

    return check


def _elapsed(unit: Callable[[datetime, datetime], float], remaining: bool, greater: bool) -> Callable[[_Operands], bool]:
    def check(ops: _Operands) -> bool:
        parsed = parse_datetime(ops.raw, ops.now)
        if parsed is None:
            return False
        diff = unit(parsed, ops.now)
        if remaining:
            if diff >= 0:
                return False
            diff = abs(diff)
        limit = _threshold(ops)
        return diff > limit if greater else diff < limit

    return check


def _changed(ops: _Operands) -> bool:
    return stringify(ops.current) != stringify(ops.previous)


OPERATORS: Dict[str, Callable[[_Operands], bool]] = {
    "eq": lambda ops: stringify(ops.current) == stringify(ops.expected),
    "neq": lambda ops: stringify(ops.current) != stringify(ops.expected),
    "contains": lambda ops: _text(ops.expected) in _text(ops.current),
    "not_contains": lambda ops: _text(ops.expected) not in _text(ops.current),
    "starts_with": lambda ops: _text(ops.current).startswith(_text(ops.expected)),
    "ends_with": lambda ops: _text(ops.current).endswith(_text(ops.expected)),
    "gt": lambda ops: to_number(ops.current) > to_number(ops.expected),
    "gte": lambda ops: to_number(ops.current) >= to_number(ops.expected),
    "lt": lambda ops: to_number(ops.current) < to_number(ops.expected),
    "lte": lambda ops: to_number(ops.current) <= to_number(ops.expected),
    "in": lambda ops: stringify(ops.current) in _members(ops),
    "not_in": lambda ops: stringify(ops.current) not in _members(ops),
    "is_true": lambda ops: is_truthy(ops.raw),
    "is_false": lambda ops: not is_truthy(ops.raw),
    "is_null": lambda ops: is_empty(ops.raw),
    "not_null": lambda ops: not is_empty(ops.raw),
    "changed": _changed,
    "changed_from": lambda ops: stringify(ops.previous) == stringify(ops.expected) and _changed(ops),
    "changed_to": lambda ops: stringify(ops.current) == stringify(ops.expected) and _changed(ops),
    "is_today": _calendar_day(0),
    "is_yesterday": _calendar_day(-1),
    "is_tomorrow": _calendar_day(1),
    "days_passed_gt": _elapsed(days_between, remaining=False, greater=True),
    "days_passed_lt": _elapsed(days_between, remaining=False, greater=False),
    "days_remaining_gt": _elapsed(days_between, remaining=True, greater=True),
    "days_remaining_lt": _elapsed(days_between, remaining=True, greater=False),
    "hours_passed_gt": _elapsed(hours_between, remaining=False, greater=True),
    "hours_passed_lt": _elapsed(hours_between, remaining=False, greater=False),
    "hours_remaining_gt": _elapsed(hours_between, remaining=True, greater=True),
    "hours_remaining_lt": _elapsed(hours_between, remaining=True, greater=False),
}


def evaluate_condition(
    condition: Condition,
    current_record: Record,
    previous_record: Record | None = None,
    now: datetime | None = None,
) -> bool:
    """Evaluate one condition. Unknown operators and unusable values yield False."""
    check = OPERATORS.get(str(condition.operator or "eq"))
    if check is None:
        logger.debug("Unknown workflow operator %r on field %r", condition.operator, condition.field)
        return False

    field = str(condition.field or "")
    raw = (current_record or {}).get(field)
    previous = (previous_record or {}).get(field)
    operands = _Operands(
        raw=raw,
        expected_raw=condition.value,
        current=to_comparable(raw),
        previous=to_comparable(previous),
        expected=to_comparable(condition.value),
        now=now or datetime.now(),
    )
    return bool(check(operands))


def evaluate_groups(
    conditions_all: Iterable[Condition],
    conditions_any: Iterable[Condition],
    current_record: Record,
    previous_record: Record | None = None,
    now: datetime | None = None,
) -> bool:
    """AND over ``conditions_all``; OR over ``conditions_any``, where an empty OR group passes."""
    now = now or datetime.now()
    all_pass = all(evaluate_condition(c, current_record, previous_record, now) for c in conditions_all)
    any_conditions = list(conditions_any)
    any_pass = not any_conditions or any(
        evaluate_condition(c, current_record, previous_record, now) for c in any_conditions
    )
    return all_pass and any_pass
