"""
Value coercion for condition evaluation.

Records reach the engine as loosely typed mappings: numbers may arrive as
text (with thousands separators or Persian digits), booleans as strings,
multi-selects as lists. The helpers here turn such values into comparable
forms. Numeric sniffing of text values is a compatibility shim for callers
that do not pre-coerce; callers that know a module's field schema should run
values through ``normalize_value_by_field_type`` before raising an event.
"""

import json
import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any, List

from registry.operators import FieldType
from sms.phone import to_english_digits

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

NUMERIC_FIELD_TYPES = frozenset({FieldType.NUMBER, FieldType.PRICE, FieldType.PERCENTAGE, FieldType.STOCK})
LIST_FIELD_TYPES = frozenset({FieldType.MULTI_SELECT, FieldType.TAGS})


def parse_number(text: str) -> int | float | None:
    """Parse text that is entirely a decimal number, ignoring thousands separators."""
    cleaned = to_english_digits(text).replace(",", "").replace("٬", "").replace("٫", ".").strip()
    if not cleaned or not _NUMBER_RE.fullmatch(cleaned):
        return None
    number = float(cleaned)
    if number.is_integer() and abs(number) < 2**53:
        return int(number)
    return number


def to_comparable(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (list, tuple)):
        return [to_comparable(item) for item in value]
    if isinstance(value, str):
        trimmed = value.strip()
        number = parse_number(trimmed)
        return trimmed if number is None else number
    return value


def as_list(value: Any) -> List[Any]:
    """List form of an ``in``/``not_in`` operand: native list or comma-separated text."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if value is None or value == "":
        return []
    if isinstance(value, str) and "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]
    return [value]


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer() and abs(value) < 2**53:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def to_number(value: Any) -> float:
    """Numeric form for relational operators; anything non-numeric becomes NaN."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        number = parse_number(value)
        return math.nan if number is None else float(number)
    return math.nan


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (bool, int, float, str)):
        return bool(value)
    return True


def parse_datetime(value: Any, now: datetime | None = None) -> datetime | None:
    """Parse a field value into a naive local datetime, or None when it is not a date."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    text = to_english_digits(value.strip())
    match = _TIME_RE.match(text)
    if match:
        hour, minute, second = int(match.group(1)), int(match.group(2)), int(match.group(3) or 0)
        if hour > 23 or minute > 59 or second > 59:
            return None
        today = (now or datetime.now()).date()
        return datetime.combine(today, time(hour, minute, second))
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def normalize_value_by_field_type(field_type: FieldType | str | None, value: Any) -> Any:
    """Pre-coerce a raw value according to the module field type that holds it."""
    if field_type is None or value is None:
        return value
    try:
        resolved = FieldType(field_type)
    except ValueError:
        return value

    if resolved in LIST_FIELD_TYPES:
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value] if value else []

    if resolved in NUMERIC_FIELD_TYPES:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value if math.isfinite(value) else None
        return parse_number(str(value))

    if resolved == FieldType.CHECKBOX:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("true", "1"):
            return True
        if normalized in ("false", "0"):
            return False
        return bool(value)

    return value


def days_between(then: datetime, now: datetime) -> float:
    return (now - then) / timedelta(days=1)


def hours_between(then: datetime, now: datetime) -> float:
    return (now - then) / timedelta(hours=1)
