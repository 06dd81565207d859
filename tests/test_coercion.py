import math
from datetime import date, datetime

from engine.coercion import (
    as_list,
    is_truthy,
    normalize_value_by_field_type,
    parse_datetime,
    parse_number,
    stringify,
    to_comparable,
    to_number,
)
from registry import FieldType


def test_numeric_text_becomes_number():
    assert to_comparable(" 1,250 ") == 1250
    assert to_comparable("12.5") == 12.5
    assert to_comparable("۱۲۳") == 123


def test_non_numeric_text_is_trimmed():
    assert to_comparable("  todo ") == "todo"
    assert to_comparable("12abc") == "12abc"


def test_booleans_lists_and_objects():
    assert to_comparable(True) is True
    assert to_comparable(["1", " a "]) == [1, "a"]
    payload = {"nested": 1}
    assert to_comparable(payload) is payload
    assert to_comparable(None) is None


def test_parse_number_rejects_partial_numbers():
    assert parse_number("") is None
    assert parse_number("1.2.3") is None
    assert parse_number("1e3") == 1000


def test_as_list_accepts_lists_and_comma_separated_text():
    assert as_list(["a", "b"]) == ["a", "b"]
    assert as_list("a, b ,,c") == ["a", "b", "c"]
    assert as_list("single") == ["single"]
    assert as_list("") == []
    assert as_list(None) == []


def test_stringify_loose_forms():
    assert stringify(None) == ""
    assert stringify(True) == "true"
    assert stringify(3.0) == "3"
    assert stringify(2.5) == "2.5"
    assert stringify([1, "a", None]) == "1,a,"


def test_to_number_fails_to_nan():
    assert to_number("abc") != to_number("abc")
    assert math.isnan(to_number(None))
    assert to_number(True) == 1.0
    assert to_number("1,000") == 1000.0


def test_truthiness_follows_loose_rules():
    assert is_truthy("0") is True
    assert is_truthy("") is False
    assert is_truthy(0) is False
    assert is_truthy([]) is True
    assert is_truthy(None) is False


def test_parse_datetime_forms():
    now = datetime(2026, 3, 10, 12, 0)
    assert parse_datetime("2026-03-09") == datetime(2026, 3, 9)
    assert parse_datetime("2026-03-09T08:30:00") == datetime(2026, 3, 9, 8, 30)
    assert parse_datetime(date(2026, 1, 2)) == datetime(2026, 1, 2)
    assert parse_datetime("14:30", now) == datetime(2026, 3, 10, 14, 30)
    assert parse_datetime("not a date") is None
    assert parse_datetime("") is None
    assert parse_datetime(True) is None


def test_normalize_value_by_field_type():
    assert normalize_value_by_field_type(FieldType.PRICE, "1,200,000") == 1200000
    assert normalize_value_by_field_type(FieldType.NUMBER, "abc") is None
    assert normalize_value_by_field_type(FieldType.TAGS, "red") == ["red"]
    assert normalize_value_by_field_type(FieldType.MULTI_SELECT, "") == []
    assert normalize_value_by_field_type(FieldType.CHECKBOX, "1") is True
    assert normalize_value_by_field_type(FieldType.CHECKBOX, "false") is False
    assert normalize_value_by_field_type("text", " keep ") == " keep "
    assert normalize_value_by_field_type("unknown_type", "x") == "x"
