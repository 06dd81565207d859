from registry import (
    OPERATOR_LABELS,
    FieldType,
    create_default_registries,
    default_operator,
    operator_needs_value,
    operator_takes_numeric_value,
    operators_for_field_type,
)


def test_field_types_map_to_catalogued_operators():
    for field_type in FieldType:
        operators = operators_for_field_type(field_type)
        assert operators
        assert set(operators) <= set(OPERATOR_LABELS)


def test_field_type_operator_sets():
    assert operators_for_field_type(None) == ["eq"]
    assert operators_for_field_type("phone")[0] == "contains"
    assert operators_for_field_type("not-a-type") == operators_for_field_type(FieldType.TEXT)
    assert "in" in operators_for_field_type(FieldType.TAGS)
    assert "hours_passed_gt" in operators_for_field_type(FieldType.TIME)
    assert "is_today" not in operators_for_field_type(FieldType.TIME)
    assert "hours_passed_gt" not in operators_for_field_type(FieldType.DATE)


def test_defaults_and_value_requirements():
    assert default_operator(FieldType.CHECKBOX) == "is_true"
    assert default_operator(FieldType.PRICE) == "eq"
    assert not operator_needs_value("changed")
    assert operator_needs_value("changed_to")
    assert operator_takes_numeric_value("days_remaining_lt")
    assert not operator_takes_numeric_value("gt")


def test_default_registries():
    registries = create_default_registries()
    assert set(registries) == {"trigger", "operator", "action"}
    assert "interval" in registries["trigger"]
    assert registries["trigger"].tagged("scheduled") == ["interval"]
    assert len(registries["action"].items) == 5
    assert set(registries["operator"].tagged("numeric_value")) == {
        "days_passed_gt",
        "days_passed_lt",
        "days_remaining_gt",
        "days_remaining_lt",
        "hours_passed_gt",
        "hours_passed_lt",
        "hours_remaining_gt",
        "hours_remaining_lt",
    }
