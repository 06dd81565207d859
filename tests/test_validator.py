import pytest
from pydantic import ValidationError

from registry import FieldType, create_default_registries
from validations import OperatorNotAllowedError, UnknownRegistryTypeError, parse_and_validate_workflow


def _payload(**overrides):
    payload = {
        "module_id": "products",
        "name": "low stock",
        "trigger_type": "on_upsert",
        "conditions_all": [{"field": "stock", "operator": "lt", "value": 5}],
        "actions": [{"type": "send_sms", "config": {"manual_numbers": ["09121111111"], "message": "{{name}}"}}],
    }
    payload.update(overrides)
    return payload


def test_valid_payload_parses():
    rule = parse_and_validate_workflow(_payload(), create_default_registries())
    assert rule.conditions_all[0].operator == "lt"
    assert rule.conditions_any == []


def test_unknown_operator_is_rejected():
    payload = _payload(conditions_any=[{"field": "name", "operator": "sounds_like", "value": "x"}])
    with pytest.raises(UnknownRegistryTypeError):
        parse_and_validate_workflow(payload, create_default_registries())


def test_unknown_action_type_fails_schema_validation():
    with pytest.raises(ValidationError):
        parse_and_validate_workflow(_payload(actions=[{"type": "fax"}]), create_default_registries())


def test_operator_must_fit_field_type():
    registries = create_default_registries()
    field_types = {"stock": FieldType.STOCK, "name": "text"}
    parse_and_validate_workflow(_payload(), registries, field_types)

    payload = _payload(conditions_all=[{"field": "name", "operator": "gt", "value": 3}])
    with pytest.raises(OperatorNotAllowedError):
        parse_and_validate_workflow(payload, registries, field_types)


def test_fields_without_known_type_are_not_checked():
    payload = _payload(conditions_all=[{"field": "custom", "operator": "is_today"}])
    parse_and_validate_workflow(payload, create_default_registries(), {"stock": FieldType.STOCK})
