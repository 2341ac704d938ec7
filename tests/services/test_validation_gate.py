"""Validation Gate: raise vs return modes and the settings-driven default gate.

Tests cover:
    - raise mode wraps the field map in ValidationFailedError
    - return mode hands the field map back
    - Clean documents produce None in both modes
    - validate() follows SAFEKIT_VALIDATION_ERRORS
"""

import pytest
from pydantic import BaseModel

from safekit.core.errors import ValidationFailedError
from safekit.schemas.model_schema import ModelSchema
from safekit.services.validation_gate import (
    ValidationGate,
    get_validation_gate,
    validate,
)


class Ticket(BaseModel):
    title: str
    priority: int = 3


SCHEMA = ModelSchema(Ticket)


def test_raise_mode_raises_validation_failed():
    gate = ValidationGate(raise_errors=True)
    with pytest.raises(ValidationFailedError) as exc_info:
        gate.validate({"priority": 1}, SCHEMA)
    assert set(exc_info.value.field_errors) == {"title"}


def test_return_mode_returns_field_map():
    gate = ValidationGate(raise_errors=False)
    errors = gate.validate({"priority": "urgent"}, SCHEMA)
    assert set(errors) == {"title", "priority"}


@pytest.mark.parametrize("raise_errors", [True, False])
def test_clean_document_returns_none(raise_errors):
    doc = {"title": "Broken build"}
    assert ValidationGate(raise_errors).validate(doc, SCHEMA) is None
    assert doc == {"title": "Broken build", "priority": 3}


def test_gate_validates_modifiers():
    gate = ValidationGate(raise_errors=False)
    assert gate.validate({"$set": {"priority": "2"}}, SCHEMA, is_modifier=True) is None
    errors = gate.validate({"$unset": {"title": ""}}, SCHEMA, is_modifier=True)
    assert errors == {"title": "Field required"}


def test_gate_uses_explicit_context():
    context = SCHEMA.new_context()
    ValidationGate(raise_errors=False).validate({}, SCHEMA, context=context)
    assert [k.name for k in context.get_error_object().invalid_keys] == ["title"]


def test_default_gate_raises():
    with pytest.raises(ValidationFailedError):
        validate({}, SCHEMA)


def test_default_gate_returns_when_configured(monkeypatch):
    monkeypatch.setenv("SAFEKIT_VALIDATION_ERRORS", "return")
    assert get_validation_gate().raise_errors is False
    assert validate({}, SCHEMA) == {"title": "Field required"}
