"""Match Predicates: WhitelistedObject, RegEx, check() and pydantic integration."""

import re
from typing import Annotated

import pytest
from pydantic import BaseModel, ValidationError

from safekit.core.match import MatchError, RegEx, WhitelistedObject, check


# ─── WhitelistedObject ──────────────────────────────────────────

@pytest.mark.parametrize("value", [{"a": 1}, {"a": 1, "b": 2}, {}])
def test_whitelisted_object_accepts_allowed_keys(value):
    assert WhitelistedObject(["a", "b"])(value) is True


def test_whitelisted_object_rejects_extra_key():
    matcher = WhitelistedObject(["a", "b"])
    assert matcher({"a": 1, "c": 3}) is False
    assert matcher.extra_keys({"a": 1, "c": 3}) == {"c"}


def test_whitelisted_object_rejects_non_mappings():
    assert WhitelistedObject(["a"])(["a"]) is False


def test_whitelisted_object_values_are_unconstrained():
    assert WhitelistedObject(["a"])({"a": object()}) is True


# ─── RegEx ──────────────────────────────────────────────────────

def test_regex_accepts_matching_string():
    assert RegEx(r"^\d+$")("123") is True


def test_regex_rejects_non_matching_string():
    assert RegEx(r"^\d+$")("12a") is False


def test_regex_accepts_compiled_pattern_and_rejects_non_strings():
    matcher = RegEx(re.compile(r"^\d+$"))
    assert matcher("7") is True
    assert matcher(7) is False


# ─── check ──────────────────────────────────────────────────────

def test_check_with_type():
    check({}, dict)
    with pytest.raises(MatchError):
        check([], dict)


def test_check_with_matcher():
    check({"a": 1}, WhitelistedObject(["a"]))
    with pytest.raises(MatchError, match="Match failed"):
        check({"z": 1}, WhitelistedObject(["a"]))


def test_match_error_is_a_type_error():
    assert issubclass(MatchError, TypeError)


# ─── pydantic field guard ───────────────────────────────────────

class Preferences(BaseModel):
    options: Annotated[dict, WhitelistedObject(["theme", "lang"]).as_validator()]
    phone: Annotated[str, RegEx(r"^\+?\d{6,15}$").as_validator()] = "000000"


def test_as_validator_guards_model_field():
    assert Preferences(options={"theme": "dark"}).options == {"theme": "dark"}
    with pytest.raises(ValidationError) as exc_info:
        Preferences(options={"theme": "dark", "font": "mono"})
    assert exc_info.value.errors()[0]["loc"] == ("options",)


def test_regex_validator_rejects_bad_value():
    with pytest.raises(ValidationError):
        Preferences(options={}, phone="call me")
