"""Match Predicates: small shape guards usable standalone or inside pydantic models.

Invariants:
    - Predicates are pure callables returning bool; they never raise on bad input
    - check() is the raising form and always raises MatchError (a TypeError)
    - WhitelistedObject constrains keys only; values are unconstrained

Design Decisions:
    - as_validator() returns a pydantic AfterValidator so the same predicate guards
      a model field (Annotated[dict, WhitelistedObject(...).as_validator()])
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from pydantic import AfterValidator


class MatchError(TypeError):
    """Value did not match the expected shape."""


class Matcher:
    """Base predicate. Subclasses implement matches()."""

    description = "value"

    def matches(self, value: Any) -> bool:
        raise NotImplementedError

    def __call__(self, value: Any) -> bool:
        return self.matches(value)

    def as_validator(self) -> AfterValidator:
        def _validate(value: Any) -> Any:
            if not self.matches(value):
                raise ValueError(f"Expected {self.description}")
            return value
        return AfterValidator(_validate)


class WhitelistedObject(Matcher):
    """Accepts a mapping whose keys are all in allowed_keys."""

    def __init__(self, allowed_keys: Iterable[str]):
        self.allowed_keys = frozenset(allowed_keys)
        self.description = (
            f"object with keys from {sorted(self.allowed_keys)}"
        )

    def extra_keys(self, value: Mapping) -> set:
        return set(value) - self.allowed_keys

    def matches(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        return not self.extra_keys(value)


class RegEx(Matcher):
    """Accepts a string the pattern matches (search semantics, anchor as needed)."""

    def __init__(self, pattern: str | re.Pattern):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.description = f"string matching {self.pattern.pattern!r}"

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


def check(value: Any, matcher: Callable[[Any], bool] | type) -> None:
    """Raise MatchError unless value satisfies matcher.

    matcher is either a predicate (a Matcher or any bool-returning callable)
    or a type, in which case isinstance() is used.
    """
    if isinstance(matcher, type):
        if not isinstance(value, matcher):
            raise MatchError(
                f"Expected {matcher.__name__}, got {type(value).__name__}"
            )
        return
    if not matcher(value):
        description = getattr(matcher, "description", "a matching value")
        raise MatchError(f"Match failed: expected {description}")
