"""Schema Protocols: the contract ValidationGate expects from a schema library.

Invariants:
    - A schema creates independent validation contexts (new_context)
    - clean() mutates the document in place; it never raises for bad values
    - A context accumulates the outcome of one validate() pass

Design Decisions:
    - Protocol over ABC: any schema library can be adapted without inheritance
    - prepare is optional and looked up at call time, so it is not part of Schema
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

from safekit.core.domain_types import Document


@dataclass(frozen=True)
class InvalidKey:
    name: str
    message: str


@dataclass
class ErrorObject:
    """Outcome of the last validate() call on a context."""
    invalid_keys: list[InvalidKey] = field(default_factory=list)


@dataclass(frozen=True)
class PrepareParams:
    """Second argument of a schema's prepare hook."""
    is_update: bool
    modifier: Mapping[str, Any] | None = None


class ValidationContext(Protocol):
    def validate(self, doc: Document, *, modifier: bool = False) -> bool: ...
    def get_error_object(self) -> ErrorObject: ...


@runtime_checkable
class Schema(Protocol):
    def new_context(self) -> ValidationContext: ...
    def clean(
        self,
        doc: Document,
        *,
        is_modifier: bool = False,
        filter: bool = True,
        trim_strings: bool = True,
    ) -> Document: ...
