"""Validation Gate: runs validate_document and applies the deployment's failure mode.

Invariants:
    - raise mode: a failed validation raises ValidationFailedError(details=field map)
    - return mode: the field map is returned; None means the document is clean
    - One mode per gate; the module-level validate() uses settings.validation_errors
"""

import logging
from functools import lru_cache

from safekit.config import get_settings
from safekit.core.domain_types import Document, FieldErrorMap
from safekit.core.errors import ValidationFailedError
from safekit.core.schema_protocols import Schema, ValidationContext
from safekit.core.validate_document import ValidationOptions, validate_document

logger = logging.getLogger(__name__)


class ValidationGate:
    """Cleans and validates documents, raising or returning field errors."""

    def __init__(self, raise_errors: bool = True):
        self.raise_errors = raise_errors

    def validate(
        self,
        doc_or_mod: Document,
        schema: Schema,
        *,
        is_modifier: bool = False,
        context: ValidationContext | None = None,
    ) -> FieldErrorMap | None:
        errors = validate_document(
            doc_or_mod,
            schema,
            ValidationOptions(is_modifier=is_modifier, context=context),
        )
        if errors is None:
            return None

        logger.info(
            f"Validation failed for {len(errors)} field(s)",
            extra={"error_code": "validation-failed", "fields": sorted(errors)},
        )
        if self.raise_errors:
            raise ValidationFailedError(errors)
        return errors


@lru_cache
def get_validation_gate() -> ValidationGate:
    return ValidationGate(raise_errors=get_settings().raise_validation_errors)


def validate(
    doc_or_mod: Document,
    schema: Schema,
    *,
    is_modifier: bool = False,
    context: ValidationContext | None = None,
) -> FieldErrorMap | None:
    """Validate with the gate configured for this process."""
    return get_validation_gate().validate(
        doc_or_mod, schema, is_modifier=is_modifier, context=context,
    )
