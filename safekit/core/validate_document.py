"""Document Validation: prepare, clean and validate a document or modifier.

Invariants:
    - Preconditions (non-mapping document, foreign context...) raise MatchError at once
    - Cleaning always runs with filter=False and trim_strings=False, whatever the
      schema's own configuration
    - A context is created per call unless the caller passes one
    - In modifier mode a missing or falsy $set gives the prepare hook an empty mapping
    - Result is either None (document is clean) or a FieldErrorMap, never both

Design Decisions:
    - Returns the error map instead of raising; services/validation_gate.py decides
      whether a deployment raises or returns
"""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass

from safekit.core.domain_types import SET_KEY, Document, FieldErrorMap
from safekit.core.match import MatchError, check
from safekit.core.schema_protocols import (
    PrepareParams,
    Schema,
    ValidationContext,
)


@dataclass
class ValidationOptions:
    is_modifier: bool = False
    context: ValidationContext | None = None


def validate_document(
    doc_or_mod: Document,
    schema: Schema,
    options: ValidationOptions | None = None,
) -> FieldErrorMap | None:
    """Cleans and validates doc_or_mod in place against schema.

    Returns a {field: message} map when validation fails, None otherwise.
    """
    options = options or ValidationOptions()
    context = _resolve_context(doc_or_mod, schema, options)

    run_prepare_hook(doc_or_mod, schema, options.is_modifier)

    schema.clean(
        doc_or_mod,
        is_modifier=options.is_modifier,
        filter=False,
        trim_strings=False,
    )

    if context.validate(doc_or_mod, modifier=options.is_modifier):
        return None

    return {
        key.name: key.message
        for key in context.get_error_object().invalid_keys
    }


def run_prepare_hook(doc_or_mod: Document, schema: Schema, is_modifier: bool) -> None:
    """Call schema.prepare, if declared, with the attributes being written."""
    prepare = getattr(schema, "prepare", None)
    if not callable(prepare):
        return

    if is_modifier:
        attributes = doc_or_mod.get(SET_KEY)
        if not attributes and not isinstance(attributes, Mapping):
            attributes = {}
        params = PrepareParams(is_update=True, modifier=doc_or_mod)
    else:
        attributes = doc_or_mod
        params = PrepareParams(is_update=False)

    check(attributes, Mapping)
    prepare(attributes, params)


def _resolve_context(
    doc_or_mod: Document, schema: Schema, options: ValidationOptions,
) -> ValidationContext:
    check(doc_or_mod, MutableMapping)
    if not isinstance(schema, Schema):
        raise MatchError(
            f"Expected a schema, got {type(schema).__name__}"
        )
    check(options.is_modifier, bool)

    fresh = schema.new_context()
    if options.context is None:
        return fresh
    # Contexts only understand the schema that built them
    check(options.context, type(fresh))
    return options.context
