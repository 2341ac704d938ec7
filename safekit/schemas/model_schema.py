"""Model Schema: adapts a pydantic model class to the Schema protocol.

Invariants:
    - clean() never raises on bad values; they are left for validate() to report
    - Defaults are applied to full documents only, never to modifiers
    - Modifier validation checks $set values field by field and refuses $unset
      of required fields
    - Error names are dotted pydantic locations; model-level errors use "__root__"

Design Decisions:
    - One TypeAdapter per field built at construction: clean() coerces with the bare
      annotation, the context validates with annotation + constraints
    - Field validators declared with @field_validator run for full documents only
"""

from collections.abc import Callable, Mapping, MutableMapping
from typing import Annotated, Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from safekit.core.domain_types import SET_KEY, UNSET_KEY, Document
from safekit.core.schema_protocols import ErrorObject, InvalidKey, PrepareParams

ROOT_ERROR_KEY = "__root__"


def _location_name(loc: tuple, prefix: str | None = None) -> str:
    parts = [str(p) for p in loc]
    if prefix is not None:
        parts.insert(0, prefix)
    return ".".join(parts) or ROOT_ERROR_KEY


def _constrained_type(field: FieldInfo) -> Any:
    if field.metadata:
        return Annotated[(field.annotation, *field.metadata)]
    return field.annotation


class ModelSchema:
    """Schema backed by a pydantic BaseModel subclass."""

    def __init__(
        self,
        model: type[BaseModel],
        prepare: Callable[[Document, PrepareParams], None] | None = None,
    ):
        self.model = model
        self.prepare = prepare
        self._coercers = {
            name: TypeAdapter(field.annotation)
            for name, field in model.model_fields.items()
        }
        self._validators = {
            name: TypeAdapter(_constrained_type(field))
            for name, field in model.model_fields.items()
        }

    @property
    def fields(self) -> dict[str, FieldInfo]:
        return self.model.model_fields

    @property
    def forbids_extra(self) -> bool:
        return self.model.model_config.get("extra") == "forbid"

    def new_context(self) -> "ModelValidationContext":
        return ModelValidationContext(self)

    def clean(
        self,
        doc: Document,
        *,
        is_modifier: bool = False,
        filter: bool = True,
        trim_strings: bool = True,
    ) -> Document:
        """Coerce, default, filter and trim doc in place. Returns doc."""
        if is_modifier:
            target = doc.get(SET_KEY)
            if not isinstance(target, MutableMapping):
                return doc
        else:
            target = doc

        for key in list(target):
            if key not in self.fields:
                if filter:
                    del target[key]
                continue
            value = target[key]
            if trim_strings and isinstance(value, str):
                value = value.strip()
            target[key] = self._coerce(key, value)

        if not is_modifier:
            self._apply_defaults(target)
        return doc

    def _coerce(self, key: str, value: Any) -> Any:
        adapter = self._coercers[key]
        try:
            return adapter.dump_python(adapter.validate_python(value))
        except ValidationError:
            # left as-is; the validation context reports it
            return value

    def _apply_defaults(self, doc: Document) -> None:
        for name, field in self.fields.items():
            if name in doc or field.is_required():
                continue
            default = field.get_default(call_default_factory=True)
            if default is not None:
                doc[name] = default

    def validate_set(self, fields: Mapping[str, Any]) -> list[InvalidKey]:
        """Validate the values of a $set operator one field at a time."""
        invalid: list[InvalidKey] = []
        for key, value in fields.items():
            top = key.split(".", 1)[0]
            if top not in self.fields:
                if self.forbids_extra:
                    invalid.append(InvalidKey(key, "Extra inputs are not permitted"))
                continue
            if top != key:
                # dotted paths into nested fields are not checked
                continue
            try:
                self._validators[key].validate_python(value)
            except ValidationError as exc:
                invalid.extend(
                    InvalidKey(_location_name(e["loc"], key), e["msg"])
                    for e in exc.errors()
                )
        return invalid

    def validate_unset(self, fields: Mapping[str, Any]) -> list[InvalidKey]:
        return [
            InvalidKey(key, "Field required")
            for key in fields
            if key in self.fields and self.fields[key].is_required()
        ]


class ModelValidationContext:
    """Holds the outcome of the last validate() call for one ModelSchema."""

    def __init__(self, schema: ModelSchema):
        self.schema = schema
        self._invalid_keys: list[InvalidKey] = []

    def validate(self, doc: Document, *, modifier: bool = False) -> bool:
        if modifier:
            self._invalid_keys = self._validate_modifier(doc)
        else:
            self._invalid_keys = self._validate_document(doc)
        return not self._invalid_keys

    def _validate_document(self, doc: Document) -> list[InvalidKey]:
        try:
            self.schema.model.model_validate(dict(doc))
        except ValidationError as exc:
            return [
                InvalidKey(_location_name(e["loc"]), e["msg"])
                for e in exc.errors()
            ]
        return []

    def _validate_modifier(self, modifier: Document) -> list[InvalidKey]:
        invalid = []
        set_fields = modifier.get(SET_KEY)
        if set_fields is not None:
            if isinstance(set_fields, Mapping):
                invalid.extend(self.schema.validate_set(set_fields))
            else:
                invalid.append(InvalidKey(SET_KEY, "Input should be a valid dictionary"))
        unset_fields = modifier.get(UNSET_KEY)
        if isinstance(unset_fields, Mapping):
            invalid.extend(self.schema.validate_unset(unset_fields))
        return invalid

    def get_error_object(self) -> ErrorObject:
        return ErrorObject(invalid_keys=list(self._invalid_keys))
