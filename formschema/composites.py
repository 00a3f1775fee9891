"""
Composite schemas: object, array, record and union.

Composites validate each child through a child context and remap child
errors under the field name, index or key before reporting them, so all
errors from a top-level call are relative to the root input.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Mapping

from .base import Schema, type_label
from .config import UnknownKeys, unknown_keys_policy
from .context import ValidationContext
from .errors import ErrorCode, SchemaDefinitionError, ValidationError
from .primitives import AnySchema, BooleanSchema, NumberSchema, StringSchema, invalid_type
from .types import UNSET, Err, Ok, ValidationResult

logger = logging.getLogger(__name__)


class ObjectSchema(Schema):
    """
    Fixed set of named fields, each with its own schema.

    The output contains only declared fields that produced a value.
    Undeclared input keys are dropped or reported depending on the
    unknown-key policy (see schema_config, strict() and strip()).
    """

    type_name: ClassVar[str] = "object"
    type_hint: ClassVar[Any] = dict

    def __init__(
        self,
        shape: Mapping[str, Any],
        *,
        unknown_keys: UnknownKeys | str | None = None,
        description: str | None = None,
    ):
        if not isinstance(shape, Mapping):
            raise TypeError(f"Object shape must be a mapping, got {type(shape).__name__}")
        super().__init__(description)
        self._shape: dict[str, Schema] = {k: to_schema(v) for k, v in shape.items()}
        self._unknown_keys = (
            None if unknown_keys is None else UnknownKeys.coerce(unknown_keys)
        )

    def __repr__(self) -> str:
        return f"ObjectSchema({list(self._shape)})"

    @property
    def shape(self) -> dict[str, Schema]:
        return dict(self._shape)

    @property
    def unknown_keys(self) -> UnknownKeys:
        return self._unknown_keys or unknown_keys_policy()

    def strict(self, message: str | None = None) -> ObjectSchema:
        """Report undeclared keys as unexpected_property errors."""
        self._unknown_keys = UnknownKeys.REJECT
        if message is not None:
            self._messages["unexpected_property"] = message
        return self

    def strip(self) -> ObjectSchema:
        """Drop undeclared keys silently."""
        self._unknown_keys = UnknownKeys.STRIP
        return self

    def extend(self, *others: ObjectSchema | Mapping[str, Any]) -> ObjectSchema:
        """New schema with the fields of others merged in; later fields win."""
        shape = dict(self._shape)
        for other in others:
            shape.update(other.shape if isinstance(other, ObjectSchema) else other)
        return self._derive(shape)

    def pick(self, *keys: str) -> ObjectSchema:
        self._check_declared(keys)
        return self._derive({k: self._shape[k] for k in keys})

    def omit(self, *keys: str) -> ObjectSchema:
        self._check_declared(keys)
        return self._derive({k: v for k, v in self._shape.items() if k not in keys})

    def _check_declared(self, keys: Iterable[str]) -> None:
        unknown = [k for k in keys if k not in self._shape]
        if unknown:
            raise SchemaDefinitionError(f"Keys not declared in object shape: {unknown}")

    def _derive(self, shape: Mapping[str, Any]) -> ObjectSchema:
        derived = ObjectSchema(shape, unknown_keys=self._unknown_keys)
        derived._messages = dict(self._messages)
        derived._attributes = dict(self._attributes)
        return derived

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not isinstance(data, Mapping):
            return invalid_type("object", data, "Invalid object")

        output: dict[str, Any] = {}
        errors: list[ValidationError] = []

        for key, schema in self._shape.items():
            child = ctx.child(key)
            result = schema.safe_parse(data.get(key, UNSET), child)
            ctx.merge_dependencies(child)
            if isinstance(result, Err):
                errors.extend(result.map_errors((key,)).errors)
            elif result.data is not UNSET:
                output[key] = result.data

        if self.unknown_keys is UnknownKeys.REJECT:
            message = self._messages.get("unexpected_property", "Unexpected property")
            for key, value in data.items():
                if key not in self._shape:
                    errors.append(
                        ValidationError(
                            path=(key,),
                            message=message,
                            code=ErrorCode.UNEXPECTED_PROPERTY,
                            expected=list(self._shape),
                            received=key,
                            value=value,
                        )
                    )

        return Err(errors) if errors else Ok(output)

    def _json_constraints(self) -> dict[str, Any]:
        return {"properties": {k: v.to_json() for k, v in self._shape.items()}}


class ArraySchema(Schema):
    """
    Homogeneous sequence. Every item is validated even after a failure,
    so one call reports all offending indices in ascending order. Items
    that produce no value (a depends_on item that does not apply) are
    left out of the output.
    """

    type_name: ClassVar[str] = "array"
    type_hint: ClassVar[Any] = list

    def __init__(self, items: Any, description: str | None = None):
        super().__init__(description)
        self._items = to_schema(items)
        self._min_length: int | None = None
        self._max_length: int | None = None

    def __repr__(self) -> str:
        return f"ArraySchema({self._items!r})"

    @property
    def item_schema(self) -> Schema:
        return self._items

    def min_length(self, value: int, message: str | None = None) -> ArraySchema:
        self._min_length = value
        self._messages["min_length"] = message or f"Array must have at least {value} items"
        return self

    def max_length(self, value: int, message: str | None = None) -> ArraySchema:
        self._max_length = value
        self._messages["max_length"] = message or f"Array must have at most {value} items"
        return self

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not isinstance(data, (list, tuple)):
            return invalid_type("array", data, "Invalid array")

        errors: list[ValidationError] = []

        if self._min_length is not None and len(data) < self._min_length:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages["min_length"],
                    code=ErrorCode.TOO_SMALL,
                    expected=self._min_length,
                    received=len(data),
                    value=data,
                )
            )
        if self._max_length is not None and len(data) > self._max_length:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages["max_length"],
                    code=ErrorCode.TOO_BIG,
                    expected=self._max_length,
                    received=len(data),
                    value=data,
                )
            )

        output: list[Any] = []
        for i, item in enumerate(data):
            child = ctx.child(i)
            result = self._items.safe_parse(item, child)
            ctx.merge_dependencies(child)
            if isinstance(result, Err):
                errors.extend(result.map_errors((i,)).errors)
            elif result.data is not UNSET:
                output.append(result.data)

        return Err(errors) if errors else Ok(output)

    def _json_constraints(self) -> dict[str, Any]:
        out: dict[str, Any] = {"items": [self._items.to_json()]}
        if self._min_length is not None:
            out["minLength"] = self._min_length
        if self._max_length is not None:
            out["maxLength"] = self._max_length
        return out


class RecordSchema(Schema):
    """
    String-keyed map with one schema for every value and one for every key.

    Key and value failures of the same entry are both reported under
    that entry's key.
    """

    type_name: ClassVar[str] = "record"
    type_hint: ClassVar[Any] = dict

    def __init__(self, values: Any, keys: Any = None, description: str | None = None):
        super().__init__(description)
        self._values = to_schema(values)
        self._keys = (
            to_schema(keys)
            if keys is not None
            else StringSchema().min_length(1, "Key must be a non-empty string")
        )

    def __repr__(self) -> str:
        return f"RecordSchema({self._values!r}, keys={self._keys!r})"

    @property
    def value_schema(self) -> Schema:
        return self._values

    @property
    def key_schema(self) -> Schema:
        return self._keys

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not isinstance(data, Mapping):
            return invalid_type("object", data, "Invalid record type")

        output: dict[Any, Any] = {}
        errors: list[ValidationError] = []

        for key, value in data.items():
            key_result = self._keys.safe_parse(key, ctx.child(key))
            child = ctx.child(key)
            value_result = self._values.safe_parse(value, child)
            ctx.merge_dependencies(child)
            if isinstance(key_result, Err):
                errors.extend(key_result.map_errors((key,)).errors)
            if isinstance(value_result, Err):
                errors.extend(value_result.map_errors((key,)).errors)
            if key_result.success and value_result.success:
                if value_result.data is not UNSET:
                    output[key_result.data] = value_result.data

        return Err(errors) if errors else Ok(output)

    def _json_constraints(self) -> dict[str, Any]:
        return {
            "keySchema": self._keys.to_json(),
            "valueSchema": self._values.to_json(),
        }


class UnionSchema(Schema):
    """
    First option that accepts the input wins.

    A missing value is handed to the options as well, so a union with an
    optional option accepts it; when none does, a single `required` error
    is reported for the union.
    """

    type_name: ClassVar[str] = "union"
    accepts_unset: ClassVar[bool] = True

    def __init__(self, options: Iterable[Any], description: str | None = None):
        super().__init__(description)
        self._options = [to_schema(o) for o in options]
        if not self._options:
            raise SchemaDefinitionError("Union needs at least one option")

    def __repr__(self) -> str:
        return f"UnionSchema({self._options!r})"

    @property
    def options(self) -> list[Schema]:
        return list(self._options)

    def __or__(self, other: Any) -> UnionSchema:
        if self._checks:
            return super().__or__(other)
        return UnionSchema([*self._options, to_schema(other)])

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        collected: list[ValidationError] = []
        snapshot = ctx.snapshot()
        start = len(snapshot.errors)

        for option in self._options:
            result = option.safe_parse(data, ctx)
            ctx.restore(snapshot)
            if result.success:
                return Ok(result.data)
            collected.extend(result.errors[start:])

        logger.debug("No union option accepted %s at %s", type_label(data), ctx.path)
        if data is UNSET:
            return Err(
                [
                    ValidationError(
                        path=(),
                        message=self.required_message,
                        code=ErrorCode.REQUIRED,
                        expected=self.type_name,
                        received=type_label(data),
                    )
                ]
            )
        if not collected:
            collected.append(
                ValidationError(
                    path=(),
                    message="Invalid union input",
                    code=ErrorCode.INVALID_UNION,
                    received=data,
                    value=data,
                )
            )
        return Err(collected)

    def _refine(self, value: Any, ctx: ValidationContext) -> ValidationResult:
        if value is UNSET:
            return Ok(UNSET)
        return super()._refine(value, ctx)

    def _json_constraints(self) -> dict[str, Any]:
        return {"options": [o.to_json() for o in self._options]}


def to_schema(spec: Any) -> Schema:
    """
    Coerce shorthand to a schema.

    Conversion rules:
        Schema -> pass through
        str / int / float / bool -> matching leaf schema
        dict -> ObjectSchema with recursive conversion
        list -> ArraySchema with item schema from list[0]
        Callable -> any value accepted by the predicate
    """
    if isinstance(spec, Schema):
        return spec

    if isinstance(spec, type):
        if issubclass(spec, bool):
            return BooleanSchema()
        if issubclass(spec, str):
            return StringSchema()
        if issubclass(spec, (int, float)):
            return NumberSchema()
        raise TypeError(f"Cannot convert {spec.__name__} to schema")

    if isinstance(spec, Mapping):
        return ObjectSchema(spec)

    if isinstance(spec, list):
        if len(spec) == 0:
            raise SchemaDefinitionError("Empty list cannot be converted to schema")
        if len(spec) == 1:
            return ArraySchema(spec[0])
        # Multiple items = OR logic for item types
        return ArraySchema(UnionSchema(spec))

    if callable(spec):
        return AnySchema().refine(spec)

    raise TypeError(f"Cannot convert {type(spec).__name__} to schema")
