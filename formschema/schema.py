"""
Schema operations for formschema.

Provides validate(), to_json_schema() and to_pydantic() functions.
"""

from __future__ import annotations

from typing import Any
from typing import Optional as TypingOptional
from typing import Union

from pydantic import BaseModel, create_model

from .base import Schema
from .composites import ArraySchema, ObjectSchema, RecordSchema, UnionSchema, to_schema
from .modifiers import DefaultSchema, DependsOnSchema, NullableSchema, OptionalSchema
from .types import ValidationResult


def validate(data: Any, schema: Any) -> ValidationResult:
    """
    Validate data against a schema or schema shorthand.

    Args:
        data: The value to validate
        schema: A Schema, or shorthand accepted by to_schema()

    Returns:
        Ok(validated) if validation passes
        Err([ValidationError, ...]) if validation fails

    Usage:
        schema = {
            "name": string().min_length(1),
            "email": email().optional(),
            "tags": [str],
        }
        result = validate({"name": "Alice", "tags": []}, schema)
    """
    return to_schema(schema).safe_parse(data)


def to_json_schema(schema: Any) -> dict[str, Any]:
    """Build the descriptor document for a schema or schema shorthand."""
    return to_schema(schema).to_json()


def to_pydantic(name: str, schema: Any) -> type[BaseModel]:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: ObjectSchema or dict shorthand

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", {
            "name": string(),
            "email": email().optional(),
        })
        user = User(name="Alice")
    """
    compiled = to_schema(schema)
    if not isinstance(compiled, ObjectSchema):
        raise TypeError("Schema must be an object schema")

    fields: dict[str, Any] = {}

    for key, child in compiled.shape.items():
        field_type, default = _extract_pydantic_field(child, f"{name}_{key}")
        fields[key] = (field_type, default)

    return create_model(name, **fields)


def _extract_pydantic_field(schema: Schema, name: str) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a schema."""
    match schema:
        case DefaultSchema(inner=inner):
            field_type, _ = _extract_pydantic_field(inner, name)
            return (field_type, schema.default_value)
        case OptionalSchema(inner=inner) | NullableSchema(inner=inner) | DependsOnSchema(
            inner=inner
        ):
            field_type, _ = _extract_pydantic_field(inner, name)
            return (TypingOptional[field_type], None)
        case ObjectSchema():
            return _required(schema, to_pydantic(name, schema))
        case ArraySchema():
            item_type, _ = _extract_pydantic_field(schema.item_schema, f"{name}_item")
            return _required(schema, list[item_type])  # type: ignore[valid-type]
        case RecordSchema():
            value_type, _ = _extract_pydantic_field(schema.value_schema, f"{name}_value")
            return _required(schema, dict[str, value_type])  # type: ignore[valid-type]
        case UnionSchema():
            option_types = tuple(
                _extract_pydantic_field(o, f"{name}_{i}")[0]
                for i, o in enumerate(schema.options)
            )
            return _required(schema, Union[option_types])

    return _required(schema, schema.type_hint)


def _required(schema: Schema, field_type: Any) -> tuple[Any, Any]:
    if schema.is_required:
        return (field_type, ...)
    return (TypingOptional[field_type], None)
