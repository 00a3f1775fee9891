"""
formschema - composable schema validation with path-qualified errors.

Usage:
    from formschema import object_, string, number, array, UNSET

    schema = object_({
        "name": string().min_length(1),
        "age": number().min(0).optional(),
        "tags": array(string()).max_length(5),
    })

    result = schema.safe_parse(data)    # Ok(data) | Err(errors)
    value = schema.parse(data)          # raises ValidationAggregateError
"""

from .base import RefinementContext, Schema
from .composites import ArraySchema, ObjectSchema, RecordSchema, UnionSchema, to_schema
from .config import UnknownKeys, schema_config, unknown_keys_policy
from .context import Condition, FailedDependency, ValidationContext
from .errors import (
    ErrorCode,
    SchemaDefinitionError,
    ValidationAggregateError,
    ValidationError,
)
from .factories import (
    any_,
    array,
    boolean,
    date,
    datetime,
    email,
    enum_,
    guid,
    hex_color,
    html,
    ip,
    iso_date,
    json_text,
    mac_address,
    never,
    number,
    object_,
    password,
    phone_number,
    record,
    street_address,
    string,
    string_number,
    union,
    unknown,
    url,
    uuid,
    xml,
    zip_code,
)
from .modifiers import DefaultSchema, DependsOnSchema, NullableSchema, OptionalSchema
from .primitives import (
    AnySchema,
    BooleanSchema,
    EnumSchema,
    NeverSchema,
    NumberSchema,
    StringSchema,
    UnknownSchema,
)
from .schema import to_json_schema, to_pydantic, validate
from .types import UNSET, Err, Ok, ValidationResult

__all__ = [
    # Result types
    "UNSET",
    "Ok",
    "Err",
    "ValidationResult",
    # Errors
    "ErrorCode",
    "ValidationError",
    "ValidationAggregateError",
    "SchemaDefinitionError",
    # Core
    "Schema",
    "RefinementContext",
    "ValidationContext",
    "Condition",
    "FailedDependency",
    "to_schema",
    # Schema classes
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "EnumSchema",
    "AnySchema",
    "UnknownSchema",
    "NeverSchema",
    "ObjectSchema",
    "ArraySchema",
    "RecordSchema",
    "UnionSchema",
    "OptionalSchema",
    "NullableSchema",
    "DefaultSchema",
    "DependsOnSchema",
    # Factories
    "string",
    "email",
    "url",
    "uuid",
    "guid",
    "zip_code",
    "hex_color",
    "mac_address",
    "ip",
    "phone_number",
    "date",
    "datetime",
    "iso_date",
    "string_number",
    "password",
    "json_text",
    "xml",
    "html",
    "street_address",
    "number",
    "boolean",
    "object_",
    "array",
    "record",
    "union",
    "enum_",
    "any_",
    "unknown",
    "never",
    # Configuration
    "UnknownKeys",
    "schema_config",
    "unknown_keys_policy",
    # Schema
    "validate",
    "to_json_schema",
    "to_pydantic",
]
