"""
Error types for formschema validation.

Provides the single-failure record, the aggregate raised by parse(),
and the exception used for schema definition mistakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Any, Iterable


class ErrorCode(str, Enum):
    """Built-in error codes. Members compare equal to their string value."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    PATTERN = "pattern"
    REQUIRED = "required"
    CUSTOM_VALIDATION = "custom_validation"
    UNEXPECTED_PROPERTY = "unexpected_property"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    INVALID_UNION = "invalid_union"
    NEVER_VALID = "never_valid"
    INVALID_JSON = "invalid_json"
    READ_ONLY = "read_only"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    One failed check.

    The path locates the failing value relative to the schema that
    produced the error; composites prepend their own segment when they
    surface child errors, so errors returned from a top-level call are
    relative to the root input.
    """

    path: tuple[str | int, ...]
    message: str
    code: str | None = None
    # Payload fields may hold lists or dicts; hashing uses path, message and code
    expected: Any = field(default=None, hash=False)
    received: Any = field(default=None, hash=False)
    value: Any = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))
        if isinstance(self.code, ErrorCode):
            object.__setattr__(self, "code", self.code.value)

    def with_prefix(self, prefix: Iterable[str | int]) -> ValidationError:
        """Return a copy re-parented under prefix."""
        return replace(self, path=(*prefix, *self.path))

    @property
    def dotted_path(self) -> str:
        return ".".join(str(segment) for segment in self.path) or "(root)"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"path": list(self.path), "message": self.message}
        for key in ("code", "expected", "received", "value"):
            attr = getattr(self, key)
            if attr is not None:
                out[key] = attr
        return out


class ValidationAggregateError(Exception):
    """
    All errors collected by one failed parse() call.

    The formatted summary is built on first access:

        Validation failed with 2 error(s)
        - user.email: Invalid format
        - (root): Passwords do not match
    """

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors: tuple[ValidationError, ...] = tuple(errors)
        super().__init__(self.errors)

    @cached_property
    def summary(self) -> str:
        lines = [f"Validation failed with {len(self.errors)} error(s)"]
        lines.extend(f"- {e.dotted_path}: {e.message}" for e in self.errors)
        return "\n".join(lines)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self.errors]

    def __str__(self) -> str:
        return self.summary

    def __repr__(self) -> str:
        return f"ValidationAggregateError({len(self.errors)} error(s))"


class SchemaDefinitionError(ValueError):
    """Raised when a schema is configured incorrectly."""
