"""
Leaf schemas: string, number, boolean, enum, any, unknown, never.
"""

from __future__ import annotations

import math
import re
from typing import Any, ClassVar, Iterable, Literal

from .base import Schema, type_label
from .context import ValidationContext
from .errors import ErrorCode, ValidationError
from .types import Err, Ok, ValidationResult


def invalid_type(expected: str, data: Any, message: str) -> Err:
    return Err(
        [
            ValidationError(
                path=(),
                message=message,
                code=ErrorCode.INVALID_TYPE,
                expected=expected,
                received=type_label(data),
                value=data,
            )
        ]
    )


class StringSchema(Schema):
    """
    String with optional length bounds and a pattern.

    Subclasses describe fixed formats by setting `format_pattern`,
    `format_title` and `format_placeholder`.
    """

    type_name: ClassVar[str] = "text"
    type_hint: ClassVar[Any] = str
    format_pattern: ClassVar[re.Pattern[str] | None] = None
    format_title: ClassVar[str | None] = None
    format_placeholder: ClassVar[str | None] = None

    def __init__(self, description: str | None = None):
        super().__init__(description)
        self._min_length: int | None = None
        self._max_length: int | None = None
        self._pattern: re.Pattern[str] | None = self.format_pattern
        if self.format_title is not None:
            self._attributes["title"] = self.format_title
        if self.format_placeholder is not None:
            self._attributes["placeholder"] = self.format_placeholder

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not isinstance(data, str):
            return invalid_type("string", data, "Invalid string")

        errors: list[ValidationError] = []

        if self._pattern is not None and self._pattern.search(data) is None:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages.get("pattern", "Invalid format"),
                    code=ErrorCode.PATTERN,
                    expected=self._pattern.pattern,
                    received=data,
                    value=data,
                )
            )

        if self._min_length is not None and len(data) < self._min_length:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages.get("min_length", "String is too short"),
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
                    message=self._messages.get("max_length", "String is too long"),
                    code=ErrorCode.TOO_BIG,
                    expected=self._max_length,
                    received=len(data),
                    value=data,
                )
            )

        return Err(errors) if errors else Ok(data)

    def min_length(self, value: int, message: str = "String is too short"):
        self._min_length = value
        self._messages["min_length"] = message
        return self

    def min(self, value: int, message: str = "String is too short"):
        return self.min_length(value, message)

    def max_length(self, value: int, message: str = "String is too long"):
        self._max_length = value
        self._messages["max_length"] = message
        return self

    def max(self, value: int, message: str = "String is too long"):
        return self.max_length(value, message)

    def pattern(
        self,
        value: str | re.Pattern[str],
        message: str | None = None,
        title: str | None = None,
    ):
        compiled = re.compile(value) if isinstance(value, str) else value
        self._pattern = compiled
        self._messages["pattern"] = (
            message or f"String does not match pattern {compiled.pattern}"
        )
        self._attributes["title"] = title or f"Pattern: {compiled.pattern}"
        return self

    def placeholder(self, value: str):
        self._attributes["placeholder"] = value
        return self

    def datalist(self, list_id: str, options: Iterable[str]):
        """
        Attach autocomplete suggestions to the descriptor.

        Suggestions do not restrict the accepted values.

        Usage:
            string().datalist("domains", ["gmail.com", "outlook.com"])
        """
        self._attributes["list"] = list_id
        self._attributes["dataList"] = list(options)
        return self

    def _json_constraints(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self._min_length is not None:
            out["minLength"] = self._min_length
        if self._max_length is not None:
            out["maxLength"] = self._max_length
        if self._pattern is not None:
            out["pattern"] = self._pattern.pattern
        return out


class NumberSchema(Schema):
    """Finite-or-infinite int or float; bool and NaN are rejected."""

    type_name: ClassVar[str] = "number"
    type_hint: ClassVar[Any] = float

    def __init__(self, description: str | None = None):
        super().__init__(description)
        self._min: float | None = None
        self._max: float | None = None

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if (
            isinstance(data, bool)
            or not isinstance(data, (int, float))
            or (isinstance(data, float) and math.isnan(data))
        ):
            return invalid_type("number", data, "Invalid number")

        errors: list[ValidationError] = []

        if self._min is not None and data < self._min:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages["min"],
                    code=ErrorCode.TOO_SMALL,
                    expected=self._min,
                    received=data,
                    value=data,
                )
            )

        if self._max is not None and data > self._max:
            errors.append(
                ValidationError(
                    path=(),
                    message=self._messages["max"],
                    code=ErrorCode.TOO_BIG,
                    expected=self._max,
                    received=data,
                    value=data,
                )
            )

        return Err(errors) if errors else Ok(data)

    def min(self, value: float, message: str | None = None):
        self._min = value
        self._messages["min"] = (
            message or f"Number must be greater than or equal to {value}"
        )
        return self

    def max(self, value: float, message: str | None = None):
        self._max = value
        self._messages["max"] = message or f"Number must be less than or equal to {value}"
        return self

    def _json_constraints(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self._min is not None:
            out["min"] = self._min
        if self._max is not None:
            out["max"] = self._max
        return out


class BooleanSchema(Schema):
    type_name: ClassVar[str] = "checkbox"
    type_hint: ClassVar[Any] = bool

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not isinstance(data, bool):
            return invalid_type("boolean", data, "Invalid boolean")
        return Ok(data)


class EnumSchema(Schema):
    """One of a fixed list of values."""

    type_name: ClassVar[str] = "select"

    def __init__(self, values: Iterable[Any], description: str | None = None):
        super().__init__(description)
        self._values = tuple(values)
        if not self._values:
            raise ValueError("Enum needs at least one value")

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    @property
    def type_hint(self) -> Any:  # type: ignore[override]
        return Literal[self._values]

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        # Exact type match so that True is not accepted for 1
        if any(type(data) is type(v) and data == v for v in self._values):
            return Ok(data)
        return Err(
            [
                ValidationError(
                    path=(),
                    message=self._messages.get("enum", "Invalid enum value"),
                    code=ErrorCode.INVALID_ENUM_VALUE,
                    expected=list(self._values),
                    received=data,
                    value=data,
                )
            ]
        )

    def _json_constraints(self) -> dict[str, Any]:
        return {"options": list(self._values)}


class AnySchema(Schema):
    """Accepts every value, including UNSET."""

    type_name: ClassVar[str] = "any"
    accepts_unset: ClassVar[bool] = True

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        return Ok(data)


class UnknownSchema(AnySchema):
    type_name: ClassVar[str] = "unknown"


class NeverSchema(Schema):
    """Rejects every value."""

    type_name: ClassVar[str] = "never"

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        return Err(
            [
                ValidationError(
                    path=(),
                    message="Value is not allowed",
                    code=ErrorCode.NEVER_VALID,
                    expected="never",
                    received=type_label(data),
                    value=data,
                )
            ]
        )
