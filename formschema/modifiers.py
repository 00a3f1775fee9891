"""
Modifier wrappers: Optional, Nullable, Default and DependsOn.

Each wrapper holds exactly one inner schema, applies its own admission
rule and otherwise delegates to the inner schema's full pipeline.
Wrappers nest in the order they were chained and are never flattened.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping

from .base import REQUIRED_MESSAGE, Schema
from .context import Condition, ValidationContext
from .errors import ErrorCode, SchemaDefinitionError, ValidationError
from .types import UNSET, Err, Ok, ValidationResult

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """Check if a value counts as not provided for a conditional field."""
    if value is UNSET or value is None:
        return True
    if isinstance(value, (dict, list, str)) and len(value) == 0:
        return True
    return False


class WrapperSchema(Schema):
    """Base for schemas that change how another schema admits input."""

    def __init__(self, inner: Schema):
        if not isinstance(inner, Schema):
            raise TypeError(f"Cannot wrap {type(inner).__name__}, expected a Schema")
        super().__init__()
        self.inner = inner

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return self.inner.type_name

    @property
    def type_hint(self) -> Any:  # type: ignore[override]
        return self.inner.type_hint

    @property
    def unwrapped(self) -> Schema:
        """The innermost non-wrapper schema."""
        inner = self.inner
        while isinstance(inner, WrapperSchema):
            inner = inner.inner
        return inner

    @property
    def default_value(self) -> Any:
        return self.inner.default_value

    @property
    def is_required(self) -> bool:
        return self.inner.is_required

    @property
    def required_message(self) -> str:
        return self.inner.required_message

    def required(self, required: bool = True, message: str = REQUIRED_MESSAGE):
        self.inner.required(required, message)
        return self

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        return self.inner.validate(data, ctx)

    def _admit(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        return self.inner.safe_parse(data, ctx)

    def _run(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        result = self._admit(data, ctx)
        if isinstance(result, Err) or result.data is UNSET or result.data is None:
            return result
        if not self._checks:
            return result
        return self._refine(result.data, ctx)

    def to_json(self) -> dict[str, Any]:
        out = self.inner.to_json()
        out.update(self._json_constraints())
        out.update(self._attributes)
        return out


class OptionalSchema(WrapperSchema):
    """
    Accept UNSET without consulting the inner schema.

    When the inner schema carries a default (e.g. number().default(5).optional()),
    UNSET is handed down so the default still applies.
    """

    @property
    def is_required(self) -> bool:
        return False

    def required(self, required: bool = True, message: str = REQUIRED_MESSAGE):
        if required:
            raise SchemaDefinitionError(
                "required() cannot undo optional(); build the schema without optional()"
            )
        return super().required(required, message)

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if data is UNSET:
            return Ok(UNSET)
        return self.inner.validate(data, ctx)

    def _admit(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if data is UNSET and self.inner.default_value is UNSET:
            return Ok(UNSET)
        return self.inner.safe_parse(data, ctx)

    def _json_constraints(self) -> dict[str, Any]:
        return {"required": False}


class NullableSchema(WrapperSchema):
    """Accept None without consulting the inner schema."""

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if data is None:
            return Ok(None)
        return self.inner.validate(data, ctx)

    def _admit(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if data is None:
            return Ok(None)
        return self.inner.safe_parse(data, ctx)

    def _json_constraints(self) -> dict[str, Any]:
        return {"nullable": True}


class DefaultSchema(WrapperSchema):
    """
    Substitute a default for UNSET or None, then validate it.

    The default goes through the inner schema like any other input, so a
    default that breaks the inner constraints fails validation.
    """

    def __init__(self, inner: Schema, value: Any):
        super().__init__(inner)
        self._default = value
        self._read_only = False

    @property
    def default_value(self) -> Any:
        return self._default

    @property
    def is_required(self) -> bool:
        return False

    def required(self, required: bool = True, message: str = REQUIRED_MESSAGE):
        if required:
            raise SchemaDefinitionError(
                "required() has no effect on a schema with a default"
            )
        return super().required(required, message)

    def read_only(self, message: str = "Value is read-only") -> DefaultSchema:
        """
        Lock the field to its default.

        A missing value still gets the default; any other value is
        reported with code `read_only`.

        Usage:
            string().default("AUTO").read_only("ID cannot be changed")
        """
        self._read_only = True
        self._messages["read_only"] = message
        self._attributes["readOnly"] = True
        return self

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def _substitute(self, data: Any) -> Any:
        if data is UNSET or data is None:
            return copy.deepcopy(self._default)
        return data

    def _read_only_error(self, data: Any) -> ValidationError:
        return ValidationError(
            path=(),
            message=self._messages["read_only"],
            code=ErrorCode.READ_ONLY,
            expected=self._default,
            received=data,
            value=data,
        )

    def _overrides_default(self, data: Any) -> bool:
        return (
            self._read_only
            and data is not UNSET
            and data is not None
            and data != self._default
        )

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if self._overrides_default(data):
            return Err([self._read_only_error(data)])
        return self.inner.validate(self._substitute(data), ctx)

    def _admit(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if self._overrides_default(data):
            ctx.add_error(self._read_only_error(data))
            return Err(ctx.errors)
        return self.inner.safe_parse(self._substitute(data), ctx)

    def _json_constraints(self) -> dict[str, Any]:
        out: dict[str, Any] = {"defaultValue": self._default}
        if self.type_name == "checkbox":
            out["checked"] = self._default
        return out


class DependsOnSchema(WrapperSchema):
    """
    Required only while at least one sibling condition holds.

    When no condition holds the field is not applicable: it succeeds and
    contributes no value to the enclosing object.
    """

    def __init__(
        self, inner: Schema, conditions: Iterable[Condition | Mapping[str, Any]]
    ):
        super().__init__(inner)
        self._conditions = tuple(Condition.coerce(c) for c in conditions)
        if not self._conditions:
            raise SchemaDefinitionError("depends_on() needs at least one condition")

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return self._conditions

    @property
    def is_required(self) -> bool:
        return False

    def _required_error(self, data: Any) -> ValidationError:
        return ValidationError(
            path=(),
            message=self.required_message,
            code=ErrorCode.REQUIRED,
            expected=[c.field for c in self._conditions],
            received=None if data is UNSET else data,
        )

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not ctx.is_field_required(self._conditions):
            return Ok(UNSET)
        if is_empty(data):
            return Err([self._required_error(data)])
        return self.inner.validate(data, ctx)

    def _admit(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if not ctx.is_field_required(self._conditions):
            logger.debug("Field at %s not applicable, skipping", ctx.path)
            return Ok(UNSET)
        if is_empty(data):
            ctx.add_error(self._required_error(data))
            return Err(ctx.errors)
        return self.inner.safe_parse(data, ctx)

    def _json_constraints(self) -> dict[str, Any]:
        return {
            "required": False,
            "data-depends-on": [
                {"field": c.field, "condition": c.source} for c in self._conditions
            ],
        }
