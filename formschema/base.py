"""
Schema base class and the refinement pipeline.

Every schema implements validate(); parse() and safe_parse() wrap it with
presence handling and the ordered list of refine/super_refine checks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, Mapping, TypeVar

from .context import Condition, ValidationContext
from .errors import ErrorCode, ValidationError
from .types import UNSET, CheckFn, Err, Ok, Path, Segment, ValidationResult

if TYPE_CHECKING:
    from .composites import UnionSchema
    from .modifiers import DefaultSchema, DependsOnSchema, NullableSchema, OptionalSchema

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="Schema")

REQUIRED_MESSAGE = "This field is required"
REFINE_MESSAGE = "Invalid value"


def type_label(value: Any) -> str:
    """Short name of a value's kind for the `received` field of errors."""
    if value is UNSET:
        return "unset"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


class RefinementContext:
    """Handle passed to super_refine callbacks for reporting issues."""

    __slots__ = ("value", "_ctx")

    def __init__(self, value: Any, ctx: ValidationContext):
        self.value = value
        self._ctx = ctx

    @property
    def path(self) -> Path:
        return self._ctx.path

    @property
    def root(self) -> Any:
        return self._ctx.root

    def add_issue(
        self,
        *,
        message: str,
        code: str = ErrorCode.CUSTOM_VALIDATION,
        expected: Any = None,
        received: Any = None,
        path: Iterable[Segment] = (),
        value: Any = UNSET,
    ) -> None:
        """
        Report a failure. `path` is relative to the refined value, so
        path=[2] on an array schema points at its third item.
        """
        self._ctx.add_error(
            ValidationError(
                path=tuple(path),
                message=message,
                code=code,
                expected=expected,
                received=received,
                value=self.value if value is UNSET else value,
            )
        )


@dataclass(frozen=True, slots=True)
class RefineCheck:
    """Boolean predicate layered on top of base validation."""

    check: CheckFn
    message: str | Callable[[Any], str] | None = None
    code: str = ErrorCode.CUSTOM_VALIDATION
    expected: Any = None
    received: Any = None
    path: Path = ()
    immediate: bool = False

    def __call__(self, value: Any, ctx: ValidationContext) -> bool:
        """Run the check; False means the refinement chain must stop."""
        if self.check(value):
            return True
        if callable(self.message):
            message = self.message(value)
        else:
            message = self.message or REFINE_MESSAGE
        ctx.add_error(
            ValidationError(
                path=self.path,
                message=message,
                code=self.code,
                expected=self.expected,
                received=self.received,
                value=value,
            )
        )
        return not self.immediate


@dataclass(frozen=True, slots=True)
class SuperRefineCheck:
    """Callback that reports any number of issues through a RefinementContext."""

    fn: Callable[[Any, RefinementContext], Any]

    def __call__(self, value: Any, ctx: ValidationContext) -> bool:
        self.fn(value, RefinementContext(value, ctx))
        return True


Check = RefineCheck | SuperRefineCheck


class Schema(ABC):
    """
    Base class for every schema.

    Subclasses implement validate(), which checks an admitted value and
    returns a result whose error paths are relative to this schema.
    Chain-style configuration methods mutate the schema and return it,
    so building a schema is not thread-safe; validating with a fully
    built schema is, since every top-level call gets its own context.
    """

    type_name: ClassVar[str] = "any"
    type_hint: ClassVar[Any] = Any
    # Let UNSET through to validate() instead of reporting `required`
    accepts_unset: ClassVar[bool] = False

    def __init__(self, description: str | None = None):
        self._checks: list[Check] = []
        self._messages: dict[str, str] = {}
        self._required = True
        self._attributes: dict[str, Any] = {}
        if description is not None:
            self._attributes["description"] = description

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @abstractmethod
    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        """Check an admitted value. Must not raise for invalid input."""

    def safe_parse(
        self, data: Any = UNSET, ctx: ValidationContext | None = None
    ) -> ValidationResult:
        """
        Validate data and run refinements without raising.

        Returns:
            Ok(validated) if validation passes
            Err(errors) if validation fails
        """
        if ctx is None:
            ctx = ValidationContext(data)
        return self._run(data, ctx)

    def parse(self, data: Any = UNSET) -> Any:
        """
        Validate data and return the validated value.

        Raises:
            ValidationAggregateError: with every error found in the input
        """
        result = self.safe_parse(data)
        if isinstance(result, Err):
            logger.debug(
                "%r rejected input with %d error(s)", self, len(result.errors)
            )
            raise result.into_error()
        return result.data

    def _run(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        if data is UNSET or data is None:
            if not self._required:
                return Ok(data)
            if data is UNSET and not self.accepts_unset:
                ctx.add_error(
                    ValidationError(
                        path=(),
                        message=self.required_message,
                        code=ErrorCode.REQUIRED,
                        expected=self.type_name,
                        received=type_label(data),
                    )
                )
                return Err(ctx.errors)

        result = self.validate(data, ctx)
        if isinstance(result, Err):
            ctx.add_errors(result.errors)
            return Err(ctx.errors)
        return self._refine(result.data, ctx)

    def _refine(self, value: Any, ctx: ValidationContext) -> ValidationResult:
        for check in self._checks:
            if not check(value, ctx):
                break
        if ctx.has_errors():
            return Err(ctx.errors)
        return Ok(value)

    # -- Refinements -------------------------------------------------------

    def refine(
        self: S,
        check: CheckFn,
        message: str | Callable[[Any], str] | None = None,
        *,
        code: str = ErrorCode.CUSTOM_VALIDATION,
        expected: Any = None,
        received: Any = None,
        path: Iterable[Segment] = (),
        immediate: bool = False,
    ) -> S:
        """
        Add a predicate that runs after base validation succeeds.

        Usage:
            string().refine(lambda s: s.isalpha(), "Letters only")
            number().refine(lambda n: n % 2 == 0, code="not_even", immediate=True)

        A failing `immediate` check stops the remaining refinements of
        this schema.
        """
        self._checks.append(
            RefineCheck(
                check=check,
                message=message,
                code=code,
                expected=expected,
                received=received,
                path=tuple(path),
                immediate=immediate,
            )
        )
        return self

    def super_refine(self: S, fn: Callable[[Any, RefinementContext], Any]) -> S:
        """
        Add a callback that may report any number of issues.

        Usage:
            def check(value, ctx):
                if value["password"] != value["confirm"]:
                    ctx.add_issue(message="Passwords differ", path=["confirm"])

            object_({...}).super_refine(check)
        """
        self._checks.append(SuperRefineCheck(fn))
        return self

    # -- Configuration -----------------------------------------------------

    def required(self: S, required: bool = True, message: str = REQUIRED_MESSAGE) -> S:
        self._required = required
        self._messages["required"] = message
        return self

    @property
    def is_required(self) -> bool:
        return self._required

    @property
    def required_message(self) -> str:
        return self._messages.get("required", REQUIRED_MESSAGE)

    @property
    def default_value(self) -> Any:
        """Default configured through .default(), UNSET when there is none."""
        return UNSET

    def metadata(self: S, **attributes: Any) -> S:
        """Attach descriptor attributes (title, placeholder, ...)."""
        self._attributes.update(attributes)
        return self

    def describe(self: S, description: str) -> S:
        return self.metadata(description=description)

    @property
    def description(self) -> str | None:
        return self._attributes.get("description")

    # -- Modifiers ---------------------------------------------------------

    def optional(self) -> OptionalSchema:
        from .modifiers import OptionalSchema

        return OptionalSchema(self)

    def nullable(self) -> NullableSchema:
        from .modifiers import NullableSchema

        return NullableSchema(self)

    def default(self, value: Any) -> DefaultSchema:
        from .modifiers import DefaultSchema

        return DefaultSchema(self, value)

    def depends_on(
        self, conditions: Iterable[Condition | Mapping[str, Any]]
    ) -> DependsOnSchema:
        """
        Make this field required only while a sibling field matches.

        Usage:
            string().depends_on([{"field": "kind", "condition": r"^business$"}])
        """
        from .modifiers import DependsOnSchema

        return DependsOnSchema(self, conditions)

    def __or__(self, other: Any) -> UnionSchema:
        """
        Combine with OR logic: at least one must pass.

        Usage:
            string() | number()
        """
        from .composites import UnionSchema, to_schema

        return UnionSchema([self, to_schema(other)])

    def __ror__(self, other: Any) -> UnionSchema:
        """Support `str | number()` where the shorthand comes first."""
        from .composites import UnionSchema, to_schema

        return UnionSchema([to_schema(other), self])

    # -- Descriptor --------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """Describe this schema as a form/UI attribute document."""
        out: dict[str, Any] = {"type": self.type_name, "required": self._required}
        out.update(self._json_constraints())
        out.update(self._attributes)
        return out

    def _json_constraints(self) -> dict[str, Any]:
        return {}
