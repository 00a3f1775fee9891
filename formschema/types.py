"""
Type definitions for formschema validation.

Provides the UNSET sentinel, a minimal Result type (Ok/Err) and type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, Iterable, TypeVar, Union

from .errors import ValidationAggregateError, ValidationError

T = TypeVar("T")


class _Unset(Enum):
    """Sentinel for "no value provided", distinct from None."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing the validated data."""

    data: T

    success: ClassVar[bool] = True
    errors: ClassVar[tuple[ValidationError, ...]] = ()

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map_errors(self, prefix: Iterable[Segment]) -> Ok[T]:
        return self

    def into_error(self) -> ValidationAggregateError:
        raise ValueError("Cannot convert a successful result into an error")

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failure result containing the ordered validation errors."""

    errors: tuple[ValidationError, ...]

    success: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map_errors(self, prefix: Iterable[Segment]) -> Err:
        """Return a new Err with every error path prepended by prefix."""
        prefix = tuple(prefix)
        return Err(tuple(e.with_prefix(prefix) for e in self.errors))

    def into_error(self) -> ValidationAggregateError:
        return ValidationAggregateError(self.errors)

    def __bool__(self) -> bool:
        return False


# Type aliases
Segment = Union[str, int]
Path = tuple[Segment, ...]
CheckFn = Callable[[Any], bool]
ValidationResult = Union[Ok[T], Err]
