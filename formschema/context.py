"""
Per-call validation state.

A ValidationContext threads the current path, a read-only handle to the
root input and the accumulated errors through a validation tree.
Composites derive one child context per field, item or entry.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from .errors import SchemaDefinitionError, ValidationError
from .types import UNSET, Path, Segment

logger = logging.getLogger(__name__)


def stringify_condition_value(value: Any) -> str:
    """
    Render a sibling value as the string a Condition is matched against.

    Booleans become "true"/"false", None becomes "null", integral floats
    drop the trailing ".0", containers are rendered as compact JSON and
    everything else goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


@dataclass(frozen=True, slots=True)
class Condition:
    """
    Requiredness rule evaluated against a sibling field.

    `condition` is a regex (string or compiled) searched for in the
    stringified sibling value, or a predicate over that string.
    """

    field: str
    condition: re.Pattern[str] | Callable[[str], bool]

    def __post_init__(self) -> None:
        if isinstance(self.condition, str):
            object.__setattr__(self, "condition", re.compile(self.condition))
        elif not isinstance(self.condition, re.Pattern) and not callable(
            self.condition
        ):
            raise SchemaDefinitionError(
                f"Condition for {self.field!r} must be a pattern or a callable"
            )

    @classmethod
    def coerce(cls, value: Condition | Mapping[str, Any]) -> Condition:
        if isinstance(value, Condition):
            return value
        if isinstance(value, Mapping):
            return cls(field=value["field"], condition=value["condition"])
        raise SchemaDefinitionError(f"Cannot convert {value!r} to a Condition")

    def matches(self, value: Any) -> bool:
        text = stringify_condition_value(value)
        if isinstance(self.condition, re.Pattern):
            return self.condition.search(text) is not None
        return bool(self.condition(text))

    @property
    def source(self) -> str | None:
        if isinstance(self.condition, re.Pattern):
            return self.condition.pattern
        return getattr(self.condition, "__name__", None)


@dataclass(frozen=True, slots=True)
class FailedDependency:
    """A Condition that did not hold, kept for diagnostics."""

    condition: Condition
    actual_value: Any
    is_required: bool = True


@dataclass(frozen=True, slots=True)
class ContextSnapshot:
    path: Path
    errors: tuple[ValidationError, ...]
    failed_dependencies: tuple[FailedDependency, ...]


class ValidationContext:
    """
    Mutable state for one validation call.

    Never reuse a context across unrelated top-level calls: each
    parse()/safe_parse() without an explicit context builds a fresh one.
    """

    def __init__(self, root: Any, path: Iterable[Segment] = ()):
        self._root = root
        self._path: Path = tuple(path)
        self._errors: list[ValidationError] = []
        self._failed_dependencies: list[FailedDependency] = []

    def __repr__(self) -> str:
        return f"ValidationContext(path={self._path!r}, errors={len(self._errors)})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def root(self) -> Any:
        return self._root

    @property
    def current_value(self) -> Any:
        return self.value_at(self._path)

    def value_at(self, path: Sequence[Segment]) -> Any:
        """Look up a value in the root input, UNSET if the path does not resolve."""
        current = self._root
        for segment in path:
            if current is None or current is UNSET:
                return UNSET
            if isinstance(current, Mapping):
                current = current.get(segment, UNSET)
            elif isinstance(current, (list, tuple)) and isinstance(segment, int):
                if -len(current) <= segment < len(current):
                    current = current[segment]
                else:
                    return UNSET
            else:
                return UNSET
        return current

    def sibling_value(self, field_name: str) -> Any:
        return self.value_at((*self._path[:-1], field_name))

    def parent_value(self, levels: int = 1) -> Any:
        return self.value_at(self._path[: len(self._path) - levels])

    def child(self, segment: Segment) -> ValidationContext:
        """New context on the same root with segment appended to the path."""
        return ValidationContext(self._root, (*self._path, segment))

    def is_dependency_satisfied(self, condition: Condition) -> bool:
        actual = self.sibling_value(condition.field)
        satisfied = actual is not UNSET and actual is not None and condition.matches(
            actual
        )
        if not satisfied:
            self._failed_dependencies.append(FailedDependency(condition, actual))
            logger.debug(
                "Condition on %r did not hold at %s (value=%r)",
                condition.field,
                self._path,
                actual,
            )
        return satisfied

    def is_field_required(self, conditions: Iterable[Condition]) -> bool:
        """True if any condition holds."""
        return any(self.is_dependency_satisfied(c) for c in conditions)

    def add_error(self, error: ValidationError) -> None:
        self._errors.append(error)

    def add_errors(self, errors: Iterable[ValidationError]) -> None:
        self._errors.extend(errors)

    @property
    def errors(self) -> tuple[ValidationError, ...]:
        return tuple(self._errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def clear_errors(self) -> None:
        self._errors = []

    @property
    def failed_dependencies(self) -> tuple[FailedDependency, ...]:
        return tuple(self._failed_dependencies)

    def clear_failed_dependencies(self) -> None:
        self._failed_dependencies = []

    def merge_dependencies(self, child: ValidationContext) -> None:
        """Pull the failed dependencies recorded by a child context up into this one."""
        self._failed_dependencies.extend(child._failed_dependencies)

    def snapshot(self) -> ContextSnapshot:
        return ContextSnapshot(
            path=self._path,
            errors=tuple(self._errors),
            failed_dependencies=tuple(self._failed_dependencies),
        )

    def restore(self, snapshot: ContextSnapshot) -> None:
        self._path = snapshot.path
        self._errors = list(snapshot.errors)
        self._failed_dependencies = list(snapshot.failed_dependencies)
