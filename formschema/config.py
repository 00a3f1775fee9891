"""
Context manager for validation configuration (e.g., unknown-key policy).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum

from .errors import SchemaDefinitionError


class UnknownKeys(str, Enum):
    """What an object schema does with keys its shape does not declare."""

    STRIP = "strip"  # Drop them from the output silently
    REJECT = "reject"  # Report each one as unexpected_property

    @classmethod
    def coerce(cls, value: "UnknownKeys | str") -> "UnknownKeys":
        try:
            return cls(value)
        except ValueError as e:
            raise SchemaDefinitionError(
                f"Unknown keys policy must be one of "
                f"{[m.value for m in cls]}, got {value!r}"
            ) from e


# Context variable for the ambient unknown-key policy
_unknown_keys: ContextVar[UnknownKeys] = ContextVar(
    "unknown_keys", default=UnknownKeys.STRIP
)


def unknown_keys_policy() -> UnknownKeys:
    """Return the policy used by object schemas without their own setting."""
    return _unknown_keys.get()


@contextmanager
def schema_config(*, unknown_keys: UnknownKeys | str = UnknownKeys.STRIP):
    """
    Context manager for validation configuration.

    Args:
        unknown_keys: Policy for undeclared object keys. "strip" (default)
                     ignores them, "reject" reports an unexpected_property
                     error for each. Schemas configured with .strict() or
                     .strip() keep their own policy.

    Example:
        from formschema import object_, string, schema_config

        schema = object_({"name": string()})

        schema.safe_parse({"name": "Ada", "extra": 1})  # Ok({"name": "Ada"})

        with schema_config(unknown_keys="reject"):
            schema.safe_parse({"name": "Ada", "extra": 1})  # Err at ("extra",)
    """
    token = _unknown_keys.set(UnknownKeys.coerce(unknown_keys))
    try:
        yield
    finally:
        _unknown_keys.reset(token)
