"""Field level rules attached to record dataclasses."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sized
from dataclasses import dataclass
from typing import Any

CONSTRAINTS_KEY = "constraints"


@dataclass(frozen=True)
class NotBlank:
    """Reject ``None``, empty strings, whitespace and empty collections."""

    message: str = "This value should not be blank."

    def check(self, value: Any) -> str | None:
        if value is None:
            return self.message
        if isinstance(value, str) and not value.strip():
            return self.message
        if isinstance(value, Sized) and len(value) == 0:
            return self.message
        return None


@dataclass(frozen=True)
class Length:
    """Bound the length of string values. ``None`` is accepted."""

    max: int | None = None
    min: int | None = None
    message: str | None = None

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        size = len(str(value))
        if self.max is not None and size > self.max:
            return self.message or f"This value is too long. It should have {self.max} characters or less."
        if self.min is not None and size < self.min:
            return self.message or f"This value is too short. It should have {self.min} characters or more."
        return None


def constrained(*constraints: Any, **field_kwargs: Any) -> Any:
    """Return a dataclass ``field`` carrying ``constraints`` in its metadata.

    ``field_kwargs`` are forwarded to :func:`dataclasses.field`; the field
    defaults to ``None`` when neither ``default`` nor ``default_factory`` is
    given.
    """

    metadata: dict[str, Any] = dict(field_kwargs.pop("metadata", None) or {})
    metadata[CONSTRAINTS_KEY] = tuple(constraints)
    if "default" not in field_kwargs and "default_factory" not in field_kwargs:
        field_kwargs["default"] = None
    return dataclasses.field(metadata=metadata, **field_kwargs)


def field_constraints(field: dataclasses.Field) -> tuple[Any, ...]:
    """Return the constraints declared on a dataclass ``field``."""

    metadata: Mapping[str, Any] = field.metadata or {}
    return tuple(metadata.get(CONSTRAINTS_KEY, ()))


__all__ = ["CONSTRAINTS_KEY", "Length", "NotBlank", "constrained", "field_constraints"]
