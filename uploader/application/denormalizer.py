"""Hydrate record dataclasses from flat form data."""

from __future__ import annotations

import dataclasses
import logging
import re
import types
import typing
from collections.abc import Iterable, Mapping
from datetime import datetime
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from uploader.config import DEFAULT_DATE_FORMAT
from uploader.domain.entities import READ_ONLY_KEY
from uploader.domain.exceptions import DenormalizationError, Violation
from uploader.utils import parse_form_datetime

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BRACKET_KEY = re.compile(r"^(?P<name>[^\[\]]+)(?P<rest>(?:\[[^\[\]]*\])+)$")
_BRACKET_SEGMENT = re.compile(r"\[([^\[\]]*)\]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def expand_form_fields(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Expand bracket notation keys into nested mappings.

    ``meta[author]=Ana`` becomes ``{"meta": {"author": "Ana"}}`` and repeated
    ``tags[]=a`` keys accumulate into a list. Plain keys are kept as they are;
    a repeated plain key keeps its last value.
    """

    expanded: dict[str, Any] = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if match is None:
            expanded[key] = value
            continue
        path = [match.group("name"), *_BRACKET_SEGMENT.findall(match.group("rest"))]
        _assign_path(expanded, path, value)
    return expanded


def _assign_path(root: dict[str, Any], path: list[str], value: Any) -> None:
    node: Any = root
    for segment, next_segment in zip(path, path[1:]):
        empty: Any = [] if next_segment == "" else {}
        if isinstance(node, list):
            node.append(empty)
            node = empty
            continue
        child = node.get(segment)
        if not isinstance(child, (dict, list)):
            child = empty
            node[segment] = child
        node = child
    if isinstance(node, list):
        node.append(value)
    else:
        node[path[-1]] = value


def to_snake_case(name: str) -> str:
    """Convert ``createdAt`` style keys to ``created_at``."""

    return _CAMEL_BOUNDARY.sub("_", name).lower()


def writable_fields(entity_type: type) -> dict[str, dataclasses.Field]:
    """Return the dataclass fields of ``entity_type`` that accept input."""

    return {
        field.name: field
        for field in dataclasses.fields(entity_type)
        if field.init and not field.metadata.get(READ_ONLY_KEY, False)
    }


@lru_cache(maxsize=None)
def _type_hints(entity_type: type) -> dict[str, Any]:
    return typing.get_type_hints(entity_type)


@lru_cache(maxsize=None)
def _adapter(hint: Any) -> TypeAdapter:
    return TypeAdapter(hint)


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1 and len(args) != len(typing.get_args(hint)):
            return args[0], True
    return hint, False


class Denormalizer:
    """Build record instances from request data by matching field names."""

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self.date_format = date_format

    def denormalize(
        self,
        data: Mapping[str, Any],
        entity_type: type[T],
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        """Return a new ``entity_type`` populated from ``data``.

        Keys without a matching writable field are ignored. ``overrides`` are
        keyed by field name and win over any key of ``data`` that maps to the
        same field, whatever its spelling. Conversion failures are collected
        for every field before raising :class:`DenormalizationError`.
        """

        violations: list[Violation] = []
        instance = self._build(data, entity_type, "", violations, overrides or {})
        if violations:
            raise DenormalizationError(
                "The submitted form data could not be converted", violations
            )
        return instance

    def _build(
        self,
        data: Mapping[str, Any],
        entity_type: type[T],
        prefix: str,
        violations: list[Violation],
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        fields = writable_fields(entity_type)
        hints = _type_hints(entity_type)
        overrides = overrides or {}
        pending: dict[str, Any] = {}
        for key, raw_value in data.items():
            name = key if key in fields else to_snake_case(key)
            if name not in fields or name in overrides:
                logger.debug("Ignoring form key %s for %s", key, entity_type.__name__)
                continue
            pending[name] = raw_value
        pending.update(overrides)

        values: dict[str, Any] = {}
        for name, raw_value in pending.items():
            location = f"{prefix}{name}"
            try:
                values[name] = self._convert(raw_value, hints[name], location, violations)
            except (ValueError, TypeError) as exc:
                violations.append(Violation(field=location, message=_message(exc)))
        if violations:
            return None  # type: ignore[return-value]
        try:
            return entity_type(**values)
        except TypeError as exc:
            location = prefix.rstrip(".") or entity_type.__name__
            violations.append(Violation(field=location, message=str(exc)))
            return None  # type: ignore[return-value]

    def _convert(
        self,
        value: Any,
        hint: Any,
        location: str,
        violations: list[Violation],
    ) -> Any:
        inner, optional = _unwrap_optional(hint)
        if optional and (value is None or (value == "" and inner is not str)):
            return None
        if dataclasses.is_dataclass(inner) and isinstance(inner, type):
            if not isinstance(value, Mapping):
                raise ValueError("Expected a nested object")
            return self._build(value, inner, f"{location}.", violations)
        if typing.get_origin(inner) is list:
            (item_hint,) = typing.get_args(inner) or (Any,)
            if dataclasses.is_dataclass(item_hint) and isinstance(value, list):
                return [
                    self._convert(item, item_hint, f"{location}.{index}", violations)
                    for index, item in enumerate(value)
                ]
        if inner is datetime and isinstance(value, str):
            return parse_form_datetime(value, self.date_format)
        return _adapter(hint).validate_python(value)


def _message(exc: Exception) -> str:
    if isinstance(exc, PydanticValidationError):
        return "; ".join(error["msg"] for error in exc.errors())
    return str(exc)


__all__ = [
    "Denormalizer",
    "expand_form_fields",
    "to_snake_case",
    "writable_fields",
]
