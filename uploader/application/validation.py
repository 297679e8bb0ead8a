"""Run field rules declared on record dataclasses."""

from __future__ import annotations

import dataclasses

from uploader.domain.constraints import field_constraints
from uploader.domain.exceptions import UploadValidationError, Violation


def collect_violations(record: object, prefix: str = "") -> list[Violation]:
    """Return every rule violation of ``record`` and its nested records."""

    violations: list[Violation] = []
    for field in dataclasses.fields(record):
        value = getattr(record, field.name)
        location = f"{prefix}{field.name}"
        for constraint in field_constraints(field):
            message = constraint.check(value)
            if message is not None:
                violations.append(Violation(field=location, message=message))
        if _is_record(value):
            violations.extend(collect_violations(value, f"{location}."))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if _is_record(item):
                    violations.extend(collect_violations(item, f"{location}.{index}."))
    return violations


def _is_record(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def validate_entity(record: object) -> None:
    """Raise :class:`UploadValidationError` listing all violations of ``record``."""

    violations = collect_violations(record)
    if violations:
        raise UploadValidationError(violations)


__all__ = ["collect_violations", "validate_entity"]
