"""Errors raised while materializing uploads."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single failed rule on a record field."""

    field: str
    message: str


class UploadError(Exception):
    """Base class for upload failures reported to API clients."""

    status_code = 500

    def __init__(self, message: str, violations: Iterable[Violation] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.violations = list(violations)

    def to_detail(self) -> dict[str, object]:
        """Return the payload sent back to the client."""

        detail: dict[str, object] = {"message": self.message}
        if self.violations:
            detail["violations"] = [
                {"field": violation.field, "message": violation.message}
                for violation in self.violations
            ]
        return detail


class UploadConfigurationError(UploadError):
    """The target record type or file field cannot receive uploads."""

    status_code = 500


class MissingUploadError(UploadError):
    """The request carries no usable ``uploaded_file`` part."""

    status_code = 400


class DenormalizationError(UploadError):
    """Form values could not be converted to the record field types."""

    status_code = 400


class UploadValidationError(UploadError):
    """The hydrated record breaks one or more field rules."""

    status_code = 400

    def __init__(self, violations: Iterable[Violation]) -> None:
        violations = list(violations)
        super().__init__(
            f"{len(violations)} validation error(s) on the uploaded record",
            violations,
        )


class UploadStorageError(UploadError):
    """The uploaded binary could not be written to the storage directory."""

    status_code = 500


__all__ = [
    "DenormalizationError",
    "MissingUploadError",
    "UploadConfigurationError",
    "UploadError",
    "UploadStorageError",
    "UploadValidationError",
    "Violation",
]
