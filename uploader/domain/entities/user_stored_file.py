"""Default record hydrated from uploads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from uploader.domain.constraints import Length, constrained

from .stored_file_record import StoredFileRecord


@dataclass(kw_only=True)
class UserStoredFile(StoredFileRecord):
    """Uploaded file described by an optional title, description and extras."""

    title: str | None = constrained(Length(max=255))
    description: str | None = None
    additional_informations: dict[str, Any] | None = None


__all__ = ["UserStoredFile"]
