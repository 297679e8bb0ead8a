"""Base record for every upload target."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from datetime import datetime

from uploader.domain.constraints import NotBlank, constrained
from uploader.utils import now_in_app_timezone

READ_ONLY_KEY = "read_only"


@dataclass(kw_only=True)
class StoredFileRecord:
    """Attributes shared by every record hydrated from an upload.

    Subclasses add their own dataclass fields; form values are mapped onto
    them by name. Fields flagged ``read_only`` in their metadata are never
    populated from request data.
    """

    id: int | None = field(default=None, metadata={READ_ONLY_KEY: True})
    file: str | None = constrained(NotBlank("No file provided."))
    created_at: datetime = field(default_factory=now_in_app_timezone)

    def get_file(self) -> str | None:
        """Return the stored file name without any directory component."""

        if not self.file:
            return self.file
        return posixpath.basename(self.file.replace("\\", "/"))

    def set_stored_file_name(self, field_name: str, name: str) -> None:
        """Assign the generated storage name to ``field_name``."""

        setattr(self, field_name, name)


__all__ = ["READ_ONLY_KEY", "StoredFileRecord"]
