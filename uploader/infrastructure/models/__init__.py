"""ORM models used by the application infrastructure."""

from .stored_file import StoredFileModel

__all__ = ["StoredFileModel"]
