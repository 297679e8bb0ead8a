"""Repository implementations for infrastructure layer."""

from .stored_file_repository import StoredFileRepository

__all__ = ["StoredFileRepository"]
