"""Domain entities exposed by the application."""

from .stored_file_record import READ_ONLY_KEY, StoredFileRecord
from .user_stored_file import UserStoredFile

__all__ = [
    "READ_ONLY_KEY",
    "StoredFileRecord",
    "UserStoredFile",
]
