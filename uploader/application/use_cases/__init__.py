"""Aggregate application use cases."""

from .stored_files import (
    delete_stored_file,
    get_stored_file,
    list_stored_files,
    register_upload,
)

__all__ = [
    "delete_stored_file",
    "get_stored_file",
    "list_stored_files",
    "register_upload",
]
