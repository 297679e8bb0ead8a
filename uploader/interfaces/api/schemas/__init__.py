from .stored_file import StoredFileRead, UploadErrorRead, ViolationRead

__all__ = [
    "StoredFileRead",
    "UploadErrorRead",
    "ViolationRead",
]
