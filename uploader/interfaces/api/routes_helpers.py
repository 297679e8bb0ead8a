"""Helper utilities shared across API route handlers."""

from typing import NoReturn

from fastapi import HTTPException

from uploader.domain.exceptions import UploadError


def raise_upload_http_error(exc: UploadError) -> NoReturn:
    """Translate ``exc`` into the HTTP error returned to the client."""

    raise HTTPException(status_code=exc.status_code, detail=exc.to_detail()) from exc


__all__ = ["raise_upload_http_error"]
