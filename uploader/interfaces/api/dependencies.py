"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Request

from uploader.application.uploader_service import IncomingFile, UploaderService, UploadRequest
from uploader.config import get_settings


@lru_cache
def get_uploader_service() -> UploaderService:
    """Return the uploader configured from the application settings.

    Building the service checks the default record class, so a broken
    configuration fails here rather than on the first request.
    """

    settings = get_settings()
    return UploaderService(
        settings.upload_directory,
        settings.default_upload_file_class,
        settings.default_upload_file_field,
        date_format=settings.upload_date_format,
    )


async def get_upload_request(request: Request) -> UploadRequest:
    """Split the multipart body of ``request`` into file parts and fields."""

    form = await request.form()
    files: dict[str, IncomingFile] = {}
    fields: list[tuple[str, str]] = []
    for key, value in form.multi_items():
        if isinstance(value, str):
            fields.append((key, value))
            continue
        files[key] = IncomingFile(
            filename=value.filename,
            content_type=value.content_type,
            stream=value.file,
        )
    return UploadRequest(files=files, fields=fields)
