"""Builders shared by the uploader tests."""

from __future__ import annotations

import io
from pathlib import Path

from uploader.application.uploader_service import IncomingFile, UploadRequest

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def build_request(
    fields: dict[str, str] | list[tuple[str, str]] | None = None,
    *,
    filename: str | None = "photo.png",
    content_type: str | None = "image/png",
    content: bytes = PNG_BYTES,
) -> UploadRequest:
    """Return an upload request carrying one ``uploaded_file`` part."""

    items = list(fields.items()) if isinstance(fields, dict) else list(fields or [])
    files = {}
    if filename is not None:
        files["uploaded_file"] = IncomingFile(
            filename=filename,
            content_type=content_type,
            stream=io.BytesIO(content),
        )
    return UploadRequest(files=files, fields=items)


def stored_names(directory: Path) -> list[str]:
    """Return every entry of ``directory``, hidden part files included."""

    if not directory.exists():
        return []
    return sorted(entry.name for entry in directory.iterdir())
