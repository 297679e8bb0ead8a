"""Turn a multipart upload into a validated record."""

from __future__ import annotations

import dataclasses
import importlib
import logging
import mimetypes
import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO
from uuid import uuid4

import filetype

from uploader.application.denormalizer import Denormalizer, expand_form_fields, writable_fields
from uploader.application.validation import validate_entity
from uploader.config import DEFAULT_DATE_FORMAT
from uploader.domain.entities import StoredFileRecord
from uploader.domain.exceptions import MissingUploadError, UploadConfigurationError
from uploader.infrastructure.storage import LocalFileStorage, StagedFile

logger = logging.getLogger(__name__)

UPLOADED_FILE_FIELD = "uploaded_file"
_GENERIC_CONTENT_TYPES = {"", "application/octet-stream"}
_SNIFF_BYTES = 8192

EntityType = type[StoredFileRecord] | str


@dataclass
class IncomingFile:
    """A file part received with the request."""

    filename: str | None
    content_type: str | None
    stream: BinaryIO

    def close(self) -> None:
        self.stream.close()


@dataclass
class UploadRequest:
    """File parts and plain form fields of one multipart request."""

    files: Mapping[str, IncomingFile] = field(default_factory=dict)
    fields: Sequence[tuple[str, Any]] = field(default_factory=list)


def generate_name_stem() -> str:
    """Return a random 32 character hexadecimal file name stem."""

    return uuid4().hex


def sniff_extension(stream: BinaryIO) -> str | None:
    """Return the extension of the type detected from the leading bytes of ``stream``."""

    stream.seek(0)
    head = stream.read(_SNIFF_BYTES)
    stream.seek(0)
    kind = filetype.guess(head) if head else None
    return kind.extension if kind is not None else None


def guess_extension(upload: IncomingFile) -> str | None:
    """Return the extension for the uploaded content, without the dot.

    The type detected from the bytes wins. The declared content type and then
    the original file name suffix are only used when the content is not
    recognised.
    """

    detected = sniff_extension(upload.stream)
    if detected:
        return detected
    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if content_type not in _GENERIC_CONTENT_TYPES:
        extension = mimetypes.guess_extension(content_type)
        if extension:
            return extension.lstrip(".")
    suffix = Path(upload.filename or "").suffix.lower()
    if suffix and mimetypes.guess_type(f"upload{suffix}")[0] is not None:
        return suffix.lstrip(".")
    return None


def resolve_entity_type(entity_type: EntityType) -> type:
    """Return the class designated by ``entity_type``.

    Strings are treated as dotted import paths.
    """

    if not isinstance(entity_type, str):
        return entity_type
    module_path, _, class_name = entity_type.rpartition(".")
    if not module_path:
        raise UploadConfigurationError(f"'{entity_type}' is not a dotted class path")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        raise UploadConfigurationError(f"Class '{entity_type}' cannot be imported") from exc


def ensure_supported_target(entity_type: EntityType, file_field: str) -> type[StoredFileRecord]:
    """Check that ``entity_type`` can receive an upload in ``file_field``."""

    resolved = resolve_entity_type(entity_type)
    if not (
        isinstance(resolved, type)
        and issubclass(resolved, StoredFileRecord)
        and dataclasses.is_dataclass(resolved)
    ):
        raise UploadConfigurationError(
            f"{getattr(resolved, '__name__', resolved)!s} must be a dataclass "
            f"extending {StoredFileRecord.__name__}"
        )
    if file_field not in writable_fields(resolved):
        raise UploadConfigurationError(
            f"{resolved.__name__} has no writable field named '{file_field}'"
        )
    return resolved


class UploaderService:
    """Store an uploaded binary and hydrate the record that references it."""

    def __init__(
        self,
        upload_directory: str | os.PathLike[str],
        default_entity_type: EntityType,
        default_file_field: str,
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
        name_generator: Callable[[], str] = generate_name_stem,
        max_name_attempts: int = 5,
    ) -> None:
        self.storage = LocalFileStorage(upload_directory)
        self.default_entity_type = ensure_supported_target(default_entity_type, default_file_field)
        self.default_file_field = default_file_field
        self.denormalizer = Denormalizer(date_format)
        self.name_generator = name_generator
        self.max_name_attempts = max_name_attempts

    @property
    def target_directory(self) -> Path:
        return self.storage.directory

    def handle_upload(
        self,
        request: UploadRequest,
        validate: bool = True,
        entity_type: EntityType | None = None,
        file_field: str | None = None,
    ) -> StoredFileRecord:
        """Return the record materialized from ``request``."""

        record, _ = self.materialize(
            request, validate=validate, entity_type=entity_type, file_field=file_field
        )
        return record

    def materialize(
        self,
        request: UploadRequest,
        *,
        validate: bool = True,
        entity_type: EntityType | None = None,
        file_field: str | None = None,
    ) -> tuple[StoredFileRecord, str]:
        """Return the record built from ``request`` and the name the binary was stored under.

        The binary is staged first and only published under its generated name
        once the record has been built and, when ``validate`` is set, passed
        its field rules. Any failure removes the staged binary. Form keys that
        map onto ``file_field`` are ignored.
        """

        file_field = file_field or self.default_file_field
        target = ensure_supported_target(entity_type or self.default_entity_type, file_field)

        upload = request.files.get(UPLOADED_FILE_FIELD)
        if upload is None or not upload.filename:
            logger.warning("Upload request without a '%s' part", UPLOADED_FILE_FIELD)
            raise MissingUploadError(f"No file provided in '{UPLOADED_FILE_FIELD}'")

        staged = self._stage(upload)
        try:
            data = expand_form_fields(request.fields)
            record = self.denormalizer.denormalize(
                data, target, overrides={file_field: staged.name}
            )
            if validate:
                validate_entity(record)
            self.storage.commit(staged)
        except Exception:
            self.storage.discard(staged)
            raise
        logger.info(
            "Materialized %s from upload %s as %s",
            target.__name__,
            upload.filename,
            staged.name,
        )
        return record, staged.name

    def move(self, upload: IncomingFile) -> str:
        """Store ``upload`` immediately and return its generated name."""

        staged = self._stage(upload)
        self.storage.commit(staged)
        return staged.name

    def generate_unique_filename(self, extension: str | None = None) -> str:
        """Return a name for ``extension`` that is unused in the target directory."""

        return self.storage.reserve_name(
            self.name_generator, extension, attempts=self.max_name_attempts
        )

    def _stage(self, upload: IncomingFile) -> StagedFile:
        try:
            name = self.generate_unique_filename(guess_extension(upload))
            return self.storage.stage(upload.stream, name)
        finally:
            upload.close()


__all__ = [
    "IncomingFile",
    "UPLOADED_FILE_FIELD",
    "UploadRequest",
    "UploaderService",
    "ensure_supported_target",
    "generate_name_stem",
    "guess_extension",
    "resolve_entity_type",
    "sniff_extension",
]
