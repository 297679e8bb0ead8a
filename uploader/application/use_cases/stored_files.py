"""Use cases for uploaded file records."""

import logging

from sqlalchemy.orm import Session

from uploader.application.uploader_service import EntityType, UploaderService, UploadRequest
from uploader.domain.entities import UserStoredFile
from uploader.infrastructure.repositories import StoredFileRepository

logger = logging.getLogger(__name__)


def register_upload(
    session: Session,
    uploader: UploaderService,
    request: UploadRequest,
    *,
    validate: bool = True,
    entity_type: EntityType | None = None,
    file_field: str | None = None,
) -> UserStoredFile:
    """Materialize the record carried by ``request`` and persist it.

    The stored binary is removed again when the record cannot be saved.
    """

    record, stored_name = uploader.materialize(
        request, validate=validate, entity_type=entity_type, file_field=file_field
    )
    repository = StoredFileRepository(session)
    try:
        return repository.create(record)
    except Exception:
        session.rollback()
        logger.exception("Unable to persist upload %s", stored_name)
        uploader.storage.delete(stored_name)
        raise


def list_stored_files(
    session: Session,
    *,
    skip: int = 0,
    limit: int | None = 100,
) -> list[UserStoredFile]:
    """Return stored file records, newest first."""

    repository = StoredFileRepository(session)
    return repository.list(skip=skip, limit=limit)


def get_stored_file(session: Session, stored_file_id: int) -> UserStoredFile:
    """Return the record identified by ``stored_file_id`` or raise an error."""

    repository = StoredFileRepository(session)
    stored_file = repository.get(stored_file_id)
    if stored_file is None:
        raise ValueError("Stored file not found")
    return stored_file


def delete_stored_file(
    session: Session, uploader: UploaderService, stored_file_id: int
) -> None:
    """Delete the binary of the record identified by ``stored_file_id``, then the record.

    A binary that cannot be removed leaves the record in place.
    """

    stored_file = get_stored_file(session, stored_file_id)
    if stored_file.get_file():
        uploader.storage.delete(stored_file.get_file())
    StoredFileRepository(session).delete(stored_file_id)


__all__ = [
    "delete_stored_file",
    "get_stored_file",
    "list_stored_files",
    "register_upload",
]
