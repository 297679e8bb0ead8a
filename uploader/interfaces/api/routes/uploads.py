"""Routes receiving uploads and exposing the stored records."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from uploader.application.uploader_service import UploaderService, UploadRequest
from uploader.application.use_cases.stored_files import (
    delete_stored_file as delete_stored_file_uc,
    get_stored_file as get_stored_file_uc,
    list_stored_files as list_stored_files_uc,
    register_upload as register_upload_uc,
)
from uploader.domain.entities import UserStoredFile
from uploader.domain.exceptions import UploadError
from uploader.infrastructure.database import get_db
from uploader.interfaces.api.dependencies import get_upload_request, get_uploader_service
from uploader.interfaces.api.routes_helpers import raise_upload_http_error
from uploader.interfaces.api.schemas import StoredFileRead, UploadErrorRead

router = APIRouter(prefix="/uploads", tags=["uploads"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": UploadErrorRead},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": UploadErrorRead},
}


def _to_read_model(stored_file: UserStoredFile) -> StoredFileRead:
    return StoredFileRead.model_validate(stored_file)


@router.post(
    "/",
    response_model=StoredFileRead,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_upload(
    validate: bool = Query(True),
    upload_request: UploadRequest = Depends(get_upload_request),
    db: Session = Depends(get_db),
    uploader: UploaderService = Depends(get_uploader_service),
) -> StoredFileRead:
    """Store the ``uploaded_file`` part and persist the record built from the form."""

    try:
        stored_file = register_upload_uc(db, uploader, upload_request, validate=validate)
    except UploadError as exc:
        logger.warning("Upload rejected: %s", exc.message)
        raise_upload_http_error(exc)
    return _to_read_model(stored_file)


@router.get("/", response_model=list[StoredFileRead])
def list_uploads(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    db: Session = Depends(get_db),
) -> list[StoredFileRead]:
    """Return stored upload records, newest first."""

    stored_files = list_stored_files_uc(db, skip=skip, limit=limit)
    return [_to_read_model(stored_file) for stored_file in stored_files]


@router.get("/{stored_file_id}", response_model=StoredFileRead)
def read_upload(
    stored_file_id: int,
    db: Session = Depends(get_db),
) -> StoredFileRead:
    """Return the upload record identified by ``stored_file_id``."""

    try:
        stored_file = get_stored_file_uc(db, stored_file_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(stored_file)


@router.delete("/{stored_file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_upload(
    stored_file_id: int,
    db: Session = Depends(get_db),
    uploader: UploaderService = Depends(get_uploader_service),
) -> Response:
    """Delete the upload record and its stored binary."""

    try:
        delete_stored_file_uc(db, uploader, stored_file_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except UploadError as exc:
        raise_upload_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
