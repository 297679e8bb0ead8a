"""Persistence helpers for uploaded file records."""

from sqlalchemy.orm import Session

from uploader.domain.entities import StoredFileRecord, UserStoredFile
from uploader.infrastructure.models import StoredFileModel
from uploader.utils import ensure_app_naive_datetime, get_app_timezone, now_in_app_timezone


class StoredFileRepository:
    """Provide CRUD operations for uploaded file records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, skip: int = 0, limit: int | None = None) -> list[UserStoredFile]:
        query = self.session.query(StoredFileModel).order_by(
            StoredFileModel.created_at.desc(), StoredFileModel.id.desc()
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, stored_file_id: int) -> UserStoredFile | None:
        model = self.session.get(StoredFileModel, stored_file_id)
        return self._to_entity(model) if model else None

    def create(self, record: StoredFileRecord) -> UserStoredFile:
        """Persist ``record`` and assign its generated identifier."""

        record_type = type(record)
        model = StoredFileModel(
            record_type=f"{record_type.__module__}.{record_type.__qualname__}",
            title=getattr(record, "title", None),
            description=getattr(record, "description", None),
            file=record.get_file(),
            additional_informations=getattr(record, "additional_informations", None),
            created_at=ensure_app_naive_datetime(record.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        record.id = model.id
        return self._to_entity(model)

    def delete(self, stored_file_id: int) -> bool:
        model = self.session.get(StoredFileModel, stored_file_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: StoredFileModel) -> UserStoredFile:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=get_app_timezone())
        return UserStoredFile(
            id=model.id,
            title=model.title,
            description=model.description,
            file=model.file,
            additional_informations=model.additional_informations,
            created_at=created_at,
        )


__all__ = ["StoredFileRepository"]
