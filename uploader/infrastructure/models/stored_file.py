"""SQLAlchemy model for uploaded files."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from uploader.infrastructure.database import Base


class StoredFileModel(Base):
    """Database representation of a record hydrated from an upload."""

    __tablename__ = "uploaded_file"

    id = Column(Integer, primary_key=True, index=True)
    record_type = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    file = Column(String(255), nullable=False, unique=True)
    additional_informations = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False)


__all__ = ["StoredFileModel"]
