"""Schemas for uploaded file endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class StoredFileRead(BaseModel):
    id: int
    title: str | None = None
    description: str | None = None
    file: str
    additional_informations: dict[str, Any] | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ViolationRead(BaseModel):
    field: str
    message: str


class UploadErrorRead(BaseModel):
    """Body returned when an upload is rejected."""

    message: str
    violations: list[ViolationRead] = []


__all__ = ["StoredFileRead", "UploadErrorRead", "ViolationRead"]
