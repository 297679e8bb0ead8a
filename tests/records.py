"""Record types used as upload targets in tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from uploader.domain.constraints import Length, NotBlank, constrained
from uploader.domain.entities import StoredFileRecord


@dataclass(kw_only=True)
class GalleryImage(StoredFileRecord):
    title: str | None = None


@dataclass(kw_only=True)
class CaptionedImage(StoredFileRecord):
    title: str | None = constrained(NotBlank("A title is required."))


@dataclass(kw_only=True)
class StrictDocument(StoredFileRecord):
    title: str | None = constrained(NotBlank())
    author: str | None = constrained(NotBlank())
    reference: str | None = constrained(NotBlank(), Length(min=3))


@dataclass
class Curator:
    name: str | None = constrained(NotBlank("Curator name is required."))
    email: str | None = None


@dataclass(kw_only=True)
class Exhibit(StoredFileRecord):
    title: str | None = None
    position: int | None = None
    external_id: UUID | None = None
    curator: Curator | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class Panel(StoredFileRecord):
    curators: list[Curator] = field(default_factory=list)


@dataclass(kw_only=True)
class Attachment(StoredFileRecord):
    """Stores the generated name in ``path`` instead of ``file``."""

    file: str | None = None
    path: str | None = constrained(NotBlank())


@dataclass
class NotARecord:
    file: str | None = None
