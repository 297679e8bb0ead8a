"""Local filesystem storage for uploaded binaries."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from uploader.domain.exceptions import UploadStorageError

logger = logging.getLogger(__name__)

_PART_SUFFIX = ".part"
_COPY_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StagedFile:
    """An upload written next to its final location but not yet visible."""

    name: str
    path: Path


class LocalFileStorage:
    """Store uploads under ``directory`` using a stage then commit protocol."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self.directory / name

    def _part_path(self, name: str) -> Path:
        return self.directory / f".{name}{_PART_SUFFIX}"

    def exists(self, name: str) -> bool:
        """Return ``True`` when ``name`` is stored or currently being staged."""

        return self.path_for(name).exists() or self._part_path(name).exists()

    def reserve_name(
        self,
        stem_factory: Callable[[], str],
        extension: str | None,
        *,
        attempts: int,
    ) -> str:
        """Return a file name produced by ``stem_factory`` that is not in use."""

        for _ in range(max(attempts, 1)):
            stem = stem_factory()
            name = f"{stem}.{extension}" if extension else stem
            if not self.exists(name):
                return name
            logger.warning("Generated upload name %s already exists; retrying", name)
        raise UploadStorageError(
            f"Could not generate a unique file name after {attempts} attempts"
        )

    def stage(self, stream: BinaryIO, name: str) -> StagedFile:
        """Copy ``stream`` into a hidden part file for ``name``."""

        part_path = self._part_path(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            if hasattr(stream, "seek"):
                stream.seek(0)
            # "x" refuses to clobber a part file staged concurrently under the same name
            with part_path.open("xb") as destination:
                shutil.copyfileobj(stream, destination, _COPY_CHUNK_SIZE)
        except FileExistsError as exc:
            raise UploadStorageError(f"File {name} is already being stored") from exc
        except OSError as exc:
            logger.exception("Unable to stage upload %s in %s", name, self.directory)
            _unlink_quietly(part_path)
            raise UploadStorageError(f"Unable to store file {name}") from exc
        return StagedFile(name=name, path=part_path)

    def commit(self, staged: StagedFile) -> Path:
        """Atomically move ``staged`` to its final name."""

        destination = self.path_for(staged.name)
        try:
            os.replace(staged.path, destination)
        except OSError as exc:
            logger.exception("Unable to commit upload %s", staged.name)
            _unlink_quietly(staged.path)
            raise UploadStorageError(f"Unable to store file {staged.name}") from exc
        logger.info("Stored upload %s in %s", staged.name, self.directory)
        return destination

    def discard(self, staged: StagedFile) -> None:
        """Remove ``staged`` without publishing it."""

        _unlink_quietly(staged.path)

    def delete(self, name: str) -> None:
        """Delete the stored file ``name`` if it exists."""

        try:
            self.path_for(Path(name).name).unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.exception("Unable to delete stored file %s", name)
            raise UploadStorageError(f"Unable to delete file {name}") from exc


def _unlink_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Unable to remove temporary upload %s", path)


__all__ = ["LocalFileStorage", "StagedFile"]
