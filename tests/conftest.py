"""Shared fixtures for the uploader test suite."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="uploader-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["UPLOAD_DIRECTORY"] = str(_TEST_ROOT / "uploads")
os.environ["DEFAULT_UPLOAD_FILE_CLASS"] = "uploader.domain.entities.UserStoredFile"
os.environ["DEFAULT_UPLOAD_FILE_FIELD"] = "file"
os.environ.pop("APP_TIMEZONE", None)


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"
