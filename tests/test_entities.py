"""Base record behaviour."""

from datetime import datetime, timezone

from uploader.domain.entities import UserStoredFile


def test_get_file_strips_directories():
    assert UserStoredFile(file="/var/uploads/abc.png").get_file() == "abc.png"
    assert UserStoredFile(file="C:\\uploads\\abc.png").get_file() == "abc.png"
    assert UserStoredFile(file="abc.png").get_file() == "abc.png"
    assert UserStoredFile().get_file() is None


def test_created_at_is_set_on_construction_and_kept():
    record = UserStoredFile()
    created_at = record.created_at

    record.set_stored_file_name("file", "abc.png")

    assert created_at.tzinfo is not None
    assert record.created_at is created_at
    assert record.file == "abc.png"


def test_created_at_can_be_overridden():
    moment = datetime(2020, 1, 1, tzinfo=timezone.utc)

    assert UserStoredFile(created_at=moment).created_at == moment


def test_identifier_is_absent_before_persistence():
    assert UserStoredFile().id is None
