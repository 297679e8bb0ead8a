"""Conversion of flat form data into record instances."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import pytest

from tests.records import Curator, Exhibit
from uploader.application.denormalizer import Denormalizer, expand_form_fields, to_snake_case
from uploader.domain.entities import UserStoredFile
from uploader.domain.exceptions import DenormalizationError


@pytest.fixture()
def denormalizer():
    return Denormalizer()


def test_expand_form_fields_builds_nested_maps():
    expanded = expand_form_fields(
        [
            ("title", "Sunset"),
            ("curator[name]", "Ana"),
            ("curator[email]", "ana@example.com"),
            ("tags[]", "beach"),
            ("tags[]", "evening"),
            ("meta[camera][model]", "X100"),
        ]
    )

    assert expanded == {
        "title": "Sunset",
        "curator": {"name": "Ana", "email": "ana@example.com"},
        "tags": ["beach", "evening"],
        "meta": {"camera": {"model": "X100"}},
    }


def test_expand_form_fields_keeps_malformed_keys_verbatim():
    assert expand_form_fields([("weird[", "x"), ("]odd", "y")]) == {"weird[": "x", "]odd": "y"}


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("createdAt", "created_at"),
        ("additionalInformations", "additional_informations"),
        ("title", "title"),
        ("externalID", "external_id"),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


def test_denormalize_maps_matching_fields_and_ignores_unknown(denormalizer):
    record = denormalizer.denormalize(
        {"title": "Report", "file": "abc.pdf", "unknown": "ignored"},
        UserStoredFile,
    )

    assert record.title == "Report"
    assert record.file == "abc.pdf"
    assert not hasattr(record, "unknown")


def test_denormalize_never_sets_identifier(denormalizer):
    record = denormalizer.denormalize({"id": "42", "file": "abc.pdf"}, UserStoredFile)

    assert record.id is None


@pytest.mark.parametrize("key", ["file", "File", "FILE"])
def test_denormalize_overrides_win_over_any_spelling_of_the_field(denormalizer, key):
    record = denormalizer.denormalize(
        {key: "../victim.png", "title": "Report"},
        UserStoredFile,
        overrides={"file": "abc.png"},
    )

    assert record.file == "abc.png"
    assert record.title == "Report"


def test_denormalize_parses_form_datetimes(denormalizer):
    record = denormalizer.denormalize(
        {"file": "abc.pdf", "createdAt": "17-10-2026 14:30:05"},
        UserStoredFile,
    )

    assert record.created_at == datetime(2026, 10, 17, 14, 30, 5, tzinfo=timezone.utc)


def test_denormalize_accepts_iso_datetimes(denormalizer):
    record = denormalizer.denormalize(
        {"file": "abc.pdf", "created_at": "2026-10-17T14:30:05+02:00"},
        UserStoredFile,
    )

    assert record.created_at.utcoffset().total_seconds() == 7200


def test_created_at_defaults_to_construction_time(denormalizer):
    before = datetime.now(timezone.utc)
    record = denormalizer.denormalize({"file": "abc.pdf"}, UserStoredFile)

    assert before <= record.created_at <= datetime.now(timezone.utc)


def test_custom_date_format():
    denormalizer = Denormalizer(date_format="%Y/%m/%d")

    record = denormalizer.denormalize({"file": "a", "created_at": "2026/01/02"}, UserStoredFile)

    assert record.created_at == datetime(2026, 1, 2, tzinfo=timezone.utc)


def test_denormalize_builds_nested_records_and_coerces_values(denormalizer):
    data = expand_form_fields(
        [
            ("file", "abc.png"),
            ("position", "3"),
            ("externalId", "12345678-1234-5678-1234-567812345678"),
            ("curator[name]", "Ana"),
            ("curator[unknown]", "ignored"),
            ("tags[]", "beach"),
        ]
    )

    exhibit = denormalizer.denormalize(data, Exhibit)

    assert exhibit.position == 3
    assert exhibit.external_id == UUID("12345678-1234-5678-1234-567812345678")
    assert exhibit.curator == Curator(name="Ana", email=None)
    assert exhibit.tags == ["beach"]


def test_denormalize_free_form_map(denormalizer):
    data = expand_form_fields(
        [("file", "abc.png"), ("additionalInformations[camera]", "X100"), ("additionalInformations[iso]", "200")]
    )

    record = denormalizer.denormalize(data, UserStoredFile)

    assert record.additional_informations == {"camera": "X100", "iso": "200"}


def test_empty_strings_become_none_for_optional_non_text_fields(denormalizer):
    exhibit = denormalizer.denormalize({"file": "a", "position": ""}, Exhibit)

    assert exhibit.position is None


def test_denormalize_reports_every_unconvertible_field(denormalizer):
    with pytest.raises(DenormalizationError) as exc_info:
        denormalizer.denormalize(
            {
                "file": "a",
                "position": "third",
                "createdAt": "yesterday",
                "curator": "Ana",
            },
            Exhibit,
        )

    fields = sorted(violation.field for violation in exc_info.value.violations)
    assert fields == ["created_at", "curator", "position"]
    assert exc_info.value.status_code == 400


def test_nested_violation_locations_are_dotted(denormalizer):
    with pytest.raises(DenormalizationError) as exc_info:
        denormalizer.denormalize({"file": "a", "curator": {"name": ["a", "b"]}}, Exhibit)

    assert [v.field for v in exc_info.value.violations] == ["curator.name"]
