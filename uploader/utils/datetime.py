"""Helpers for record timestamps and form supplied datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from uploader.config import get_settings

_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    ``APP_TIMEZONE`` accepts an IANA name (``Europe/Paris``) or a fixed offset
    (``UTC+02:00``). Unset or unknown values resolve to UTC.
    """

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name:
        return timezone.utc
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    ``DateTime`` columns on SQLite drop offsets, so records keep aware values
    while the database stores the localized naive representation.
    """

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def parse_form_datetime(value: str, date_format: str) -> datetime:
    """Parse a datetime sent as a form field.

    ``date_format`` is tried first; ISO 8601 strings are accepted as a
    fallback. Naive results are attached to the application timezone.
    """

    text = value.strip()
    try:
        parsed = datetime.strptime(text, date_format)
    except ValueError:
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=get_app_timezone())
    return parsed


def _resolve_timezone(tz_name: str) -> tzinfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            offset = timedelta(
                hours=int(match.group("hours")),
                minutes=int(match.group("minutes") or 0),
            )
            return timezone(sign * offset)
    return timezone.utc
