"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    get_app_timezone,
    now_in_app_timezone,
    parse_form_datetime,
)

__all__ = [
    "ensure_app_naive_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
    "parse_form_datetime",
]
