"""Timestamp helpers shared across the API service."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(value: datetime | None = None) -> str:
    """Return *value* (default: now) as ISO 8601 UTC with milliseconds and a ``Z`` suffix.

    Naive datetimes are assumed to already be in UTC.
    """
    if value is None:
        value = utc_now()
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = ["utc_now", "iso_timestamp"]
