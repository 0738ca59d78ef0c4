"""Datetime helpers.

Feed timestamps are ISO 8601 strings, usually with a trailing ``Z``.
All datetimes produced here are timezone-aware UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


def parse_feed_timestamp(value: str | None) -> datetime | None:
    """Parse a feed timestamp into an aware UTC datetime.

    Naive timestamps are treated as UTC. Returns None for empty or
    unparseable input rather than raising, so callers can decide ordering.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso_z(value: datetime) -> str:
    """Format an aware datetime as ISO 8601 UTC with a ``Z`` suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
