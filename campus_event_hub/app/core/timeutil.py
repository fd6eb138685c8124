"""Timestamp helpers."""

from datetime import date, datetime, timezone
from typing import Optional


def _utc_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utcnow_iso() -> str:
    """Current UTC time as an ISO 8601 string, e.g. ``2025-09-01T10:00:00.000Z``."""
    return _utc_iso(datetime.now(timezone.utc))


def normalize_iso_date(value: str) -> Optional[str]:
    """Return the canonical form of an ISO 8601 date or date-time.

    Calendar dates become ``YYYY-MM-DD``.  Date-times become UTC
    ``YYYY-MM-DDTHH:MM:SS.sssZ``; values without an offset are taken
    as UTC.  Canonical values sort chronologically as plain strings.
    Returns ``None`` if ``value`` is not ISO 8601.
    """
    value = value.strip()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        pass
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return _utc_iso(moment)
