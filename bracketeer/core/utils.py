"""Time helpers shared by the services."""

from __future__ import annotations

import datetime


def utc_now() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def utc_timestamp(moment: datetime.datetime | None = None) -> str:
    """Format a moment as a fixed-width UTC ISO-8601 string.

    Every stored timestamp goes through here so that plain string comparison
    orders them chronologically: microseconds are always present and the
    offset is always ``+00:00``.
    """
    if moment is None:
        moment = utc_now()
    return moment.astimezone(datetime.timezone.utc).isoformat(timespec="microseconds")
