# File: utils/dt_utils.py
"""Date and time utilities for Platinum Tracker.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Functions:
    - dt_now_unix: Current unix time in whole seconds
    - dt_from_unix: Aware UTC datetime from unix seconds
    - dt_format_unix_local: Format unix seconds in a given timezone
    - dt_week_bucket: ISO week bucket ("2026-W42") for unix seconds
    - is_valid_timezone: Check an IANA timezone name
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

DISPLAY_UNKNOWN = "Unknown"
DEFAULT_DATE_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def dt_now_unix() -> int:
    """Return the current unix time in whole seconds."""
    return int(time.time())


def dt_from_unix(seconds: int) -> datetime:
    """Return an aware UTC datetime for unix seconds."""
    return datetime.fromtimestamp(seconds, UTC)


def dt_format_unix_local(
    seconds: int | None,
    tz_name: str,
    fmt: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Format unix seconds in the given timezone.

    Returns "Unknown" for a missing or zero timestamp. An unknown timezone
    name falls back to UTC rather than failing a notification.
    """
    if not seconds:
        return DISPLAY_UNKNOWN

    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        _LOGGER.warning("Unknown timezone '%s', formatting in UTC", tz_name)
        tz = ZoneInfo("UTC")

    return dt_from_unix(seconds).astimezone(tz).strftime(fmt)


def dt_week_bucket(seconds: int) -> str:
    """Return the ISO week bucket ("YYYY-Www") of unix seconds in UTC.

    Examples:
        dt_week_bucket(0) → "1970-W01"
    """
    iso_year, iso_week, _ = dt_from_unix(seconds).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def is_valid_timezone(tz_name: str) -> bool:
    """Return True when tz_name is a known IANA timezone."""
    if not tz_name:
        return False
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
