"""Unit tests for the pure date and math utilities."""

from __future__ import annotations

from custom_components.platinum_tracker.utils.dt_utils import (
    dt_format_unix_local,
    dt_week_bucket,
    is_valid_timezone,
)
from custom_components.platinum_tracker.utils.math_utils import (
    floor_percent,
    format_progress_text,
)


class TestMathUtils:
    """Tests for progress math."""

    def test_floor_percent(self) -> None:
        """Percent is floored and safe for a zero denominator."""
        assert floor_percent(1, 3) == 33
        assert floor_percent(2, 3) == 66
        assert floor_percent(3, 3) == 100
        assert floor_percent(5, 0) == 0
        assert floor_percent(5, None) == 0

    def test_format_progress_text(self) -> None:
        """Progress text includes counts and percent."""
        assert format_progress_text(12, 40) == "12/40 (30%)"
        assert format_progress_text(0, None) == "0/0 (0%)"


class TestDtUtils:
    """Tests for date formatting and week buckets."""

    def test_format_unknown_for_missing_timestamp(self) -> None:
        """Zero or None renders as Unknown."""
        assert dt_format_unix_local(0, "UTC") == "Unknown"
        assert dt_format_unix_local(None, "UTC") == "Unknown"

    def test_format_in_timezone(self) -> None:
        """Timestamps are rendered in the requested zone."""
        # 2021-01-01T00:00:00Z
        assert dt_format_unix_local(1609459200, "UTC") == "01/01/2021, 12:00:00 AM"
        assert (
            dt_format_unix_local(1609459200, "America/New_York")
            == "12/31/2020, 07:00:00 PM"
        )

    def test_format_bad_timezone_falls_back_to_utc(self) -> None:
        """An unknown zone name never fails the notification."""
        assert (
            dt_format_unix_local(1609459200, "Mars/Olympus")
            == "01/01/2021, 12:00:00 AM"
        )

    def test_week_bucket(self) -> None:
        """ISO week buckets use the ISO year."""
        assert dt_week_bucket(0) == "1970-W01"
        # 2021-01-01 belongs to ISO week 53 of 2020
        assert dt_week_bucket(1609459200) == "2020-W53"

    def test_is_valid_timezone(self) -> None:
        """IANA names validate, others do not."""
        assert is_valid_timezone("Europe/London") is True
        assert is_valid_timezone("Mars/Olympus") is False
        assert is_valid_timezone("") is False
