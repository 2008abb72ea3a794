"""Tests for timestamp parsing and the system clock."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.protocols import Clock
from trade_journal.core.timestamps import SystemClock, from_epoch_ms, parse_date, to_epoch_ms

_JAN_1_2024_UTC = 1704067200
_JAN_1_2024_MS = _JAN_1_2024_UTC * 1000
_TOKYO = ZoneInfo("Asia/Tokyo")


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self, utc_calendar: JournalCalendar) -> None:
        """Parse a plain ISO date as local midnight."""
        assert parse_date("2024-01-01", utc_calendar) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_iso_datetime(self, utc_calendar: JournalCalendar) -> None:
        """Parse an ISO datetime with a time component."""
        result = parse_date("2024-01-01T12:30:00", utc_calendar)
        assert result == datetime(2024, 1, 1, 12, 30, tzinfo=UTC)

    def test_date_uses_calendar_zone(self) -> None:
        """A date string is midnight in the calendar's zone, not UTC."""
        result = parse_date("2024-01-01", JournalCalendar("Asia/Tokyo"))
        assert result == datetime(2024, 1, 1, tzinfo=_TOKYO)
        assert result.astimezone(UTC) == datetime(2023, 12, 31, 15, tzinfo=UTC)

    def test_unix_timestamp(self, utc_calendar: JournalCalendar) -> None:
        """Parse a raw integer Unix timestamp."""
        assert parse_date(str(_JAN_1_2024_UTC), utc_calendar) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_invalid_value(self, utc_calendar: JournalCalendar) -> None:
        """Raise ValueError for unparseable input."""
        with pytest.raises(ValueError, match="Cannot parse date"):
            parse_date("not-a-date", utc_calendar)


class TestEpochMillis:
    """Tests for epoch millisecond conversion."""

    def test_to_epoch_ms(self) -> None:
        """An aware datetime converts to epoch milliseconds."""
        assert to_epoch_ms(datetime(2024, 1, 1, tzinfo=UTC)) == _JAN_1_2024_MS

    def test_from_epoch_ms_keeps_millis(self) -> None:
        """Sub-second precision survives the conversion."""
        result = from_epoch_ms(_JAN_1_2024_MS + 250)
        assert result == datetime(2024, 1, 1, tzinfo=UTC) + timedelta(milliseconds=250)

    def test_other_zone_same_instant(self) -> None:
        """A Tokyo datetime stores the same instant as its UTC equivalent."""
        tokyo_midnight = datetime(2024, 1, 1, 9, tzinfo=_TOKYO)
        assert to_epoch_ms(tokyo_midnight) == _JAN_1_2024_MS


class TestSystemClock:
    """Tests for SystemClock."""

    def test_now_is_aware_in_calendar_zone(self) -> None:
        """now() returns an aware datetime in the calendar's zone."""
        clock = SystemClock(JournalCalendar("Asia/Tokyo"))
        assert clock.now().tzinfo == _TOKYO

    def test_satisfies_clock_protocol(self, utc_calendar: JournalCalendar) -> None:
        """SystemClock structurally satisfies Clock."""
        assert isinstance(SystemClock(utc_calendar), Clock)
