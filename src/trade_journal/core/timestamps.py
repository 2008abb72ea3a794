"""Timestamp parsing and clock utilities for CLI date arguments."""

from datetime import UTC, datetime, timedelta

from trade_journal.core.calendar import JournalCalendar


def parse_date(value: str, calendar: JournalCalendar) -> datetime:
    """Parse a date string or raw integer into an aware datetime.

    Accept ISO 8601 date strings (``2024-01-01``, ``2024-01-01T12:00:00``),
    interpreted as wall-clock time in the calendar's zone, or raw integer
    Unix timestamps in seconds.

    Args:
        value: Date string or integer timestamp.
        calendar: Calendar whose time zone applies to date strings.

    Returns:
        Aware datetime in the calendar's time zone.

    Raises:
        ValueError: If the value cannot be parsed.

    """
    # Try raw integer first
    try:
        return datetime.fromtimestamp(int(value), tz=UTC).astimezone(calendar.tz)
    except ValueError:
        pass

    for fmt in ("%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"):
        try:
            return calendar.localize(datetime.strptime(value, fmt))  # noqa: DTZ007
        except ValueError:
            continue

    msg = f"Cannot parse date: {value!r}. Use ISO 8601 (YYYY-MM-DD) or a Unix timestamp."
    raise ValueError(msg)


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return round(moment.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    seconds, millis = divmod(value, 1000)
    return datetime.fromtimestamp(seconds, tz=UTC) + timedelta(milliseconds=millis)


class SystemClock:
    """``Clock`` backed by the system time, expressed in the calendar's zone."""

    def __init__(self, calendar: JournalCalendar) -> None:
        """Initialize the clock.

        Args:
            calendar: Calendar whose time zone ``now()`` is expressed in.

        """
        self._calendar = calendar

    def now(self) -> datetime:
        """Return the current aware time."""
        return datetime.now(tz=self._calendar.tz)
