"""Calendar arithmetic pinned to a single configured time zone.

Every component that truncates a timestamp to a day or a month goes
through one ``JournalCalendar`` instance, built once at startup from
``journal.timezone``. Mixing local time in one place with UTC in another
would put the same trade on different days, so nothing else in the
package calls ``datetime.date()`` on a trade timestamp directly.
"""

import calendar
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

_MONTHS_PER_YEAR = 12
_SUNDAY = 6


class JournalCalendar:
    """Day and month truncation in one fixed IANA time zone.

    Args:
        timezone: IANA zone name, e.g. ``"Asia/Tokyo"`` or ``"UTC"``.

    """

    def __init__(self, timezone: str = "UTC") -> None:
        """Initialize the calendar for the given time zone.

        Args:
            timezone: IANA zone name.

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If the zone is unknown.

        """
        self._tz = ZoneInfo(timezone)
        self._grid = calendar.Calendar(firstweekday=_SUNDAY)

    @property
    def tz(self) -> ZoneInfo:
        """Return the configured time zone."""
        return self._tz

    def localize(self, moment: datetime) -> datetime:
        """Return ``moment`` expressed in the calendar's time zone.

        Naive datetimes are taken to be wall-clock times in this zone
        already; aware datetimes are converted.
        """
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self._tz)
        return moment.astimezone(self._tz)

    def day_of(self, moment: datetime) -> date:
        """Return the calendar day on which ``moment`` falls."""
        return self.localize(moment).date()

    def start_of_day(self, day: date | datetime) -> datetime:
        """Return local midnight at the start of ``day``."""
        if isinstance(day, datetime):
            day = self.day_of(day)
        return datetime.combine(day, time.min, tzinfo=self._tz)

    def start_of_month(self, moment: datetime) -> datetime:
        """Return local midnight on the first day of the month holding ``moment``."""
        local = self.localize(moment)
        return datetime(local.year, local.month, 1, tzinfo=self._tz)

    def shift_months(self, month_start: datetime, months: int) -> datetime:
        """Return the first day of the month ``months`` away from ``month_start``.

        Negative values move backwards. The result is always local
        midnight on day 1.
        """
        local = self.localize(month_start)
        index = local.year * _MONTHS_PER_YEAR + (local.month - 1) + months
        year, month = divmod(index, _MONTHS_PER_YEAR)
        return datetime(year, month + 1, 1, tzinfo=self._tz)

    def add_days(self, day: date, days: int) -> date:
        """Return the day ``days`` after ``day``."""
        return day + timedelta(days=days)

    def month_days(self, year: int, month: int) -> list[date]:
        """Return every day of the given month in order."""
        _, count = calendar.monthrange(year, month)
        return [date(year, month, d) for d in range(1, count + 1)]

    def month_grid(self, year: int, month: int) -> list[list[date | None]]:
        """Return the month as Sunday-first weeks.

        Cells belonging to the neighbouring months are ``None`` so the
        grid can be rendered with blank padding.
        """
        return [
            [d if d.month == month else None for d in week]
            for week in self._grid.monthdatescalendar(year, month)
        ]
