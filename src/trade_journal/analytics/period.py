"""Resolve a profit graph range into a concrete date interval.

Periods are anchored to month boundaries of the journal calendar: one
month starts on the first of the current month, three months on the
first of the month two months back, and "all" on the first of the month
holding the earliest trade ever recorded. Every interval ends at ``now``
(exclusive).
"""

from collections.abc import Iterable
from datetime import datetime

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import DateInterval, ProfitGraphRange, Trade

_THREE_MONTH_OFFSET = -2


def earliest_trade_date(
    trades: Iterable[Trade],
    calendar: JournalCalendar,
) -> datetime | None:
    """Return the earliest date across all dated trades, or ``None`` if there are none.

    Pass the full, unfiltered collection: the "all" range starts from
    this date, so looking it up inside an already-filtered window would
    be circular. Dates are localized first so naive and aware values
    compare on the same clock.
    """
    dates = [calendar.localize(t.date) for t in trades if t.date is not None]
    return min(dates) if dates else None


def make_interval(
    selected: ProfitGraphRange,
    now: datetime,
    calendar: JournalCalendar,
    earliest: datetime | None = None,
) -> DateInterval | None:
    """Return the ``[start, now)`` interval for the selected range.

    Args:
        selected: Requested graph range.
        now: Reference instant, used as the exclusive end.
        calendar: The process-wide journal calendar.
        earliest: Earliest trade date in the whole journal; only consulted
            for ``ProfitGraphRange.ALL``.

    Returns:
        The interval, or ``None`` for ``ALL`` when the journal has no
        dated trades. Callers show an empty result in that case.

    """
    end = calendar.localize(now)
    this_month = calendar.start_of_month(end)
    if selected is ProfitGraphRange.ONE_MONTH:
        return DateInterval(start=this_month, end=end)
    if selected is ProfitGraphRange.THREE_MONTHS:
        start = calendar.shift_months(this_month, _THREE_MONTH_OFFSET)
        return DateInterval(start=start, end=end)
    if earliest is None:
        return None
    return DateInterval(start=calendar.start_of_month(earliest), end=end)


def filter_trades(
    trades: Iterable[Trade],
    interval: DateInterval | None,
    calendar: JournalCalendar,
) -> list[Trade]:
    """Return the dated trades falling inside ``interval``.

    A missing interval yields an empty list. A naive trade date is read
    as wall-clock time in the calendar's zone before the bounds check.
    """
    if interval is None:
        return []
    return [
        t for t in trades if t.date is not None and interval.contains(calendar.localize(t.date))
    ]
