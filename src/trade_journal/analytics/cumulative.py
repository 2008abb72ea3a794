"""Build the running-total profit series for the active period."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import ZERO, CumulativePoint, DailyPoint

_DOMAIN_PAD_DAYS = 1


@dataclass(frozen=True)
class CumulativeSeries:
    """Running profit per day plus the x-axis range to plot it on.

    ``x_domain`` spans from the first day to one day past the last, so
    the most recent point is not drawn against the right edge. It is
    ``None`` when the series is empty.
    """

    points: tuple[CumulativePoint, ...]
    x_domain: tuple[date, date] | None

    @property
    def final_value(self) -> Decimal:
        """Return the last running total, or zero for an empty series."""
        return self.points[-1].cumulative_profit if self.points else ZERO


EMPTY_SERIES = CumulativeSeries(points=(), x_domain=None)


def build_cumulative_series(
    daily_points: Sequence[DailyPoint],
    calendar: JournalCalendar,
) -> CumulativeSeries:
    """Accumulate daily profits into a running total.

    The total starts at zero immediately before the first point, so each
    period has its own baseline rather than continuing the all-time sum.

    Args:
        daily_points: Date-ascending daily totals for the active period.
        calendar: The process-wide journal calendar.

    Returns:
        One ``CumulativePoint`` per daily point and the padded x-domain.

    """
    if not daily_points:
        return EMPTY_SERIES

    running = ZERO
    points: list[CumulativePoint] = []
    for point in daily_points:
        running += point.profit
        points.append(CumulativePoint(day=point.day, cumulative_profit=running))

    first = daily_points[0].day
    last = daily_points[-1].day
    return CumulativeSeries(
        points=tuple(points),
        x_domain=(first, calendar.add_days(last, _DOMAIN_PAD_DAYS)),
    )
