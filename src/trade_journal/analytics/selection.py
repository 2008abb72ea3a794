"""Resolve a tapped or hovered date to the nearest point on the profit graph."""

from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import TypeVar

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import ZERO, CumulativePoint, DailyPoint, GraphSelection

_P = TypeVar("_P", DailyPoint, CumulativePoint)


def _nearest(points: Sequence[_P], target: date, day_of: Callable[[_P], date]) -> _P | None:
    """Return the point closest to ``target``; the first one scanned wins ties."""
    best: _P | None = None
    best_distance = 0
    for point in points:
        distance = abs((day_of(point) - target).days)
        if best is None or distance < best_distance:
            best = point
            best_distance = distance
    return best


def select_nearest(
    query: datetime | None,
    daily_points: Sequence[DailyPoint],
    cumulative_points: Sequence[CumulativePoint],
    calendar: JournalCalendar,
) -> GraphSelection | None:
    """Return the daily point nearest to ``query`` with its running total.

    The query is first truncated to its calendar day. The running total
    is taken from the cumulative point on the same day; failing that,
    from the cumulative point nearest to the chosen day; failing that,
    zero.

    Args:
        query: Date picked by the user, or ``None`` for no pick.
        daily_points: Date-ascending daily totals for the active period.
        cumulative_points: Date-ascending running totals for the period.
        calendar: The process-wide journal calendar.

    Returns:
        The selection, or ``None`` when there is no query or no data.

    """
    if query is None or not daily_points:
        return None

    target = calendar.day_of(query)
    nearest = _nearest(daily_points, target, lambda p: p.day)
    if nearest is None:
        return None

    cumulative = next((c for c in cumulative_points if c.day == nearest.day), None)
    if cumulative is None:
        cumulative = _nearest(cumulative_points, nearest.day, lambda c: c.day)
    running = cumulative.cumulative_profit if cumulative is not None else ZERO

    return GraphSelection(day=nearest.day, daily_profit=nearest.profit, cumulative_profit=running)


def retain_selection(
    selection: GraphSelection | None,
    daily_points: Sequence[DailyPoint],
    cumulative_points: Sequence[CumulativePoint],
) -> GraphSelection | None:
    """Carry a selection over to a rebuilt series.

    The selection survives only if its day is still plotted. Its daily
    and running profit are re-read from the new points, since an edit to
    a trade on that day changes both.
    """
    if selection is None:
        return None
    daily = next((p for p in daily_points if p.day == selection.day), None)
    if daily is None:
        return None
    running = next((c for c in cumulative_points if c.day == daily.day), None)
    return GraphSelection(
        day=daily.day,
        daily_profit=daily.profit,
        cumulative_profit=running.cumulative_profit if running is not None else ZERO,
    )
