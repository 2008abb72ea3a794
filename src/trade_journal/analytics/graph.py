"""Profit graph service that owns the cumulative series for one range.

Wire the analytics pipeline together behind one explicit recompute call:
resolve the selected range into an interval, filter the trade snapshot,
aggregate by day, accumulate, and analyse drawdown. Every ``reload``
builds a complete new ``ProfitGraphSnapshot`` and only then replaces the
previous one, so a reader never observes a half-built graph.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from trade_journal.analytics.cumulative import build_cumulative_series
from trade_journal.analytics.daily import build_daily_index
from trade_journal.analytics.drawdown import compute_max_drawdown
from trade_journal.analytics.period import earliest_trade_date, filter_trades, make_interval
from trade_journal.analytics.selection import retain_selection, select_nearest
from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import (
    CumulativePoint,
    DailyPoint,
    DateInterval,
    DrawdownResult,
    GraphSelection,
    ProfitGraphRange,
    Trade,
)
from trade_journal.core.protocols import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfitGraphSnapshot:
    """Everything the profit graph shows for one range at one instant."""

    selected_range: ProfitGraphRange
    interval: DateInterval | None
    daily_points: tuple[DailyPoint, ...]
    cumulative_points: tuple[CumulativePoint, ...]
    x_domain: tuple[date, date] | None
    max_drawdown: DrawdownResult | None

    @property
    def is_empty(self) -> bool:
        """Return whether the period contains no dated trades."""
        return not self.daily_points


def empty_snapshot(selected_range: ProfitGraphRange) -> ProfitGraphSnapshot:
    """Return the snapshot shown when there is nothing to plot."""
    return ProfitGraphSnapshot(
        selected_range=selected_range,
        interval=None,
        daily_points=(),
        cumulative_points=(),
        x_domain=None,
        max_drawdown=None,
    )


def build_snapshot(
    trades: Sequence[Trade],
    selected_range: ProfitGraphRange,
    now: datetime,
    calendar: JournalCalendar,
) -> ProfitGraphSnapshot:
    """Run the full pipeline over one trade snapshot.

    Args:
        trades: Every trade in the journal, unfiltered and in any order.
        selected_range: Range to plot.
        now: Exclusive end of the period.
        calendar: The process-wide journal calendar.

    Returns:
        A new immutable snapshot.

    """
    interval = make_interval(
        selected_range, now, calendar, earliest_trade_date(trades, calendar)
    )
    if interval is None:
        return empty_snapshot(selected_range)

    daily = build_daily_index(filter_trades(trades, interval, calendar), calendar)
    series = build_cumulative_series(daily.points, calendar)
    return ProfitGraphSnapshot(
        selected_range=selected_range,
        interval=interval,
        daily_points=daily.points,
        cumulative_points=series.points,
        x_domain=series.x_domain,
        max_drawdown=compute_max_drawdown(series.points),
    )


class ProfitGraph:
    """Hold the current profit graph snapshot and the user's selection.

    Nothing recomputes implicitly: callers invoke ``reload`` whenever the
    trade collection changes and ``set_range`` when the user picks a
    different window.
    """

    def __init__(
        self,
        calendar: JournalCalendar,
        clock: Clock,
        selected_range: ProfitGraphRange = ProfitGraphRange.ONE_MONTH,
    ) -> None:
        """Initialize an empty graph.

        Args:
            calendar: The process-wide journal calendar.
            clock: Source of ``now`` when ``reload`` is not given one.
            selected_range: Initial range.

        """
        self._calendar = calendar
        self._clock = clock
        self._selected_range = selected_range
        self._snapshot = empty_snapshot(selected_range)
        self._selection: GraphSelection | None = None

    @property
    def selected_range(self) -> ProfitGraphRange:
        """Return the range the next reload will build."""
        return self._selected_range

    @property
    def snapshot(self) -> ProfitGraphSnapshot:
        """Return the most recently built snapshot."""
        return self._snapshot

    @property
    def selection(self) -> GraphSelection | None:
        """Return the currently selected point, if any."""
        return self._selection

    def reload(
        self,
        trades: Sequence[Trade] | None,
        now: datetime | None = None,
    ) -> ProfitGraphSnapshot:
        """Rebuild the snapshot from a fresh trade collection.

        Args:
            trades: Every trade in the journal, or ``None`` if loading them
                failed. A failed load yields the empty snapshot rather than
                keeping the previous one.
            now: Reference instant; defaults to the injected clock.

        Returns:
            The new snapshot, which is also now current.

        """
        selected = self._selected_range
        if trades is None:
            logger.warning("Trade source unavailable; clearing %s graph", selected.value)
            snapshot = empty_snapshot(selected)
        else:
            moment = now if now is not None else self._clock.now()
            snapshot = build_snapshot(trades, selected, moment, self._calendar)

        self._snapshot = snapshot
        self._selection = retain_selection(
            self._selection, snapshot.daily_points, snapshot.cumulative_points
        )
        logger.debug(
            "Rebuilt %s graph: %d days, drawdown=%s",
            selected.value,
            len(snapshot.daily_points),
            snapshot.max_drawdown.drawdown if snapshot.max_drawdown else None,
        )
        return snapshot

    def set_range(
        self,
        selected_range: ProfitGraphRange,
        trades: Sequence[Trade] | None,
        now: datetime | None = None,
    ) -> ProfitGraphSnapshot:
        """Switch to a different range and rebuild immediately."""
        self._selected_range = selected_range
        return self.reload(trades, now)

    def select_nearest(self, query: datetime | None) -> GraphSelection | None:
        """Select the plotted day nearest to ``query``.

        A ``None`` query or an empty graph leaves the current selection
        unchanged.
        """
        selection = select_nearest(
            query,
            self._snapshot.daily_points,
            self._snapshot.cumulative_points,
            self._calendar,
        )
        if selection is not None:
            self._selection = selection
        return self._selection

    def clear_selection(self) -> None:
        """Drop the current selection."""
        self._selection = None
