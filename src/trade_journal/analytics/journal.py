"""Calendar-side view of the journal: per-day and per-month profit totals.

Keep the latest full trade snapshot together with its ``DailyIndex`` so
the month grid can look up each cell in constant time. ``refresh`` must
be called after every add, update, or delete; it replaces both the
snapshot and the index in one step.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from trade_journal.analytics.daily import EMPTY_INDEX, DailyIndex, build_daily_index
from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import ZERO, Trade

logger = logging.getLogger(__name__)


class TradeJournal:
    """Trade snapshot plus its day index for the calendar view."""

    def __init__(self, calendar: JournalCalendar) -> None:
        """Initialize an empty journal view.

        Args:
            calendar: The process-wide journal calendar.

        """
        self._calendar = calendar
        self._trades: tuple[Trade, ...] = ()
        self._index: DailyIndex = EMPTY_INDEX

    @property
    def trades(self) -> tuple[Trade, ...]:
        """Return the current trade snapshot."""
        return self._trades

    @property
    def index(self) -> DailyIndex:
        """Return the day index built from the current snapshot."""
        return self._index

    def refresh(self, trades: Sequence[Trade] | None) -> DailyIndex:
        """Replace the snapshot and rebuild the day index.

        Args:
            trades: Every trade in the journal, or ``None`` if loading them
                failed, which empties the view.

        Returns:
            The new day index.

        """
        snapshot = tuple(trades) if trades is not None else ()
        index = build_daily_index(snapshot, self._calendar)
        self._trades, self._index = snapshot, index
        logger.debug("Journal refreshed: %d trades on %d days", len(snapshot), len(index))
        return index

    def trades_on(self, day: date) -> tuple[Trade, ...]:
        """Return the trades dated on ``day``."""
        return self._index.trades_on(day)

    def daily_total(self, day: date) -> Decimal:
        """Return the net profit on ``day``."""
        return self._index.profit_on(day)

    def monthly_total(self, now: datetime) -> Decimal:
        """Return the net profit of every trade in the calendar month holding ``now``."""
        month = self._calendar.day_of(now)
        return sum(
            (
                point.profit
                for point in self._index.points
                if (point.day.year, point.day.month) == (month.year, month.month)
            ),
            ZERO,
        )

    @property
    def latest_total_balance(self) -> Decimal:
        """Return the balance after the most recent dated trade, or zero."""
        dated = [
            (self._calendar.localize(t.date), t) for t in self._trades if t.date is not None
        ]
        if not dated:
            return ZERO
        _, latest = max(dated, key=lambda pair: pair[0])
        return latest.balance_after
