"""Group trades by calendar day into a profit index.

The index is rebuilt from the full trade collection after every add,
update, delete, or fetch; it is never patched incrementally. Building it
is O(n) and every later per-day lookup is O(1), which is why the
calendar grid reads from a cached ``DailyIndex`` instead of rescanning
the trade list for each cell.
"""

from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import ZERO, DailyPoint, Trade


class DailyIndex:
    """Immutable day -> net profit index built from one trade snapshot.

    Hold the per-day profit totals, the same totals as a date-ascending
    tuple of ``DailyPoint``, and the trades that fell on each day.
    Instances are never mutated after construction; a rebuild produces a
    new index.
    """

    def __init__(
        self,
        totals: dict[date, Decimal],
        trades_by_day: dict[date, tuple[Trade, ...]],
    ) -> None:
        """Initialize the index from pre-grouped data.

        Args:
            totals: Net profit per day.
            trades_by_day: Trades per day, in input order.

        """
        ordered = sorted(totals)
        self._totals = MappingProxyType({day: totals[day] for day in ordered})
        self._trades = MappingProxyType(dict(trades_by_day))
        self._points = tuple(DailyPoint(day=day, profit=totals[day]) for day in ordered)

    @property
    def totals(self) -> MappingProxyType[date, Decimal]:
        """Return the read-only day -> profit mapping, in ascending day order."""
        return self._totals

    @property
    def points(self) -> tuple[DailyPoint, ...]:
        """Return the daily totals as date-ascending points."""
        return self._points

    @property
    def total(self) -> Decimal:
        """Return the sum of every daily total."""
        return sum(self._totals.values(), ZERO)

    def profit_on(self, day: date) -> Decimal:
        """Return the net profit on ``day`` (zero when no trade fell on it)."""
        return self._totals.get(day, ZERO)

    def trades_on(self, day: date) -> tuple[Trade, ...]:
        """Return the dated trades that fell on ``day``."""
        return self._trades.get(day, ())

    def __contains__(self, day: object) -> bool:
        """Return whether any trade fell on ``day``."""
        return day in self._totals

    def __len__(self) -> int:
        """Return the number of days with at least one trade."""
        return len(self._points)

    def __iter__(self) -> Iterator[DailyPoint]:
        """Iterate over the daily points in ascending day order."""
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        """Compare two indexes by their daily points."""
        if not isinstance(other, DailyIndex):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        """Hash the daily points."""
        return hash(self._points)

    def __repr__(self) -> str:
        """Return a short summary for debugging."""
        return f"DailyIndex(days={len(self._points)}, total={self.total})"


EMPTY_INDEX = DailyIndex({}, {})


def build_daily_index(trades: Iterable[Trade], calendar: JournalCalendar) -> DailyIndex:
    """Group dated trades by calendar day and sum their profit.

    Trades without a date are skipped. Every date is truncated with the
    same ``calendar`` so a trade always lands on the same day no matter
    which view asks.

    Args:
        trades: Trades in any order.
        calendar: The process-wide journal calendar.

    Returns:
        A new ``DailyIndex``.

    """
    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    grouped: dict[date, list[Trade]] = defaultdict(list)
    for trade in trades:
        if trade.date is None:
            continue
        day = calendar.day_of(trade.date)
        totals[day] += trade.profit
        grouped[day].append(trade)
    return DailyIndex(
        dict(totals),
        {day: tuple(items) for day, items in grouped.items()},
    )
