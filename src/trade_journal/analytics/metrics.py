"""Performance metrics for evaluating journal trades.

Provide standalone functions that each compute a single metric from a
list of ``Trade`` objects. The ``calculate_metrics`` convenience function
runs all of them and returns a dictionary suitable for display, and
``monthly_summary`` breaks profit and win rate down per calendar month.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import ZERO, Trade


@dataclass(frozen=True)
class PeriodSummary:
    """Profit, trade count, and win rate for one calendar month."""

    period: str
    profit: Decimal
    trade_count: int
    win_rate: Decimal


def total_profit(trades: Sequence[Trade]) -> Decimal:
    """Return the sum of all trade profits."""
    return sum((t.profit for t in trades), ZERO)


def average_profit(trades: Sequence[Trade]) -> Decimal:
    """Return the mean profit per trade, or zero when there are no trades."""
    if not trades:
        return ZERO
    return total_profit(trades) / Decimal(len(trades))


def win_rate(trades: Sequence[Trade]) -> Decimal:
    """Return the fraction of trades with strictly positive profit (0.0 to 1.0)."""
    if not trades:
        return ZERO
    winners = sum(1 for t in trades if t.profit > ZERO)
    return Decimal(winners) / Decimal(len(trades))


def profit_factor(trades: Sequence[Trade]) -> Decimal:
    """Return gross profit divided by gross loss.

    A value above 1.0 means winning trades outweigh losers. Return
    ``Infinity`` when there are no losing trades, or zero when there
    are no winning trades either.
    """
    gross_profit = sum((t.profit for t in trades if t.profit > ZERO), ZERO)
    gross_loss = abs(sum((t.profit for t in trades if t.profit < ZERO), ZERO))
    if gross_loss == ZERO:
        return Decimal("Infinity") if gross_profit > ZERO else ZERO
    return gross_profit / gross_loss


def monthly_summary(trades: Sequence[Trade], calendar: JournalCalendar) -> list[PeriodSummary]:
    """Group dated trades by calendar month and summarise each month.

    Args:
        trades: Trades in any order. Undated trades are ignored.
        calendar: The process-wide journal calendar.

    Returns:
        One ``PeriodSummary`` per month with trades, oldest first. The
        ``period`` label is ``YYYY-MM``.

    """
    by_month: dict[tuple[int, int], list[Trade]] = defaultdict(list)
    for trade in trades:
        if trade.date is None:
            continue
        day = calendar.day_of(trade.date)
        by_month[(day.year, day.month)].append(trade)

    return [
        PeriodSummary(
            period=f"{year:04d}-{month:02d}",
            profit=total_profit(items),
            trade_count=len(items),
            win_rate=win_rate(items),
        )
        for (year, month), items in sorted(by_month.items())
    ]


def calculate_metrics(trades: Sequence[Trade]) -> dict[str, Decimal]:
    """Calculate all performance metrics and return them as a named dictionary."""
    return {
        "total_profit": total_profit(trades),
        "average_profit": average_profit(trades),
        "win_rate": win_rate(trades),
        "profit_factor": profit_factor(trades),
        "total_trades": Decimal(len(trades)),
    }
