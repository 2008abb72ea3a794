"""Core data models shared across the trade journal application.

Define the immutable value objects (Trade, DailyPoint, CumulativePoint,
DrawdownResult, GraphSelection) that flow from the persistence layer
through the analytics engine to the CLI and charts, plus the risk value
types consumed by the position-sizing calculator.

Every aggregate is rebuilt from scratch on each recomputation, so all
models here are frozen dataclasses.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

ZERO = Decimal(0)
HUNDRED = Decimal(100)


class ProfitGraphRange(Enum):
    """Selectable window for the cumulative profit graph."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ALL = "ALL"


@dataclass(frozen=True)
class Trade:
    """Immutable journal entry for a single completed trade.

    Store the currency pair, the account balance before and after the
    trade, the trade date, and an optional memo. ``profit`` is derived
    from the two balances on every access and is never stored, so it
    cannot drift from them.

    A ``date`` of ``None`` marks a malformed record. Such trades are kept
    in the journal but excluded from every aggregation.
    """

    pair: str
    balance_before: Decimal
    balance_after: Decimal
    date: datetime | None
    memo: str | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def profit(self) -> Decimal:
        """Return the balance change caused by this trade.

        Uses the same formula as ``analytics.risk.profit``. The model owns
        its copy because ``core`` must not import from ``analytics``, which
        already depends on these models.
        """
        return self.balance_after - self.balance_before

    def with_changes(self, **changes: Any) -> "Trade":
        """Return a copy of this trade with the given fields replaced.

        The identifier is preserved unless explicitly overridden, and the
        derived ``profit`` follows the new balances automatically.
        """
        return replace(self, **changes)


@dataclass(frozen=True)
class DailyPoint:
    """Net profit of every trade that falls on one calendar day."""

    day: date
    profit: Decimal


@dataclass(frozen=True)
class CumulativePoint:
    """Running profit total at the end of one calendar day.

    The running total starts from zero at the beginning of the active
    period, not from the all-time total.
    """

    day: date
    cumulative_profit: Decimal


@dataclass(frozen=True)
class DrawdownResult:
    """Worst peak-to-trough decline found in a cumulative profit series."""

    peak_day: date
    trough_day: date
    peak_value: Decimal
    trough_value: Decimal

    @property
    def drawdown(self) -> Decimal:
        """Return the decline from peak to trough (zero or negative)."""
        return self.trough_value - self.peak_value


@dataclass(frozen=True)
class GraphSelection:
    """Day picked on the profit graph with its daily and running profit."""

    day: date
    daily_profit: Decimal
    cumulative_profit: Decimal


@dataclass(frozen=True)
class DateInterval:
    """Half-open ``[start, end)`` span of time used to filter trades."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Return whether ``moment`` lies inside the interval."""
        return self.start <= moment < self.end


@dataclass(frozen=True)
class RiskRate:
    """Percentage of the account balance a trader is willing to lose.

    ``percent`` is expressed on a 0-100 scale (``5`` means 5%). Values
    outside ``0 < percent <= 100`` are rejected here, at construction,
    so the calculator functions never see them.
    """

    percent: Decimal

    def __post_init__(self) -> None:
        """Validate the percentage is within ``(0, 100]``."""
        if not (ZERO < self.percent <= HUNDRED):
            msg = f"risk percent must be greater than 0 and at most 100, got {self.percent}"
            raise ValueError(msg)

    @property
    def fraction(self) -> Decimal:
        """Return the rate as a decimal fraction (``5`` -> ``0.05``)."""
        return self.percent / HUNDRED


@dataclass(frozen=True)
class RiskAmount:
    """Allowed loss for a single trade (1R)."""

    value: Decimal


@dataclass(frozen=True)
class TargetAmount:
    """Profit target expressed as a multiple of 1R (2R, 3R, ...)."""

    value: Decimal
