"""Structural protocols for the journal's pluggable collaborators.

Define the ``Clock`` and ``TradeSource`` interfaces that decouple the
analytics services from the system time and from concrete storage. Any
class whose shape matches these protocols can be used without explicit
inheritance (structural subtyping), which lets tests inject a fixed
clock or an in-memory source.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from trade_journal.core.models import Trade


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant used as the end of every period."""

    def now(self) -> datetime:
        """Return the current time as an aware datetime."""
        ...


@runtime_checkable
class TradeSource(Protocol):
    """Async provider of the full, unfiltered trade collection.

    Implementors return every stored trade in any order. On failure they
    return an empty list so a refresh never keeps stale aggregates.
    """

    async def load_snapshot(self) -> list[Trade]:
        """Return all trades, or an empty list if loading failed."""
        ...
