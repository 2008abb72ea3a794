"""SQLAlchemy ORM models for the trade journal database.

Define the ``trades`` table holding journal entries and the single-row
``settings`` table holding the stored risk percentage. Dates are stored
as epoch milliseconds so the database never has to understand time
zones; the journal calendar applies the configured zone on read.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import BigInteger, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from trade_journal.core.models import Trade
from trade_journal.core.timestamps import from_epoch_ms, to_epoch_ms

SETTINGS_ROW_ID = 1


class Base(DeclarativeBase):
    """Declarative base class for all trade journal ORM models."""


class TradeRecord(Base):
    """A single persisted journal entry.

    ``profit`` is intentionally not a column: it is derived from the two
    balances by the ``Trade`` value object.

    Attributes:
        id: UUID string primary key.
        date_ms: Trade date as epoch milliseconds, ``None`` for records
            without a date (indexed).
        pair: Free-text currency pair label.
        balance_before: Account balance before the trade.
        balance_after: Account balance after the trade.
        memo: Optional free-text note.

    """

    __tablename__ = "trades"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    date_ms: Mapped[int | None] = mapped_column(BigInteger, index=True, nullable=True)
    pair: Mapped[str] = mapped_column(String)
    balance_before: Mapped[float] = mapped_column(Float)
    balance_after: Mapped[float] = mapped_column(Float)
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeRecord":
        """Build a record from a ``Trade`` value."""
        record = cls(id=str(trade.id))
        record.apply(trade)
        return record

    def apply(self, trade: Trade) -> None:
        """Copy every field of ``trade`` except its identifier onto this record."""
        self.date_ms = to_epoch_ms(trade.date) if trade.date is not None else None
        self.pair = trade.pair
        self.balance_before = float(trade.balance_before)
        self.balance_after = float(trade.balance_after)
        self.memo = trade.memo

    def to_trade(self) -> Trade:
        """Convert this record into an immutable ``Trade``."""
        return Trade(
            id=UUID(self.id),
            pair=self.pair,
            balance_before=Decimal(str(self.balance_before)),
            balance_after=Decimal(str(self.balance_after)),
            date=from_epoch_ms(self.date_ms) if self.date_ms is not None else None,
            memo=self.memo,
        )


class SettingsRecord(Base):
    """Single-row table of user settings.

    Attributes:
        id: Always ``SETTINGS_ROW_ID``.
        risk_percent: Stored risk percentage on a 0-100 scale.

    """

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    risk_percent: Mapped[float] = mapped_column(Float)
