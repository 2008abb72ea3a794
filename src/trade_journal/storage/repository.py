"""Async repository for persisting and querying journal trades.

Wrap SQLAlchemy async engine and session management for the journal.
Support trade CRUD, an earliest-date lookup for the "all" graph range,
and the stored risk setting. The repository is database-agnostic: swap
from SQLite to PostgreSQL by changing the connection string.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from trade_journal.core.models import RiskRate, Trade
from trade_journal.core.timestamps import from_epoch_ms
from trade_journal.storage.models import SETTINGS_ROW_ID, Base, SettingsRecord, TradeRecord

logger = logging.getLogger(__name__)

_DEFAULT_RISK_PERCENT = Decimal(5)


class TradeNotFoundError(LookupError):
    """Raise when an update or delete targets a trade that does not exist."""

    def __init__(self, trade_id: UUID) -> None:
        """Initialize the error.

        Args:
            trade_id: Identifier that was not found.

        """
        self.trade_id = trade_id
        super().__init__(f"Trade not found: {trade_id}")


class TradeRepository:
    """Async repository for journal trade persistence and retrieval.

    Manage an async SQLAlchemy engine and session factory. Provide methods for
    creating the schema, adding, updating, and deleting trades, listing them,
    and reading or writing the stored risk percentage.

    Args:
        db_url: SQLAlchemy async connection string
            (e.g. ``sqlite+aiosqlite:///trade_journal.db``).
        default_risk_percent: Risk percent stored the first time the
            settings row is read.

    """

    def __init__(self, db_url: str, default_risk_percent: Decimal = _DEFAULT_RISK_PERCENT) -> None:
        """Initialize the repository with an async database engine.

        Args:
            db_url: SQLAlchemy async connection string.
            default_risk_percent: Initial stored risk percent.

        """
        self._engine: AsyncEngine = create_async_engine(db_url, echo=False)
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        self._default_risk_percent = default_risk_percent

    async def init_db(self) -> None:
        """Create all tables if they do not already exist.

        Idempotent, safe to call on every startup.
        """
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialised")

    async def add_trade(self, trade: Trade) -> Trade:
        """Persist a new trade and return it."""
        async with self._session_factory() as session, session.begin():
            session.add(TradeRecord.from_trade(trade))
        logger.debug("Added trade %s", trade.id)
        return trade

    async def add_trades(self, trades: list[Trade]) -> int:
        """Batch-insert trades and return how many were saved."""
        if not trades:
            return 0
        async with self._session_factory() as session, session.begin():
            session.add_all([TradeRecord.from_trade(t) for t in trades])
        logger.debug("Added %d trades", len(trades))
        return len(trades)

    async def get_trade(self, trade_id: UUID) -> Trade | None:
        """Return the trade with the given identifier, or ``None``."""
        async with self._session_factory() as session:
            record = await session.get(TradeRecord, str(trade_id))
            return record.to_trade() if record is not None else None

    async def update_trade(self, trade: Trade) -> Trade:
        """Overwrite the stored trade with the same identifier.

        Raises:
            TradeNotFoundError: If no trade with ``trade.id`` exists.

        """
        async with self._session_factory() as session, session.begin():
            record = await session.get(TradeRecord, str(trade.id))
            if record is None:
                raise TradeNotFoundError(trade.id)
            record.apply(trade)
        logger.debug("Updated trade %s", trade.id)
        return trade

    async def delete_trade(self, trade_id: UUID) -> None:
        """Delete the trade with the given identifier.

        Raises:
            TradeNotFoundError: If no such trade exists.

        """
        async with self._session_factory() as session, session.begin():
            record = await session.get(TradeRecord, str(trade_id))
            if record is None:
                raise TradeNotFoundError(trade_id)
            await session.delete(record)
        logger.debug("Deleted trade %s", trade_id)

    async def list_trades(self) -> list[Trade]:
        """Return every trade ordered by date ascending, undated trades last."""
        stmt = select(TradeRecord).order_by(TradeRecord.date_ms.is_(None), TradeRecord.date_ms)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [r.to_trade() for r in result.scalars().all()]

    async def load_snapshot(self) -> list[Trade]:
        """Return every trade, or an empty list if the query fails.

        A failed query is logged and treated as an empty journal for this
        cycle so callers rebuild an empty view instead of keeping stale data.
        """
        try:
            return await self.list_trades()
        except SQLAlchemyError:
            logger.warning("Failed to load trades; treating journal as empty", exc_info=True)
            return []

    async def get_earliest_trade_date(self) -> datetime | None:
        """Return the earliest stored trade date, or ``None`` if no trade has one."""
        stmt = select(func.min(TradeRecord.date_ms))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            value = result.scalar_one_or_none()
        return from_epoch_ms(value) if value is not None else None

    async def get_trade_count(self) -> int:
        """Return the total number of stored trades."""
        stmt = select(func.count()).select_from(TradeRecord)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def get_risk_percent(self) -> Decimal:
        """Return the stored risk percent, creating the default row on first use."""
        async with self._session_factory() as session, session.begin():
            record = await session.get(SettingsRecord, SETTINGS_ROW_ID)
            if record is None:
                record = SettingsRecord(
                    id=SETTINGS_ROW_ID, risk_percent=float(self._default_risk_percent)
                )
                session.add(record)
                logger.info("Created default settings (risk %s%%)", self._default_risk_percent)
            return Decimal(str(record.risk_percent))

    async def set_risk_percent(self, rate: RiskRate) -> None:
        """Store a validated risk rate."""
        async with self._session_factory() as session, session.begin():
            record = await session.get(SettingsRecord, SETTINGS_ROW_ID)
            if record is None:
                session.add(SettingsRecord(id=SETTINGS_ROW_ID, risk_percent=float(rate.percent)))
            else:
                record.risk_percent = float(rate.percent)
        logger.info("Risk percent set to %s", rate.percent)

    async def close(self) -> None:
        """Dispose the async engine and release all connections."""
        await self._engine.dispose()
        logger.info("Database engine disposed")
