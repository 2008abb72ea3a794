"""Tests for the async trade repository."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from trade_journal.core.models import RiskRate, Trade
from trade_journal.core.protocols import TradeSource
from trade_journal.storage.repository import TradeNotFoundError, TradeRepository

_MEMORY_URL = "sqlite+aiosqlite:///:memory:"
_MARCH_4 = datetime(2024, 3, 4, 9, 30, 15, 250_000, tzinfo=UTC)
_MARCH_1 = datetime(2024, 3, 1, 8, tzinfo=UTC)
_BATCH_COUNT = 3


def _make_trade(
    when: datetime | None = _MARCH_4,
    before: str = "10000.50",
    after: str = "10250.75",
    memo: str | None = None,
) -> Trade:
    """Create a Trade for testing.

    Args:
        when: Trade date, or ``None`` for an undated trade.
        before: Balance before the trade.
        after: Balance after the trade.
        memo: Optional note.

    Returns:
        A new Trade instance.

    """
    return Trade(
        pair="USD/JPY",
        balance_before=Decimal(before),
        balance_after=Decimal(after),
        date=when,
        memo=memo,
    )


@pytest_asyncio.fixture
async def repo() -> TradeRepository:
    """Create an in-memory SQLite repository for testing.

    Returns:
        Initialised TradeRepository with an in-memory database.

    """
    repository = TradeRepository(_MEMORY_URL)
    await repository.init_db()
    return repository


class TestTradeCrud:
    """Tests for adding, reading, updating, and deleting trades."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, repo: TradeRepository) -> None:
        """A stored trade reads back with the same fields."""
        trade = _make_trade(memo="breakout")
        await repo.add_trade(trade)

        stored = await repo.get_trade(trade.id)
        assert stored == trade
        assert stored is not None
        assert stored.profit == Decimal("250.25")
        await repo.close()

    @pytest.mark.asyncio
    async def test_date_round_trips_as_same_instant(self, repo: TradeRepository) -> None:
        """Dates in another zone come back as the same instant in UTC."""
        tokyo = datetime.fromisoformat("2024-03-04T18:30:00+09:00")
        trade = _make_trade(when=tokyo)
        await repo.add_trade(trade)

        stored = await repo.get_trade(trade.id)
        assert stored is not None
        assert stored.date == tokyo
        await repo.close()

    @pytest.mark.asyncio
    async def test_get_missing(self, repo: TradeRepository) -> None:
        """An unknown ID returns None."""
        assert await repo.get_trade(uuid4()) is None
        await repo.close()

    @pytest.mark.asyncio
    async def test_update(self, repo: TradeRepository) -> None:
        """update_trade overwrites every field and keeps the ID."""
        trade = _make_trade()
        await repo.add_trade(trade)

        edited = trade.with_changes(balance_after=Decimal(9900), memo="stopped out")
        await repo.update_trade(edited)

        stored = await repo.get_trade(trade.id)
        assert stored is not None
        assert stored.profit == Decimal("-100.50")
        assert stored.memo == "stopped out"
        await repo.close()

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, repo: TradeRepository) -> None:
        """Updating an unknown trade raises TradeNotFoundError."""
        with pytest.raises(TradeNotFoundError, match="Trade not found"):
            await repo.update_trade(_make_trade())
        await repo.close()

    @pytest.mark.asyncio
    async def test_delete(self, repo: TradeRepository) -> None:
        """A deleted trade is gone."""
        trade = _make_trade()
        await repo.add_trade(trade)
        await repo.delete_trade(trade.id)

        assert await repo.get_trade(trade.id) is None
        assert await repo.get_trade_count() == 0
        await repo.close()

    @pytest.mark.asyncio
    async def test_delete_missing_raises(self, repo: TradeRepository) -> None:
        """Deleting an unknown trade raises with the missing ID."""
        missing = uuid4()
        with pytest.raises(TradeNotFoundError) as exc_info:
            await repo.delete_trade(missing)
        assert exc_info.value.trade_id == missing
        await repo.close()


class TestTradeQueries:
    """Tests for listing and snapshot queries."""

    @pytest.mark.asyncio
    async def test_add_trades_batch(self, repo: TradeRepository) -> None:
        """add_trades stores every trade and reports the count."""
        saved = await repo.add_trades([_make_trade() for _ in range(_BATCH_COUNT)])
        assert saved == _BATCH_COUNT
        assert await repo.get_trade_count() == _BATCH_COUNT
        await repo.close()

    @pytest.mark.asyncio
    async def test_add_trades_empty(self, repo: TradeRepository) -> None:
        """An empty batch stores nothing."""
        assert await repo.add_trades([]) == 0
        await repo.close()

    @pytest.mark.asyncio
    async def test_list_orders_by_date_undated_last(self, repo: TradeRepository) -> None:
        """Trades are listed oldest first with undated trades at the end."""
        undated = _make_trade(when=None)
        later = _make_trade(when=_MARCH_4)
        earlier = _make_trade(when=_MARCH_1)
        await repo.add_trades([undated, later, earlier])

        listed = await repo.list_trades()
        assert [t.id for t in listed] == [earlier.id, later.id, undated.id]
        await repo.close()

    @pytest.mark.asyncio
    async def test_earliest_trade_date(self, repo: TradeRepository) -> None:
        """The earliest lookup ignores undated trades."""
        assert await repo.get_earliest_trade_date() is None
        await repo.add_trades([_make_trade(when=None), _make_trade(), _make_trade(when=_MARCH_1)])
        assert await repo.get_earliest_trade_date() == _MARCH_1
        await repo.close()

    @pytest.mark.asyncio
    async def test_load_snapshot(self, repo: TradeRepository) -> None:
        """load_snapshot returns every stored trade."""
        await repo.add_trades([_make_trade(), _make_trade(when=None)])
        snapshot = await repo.load_snapshot()
        assert len(snapshot) == 2
        await repo.close()

    @pytest.mark.asyncio
    async def test_load_snapshot_failure_is_empty(self) -> None:
        """A query failure yields an empty snapshot instead of raising."""
        repository = TradeRepository(_MEMORY_URL)
        # Tables were never created, so the SELECT fails
        assert await repository.load_snapshot() == []
        await repository.close()

    def test_satisfies_trade_source(self) -> None:
        """The repository structurally satisfies TradeSource."""
        assert isinstance(TradeRepository(_MEMORY_URL), TradeSource)


class TestRiskSetting:
    """Tests for the stored risk percent."""

    @pytest.mark.asyncio
    async def test_default_created_on_first_read(self) -> None:
        """The configured default is returned for a new journal."""
        repository = TradeRepository(_MEMORY_URL, default_risk_percent=Decimal(2))
        await repository.init_db()
        assert await repository.get_risk_percent() == Decimal(2)
        await repository.close()

    @pytest.mark.asyncio
    async def test_set_and_get(self, repo: TradeRepository) -> None:
        """A stored rate replaces the previous value."""
        await repo.set_risk_percent(RiskRate(Decimal("1.5")))
        assert await repo.get_risk_percent() == Decimal("1.5")
        await repo.set_risk_percent(RiskRate(Decimal(3)))
        assert await repo.get_risk_percent() == Decimal(3)
        await repo.close()
