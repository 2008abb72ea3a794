"""Tests for the calendar-side journal view."""

from datetime import UTC, date, datetime
from decimal import Decimal

from trade_journal.analytics.journal import TradeJournal
from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import Trade


def _trade(when: datetime | None, before: int, after: int) -> Trade:
    return Trade(
        pair="AUD/USD",
        balance_before=Decimal(before),
        balance_after=Decimal(after),
        date=when,
    )


_MARCH_4 = datetime(2024, 3, 4, 9, tzinfo=UTC)
_MARCH_20 = datetime(2024, 3, 20, 9, tzinfo=UTC)
_APRIL_2 = datetime(2024, 4, 2, 9, tzinfo=UTC)


class TestTradeJournal:
    """Tests for TradeJournal."""

    def test_refresh_builds_index(self, utc_calendar: JournalCalendar) -> None:
        """refresh groups trades into daily totals."""
        journal = TradeJournal(utc_calendar)
        journal.refresh([_trade(_MARCH_4, 1000, 1100), _trade(_MARCH_4, 1100, 1070)])
        assert journal.daily_total(date(2024, 3, 4)) == Decimal(70)
        assert len(journal.trades_on(date(2024, 3, 4))) == 2

    def test_monthly_total(self, utc_calendar: JournalCalendar) -> None:
        """monthly_total sums only the month holding now."""
        journal = TradeJournal(utc_calendar)
        journal.refresh(
            [
                _trade(_MARCH_4, 1000, 1100),
                _trade(_MARCH_20, 1100, 1050),
                _trade(_APRIL_2, 1050, 1500),
            ]
        )
        assert journal.monthly_total(datetime(2024, 3, 31, tzinfo=UTC)) == Decimal(50)
        assert journal.monthly_total(datetime(2024, 5, 1, tzinfo=UTC)) == 0

    def test_latest_total_balance(self, utc_calendar: JournalCalendar) -> None:
        """The latest balance comes from the most recent dated trade."""
        journal = TradeJournal(utc_calendar)
        journal.refresh(
            [
                _trade(_APRIL_2, 1050, 1500),
                _trade(_MARCH_4, 1000, 1100),
                _trade(None, 0, 99999),
            ]
        )
        assert journal.latest_total_balance == Decimal(1500)

    def test_failed_load_empties_view(self, utc_calendar: JournalCalendar) -> None:
        """refresh(None) discards the previous snapshot and index."""
        journal = TradeJournal(utc_calendar)
        journal.refresh([_trade(_MARCH_4, 1000, 1100)])
        index = journal.refresh(None)
        assert len(index) == 0
        assert journal.trades == ()
        assert journal.latest_total_balance == 0
        assert journal.daily_total(date(2024, 3, 4)) == 0

    def test_refresh_after_edit(self, utc_calendar: JournalCalendar) -> None:
        """An edited trade is reflected after the next refresh."""
        journal = TradeJournal(utc_calendar)
        original = _trade(_MARCH_4, 1000, 1100)
        journal.refresh([original])
        edited = original.with_changes(balance_after=Decimal(900))
        journal.refresh([edited])
        assert journal.daily_total(date(2024, 3, 4)) == Decimal(-100)

    def test_latest_balance_with_naive_and_aware_dates(self) -> None:
        """Naive dates are local wall-clock time when finding the latest trade."""
        journal = TradeJournal(JournalCalendar("Asia/Tokyo"))
        # 2024-03-04 20:00 in Tokyo is 11:00 UTC, after the aware 09:00 UTC trade
        naive = _trade(datetime(2024, 3, 4, 20), 1100, 1234)  # noqa: DTZ001
        journal.refresh([naive, _trade(_MARCH_4, 1000, 1100)])
        assert journal.latest_total_balance == Decimal(1234)
        assert journal.daily_total(date(2024, 3, 4)) == Decimal(234)
