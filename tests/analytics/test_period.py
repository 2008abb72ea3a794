"""Tests for resolving graph ranges into date intervals."""

from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from trade_journal.analytics.period import earliest_trade_date, filter_trades, make_interval
from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import DateInterval, ProfitGraphRange, Trade

_NOW = datetime(2024, 5, 20, 12, tzinfo=UTC)
_BASE = Decimal(1000)


def _trade(when: datetime | None) -> Trade:
    return Trade(pair="EUR/USD", balance_before=_BASE, balance_after=_BASE + 10, date=when)


class TestMakeInterval:
    """Tests for make_interval."""

    def test_one_month_starts_on_first(self, utc_calendar: JournalCalendar) -> None:
        """One month runs from the first of the current month to now."""
        interval = make_interval(ProfitGraphRange.ONE_MONTH, _NOW, utc_calendar)
        assert interval == DateInterval(start=datetime(2024, 5, 1, tzinfo=UTC), end=_NOW)

    def test_three_months_includes_current_month(self, utc_calendar: JournalCalendar) -> None:
        """Three months starts on the first of the month two months back."""
        interval = make_interval(ProfitGraphRange.THREE_MONTHS, _NOW, utc_calendar)
        assert interval is not None
        assert interval.start == datetime(2024, 3, 1, tzinfo=UTC)

    def test_three_months_across_year_boundary(self, utc_calendar: JournalCalendar) -> None:
        """In January, three months starts in November of the prior year."""
        now = datetime(2024, 1, 10, tzinfo=UTC)
        interval = make_interval(ProfitGraphRange.THREE_MONTHS, now, utc_calendar)
        assert interval is not None
        assert interval.start == datetime(2023, 11, 1, tzinfo=UTC)

    def test_all_without_trades_is_absent(self, utc_calendar: JournalCalendar) -> None:
        """ALL with no trades yields no interval."""
        assert make_interval(ProfitGraphRange.ALL, _NOW, utc_calendar, None) is None

    def test_all_starts_at_month_of_earliest_trade(self, utc_calendar: JournalCalendar) -> None:
        """ALL starts on the first of the month holding the earliest trade."""
        earliest = datetime(2024, 3, 15, 9, tzinfo=UTC)
        interval = make_interval(ProfitGraphRange.ALL, _NOW, utc_calendar, earliest)
        assert interval == DateInterval(start=datetime(2024, 3, 1, tzinfo=UTC), end=_NOW)

    def test_month_start_uses_calendar_zone(self) -> None:
        """The month boundary is local midnight in the configured zone."""
        tokyo = ZoneInfo("Asia/Tokyo")
        # 2024-05-31 20:00 UTC is already June 1 in Tokyo
        now = datetime(2024, 5, 31, 20, tzinfo=UTC)
        interval = make_interval(ProfitGraphRange.ONE_MONTH, now, JournalCalendar("Asia/Tokyo"))
        assert interval is not None
        assert interval.start == datetime(2024, 6, 1, tzinfo=tokyo)


class TestEarliestAndFilter:
    """Tests for earliest_trade_date and filter_trades."""

    def test_earliest_ignores_undated(self, utc_calendar: JournalCalendar) -> None:
        """Undated trades do not count toward the earliest date."""
        early = datetime(2024, 3, 15, tzinfo=UTC)
        trades = [_trade(None), _trade(datetime(2024, 4, 1, tzinfo=UTC)), _trade(early)]
        assert earliest_trade_date(trades, utc_calendar) == early

    def test_earliest_of_nothing(self, utc_calendar: JournalCalendar) -> None:
        """No dated trades gives None."""
        assert earliest_trade_date([_trade(None)], utc_calendar) is None

    def test_earliest_mixes_naive_and_aware(self) -> None:
        """Naive dates are local wall-clock time and compare with aware ones."""
        tokyo = JournalCalendar("Asia/Tokyo")
        # 2024-03-15 08:00 in Tokyo is 2024-03-14 23:00 UTC
        naive = datetime(2024, 3, 15, 8)  # noqa: DTZ001
        aware = datetime(2024, 3, 15, tzinfo=UTC)
        earliest = earliest_trade_date([_trade(aware), _trade(naive)], tokyo)
        assert earliest == datetime(2024, 3, 15, 8, tzinfo=ZoneInfo("Asia/Tokyo"))

    def test_filter_is_half_open(self, utc_calendar: JournalCalendar) -> None:
        """Trades at the start are kept and trades at the end are dropped."""
        start = datetime(2024, 5, 1, tzinfo=UTC)
        interval = DateInterval(start=start, end=_NOW)
        at_start, before, at_end, undated = (
            _trade(start),
            _trade(datetime(2024, 4, 30, 23, 59, tzinfo=UTC)),
            _trade(_NOW),
            _trade(None),
        )
        kept = filter_trades([at_start, before, at_end, undated], interval, utc_calendar)
        assert kept == [at_start]

    def test_filter_accepts_naive_dates(self, utc_calendar: JournalCalendar) -> None:
        """Naive trade dates are checked against the interval as local time."""
        interval = DateInterval(start=datetime(2024, 5, 1, tzinfo=UTC), end=_NOW)
        inside = _trade(datetime(2024, 5, 2, 9))  # noqa: DTZ001
        outside = _trade(datetime(2024, 4, 30, 9))  # noqa: DTZ001
        assert filter_trades([inside, outside], interval, utc_calendar) == [inside]

    def test_filter_without_interval(self, utc_calendar: JournalCalendar) -> None:
        """A missing interval keeps nothing."""
        assert filter_trades([_trade(_NOW)], None, utc_calendar) == []


class TestNaiveNow:
    """Tests for a naive reference instant."""

    def test_naive_now_is_local(self, utc_calendar: JournalCalendar) -> None:
        """A naive now becomes an aware end in the calendar zone."""
        now = datetime(2024, 5, 20, 12)  # noqa: DTZ001
        interval = make_interval(ProfitGraphRange.ONE_MONTH, now, utc_calendar)
        assert interval == DateInterval(start=datetime(2024, 5, 1, tzinfo=UTC), end=_NOW)
