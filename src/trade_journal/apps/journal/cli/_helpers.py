"""Shared helpers for trade journal CLI commands.

Centralise the pieces reused across command modules: verbose logging
setup, calendar and repository construction from the YAML config,
option parsing for dates, ranges and trade IDs, and money formatting.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

import typer

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.config import build_calendar, get_config
from trade_journal.core.models import ProfitGraphRange
from trade_journal.core.timestamps import SystemClock, parse_date
from trade_journal.storage.repository import TradeRepository


def configure_verbose_logging() -> None:
    """Enable INFO-level logging for repository and rebuild output."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%H:%M:%S",
    )


def journal_calendar() -> JournalCalendar:
    """Return the calendar built from ``journal.timezone``."""
    return build_calendar(get_config())


async def open_repository(db_url: str | None) -> TradeRepository:
    """Create a repository for ``db_url`` (or the configured URL) and ensure its schema.

    Args:
        db_url: SQLAlchemy async URL from the command line, or ``None`` to
            use ``journal.db_url``.

    Returns:
        An initialised repository. The caller must ``close()`` it.

    """
    config = get_config()
    repo = TradeRepository(
        db_url or config.get_db_url(),
        default_risk_percent=config.get_default_risk_percent(),
    )
    await repo.init_db()
    return repo


def parse_date_option(value: str, calendar: JournalCalendar, param_hint: str) -> datetime:
    """Parse a date option, raising ``typer.BadParameter`` on bad input."""
    try:
        return parse_date(value, calendar)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc


def resolve_now(as_of: str | None, calendar: JournalCalendar) -> datetime:
    """Return the ``--as-of`` instant, or the current time when omitted."""
    if as_of is None:
        return SystemClock(calendar).now()
    return parse_date_option(as_of, calendar, "'--as-of'")


def resolve_range(raw: str | None) -> ProfitGraphRange:
    """Resolve the graph range from the CLI option or the YAML config default."""
    if raw is None:
        return get_config().get_default_range()
    try:
        return ProfitGraphRange(raw.upper())
    except ValueError as exc:
        names = ", ".join(r.value for r in ProfitGraphRange)
        raise typer.BadParameter(f"Must be one of: {names}", param_hint="'--range'") from exc


def parse_trade_id(value: str) -> UUID:
    """Parse a trade identifier argument."""
    try:
        return UUID(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Not a valid trade ID: {value!r}") from exc


def to_decimal(value: float) -> Decimal:
    """Convert a float CLI option to ``Decimal`` without binary noise."""
    return Decimal(str(value))


def fmt_money(value: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{value:,.2f}"
