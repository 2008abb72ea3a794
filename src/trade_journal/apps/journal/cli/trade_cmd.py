"""CLI commands for recording, editing, deleting, and listing trades."""

import asyncio
from typing import Annotated
from uuid import UUID

import typer

from trade_journal.apps.journal.cli._helpers import (
    configure_verbose_logging,
    fmt_money,
    journal_calendar,
    open_repository,
    parse_date_option,
    parse_trade_id,
    to_decimal,
)
from trade_journal.core.models import Trade
from trade_journal.storage.repository import TradeNotFoundError

_MAX_MEMO_LEN = 30


def add(
    pair: Annotated[str, typer.Option(help="Currency pair, e.g. USD/JPY")],
    before: Annotated[float, typer.Option(help="Account balance before the trade")],
    after: Annotated[float, typer.Option(help="Account balance after the trade")],
    date: Annotated[str, typer.Option(help="Trade date (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)")],
    memo: Annotated[str | None, typer.Option(help="Optional note")] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable info logging")
    ] = False,
) -> None:
    """Record a new trade."""
    if verbose:
        configure_verbose_logging()
    calendar = journal_calendar()
    trade = Trade(
        pair=pair,
        balance_before=to_decimal(before),
        balance_after=to_decimal(after),
        date=parse_date_option(date, calendar, "'--date'"),
        memo=memo,
    )
    asyncio.run(_add(trade, db_url=db_url))
    typer.echo(f"Added trade {trade.id} ({trade.pair}, profit {fmt_money(trade.profit)})")


async def _add(trade: Trade, *, db_url: str | None) -> None:
    """Persist a trade."""
    repo = await open_repository(db_url)
    try:
        await repo.add_trade(trade)
    finally:
        await repo.close()


def edit(  # noqa: PLR0913
    trade_id: Annotated[str, typer.Argument(help="ID of the trade to edit")],
    pair: Annotated[str | None, typer.Option(help="New currency pair")] = None,
    before: Annotated[float | None, typer.Option(help="New balance before")] = None,
    after: Annotated[float | None, typer.Option(help="New balance after")] = None,
    date: Annotated[str | None, typer.Option(help="New trade date")] = None,
    memo: Annotated[str | None, typer.Option(help="New note")] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Change fields of an existing trade. Profit is recomputed from the balances."""
    calendar = journal_calendar()
    changes: dict[str, object] = {}
    if pair is not None:
        changes["pair"] = pair
    if before is not None:
        changes["balance_before"] = to_decimal(before)
    if after is not None:
        changes["balance_after"] = to_decimal(after)
    if date is not None:
        changes["date"] = parse_date_option(date, calendar, "'--date'")
    if memo is not None:
        changes["memo"] = memo or None
    if not changes:
        typer.echo("Error: nothing to change.", err=True)
        raise typer.Exit(code=1)

    updated = asyncio.run(_edit(parse_trade_id(trade_id), changes, db_url=db_url))
    if updated is None:
        typer.echo(f"Error: trade {trade_id} not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Updated trade {updated.id} (profit {fmt_money(updated.profit)})")


async def _edit(
    trade_id: UUID, changes: dict[str, object], *, db_url: str | None
) -> Trade | None:
    """Apply ``changes`` to the stored trade and return the result, or ``None`` if missing."""
    repo = await open_repository(db_url)
    try:
        current = await repo.get_trade(trade_id)
        if current is None:
            return None
        return await repo.update_trade(current.with_changes(**changes))
    finally:
        await repo.close()


def delete(
    trade_id: Annotated[str, typer.Argument(help="ID of the trade to delete")],
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Delete a trade."""
    uid = parse_trade_id(trade_id)
    try:
        asyncio.run(_delete(uid, db_url=db_url))
    except TradeNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Deleted trade {uid}")


async def _delete(trade_id: UUID, *, db_url: str | None) -> None:
    """Remove a trade from the repository."""
    repo = await open_repository(db_url)
    try:
        await repo.delete_trade(trade_id)
    finally:
        await repo.close()


def list_trades(
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """List every trade, oldest first."""
    trades = asyncio.run(_list(db_url=db_url))
    if not trades:
        typer.echo("No trades recorded.")
        return

    calendar = journal_calendar()
    typer.echo(
        f"\n{'ID':<36} {'Date':<16} {'Pair':<10} {'Before':>14} {'After':>14} {'Profit':>12}  Memo"
    )
    typer.echo("-" * 120)
    for t in trades:
        when = calendar.localize(t.date).strftime("%Y-%m-%d %H:%M") if t.date else "(no date)"
        memo = (t.memo or "")[:_MAX_MEMO_LEN]
        typer.echo(
            f"{t.id!s:<36} {when:<16} {t.pair:<10} {fmt_money(t.balance_before):>14} "
            f"{fmt_money(t.balance_after):>14} {fmt_money(t.profit):>12}  {memo}"
        )


async def _list(*, db_url: str | None) -> list[Trade]:
    """Fetch every stored trade."""
    repo = await open_repository(db_url)
    try:
        return await repo.list_trades()
    finally:
        await repo.close()
