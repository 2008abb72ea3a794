"""CLI command for bulk-importing trades from a CSV file."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from trade_journal.apps.journal.cli._helpers import journal_calendar, open_repository
from trade_journal.core.models import Trade
from trade_journal.storage.csv_import import CsvImportError, CsvTradeLoader


def import_csv(
    path: Annotated[Path, typer.Argument(help="CSV file with date,pair,balance_before,...")],
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Import trades from a CSV file."""
    if not path.exists():
        typer.echo(f"Error: file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        trades = CsvTradeLoader(path, journal_calendar()).load()
    except CsvImportError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    saved, total = asyncio.run(_save(trades, db_url=db_url))
    undated = sum(1 for t in trades if t.date is None)
    typer.echo(f"Imported {saved} trades from {path}")
    if undated:
        typer.echo(f"  {undated} without a date (excluded from reports)")
    typer.echo(f"Journal now holds {total} trades")


async def _save(trades: list[Trade], *, db_url: str | None) -> tuple[int, int]:
    """Batch-insert the imported trades and return (saved, total stored)."""
    repo = await open_repository(db_url)
    try:
        saved = await repo.add_trades(trades)
        return saved, await repo.get_trade_count()
    finally:
        await repo.close()
