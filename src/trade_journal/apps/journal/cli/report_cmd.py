"""CLI commands that report on the journal: calendar, profit graph, statistics.

Each command loads a fresh trade snapshot, rebuilds the analytics it
needs from scratch, and prints the result. A storage failure is reported
as an empty journal rather than aborting.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from trade_journal.analytics.graph import ProfitGraph
from trade_journal.analytics.journal import TradeJournal
from trade_journal.analytics.metrics import calculate_metrics, monthly_summary
from trade_journal.apps.journal.charts import create_cumulative_chart, save_charts, show_charts
from trade_journal.apps.journal.cli._helpers import (
    configure_verbose_logging,
    fmt_money,
    journal_calendar,
    open_repository,
    parse_date_option,
    resolve_now,
    resolve_range,
)
from trade_journal.core.models import Trade
from trade_journal.core.protocols import TradeSource
from trade_journal.core.timestamps import SystemClock

logger = logging.getLogger(__name__)

_WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_CELL_WIDTH = 14


async def read_trades(source: TradeSource) -> list[Trade]:
    """Return the full snapshot from any trade source."""
    trades = await source.load_snapshot()
    logger.info("Loaded %d trades", len(trades))
    return trades


async def load_trades(db_url: str | None) -> list[Trade]:
    """Load the full trade snapshot, empty if the query fails."""
    repo = await open_repository(db_url)
    try:
        return await read_trades(repo)
    finally:
        await repo.close()


def calendar(
    month: Annotated[
        str | None, typer.Option(help="Month to show as YYYY-MM (default: current month)")
    ] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Show a month grid of daily profit totals."""
    cal = journal_calendar()
    now = resolve_now(None, cal)
    if month is not None:
        now = parse_date_option(f"{month}-01", cal, "'--month'")

    journal = TradeJournal(cal)
    journal.refresh(asyncio.run(load_trades(db_url)))

    typer.echo(f"\n{now.year:04d}-{now.month:02d}")
    typer.echo("".join(f"{d:>{_CELL_WIDTH}}" for d in _WEEKDAYS))
    for week in cal.month_grid(now.year, now.month):
        days_row = "".join(
            f"{d.day:>{_CELL_WIDTH}}" if d is not None else " " * _CELL_WIDTH for d in week
        )
        profit_row = "".join(
            f"{fmt_money(journal.daily_total(d)):>{_CELL_WIDTH}}"
            if d is not None and d in journal.index
            else " " * _CELL_WIDTH
            for d in week
        )
        typer.echo(days_row)
        typer.echo(profit_row)
    typer.echo(f"\nMonthly total:  {fmt_money(journal.monthly_total(now))}")
    typer.echo(f"Latest balance: {fmt_money(journal.latest_total_balance)}")


def graph(  # noqa: PLR0913
    range_: Annotated[
        str | None, typer.Option("--range", help="Graph range: 1M, 3M, or ALL")
    ] = None,
    as_of: Annotated[
        str | None, typer.Option(help="End of the period, exclusive (default: now)")
    ] = None,
    select: Annotated[str | None, typer.Option(help="Show the point nearest this date")] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
    chart: Annotated[bool, typer.Option(help="Open an interactive chart")] = False,  # noqa: FBT002
    chart_output: Annotated[
        Path | None, typer.Option(help="Save the chart to an HTML file instead of the browser")
    ] = None,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable info logging")
    ] = False,
) -> None:
    """Show the cumulative profit series and maximum drawdown for a period."""
    if verbose:
        configure_verbose_logging()
    cal = journal_calendar()
    selected = resolve_range(range_)
    now = resolve_now(as_of, cal)

    profit_graph = ProfitGraph(cal, SystemClock(cal), selected)
    snapshot = profit_graph.reload(asyncio.run(load_trades(db_url)), now)

    typer.echo(f"\n{'=' * 50}")
    typer.echo(f"Range:  {selected.value}")
    if snapshot.is_empty or snapshot.interval is None or snapshot.x_domain is None:
        typer.echo("No trades in the selected period.")
        typer.echo(f"{'=' * 50}\n")
        return

    typer.echo(f"Period: {snapshot.interval.start:%Y-%m-%d} .. {snapshot.interval.end:%Y-%m-%d}")
    typer.echo(f"Axis:   {snapshot.x_domain[0]} .. {snapshot.x_domain[1]}")
    typer.echo(f"\n{'Date':<12} {'Daily':>14} {'Cumulative':>14}")
    for daily, running in zip(snapshot.daily_points, snapshot.cumulative_points, strict=True):
        typer.echo(
            f"{daily.day!s:<12} {fmt_money(daily.profit):>14} "
            f"{fmt_money(running.cumulative_profit):>14}"
        )

    dd = snapshot.max_drawdown
    if dd is None:
        typer.echo("\nMax drawdown: none")
    else:
        typer.echo(
            f"\nMax drawdown: {fmt_money(dd.drawdown)} "
            f"(peak {fmt_money(dd.peak_value)} on {dd.peak_day}, "
            f"trough {fmt_money(dd.trough_value)} on {dd.trough_day})"
        )

    if select is not None:
        picked = profit_graph.select_nearest(parse_date_option(select, cal, "'--select'"))
        if picked is not None:
            typer.echo(
                f"Selected:     {picked.day}  daily {fmt_money(picked.daily_profit)}  "
                f"cumulative {fmt_money(picked.cumulative_profit)}"
            )
    typer.echo(f"{'=' * 50}\n")

    if chart or chart_output is not None:
        fig = create_cumulative_chart(snapshot, profit_graph.selection)
        if chart_output is not None:
            save_charts([fig], chart_output)
            typer.echo(f"Chart saved to {chart_output}")
        else:
            show_charts([fig])


def stats(
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Show win rate, profit factor, and a month-by-month summary."""
    cal = journal_calendar()
    trades = [t for t in asyncio.run(load_trades(db_url)) if t.date is not None]

    metrics = calculate_metrics(trades)
    typer.echo(f"\n{'--- Metrics ---':^50}")
    typer.echo(f"  {'total_trades':20s}: {metrics['total_trades']}")
    typer.echo(f"  {'total_profit':20s}: {fmt_money(metrics['total_profit'])}")
    typer.echo(f"  {'average_profit':20s}: {fmt_money(metrics['average_profit'])}")
    typer.echo(f"  {'win_rate':20s}: {metrics['win_rate']:.2%}")
    typer.echo(f"  {'profit_factor':20s}: {metrics['profit_factor']:.4f}")

    summary = monthly_summary(trades, cal)
    if not summary:
        return
    typer.echo(f"\n{'Month':<8} {'Trades':>7} {'Profit':>14} {'Win rate':>9}")
    typer.echo("-" * 41)
    for row in summary:
        typer.echo(
            f"{row.period:<8} {row.trade_count:>7} {fmt_money(row.profit):>14} "
            f"{row.win_rate:>9.2%}"
        )
