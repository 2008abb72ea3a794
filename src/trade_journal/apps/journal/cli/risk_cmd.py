"""CLI commands for position sizing and the stored risk setting.

Every amount printed here comes from ``trade_journal.analytics.risk``;
the commands only validate input and format output. Risk percentages
typed on the command line are validated before they reach the
calculator, so an invalid value exits with an error instead of being
clamped.
"""

import asyncio
from decimal import Decimal
from typing import Annotated

import typer

from trade_journal.analytics.risk import (
    RiskSettingError,
    lot_size,
    parse_risk_percent,
    risk_targets,
)
from trade_journal.apps.journal.cli._helpers import fmt_money, open_repository, to_decimal
from trade_journal.core.config import get_config
from trade_journal.core.models import ZERO, RiskRate


def _rate_from_option(risk_percent: str | None, db_url: str | None) -> RiskRate:
    """Validate ``--risk-percent`` or fall back to the stored setting."""
    try:
        if risk_percent is not None:
            return parse_risk_percent(risk_percent)
        return parse_risk_percent(str(asyncio.run(_stored_percent(db_url))))
    except RiskSettingError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _stored_percent(db_url: str | None) -> Decimal:
    """Read the stored risk percent."""
    repo = await open_repository(db_url)
    try:
        return await repo.get_risk_percent()
    finally:
        await repo.close()


def risk(
    balance: Annotated[float, typer.Argument(help="Account balance")],
    risk_percent: Annotated[
        str | None, typer.Option(help="Risk percent (0-100]; default: stored setting")
    ] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Show the allowed loss (1R) and the 2R/3R targets for a balance."""
    amount = to_decimal(balance)
    if amount <= ZERO:
        typer.echo("Error: balance must be greater than 0.", err=True)
        raise typer.Exit(code=1)
    rate = _rate_from_option(risk_percent, db_url)

    targets = risk_targets(amount, rate, get_config().get_risk_multiples())
    typer.echo(f"\nBalance: {fmt_money(amount)}  Risk: {rate.percent}%")
    for multiple, target in targets.items():
        typer.echo(f"  {multiple}R: {fmt_money(target.value):>14}")


def lot(
    capital: Annotated[float, typer.Argument(help="Account capital")],
    stop_loss_pips: Annotated[float, typer.Argument(help="Stop-loss distance in pips")],
    risk_percent: Annotated[
        str | None, typer.Option(help="Risk percent (0-100]; default: stored setting")
    ] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Show the position size that risks exactly 1R at the stop-loss distance."""
    rate = _rate_from_option(risk_percent, db_url)
    size = lot_size(to_decimal(capital), rate, to_decimal(stop_loss_pips))
    typer.echo(f"Lot size: {size:.2f}")


def settings(
    risk_percent: Annotated[
        str | None, typer.Option(help="New risk percent to store (0-100]")
    ] = None,
    db_url: Annotated[str | None, typer.Option(help="SQLAlchemy async DB URL")] = None,
) -> None:
    """Show the stored risk percent, or store a new one."""
    if risk_percent is None:
        current = asyncio.run(_stored_percent(db_url))
        typer.echo(f"Risk percent: {current}% (fraction {current / Decimal(100):.4f})")
        return

    try:
        rate = parse_risk_percent(risk_percent)
    except RiskSettingError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    asyncio.run(_store_percent(rate, db_url))
    typer.echo(f"Risk percent set to {rate.percent}%")


async def _store_percent(rate: RiskRate, db_url: str | None) -> None:
    """Persist a validated risk rate."""
    repo = await open_repository(db_url)
    try:
        await repo.set_risk_percent(rate)
    finally:
        await repo.close()
