"""CLI subpackage for the trade journal app.

Create the Typer application and register all command modules.
"""

import typer

from trade_journal.apps.journal.cli.import_cmd import import_csv
from trade_journal.apps.journal.cli.report_cmd import calendar, graph, stats
from trade_journal.apps.journal.cli.risk_cmd import lot, risk, settings
from trade_journal.apps.journal.cli.trade_cmd import add, delete, edit, list_trades

app = typer.Typer(help="Personal trading journal")

app.command()(add)
app.command()(edit)
app.command()(delete)
app.command(name="list")(list_trades)
app.command(name="import-csv")(import_csv)
app.command()(calendar)
app.command()(graph)
app.command()(stats)
app.command()(risk)
app.command()(lot)
app.command()(settings)

__all__ = ["app"]
