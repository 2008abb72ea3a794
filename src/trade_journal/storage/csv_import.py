"""CSV trade loader for bulk-importing journal entries.

Read trades exported from a spreadsheet or another journal. The file must
have a header row with the columns ``date``, ``pair``, ``balance_before``,
``balance_after`` and, optionally, ``memo``. A blank ``date`` is kept as
an undated trade, which the analytics skip.
"""

import csv
from decimal import Decimal, InvalidOperation
from pathlib import Path

from trade_journal.core.calendar import JournalCalendar
from trade_journal.core.models import Trade
from trade_journal.core.timestamps import parse_date

_REQUIRED_COLUMNS = ("date", "pair", "balance_before", "balance_after")


class CsvImportError(ValueError):
    """Raise when a CSV file is missing columns or contains an unparseable row."""


class CsvTradeLoader:
    """Load trades from a local CSV file.

    Dates are parsed with the journal calendar, so a date without a time
    or zone is read as local midnight in the configured time zone.
    """

    def __init__(self, file_path: Path, calendar: JournalCalendar) -> None:
        """Initialize the loader with the path to the CSV file.

        Args:
            file_path: Absolute or relative path to the CSV file.
            calendar: The process-wide journal calendar.

        """
        self._file_path = file_path
        self._calendar = calendar

    def load(self) -> list[Trade]:
        """Read every row of the file into a ``Trade``.

        Returns:
            Trades in file order.

        Raises:
            CsvImportError: If a required column is missing or a row has
                an invalid date or balance.

        """
        trades: list[Trade] = []
        with self._file_path.open(newline="") as f:
            reader = csv.DictReader(f)
            missing = [c for c in _REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                msg = f"{self._file_path}: missing columns: {', '.join(missing)}"
                raise CsvImportError(msg)
            # Header is line 1
            for line_no, row in enumerate(reader, start=2):
                trades.append(self._parse_row(row, line_no))
        return trades

    def _parse_row(self, row: dict[str, str], line_no: int) -> Trade:
        """Convert one CSV row into a ``Trade``."""
        raw_date = (row.get("date") or "").strip()
        try:
            date = parse_date(raw_date, self._calendar) if raw_date else None
            before = Decimal((row.get("balance_before") or "").strip())
            after = Decimal((row.get("balance_after") or "").strip())
        except (ValueError, InvalidOperation) as exc:
            msg = f"{self._file_path}:{line_no}: {exc}"
            raise CsvImportError(msg) from exc
        memo = (row.get("memo") or "").strip() or None
        return Trade(
            pair=(row.get("pair") or "").strip(),
            balance_before=before,
            balance_after=after,
            date=date,
            memo=memo,
        )
