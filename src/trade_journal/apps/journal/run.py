"""CLI entry point for the trade journal app.

All command logic lives in the cli subpackage.
"""

from trade_journal.apps.journal.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the trade journal CLI application."""
    app()


if __name__ == "__main__":
    main()
