"""Trade journal app: record trades and report profit, drawdown, and risk.

Wire the analytics engine to an async SQLAlchemy repository and expose
it through a Typer CLI, with optional Plotly charts for the profit graph.
"""
