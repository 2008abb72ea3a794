"""Trade aggregation and analytics engine.

Turn an unordered trade collection into a day-indexed profit index, a
cumulative profit series with maximum drawdown for a selectable period,
nearest-point selections, and risk-based position sizes. Everything here
is synchronous and free of I/O.
"""
