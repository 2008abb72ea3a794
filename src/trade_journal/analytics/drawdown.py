"""Find the maximum drawdown of a cumulative profit series.

Walk the series once, tracking the running high-water mark and the most
negative decline from it. Unlike the percentage drawdown used for equity
curves, the journal reports the absolute decline in cumulative profit,
together with the days on which the peak and the trough occurred.
"""

from collections.abc import Sequence

from trade_journal.core.models import ZERO, CumulativePoint, DrawdownResult

_MIN_POINTS = 2


def compute_max_drawdown(points: Sequence[CumulativePoint]) -> DrawdownResult | None:
    """Return the single worst peak-to-trough decline, or ``None``.

    The peak starts at the first point. A point above the running peak
    becomes the new peak and cannot be a trough. Any other point is a
    candidate trough; it replaces the current best only when its decline
    is strictly larger, so among equal declines the earliest wins.

    Args:
        points: Date-ascending cumulative profit points.

    Returns:
        The worst drawdown, or ``None`` when there are fewer than two
        points or the series never falls below a prior peak.

    """
    if len(points) < _MIN_POINTS:
        return None

    peak = points[0]
    best: DrawdownResult | None = None
    for point in points[1:]:
        if point.cumulative_profit > peak.cumulative_profit:
            peak = point
            continue
        dd = point.cumulative_profit - peak.cumulative_profit
        current = best.drawdown if best is not None else ZERO
        if dd < current:
            best = DrawdownResult(
                peak_day=peak.day,
                trough_day=point.day,
                peak_value=peak.cumulative_profit,
                trough_value=point.cumulative_profit,
            )
    return best
