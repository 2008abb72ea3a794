# pyright: reportMissingTypeStubs=false, reportUnknownMemberType=false, reportUnknownArgumentType=false, reportUnknownVariableType=false
"""Interactive Plotly charts for the profit graph.

Render the cumulative profit line with the daily profit bars underneath
and mark the maximum drawdown peak and trough. The x-axis uses the
snapshot's padded domain so the latest day is not drawn against the
right edge. Charts share a dark theme and can be opened in the browser
or saved to HTML.
"""

from __future__ import annotations

import tempfile
import webbrowser
from datetime import date
from typing import TYPE_CHECKING

import plotly.graph_objects as go
from plotly.subplots import make_subplots

if TYPE_CHECKING:
    from pathlib import Path

    from trade_journal.analytics.graph import ProfitGraphSnapshot
    from trade_journal.core.models import GraphSelection

_BG_COLOR = "#1e1e2f"
_PAPER_COLOR = "#1e1e2f"
_GRID_COLOR = "#2e2e3e"
_TEXT_COLOR = "#e0e0e0"
_GREEN = "#00c853"
_RED = "#ff1744"
_YELLOW = "#ffd600"
_REFERENCE_DASH = "dash"
_ROW_HEIGHTS = [0.65, 0.35]


def _apply_dark_theme(fig: go.Figure) -> go.Figure:
    """Apply a consistent dark theme to a Plotly figure.

    Args:
        fig: The Plotly figure to style.

    Returns:
        The same figure, mutated in place, for chaining convenience.

    """
    fig.update_layout(
        template="plotly_dark",
        plot_bgcolor=_BG_COLOR,
        paper_bgcolor=_PAPER_COLOR,
        font_color=_TEXT_COLOR,
        legend={"bgcolor": "rgba(0,0,0,0)"},
        margin={"l": 60, "r": 30, "t": 50, "b": 40},
    )
    fig.update_xaxes(gridcolor=_GRID_COLOR, zeroline=False)
    fig.update_yaxes(gridcolor=_GRID_COLOR, zeroline=False)
    return fig


def _iso(day: date) -> str:
    return day.isoformat()


def create_cumulative_chart(
    snapshot: ProfitGraphSnapshot,
    selection: GraphSelection | None = None,
) -> go.Figure:
    """Create the cumulative profit chart for one graph snapshot.

    The top panel plots the running total, green when the period ended
    in profit and red otherwise, with markers on the drawdown peak and
    trough. The bottom panel shows daily profit bars.

    Args:
        snapshot: A built profit graph snapshot.
        selection: Optional selected day to highlight.

    Returns:
        A Plotly ``Figure`` with two rows sharing the x-axis.

    Raises:
        ValueError: If the snapshot has no points.

    """
    if snapshot.is_empty or snapshot.x_domain is None:
        msg = "Cannot create profit chart: no trades in the selected period"
        raise ValueError(msg)

    days = [_iso(p.day) for p in snapshot.cumulative_points]
    running = [float(p.cumulative_profit) for p in snapshot.cumulative_points]
    daily = [float(p.profit) for p in snapshot.daily_points]
    line_color = _GREEN if running[-1] >= 0 else _RED

    fig = make_subplots(
        rows=2,
        cols=1,
        shared_xaxes=True,
        row_heights=_ROW_HEIGHTS,
        vertical_spacing=0.05,
        subplot_titles=("Cumulative Profit", "Daily Profit"),
    )
    fig.add_trace(
        go.Scatter(
            x=days,
            y=running,
            mode="lines+markers",
            name="Cumulative",
            line={"color": line_color, "width": 2},
        ),
        row=1,
        col=1,
    )
    fig.add_trace(
        go.Bar(
            x=[_iso(p.day) for p in snapshot.daily_points],
            y=daily,
            name="Daily",
            marker_color=[_GREEN if v >= 0 else _RED for v in daily],
        ),
        row=2,
        col=1,
    )
    fig.add_hline(
        y=0,
        line_dash=_REFERENCE_DASH,
        line_color=_TEXT_COLOR,
        opacity=0.5,
        row=1,
        col=1,
    )

    dd = snapshot.max_drawdown
    if dd is not None:
        fig.add_trace(
            go.Scatter(
                x=[_iso(dd.peak_day), _iso(dd.trough_day)],
                y=[float(dd.peak_value), float(dd.trough_value)],
                mode="markers",
                name="Max Drawdown",
                marker={"color": _RED, "size": 10, "symbol": ["triangle-up", "triangle-down"]},
            ),
            row=1,
            col=1,
        )
        fig.add_annotation(
            x=_iso(dd.trough_day),
            y=float(dd.trough_value),
            text=f"Max DD: {float(dd.drawdown):,.2f}",
            showarrow=True,
            arrowhead=2,
            font={"color": _RED},
            row=1,
            col=1,
        )

    if selection is not None:
        fig.add_vline(x=_iso(selection.day), line_dash=_REFERENCE_DASH, line_color=_YELLOW)

    start, end = snapshot.x_domain
    fig.update_xaxes(range=[_iso(start), _iso(end)])
    fig.update_layout(title=f"Profit ({snapshot.selected_range.value})", showlegend=True)
    return _apply_dark_theme(fig)


def _to_html(figs: list[go.Figure]) -> str:
    """Combine figures into a single HTML page."""
    html_parts = [
        "<html><head><title>Trade Journal Charts</title></head><body>",
        *[fig.to_html(full_html=False, include_plotlyjs="cdn") for fig in figs],
        "</body></html>",
    ]
    return "\n".join(html_parts)


def show_charts(figs: list[go.Figure]) -> None:
    """Write figures to a temporary HTML file and open it in the browser.

    The temp file is not automatically deleted, allowing the browser to
    load it fully.

    Args:
        figs: A list of Plotly figures to display.

    """
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".html", delete=False, prefix="trade_journal_"
    ) as tmp:
        tmp.write(_to_html(figs))
        tmp_path = tmp.name

    webbrowser.open(f"file://{tmp_path}")


def save_charts(figs: list[go.Figure], output_path: Path) -> None:
    """Save figures to an HTML file at the given path.

    Args:
        figs: A list of Plotly figures to save.
        output_path: Destination file path. Must have a ``.html`` suffix.

    Raises:
        ValueError: If the output path does not end with ``.html``.

    """
    if output_path.suffix.lower() != ".html":
        msg = f"Output path must end with .html, got: {output_path}"
        raise ValueError(msg)

    output_path.write_text(_to_html(figs))
