"""
Calendar heatmap chart built with Plotly.
Draws a Sunday-first week x weekday grid from a HeatmapView.
"""

import plotly.graph_objects as go
from typing import List, Optional

from ..alignment import grid_position, grid_start, parse_any_ymd
from ..config import CELL_GAP, HEATMAP_CHART_HEIGHT, NO_DATA_PANEL_TEXT
from ..labels import month_labels, week_labels
from ..logger import setup_logger
from ..options import HeatmapOptions
from ..services.heatmap_service import Cell, HeatmapView, format_value

logger = setup_logger(__name__)


def discrete_colorscale(colors: List[str]) -> list:
    """
    Plotly colorscale giving each integer level 0..n-1 a flat color.
    Use with zmin=-0.5 and zmax=n-0.5.
    """
    n = len(colors)
    scale = []
    for i, color in enumerate(colors):
        scale.append([i / n, color])
        scale.append([(i + 1) / n, color])
    return scale


def _month_ticks(cells: List[Cell], start, labels: List[str]):
    """Tick positions at the first column of each month (by original date)."""
    tickvals, ticktext = [], []
    last_column, last_month = None, None
    for cell in cells:
        column, _ = grid_position(cell.date, start)
        if column == last_column:
            continue
        last_column = column
        month = parse_any_ymd(cell.original_date).month
        if month != last_month:
            tickvals.append(column)
            ticktext.append(labels[month - 1])
            last_month = month
    return tickvals, ticktext


def create_calendar_heatmap(view: HeatmapView, options: Optional[HeatmapOptions] = None) -> go.Figure:
    """
    Create a GitHub-style calendar heatmap.
    
    Args:
        view: Result of HeatmapService.build
        options: Panel options (labels, tooltip and legend toggles)
        
    Returns:
        Plotly Figure with one cell per rendered day
    """
    if options is None:
        options = HeatmapOptions()
    
    cells = list(view.cells()) if view.has_data else []
    if not cells:
        fig = go.Figure()
        fig.add_annotation(text=NO_DATA_PANEL_TEXT, xref="paper", yref="paper",
                           x=0.5, y=0.5, showarrow=False)
        return fig
    
    start = grid_start(parse_any_ymd(cells[0].date))
    columns = grid_position(cells[-1].date, start)[0] + 1
    
    z = [[None] * columns for _ in range(7)]
    text = [[""] * columns for _ in range(7)]
    for cell in cells:
        column, row = grid_position(cell.date, start)
        z[row][column] = cell.level
        text[row][column] = cell.tooltip
    
    heatmap = go.Heatmap(
        z=z,
        text=text,
        x=list(range(columns)),
        y=list(range(7)),
        colorscale=discrete_colorscale(view.legend),
        zmin=-0.5,
        zmax=len(view.legend) - 0.5,
        showscale=False,
        xgap=CELL_GAP,
        ygap=CELL_GAP,
        hoverinfo='text' if options.show_tooltip else 'skip',
        hovertemplate='%{text}<extra></extra>' if options.show_tooltip else None,
    )
    fig = go.Figure(data=heatmap)
    
    yaxis = dict(autorange='reversed', showgrid=False, zeroline=False, showticklabels=False)
    if options.show_week_labels:
        yaxis.update(
            showticklabels=True,
            tickmode='array',
            tickvals=list(range(7)),
            ticktext=week_labels(options.week_start, options.week_label_mode, options.week_label_custom),
        )
    
    xaxis = dict(showgrid=False, zeroline=False, showticklabels=False, side='top')
    if options.show_month_labels:
        tickvals, ticktext = _month_ticks(
            cells, start,
            month_labels(options.month_label_mode, options.month_label_custom),
        )
        xaxis.update(showticklabels=True, tickmode='array', tickvals=tickvals, ticktext=ticktext)
    
    fig.update_layout(
        height=HEATMAP_CHART_HEIGHT,
        xaxis=xaxis,
        yaxis=yaxis,
        plot_bgcolor=view.empty_color,
        margin=dict(l=40, r=10, t=30, b=10),
    )
    
    if options.show_legend and view.max_value > 0:
        fig.add_annotation(
            text=f"Max: {format_value(view.max_value)}",
            xref="paper", yref="paper", x=1, y=-0.1,
            showarrow=False,
        )
    
    logger.debug(f"Rendered calendar heatmap with {len(cells)} cells over {columns} weeks")
    
    return fig
