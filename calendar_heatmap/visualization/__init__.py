"""
Visualization package - Plotly rendering of heatmap views.
"""

from .calendar_chart import create_calendar_heatmap, discrete_colorscale

__all__ = ['create_calendar_heatmap', 'discrete_colorscale']
