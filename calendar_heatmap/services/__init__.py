"""
Services package - Business logic layer.
"""

from .heatmap_service import HeatmapService, HeatmapView, Cell, format_value

__all__ = ['HeatmapService', 'HeatmapView', 'Cell', 'format_value']
