"""
Models package - Data models and type definitions.
"""

from .heatmap import (
    AggregationMethod,
    BucketConfig,
    BucketMode,
    ColorScheme,
    DailyValue,
    DateRange,
    HeatmapTheme,
    LabelMode,
    Observation,
    WeekStart,
    dark_theme,
    light_theme,
)

__all__ = [
    'AggregationMethod',
    'BucketConfig',
    'BucketMode',
    'ColorScheme',
    'DailyValue',
    'DateRange',
    'HeatmapTheme',
    'LabelMode',
    'Observation',
    'WeekStart',
    'dark_theme',
    'light_theme',
]
