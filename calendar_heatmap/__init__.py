"""
Calendar heatmap core.

Turns timestamped observations into one value per calendar day, colors
each day through a threshold table and aligns dates for Monday-first weeks.
"""

from .alignment import (
    week_start_offset,
    shift_range,
    shift_daily_values,
    unshift_date,
    parse_any_ymd,
    to_key,
)
from .models import (
    AggregationMethod,
    BucketConfig,
    BucketMode,
    ColorScheme,
    DailyValue,
    DateRange,
    HeatmapTheme,
    Observation,
    WeekStart,
    dark_theme,
    light_theme,
)
from .options import HeatmapOptions
from .palette import build_thresholds, legend_colors, select_color
from .processing import aggregate, process_time_series
from .services import HeatmapService, HeatmapView

__version__ = "0.1.0"

__all__ = [
    # Aggregation
    "aggregate",
    "process_time_series",
    # Palette
    "build_thresholds",
    "legend_colors",
    "select_color",
    # Alignment
    "week_start_offset",
    "shift_range",
    "shift_daily_values",
    "unshift_date",
    "parse_any_ymd",
    "to_key",
    # Models
    "AggregationMethod",
    "BucketConfig",
    "BucketMode",
    "ColorScheme",
    "DailyValue",
    "DateRange",
    "HeatmapTheme",
    "Observation",
    "WeekStart",
    "dark_theme",
    "light_theme",
    # Service
    "HeatmapOptions",
    "HeatmapService",
    "HeatmapView",
]
