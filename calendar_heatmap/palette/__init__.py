"""Palette package - color levels and threshold tables."""

from .colors import parse_color, mix, to_hex, derive_custom_shades
from .thresholds import (
    ThresholdTable,
    resolve_levels,
    legend_colors,
    parse_custom_buckets,
    valid_edges,
    build_thresholds,
    select_color,
    level_for,
)
