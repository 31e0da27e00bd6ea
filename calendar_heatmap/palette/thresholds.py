"""
Threshold tables mapping daily values to heatmap colors.

The renderer picks, for a value, the color of the smallest key strictly
greater than that value. Keys are therefore exclusive upper bounds, and two
keys always sit at the empty/colored boundary: the minimum colored value
maps to the empty color and the next key (plus epsilon) to the first level.
"""

import math
from typing import Dict, List, Optional, Union

from ..config import (
    AUTO_KEY_FLOOR,
    BOUNDARY_EPSILON,
    CUSTOM_BUCKET_COUNT,
    DEFAULT_HUE,
    MAX_SAFE_INTEGER,
    MIN_COLORED_VALUE,
    SHADE_NAMES,
    SHADE_QUANTILES,
    SUPPORTED_HUES,
)
from ..logger import setup_logger
from ..models import BucketConfig, BucketMode, ColorScheme, HeatmapTheme
from .colors import derive_custom_shades

logger = setup_logger(__name__)

ThresholdTable = Dict[float, str]


def _scheme_name(scheme: Union[ColorScheme, str, None]) -> str:
    if isinstance(scheme, ColorScheme):
        return scheme.value
    return str(scheme or '').strip().lower()


def resolve_levels(
    scheme: Union[ColorScheme, str],
    theme: HeatmapTheme,
    custom_color: Optional[str] = None,
) -> List[str]:
    """
    Resolve the 4 colored levels, lightest first (reversed on dark themes).
    
    Args:
        scheme: Built-in hue name or 'custom'
        theme: Theme providing named colors and polarity
        custom_color: Base color for the custom scheme
        
    Returns:
        List of 4 color strings
    """
    name = _scheme_name(scheme)
    levels = None
    
    if name == ColorScheme.CUSTOM.value:
        levels = derive_custom_shades(custom_color)
        if levels is None:
            logger.warning(f"Invalid custom color '{custom_color}', using the {DEFAULT_HUE} palette")
    
    if levels is None:
        hue = name if name in SUPPORTED_HUES else DEFAULT_HUE
        if hue != name and name != ColorScheme.CUSTOM.value:
            logger.warning(f"Unknown color scheme '{scheme}', using {DEFAULT_HUE}")
        levels = [theme.color_by_name(f"{shade}-{hue}") for shade in SHADE_NAMES]
    
    if theme.is_dark:
        levels = list(reversed(levels))
    
    return levels


def legend_colors(
    scheme: Union[ColorScheme, str],
    theme: HeatmapTheme,
    custom_color: Optional[str] = None,
) -> List[str]:
    """Empty color followed by the 4 levels, in legend order."""
    return [theme.background_color] + resolve_levels(scheme, theme, custom_color)


def parse_custom_buckets(text: Optional[str]) -> Optional[List[float]]:
    """
    Parse custom bucket edges like "0,1,2,9".
    
    Valid edges are exactly 4 finite numbers, starting at 0 and strictly
    increasing.
    
    Returns:
        List of edges, or None when the text is invalid
    """
    if not text or not isinstance(text, str):
        return None
    
    try:
        edges = [float(part.strip()) for part in text.split(',')]
    except ValueError:
        return None
    
    return edges if valid_edges(edges) else None


def valid_edges(edges) -> bool:
    """Whether edges are 4 finite numbers starting at 0 and strictly increasing."""
    try:
        edges = [float(e) for e in edges]
    except (TypeError, ValueError):
        return False
    if len(edges) != CUSTOM_BUCKET_COUNT:
        return False
    if not all(math.isfinite(e) for e in edges):
        return False
    if edges[0] != 0:
        return False
    return all(b > a for a, b in zip(edges, edges[1:]))


def _put(table: ThresholdTable, key: float, color: str) -> float:
    """Append a key, advancing it past the previous key on collision."""
    if table:
        last = next(reversed(table))
        if key <= last:
            key = last + BOUNDARY_EPSILON
            if key <= last:
                # Epsilon vanishes at large magnitudes
                key = math.nextafter(last, math.inf)
    table[key] = color
    return key


def _boundary(empty: str, first: str, min_colored: float) -> ThresholdTable:
    table: ThresholdTable = {}
    _put(table, 0, empty)
    _put(table, min_colored, empty)
    _put(table, min_colored + BOUNDARY_EPSILON, first)
    return table


def _safe_max(value) -> int:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return max(0, math.ceil(value))


def _auto_table(levels: List[str], empty: str, max_value, min_colored: float) -> ThresholdTable:
    table = _boundary(empty, levels[0], min_colored)
    safe_max = _safe_max(max_value)
    
    prev = AUTO_KEY_FLOOR
    for fraction, color in zip(SHADE_QUANTILES, levels):
        # Inclusive cutoff (halves round up) + 1 gives the exclusive upper bound
        desired = math.floor(safe_max * fraction + 0.5) + 1
        key = max(prev + 1, max(2, desired))
        _put(table, key, color)
        prev = key
    
    return table


def _custom_table(levels: List[str], empty: str, edges: List[float], min_colored: float) -> ThresholdTable:
    table = _boundary(empty, levels[0], min_colored)
    _, b1, b2, b3 = (float(e) for e in edges)
    
    _put(table, max(b1, min_colored + BOUNDARY_EPSILON), levels[0])
    _put(table, b2, levels[1])
    _put(table, b3, levels[2])
    _put(table, max(MAX_SAFE_INTEGER, math.nextafter(b3, math.inf)), levels[3])
    
    return table


def build_thresholds(
    scheme: Union[ColorScheme, str],
    theme: HeatmapTheme,
    max_observed_value: float,
    custom_color: Optional[str] = None,
    bucket_config: Optional[BucketConfig] = None,
) -> ThresholdTable:
    """
    Build the threshold table consumed by the renderer.
    
    Args:
        scheme: Built-in hue name or 'custom'
        theme: Theme providing the empty color and named shades
        max_observed_value: Largest daily value; non-finite input counts as 0
        custom_color: Base color for the custom scheme
        bucket_config: Auto/custom bucket settings (defaults to auto)
        
    Returns:
        Dict of strictly increasing exclusive upper bounds -> color
    """
    if bucket_config is None:
        bucket_config = BucketConfig()
    
    levels = resolve_levels(scheme, theme, custom_color)
    empty = theme.background_color
    min_colored = bucket_config.min_colored_value
    
    if BucketMode.parse(bucket_config.mode) == BucketMode.CUSTOM:
        if bucket_config.custom_edges is not None and valid_edges(bucket_config.custom_edges):
            return _custom_table(levels, empty, bucket_config.custom_edges, min_colored)
        logger.warning("Invalid custom buckets, falling back to automatic buckets")
    
    return _auto_table(levels, empty, max_observed_value, min_colored)


# Level of each key position: 0, m -> empty; m+eps, b1 -> level 1; then 2, 3, 4
KEY_LEVELS = (0, 0, 1, 1, 2, 3, 4)


def _selected_index(value: float, table: ThresholdTable) -> int:
    """Position of the smallest key strictly greater than the value (last key when none)."""
    for i, key in enumerate(table):
        if value < key:
            return i
    return len(table) - 1


def select_color(value: float, table: ThresholdTable) -> str:
    """
    Pick the color the renderer would draw for a value.
    
    Uses the smallest key strictly greater than the value; values at or above
    the largest key take the largest key's color.
    """
    return list(table.values())[_selected_index(value, table)]


def level_for(value: Optional[float], table: ThresholdTable) -> int:
    """
    Level (0 = empty, 1..4 = colored) selected for a value, taken from the
    position of the selected key so levels sharing a color stay distinct.
    Missing values are level 0.
    """
    if value is None:
        return 0
    return KEY_LEVELS[_selected_index(value, table)]
