"""
Configuration constants for the calendar heatmap.
Centralized configuration for thresholds, palettes, and behavior.
"""

from typing import Dict, List

# Empty / colored boundary
MIN_COLORED_VALUE = 0.01  # Values below this render as empty
BOUNDARY_EPSILON = 1e-9  # Gap between the empty key and the first colored key
MAX_SAFE_INTEGER = 2 ** 53 - 1  # Sentinel upper bound for the last custom bucket

# Automatic (quantile) buckets
SHADE_QUANTILES: List[float] = [0.25, 0.50, 0.75, 1.00]
AUTO_KEY_FLOOR = 1  # Integer floor the first quantile key must exceed
CUSTOM_BUCKET_COUNT = 4

# Custom color derivation: (target, weight) per level, lightest first
CUSTOM_SHADE_MIX = [
    ((255, 255, 255), 0.70),
    ((255, 255, 255), 0.45),
    ((0, 0, 0), 0.15),
    ((0, 0, 0), 0.35),
]

# Built-in hues
SUPPORTED_HUES: List[str] = ['red', 'orange', 'yellow', 'green', 'blue', 'purple']
DEFAULT_HUE = 'green'
SHADE_NAMES: List[str] = ['super-light', 'light', 'semi-dark', 'dark']

# Named colors resolved by the theme ("<shade>-<hue>")
NAMED_COLORS: Dict[str, str] = {
    'super-light-red': '#FFA6B0',
    'light-red': '#FF7383',
    'semi-dark-red': '#E02F44',
    'dark-red': '#C4162A',
    'super-light-orange': '#FFCB7D',
    'light-orange': '#FFB357',
    'semi-dark-orange': '#FF780A',
    'dark-orange': '#FA6400',
    'super-light-yellow': '#FFF899',
    'light-yellow': '#FFEE52',
    'semi-dark-yellow': '#F2CC0C',
    'dark-yellow': '#E0B400',
    'super-light-green': '#C8F2C2',
    'light-green': '#96D98D',
    'semi-dark-green': '#56A64B',
    'dark-green': '#37872D',
    'super-light-blue': '#C0D8FF',
    'light-blue': '#8AB8FF',
    'semi-dark-blue': '#3274D9',
    'dark-blue': '#1F60C4',
    'super-light-purple': '#DEB6F2',
    'light-purple': '#CA95E5',
    'semi-dark-purple': '#A352CC',
    'dark-purple': '#8F3BB8',
}

# Theme backgrounds (used as the empty color)
LIGHT_BACKGROUND = '#F4F5F5'
DARK_BACKGROUND = '#111217'

# Dates
DATE_KEY_FORMAT = "%Y/%m/%d"
LOCAL_TIME_ZONES = ('', 'browser')  # Resolve to the process local zone

# Labels
DEFAULT_WEEK_LABELS: List[str] = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
DEFAULT_MONTH_LABELS: List[str] = [
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
]
NO_DATA_TEXT = "No data"
NO_DATA_PANEL_TEXT = "No data available"

# Chart Defaults
HEATMAP_CHART_HEIGHT = 220
CELL_GAP = 3

# Service cache
CACHE_TTL_SECONDS = 300
CACHE_MAX_ENTRIES = 32

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
