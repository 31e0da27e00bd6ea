"""
Heatmap data models and type definitions.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..config import (
    DARK_BACKGROUND,
    LIGHT_BACKGROUND,
    MIN_COLORED_VALUE,
    NAMED_COLORS,
)


class _ParsableEnum(str, Enum):
    """String enum that maps unrecognized input to a default member."""

    @classmethod
    def default(cls):
        return next(iter(cls))

    @classmethod
    def parse(cls, value: Any):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.default()


class AggregationMethod(_ParsableEnum):
    """How the values of one calendar day are reduced."""
    SUM = "sum"
    COUNT = "count"
    AVG = "avg"
    MAX = "max"
    MIN = "min"


class ColorScheme(_ParsableEnum):
    """Built-in hues plus the custom base color path."""
    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    CUSTOM = "custom"


class WeekStart(_ParsableEnum):
    SUNDAY = "sunday"
    MONDAY = "monday"


class BucketMode(_ParsableEnum):
    AUTO = "auto"
    CUSTOM = "custom"


class LabelMode(_ParsableEnum):
    DEFAULT = "default"
    NUMBER = "number"
    CUSTOM = "custom"


@dataclass
class Observation:
    """
    A single timestamped reading from a host series.
    
    Attributes:
        instant: Absolute timestamp (datetime, Timestamp, ISO string or epoch milliseconds)
        value: Numeric reading; None/NaN readings are dropped during aggregation
    """
    instant: Union[datetime, float, int, str]
    value: Optional[float]


@dataclass(frozen=True)
class DailyValue:
    """
    One aggregated value per calendar day.
    
    Attributes:
        date: Canonical YYYY/MM/DD key
        value: Reduced value rounded to 2 decimals
    """
    date: str
    value: float


@dataclass
class BucketConfig:
    """Bucket settings for the palette engine."""
    mode: BucketMode = BucketMode.AUTO
    min_colored_value: float = MIN_COLORED_VALUE
    custom_edges: Optional[List[float]] = None  # None when the custom string is invalid


@dataclass
class DateRange:
    """Inclusive rendering range (datetimes or dates)."""
    start: Union[datetime, date]
    end: Union[datetime, date]


@dataclass
class HeatmapTheme:
    """
    Theme collaborator supplied by the host.
    
    Attributes:
        background_color: Canvas color, used for empty cells
        is_dark: Whether the theme is dark
        named_colors: Lookup for names like "semi-dark-green"
    """
    background_color: str
    is_dark: bool = False
    named_colors: Dict[str, str] = field(default_factory=lambda: dict(NAMED_COLORS))
    
    def color_by_name(self, name: str) -> str:
        """Resolve a named color; unknown names pass through unchanged."""
        return self.named_colors.get(name, name)


def light_theme() -> HeatmapTheme:
    return HeatmapTheme(background_color=LIGHT_BACKGROUND, is_dark=False)


def dark_theme() -> HeatmapTheme:
    return HeatmapTheme(background_color=DARK_BACKGROUND, is_dark=True)
