"""
Heatmap service - Builds everything a calendar renderer needs.
Wires aggregation, palette thresholds and week alignment into one view.
"""

import hashlib
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterator, List, Optional, Union

import pandas as pd

from ..alignment import (
    DateLike,
    parse_any_ymd,
    shift_daily_values,
    shift_range,
    to_key,
    unshift_date,
    week_start_offset,
)
from ..config import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS, NO_DATA_TEXT
from ..logger import setup_logger, log_daily_values_stats
from ..models import DailyValue, DateRange, HeatmapTheme, light_theme
from ..options import HeatmapOptions
from ..palette import ThresholdTable, build_thresholds, legend_colors, level_for, select_color
from ..processing import has_usable_data, process_time_series

logger = setup_logger(__name__)

STATUS_OK = "ok"
STATUS_NO_DATA = "no_data"


def format_value(value: float) -> str:
    """Thousands separators, at most 2 decimals, no trailing zeros."""
    text = f"{value:,.2f}"
    return text.rstrip('0').rstrip('.') if '.' in text else text


@dataclass
class Cell:
    """One rendered grid cell."""
    date: str  # Rendered (shifted) date key
    original_date: str
    value: Optional[float]
    color: str
    level: int
    tooltip: str


@dataclass
class HeatmapView:
    """
    Result of one render pass.
    
    Attributes:
        status: 'ok', or 'no_data' when no series has a time and numeric field
        daily_values: Aggregated values keyed by original date
        max_value: Largest daily value (0 when empty)
        thresholds: Renderer threshold table
        legend: Empty color followed by the 4 levels
        offset_days: Shift applied to every rendered date
        date_range: Requested range (original dates)
        render_range: Range handed to the renderer (shifted)
        render_values: Daily values keyed by rendered date
    """
    status: str
    daily_values: List[DailyValue]
    max_value: float
    thresholds: ThresholdTable
    legend: List[str]
    offset_days: int
    date_range: DateRange
    render_range: DateRange
    render_values: List[DailyValue]
    _by_date: Dict[str, float] = field(default_factory=dict, init=False, repr=False)
    
    def __post_init__(self):
        self._by_date = {dv.date: dv.value for dv in self.daily_values}
    
    @property
    def has_data(self) -> bool:
        return self.status == STATUS_OK
    
    @property
    def empty_color(self) -> str:
        return self.legend[0]
    
    def original_date(self, rendered: DateLike) -> str:
        return unshift_date(rendered, self.offset_days)
    
    def value_for(self, rendered: DateLike) -> Optional[float]:
        """Aggregated value behind a rendered cell, None when the day has no data."""
        return self._by_date.get(self.original_date(rendered))
    
    def tooltip_for(self, rendered: DateLike) -> str:
        """Tooltip text for a rendered cell, labelled with the original date."""
        key = self.original_date(rendered)
        value = self._by_date.get(key)
        if value is None:
            return f"{key}: {NO_DATA_TEXT}"
        return f"{key}: {format_value(value)}"
    
    def color_for(self, rendered: DateLike) -> str:
        value = self.value_for(rendered)
        if value is None:
            return self.empty_color
        return select_color(value, self.thresholds)
    
    def cells(self) -> Iterator[Cell]:
        """Every day of the rendered range, in order."""
        day = _to_date(self.render_range.start)
        end = _to_date(self.render_range.end)
        while day <= end:
            rendered = to_key(day)
            value = self.value_for(rendered)
            yield Cell(
                date=rendered,
                original_date=self.original_date(rendered),
                value=value,
                color=self.color_for(rendered),
                level=level_for(value, self.thresholds),
                tooltip=self.tooltip_for(rendered),
            )
            day += timedelta(days=1)


def _to_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def _default_range(values: List[DailyValue]) -> DateRange:
    days = [d for d in (parse_any_ymd(v.date) for v in values) if d is not None]
    if not days:
        today = date.today()
        return DateRange(start=today, end=today)
    return DateRange(start=min(days), end=max(days))


class HeatmapService:
    """
    Service layer for calendar heatmaps with built-in caching.
    Aggregation results are reused while the inputs are unchanged.
    """
    
    def __init__(self, cache_enabled: bool = True, cache_ttl_seconds: int = CACHE_TTL_SECONDS):
        self.cache_enabled = cache_enabled
        self._cache_ttl_seconds = cache_ttl_seconds
        self._cache: "OrderedDict[str, tuple]" = OrderedDict()
    
    def _fingerprint(self, series: List[pd.DataFrame], options: HeatmapOptions) -> Optional[str]:
        """
        Generate a fingerprint of the aggregation inputs.
        
        Returns:
            MD5 hash, or None when a frame cannot be hashed
        """
        parts = [options.aggregation.value, str(options.time_zone), str(options.hide_negligible)]
        try:
            for frame in series:
                parts.append(",".join(map(str, frame.columns)))
                parts.append(pd.util.hash_pandas_object(frame, index=False).values.tobytes().hex())
        except TypeError as e:
            logger.debug(f"Frame not hashable, skipping cache: {e}")
            return None
        return hashlib.md5("_".join(parts).encode()).hexdigest()
    
    def get_daily_values(self, series: List[pd.DataFrame], options: HeatmapOptions) -> List[DailyValue]:
        """
        Aggregate host series with caching.
        
        Args:
            series: Host frames
            options: Panel options (aggregation, time zone, negligible policy)
            
        Returns:
            Sorted daily values
        """
        key = self._fingerprint(series, options) if self.cache_enabled else None
        now = time.time()
        
        if key is not None and key in self._cache:
            cached_at, values = self._cache[key]
            if now - cached_at < self._cache_ttl_seconds:
                logger.debug("Returning cached daily values")
                self._cache.move_to_end(key)
                return list(values)
            del self._cache[key]
        
        values = process_time_series(
            series,
            method=options.aggregation,
            time_zone=options.time_zone,
            hide_negligible=options.hide_negligible,
        )
        
        if key is not None:
            self._cache[key] = (now, tuple(values))
            while len(self._cache) > CACHE_MAX_ENTRIES:
                self._cache.popitem(last=False)
        
        return values
    
    def invalidate_cache(self):
        """Clear all cached data."""
        self._cache.clear()
        logger.info("Heatmap cache invalidated")
    
    def build(
        self,
        series: List[pd.DataFrame],
        options: Optional[Union[HeatmapOptions, dict]] = None,
        theme: Optional[HeatmapTheme] = None,
        time_range: Optional[DateRange] = None,
    ) -> HeatmapView:
        """
        Build the view for one render pass.
        
        Args:
            series: Host frames, each with a time field and a numeric field
            options: Panel options (or a raw option dict)
            theme: Host theme; defaults to the light theme
            time_range: Range to render; defaults to the span of the data
            
        Returns:
            HeatmapView ready for a renderer
        """
        if options is None:
            options = HeatmapOptions()
        elif isinstance(options, dict):
            options = HeatmapOptions.model_validate(options)
        if theme is None:
            theme = light_theme()
        
        usable = bool(series) and has_usable_data(series)
        if not usable:
            logger.warning("No series with both a time field and a numeric field")
            values = []
        else:
            values = self.get_daily_values(series, options)
            log_daily_values_stats(values, logger)
        
        max_value = max((v.value for v in values), default=0)
        
        thresholds = build_thresholds(
            options.color_scheme,
            theme,
            max_value,
            custom_color=options.custom_color,
            bucket_config=options.bucket_config(),
        )
        legend = legend_colors(options.color_scheme, theme, options.custom_color)
        
        offset = week_start_offset(options.week_start)
        date_range = time_range or _default_range(values)
        
        return HeatmapView(
            status=STATUS_OK if usable else STATUS_NO_DATA,
            daily_values=values,
            max_value=max_value,
            thresholds=thresholds,
            legend=legend,
            offset_days=offset,
            date_range=date_range,
            render_range=shift_range(date_range, offset),
            render_values=shift_daily_values(values, offset),
        )
