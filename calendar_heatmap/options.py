"""
Panel options for the calendar heatmap.
Validates host configuration and applies documented fallbacks per field.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_MONTH_LABELS, DEFAULT_WEEK_LABELS, MIN_COLORED_VALUE
from .logger import setup_logger
from .models import (
    AggregationMethod,
    BucketConfig,
    BucketMode,
    ColorScheme,
    LabelMode,
    WeekStart,
)
from .palette import parse_custom_buckets

logger = setup_logger(__name__)


def _fallback(enum_cls, value, field_name: str):
    """Parse an enum option, logging when the fallback default is used."""
    if value is None:
        return enum_cls.default()
    parsed = enum_cls.parse(value)
    if not isinstance(value, enum_cls) and parsed.value != str(value).strip().lower():
        logger.warning(f"Unrecognized {field_name} '{value}', using '{parsed.value}'")
    return parsed


class HeatmapOptions(BaseModel):
    """User configuration of a calendar heatmap panel."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')
    
    # Colors
    color_scheme: ColorScheme = Field(default=ColorScheme.GREEN, alias='colorScheme')
    custom_color: str = Field(default='', alias='customColor')
    
    # Data
    aggregation: AggregationMethod = Field(default=AggregationMethod.SUM)
    time_zone: Optional[str] = Field(default=None, alias='timeZone')
    hide_negligible: bool = Field(default=False, alias='hideNegligible')
    
    # Buckets
    bucket_mode: BucketMode = Field(default=BucketMode.AUTO, alias='bucketMode')
    custom_buckets: str = Field(default='', alias='customBuckets')
    
    # Layout
    week_start: WeekStart = Field(default=WeekStart.SUNDAY, alias='weekStart')
    
    # Labels
    show_week_labels: bool = Field(default=True, alias='showWeekLabels')
    show_month_labels: bool = Field(default=True, alias='showMonthLabels')
    show_legend: bool = Field(default=True, alias='showLegend')
    week_label_mode: LabelMode = Field(default=LabelMode.DEFAULT, alias='weekLabelMode')
    week_label_custom: str = Field(default=','.join(DEFAULT_WEEK_LABELS), alias='weekLabelCustom')
    month_label_mode: LabelMode = Field(default=LabelMode.DEFAULT, alias='monthLabelMode')
    month_label_custom: str = Field(default=','.join(DEFAULT_MONTH_LABELS), alias='monthLabelCustom')
    
    # Interaction
    show_tooltip: bool = Field(default=True, alias='showTooltip')
    
    @field_validator('color_scheme', mode='before')
    @classmethod
    def _parse_color_scheme(cls, v):
        return _fallback(ColorScheme, v, 'color scheme')
    
    @field_validator('aggregation', mode='before')
    @classmethod
    def _parse_aggregation(cls, v):
        return _fallback(AggregationMethod, v, 'aggregation')
    
    @field_validator('bucket_mode', mode='before')
    @classmethod
    def _parse_bucket_mode(cls, v):
        return _fallback(BucketMode, v, 'bucket mode')
    
    @field_validator('week_start', mode='before')
    @classmethod
    def _parse_week_start(cls, v):
        return _fallback(WeekStart, v, 'week start')
    
    @field_validator('week_label_mode', 'month_label_mode', mode='before')
    @classmethod
    def _parse_label_mode(cls, v):
        return _fallback(LabelMode, v, 'label mode')
    
    @field_validator('custom_color', 'custom_buckets', 'week_label_custom', 'month_label_custom', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return '' if v is None else v
    
    def bucket_config(self) -> BucketConfig:
        """Bucket settings for the palette engine."""
        edges = None
        if self.bucket_mode == BucketMode.CUSTOM:
            edges = parse_custom_buckets(self.custom_buckets)
            if edges is None:
                logger.warning(f"Invalid custom buckets '{self.custom_buckets}', using automatic buckets")
        return BucketConfig(
            mode=self.bucket_mode,
            min_colored_value=MIN_COLORED_VALUE,
            custom_edges=edges,
        )
