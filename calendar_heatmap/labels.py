"""
Week and month labels for the calendar grid.
"""

from typing import List, Optional, Union

from .config import DEFAULT_MONTH_LABELS, DEFAULT_WEEK_LABELS
from .models import LabelMode, WeekStart


def _split_custom(text: Optional[str], expected: int) -> Optional[List[str]]:
    if not text:
        return None
    parts = [p.strip() for p in text.split(',')]
    if len(parts) != expected or not all(parts):
        return None
    return parts


def week_labels(
    week_start: Union[WeekStart, str] = WeekStart.SUNDAY,
    mode: Union[LabelMode, str] = LabelMode.DEFAULT,
    custom: Optional[str] = None,
) -> List[str]:
    """
    Row labels for the 7 weekday rows, in display order.
    
    Custom labels are given Sunday-first; Monday-first weeks rotate
    them so Sunday comes last.
    """
    mode = LabelMode.parse(mode)
    
    if mode == LabelMode.NUMBER:
        # Numbers follow display order, not weekday identity
        return [str(i) for i in range(1, 8)]
    
    labels = list(DEFAULT_WEEK_LABELS)
    if mode == LabelMode.CUSTOM:
        labels = _split_custom(custom, 7) or labels
    
    if WeekStart.parse(week_start) == WeekStart.MONDAY:
        labels = labels[1:] + labels[:1]
    return labels


def month_labels(
    mode: Union[LabelMode, str] = LabelMode.DEFAULT,
    custom: Optional[str] = None,
) -> List[str]:
    """Labels for January..December."""
    mode = LabelMode.parse(mode)
    if mode == LabelMode.NUMBER:
        return [f"{i:02d}" for i in range(1, 13)]
    if mode == LabelMode.CUSTOM:
        return _split_custom(custom, 12) or list(DEFAULT_MONTH_LABELS)
    return list(DEFAULT_MONTH_LABELS)
