"""
Calendar alignment for Monday-first weeks.

The grid renderer always lays weekday rows out Sunday-first. Shifting every
rendered date one day back makes Monday land in the first row and Sunday in
the last. Dates reported back by the renderer are shifted forward again
before any lookup against the aggregated values.
"""

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union

from .models import DailyValue, DateRange, WeekStart

DateLike = Union[str, date, datetime]


def week_start_offset(week_start: Union[WeekStart, str]) -> int:
    """Day offset applied before rendering: -1 for Monday-first weeks, else 0."""
    return -1 if WeekStart.parse(week_start) == WeekStart.MONDAY else 0


def parse_any_ymd(text: str) -> Optional[date]:
    """
    Parse 'YYYY/MM/DD' or 'YYYY-MM-DD' into a date.
    
    Returns:
        The date, or None when the text is not a valid 3-field date
    """
    s = str(text).strip()
    if '/' in s:
        parts = s.split('/')
    elif '-' in s:
        parts = s.split('-')
    else:
        return None
    
    if len(parts) != 3:
        return None
    
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def to_key(day: Union[date, datetime]) -> str:
    """Canonical zero-padded YYYY/MM/DD key."""
    if isinstance(day, datetime):
        day = day.date()
    return f"{day.year:04d}/{day.month:02d}/{day.day:02d}"


def _as_date(value: DateLike) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_any_ymd(value)


def shift_range(date_range: DateRange, offset_days: int) -> DateRange:
    """Shift both ends of a rendering range by a fixed number of days."""
    if offset_days == 0:
        return date_range
    delta = timedelta(days=offset_days)
    return DateRange(start=date_range.start + delta, end=date_range.end + delta)


def shift_daily_values(values: List[DailyValue], offset_days: int) -> List[DailyValue]:
    """
    Re-key daily values by a fixed day offset.
    
    Values whose date cannot be parsed are kept unchanged.
    """
    if offset_days == 0:
        return list(values)
    
    delta = timedelta(days=offset_days)
    shifted = []
    for dv in values:
        parsed = parse_any_ymd(dv.date)
        if parsed is None:
            shifted.append(dv)
            continue
        shifted.append(replace(dv, date=to_key(parsed + delta)))
    return shifted


def unshift_date(rendered: DateLike, offset_days: int) -> str:
    """
    Recover the original date key of a rendered cell.
    
    Args:
        rendered: Date reported by the renderer (string, date or datetime)
        offset_days: The offset that was applied before rendering
        
    Returns:
        Canonical YYYY/MM/DD key of the original date
    """
    parsed = _as_date(rendered)
    if parsed is None:
        return str(rendered).replace('-', '/')
    return to_key(parsed - timedelta(days=offset_days))


def grid_start(day: Union[date, datetime]) -> date:
    """Sunday on or before the given day (first column of the grid)."""
    if isinstance(day, datetime):
        day = day.date()
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def grid_position(day: DateLike, start: date) -> Optional[Tuple[int, int]]:
    """
    Column (week index) and Sunday-first row of a rendered date.
    
    Returns:
        (column, row), or None when the date cannot be parsed
    """
    parsed = _as_date(day)
    if parsed is None:
        return None
    column = (parsed - start).days // 7
    row = (parsed.weekday() + 1) % 7
    return column, row
