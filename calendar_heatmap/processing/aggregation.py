"""
Daily aggregation of timestamped observations.
Resolves each instant to a calendar day in a time zone and reduces
every day to a single rounded value.
"""

from decimal import Decimal, ROUND_HALF_UP
from numbers import Number
from typing import Iterable, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np
import pandas as pd

from ..config import DATE_KEY_FORMAT, LOCAL_TIME_ZONES, MIN_COLORED_VALUE
from ..logger import setup_logger
from ..models import AggregationMethod, DailyValue, Observation

logger = setup_logger(__name__)

# pandas reducer per aggregation method
_REDUCERS = {
    AggregationMethod.SUM: 'sum',
    AggregationMethod.COUNT: 'count',
    AggregationMethod.AVG: 'mean',
    AggregationMethod.MAX: 'max',
    AggregationMethod.MIN: 'min',
}


def round_half_away(value: float, places: int = 2) -> float:
    """
    Round on the decimal representation, halves away from zero.
    
    1.005 -> 1.01, -1.005 -> -1.01, 1.004 -> 1.0
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def reduce_values(values: List[float], method: Union[AggregationMethod, str]) -> float:
    """
    Reduce one day's values. An empty list reduces to 0.
    
    Args:
        values: Numeric values of a single day
        method: Aggregation method; unrecognized names behave as sum
        
    Returns:
        Reduced value (unrounded)
    """
    if not values:
        return 0
    
    method = AggregationMethod.parse(method)
    return float(pd.Series(values, dtype='float64').agg(_REDUCERS[method]))


def resolve_time_zone(time_zone: Optional[str]):
    """
    Resolve a host time zone name.
    
    Returns:
        ZoneInfo for a named zone, or None for the process local zone
    """
    if time_zone is None or time_zone.strip().lower() in LOCAL_TIME_ZONES:
        return None
    if time_zone.strip().lower() == 'utc':
        return ZoneInfo('UTC')
    
    try:
        return ZoneInfo(time_zone.strip())
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown time zone '{time_zone}', using local time")
        return None


def _to_utc(instant) -> pd.Timestamp:
    """Convert one instant to a UTC timestamp, NaT when malformed."""
    if instant is None or isinstance(instant, bool):
        return pd.NaT
    try:
        if isinstance(instant, Number):
            if not np.isfinite(instant):
                return pd.NaT
            return pd.Timestamp(instant, unit='ms', tz='UTC')
        ts = pd.Timestamp(instant)
    except (ValueError, TypeError, OverflowError):
        return pd.NaT
    if ts is pd.NaT:
        return pd.NaT
    return ts.tz_localize('UTC') if ts.tzinfo is None else ts.tz_convert('UTC')


def _day_keys(instants: pd.Series, tz) -> pd.Series:
    """Format UTC instants as YYYY/MM/DD keys in the given zone."""
    if tz is None:
        return instants.map(lambda ts: ts.to_pydatetime().astimezone().strftime(DATE_KEY_FORMAT))
    return instants.dt.tz_convert(tz).dt.strftime(DATE_KEY_FORMAT)


def _to_frame(observations) -> pd.DataFrame:
    if isinstance(observations, pd.DataFrame):
        frame = observations.iloc[:, :2].copy()
        frame.columns = ['instant', 'value']
        return frame
    rows = [(o.instant, o.value) for o in observations]
    return pd.DataFrame(rows, columns=['instant', 'value'])


def aggregate(
    observations: Union[Iterable[Observation], pd.DataFrame],
    method: Union[AggregationMethod, str] = AggregationMethod.SUM,
    time_zone: Optional[str] = None,
    hide_negligible: bool = False,
) -> List[DailyValue]:
    """
    Group observations by calendar day and reduce each day to one value.
    
    Args:
        observations: Observations, or a DataFrame whose first two columns are (instant, value)
        method: Aggregation method ('sum', 'count', 'avg', 'max', 'min')
        time_zone: IANA zone deciding day boundaries; None uses local time
        hide_negligible: Drop days whose value is below the minimum colored value
        
    Returns:
        DailyValues sorted ascending by date, one per day with data
    """
    df = _to_frame(observations)
    if df.empty:
        return []
    
    total = len(df)
    df['value'] = pd.to_numeric(df['value'], errors='coerce')
    df = df[np.isfinite(df['value'])]
    
    df = df.assign(instant=[_to_utc(i) for i in df['instant']])
    df = df[df['instant'].notna()]
    
    dropped = total - len(df)
    if dropped:
        logger.debug(f"Dropped {dropped} of {total} observations without a usable time or value")
    
    if df.empty:
        return []
    
    method = AggregationMethod.parse(method)
    df = df.assign(instant=pd.to_datetime(df['instant'], utc=True))
    df = df.assign(date=_day_keys(df['instant'], resolve_time_zone(time_zone)))
    
    daily = df.groupby('date', sort=True)['value'].agg(lambda s: reduce_values(s.tolist(), method))
    
    result = []
    for day, value in daily.items():
        rounded = round_half_away(value)
        if hide_negligible and abs(rounded) < MIN_COLORED_VALUE:
            continue
        result.append(DailyValue(date=day, value=rounded))
    
    logger.debug(f"Aggregated {len(df)} observations into {len(result)} days using '{method.value}'")
    
    return result


# ============================================================================
# HOST SERIES
# ============================================================================

def find_fields(frame: pd.DataFrame) -> Optional[tuple]:
    """
    Locate the time and value columns of a host frame.
    
    The time column is the first datetime column; the value column is the
    first numeric column not named 'Time'.
    
    Returns:
        (time_column, value_column) or None when either is missing
    """
    if frame is None or len(frame.columns) == 0:
        return None
    
    time_col = next(
        (c for c in frame.columns if pd.api.types.is_datetime64_any_dtype(frame[c])),
        None,
    )
    value_col = next(
        (
            c for c in frame.columns
            if c != time_col
            and c != 'Time'
            and pd.api.types.is_numeric_dtype(frame[c])
            and not pd.api.types.is_bool_dtype(frame[c])
        ),
        None,
    )
    
    if time_col is None or value_col is None:
        return None
    return time_col, value_col


def has_usable_data(series: List[pd.DataFrame]) -> bool:
    """Whether any frame exposes both a time and a numeric field."""
    return any(find_fields(frame) is not None for frame in series)


def observations_from_series(series: List[pd.DataFrame]) -> pd.DataFrame:
    """
    Flatten host frames into a single (instant, value) frame.
    Frames without usable fields are skipped.
    """
    parts = []
    for frame in series:
        fields = find_fields(frame)
        if fields is None:
            logger.debug(f"Skipping frame without time/value fields: {list(frame.columns)}")
            continue
        part = frame[list(fields)].copy()
        part.columns = ['instant', 'value']
        parts.append(part)
    
    if not parts:
        return pd.DataFrame(columns=['instant', 'value'])
    return pd.concat(parts, ignore_index=True)


def process_time_series(
    series: List[pd.DataFrame],
    method: Union[AggregationMethod, str] = AggregationMethod.SUM,
    time_zone: Optional[str] = None,
    hide_negligible: bool = False,
) -> List[DailyValue]:
    """Aggregate every usable host frame into one daily series."""
    return aggregate(
        observations_from_series(series),
        method=method,
        time_zone=time_zone,
        hide_negligible=hide_negligible,
    )
