"""Processing package - turns host series into daily values."""

from .aggregation import (
    aggregate,
    reduce_values,
    round_half_away,
    resolve_time_zone,
    find_fields,
    has_usable_data,
    observations_from_series,
    process_time_series,
)
