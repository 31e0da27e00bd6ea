"""
Unit tests for Monday-first week alignment
"""
from datetime import date, datetime, timedelta

import pytest

from calendar_heatmap.alignment import (
    grid_position,
    grid_start,
    parse_any_ymd,
    shift_daily_values,
    shift_range,
    to_key,
    unshift_date,
    week_start_offset,
)
from calendar_heatmap.models import DailyValue, DateRange, WeekStart


@pytest.mark.unit
class TestOffset:

    @pytest.mark.parametrize("week_start,expected", [
        ("monday", -1),
        (WeekStart.MONDAY, -1),
        ("Monday", -1),
        ("sunday", 0),
        (WeekStart.SUNDAY, 0),
        ("tuesday", 0),
        (None, 0),
    ])
    def test_week_start_offset(self, week_start, expected):
        assert week_start_offset(week_start) == expected


@pytest.mark.unit
class TestDateKeys:

    @pytest.mark.parametrize("text", ["2026/01/05", "2026-01-05", "2026-1-5", " 2026/1/05 "])
    def test_parse_any_ymd(self, text):
        assert parse_any_ymd(text) == date(2026, 1, 5)

    @pytest.mark.parametrize("text", ["", "20260105", "2026/01", "2026/01/05/01", "2026/02/30", "yyyy/mm/dd"])
    def test_parse_any_ymd_invalid(self, text):
        assert parse_any_ymd(text) is None

    def test_to_key_zero_padded(self):
        assert to_key(date(2026, 1, 5)) == "2026/01/05"
        assert to_key(datetime(2026, 11, 23, 17, 45)) == "2026/11/23"


@pytest.mark.unit
class TestShift:

    def test_shift_range_monday(self):
        original = DateRange(start=datetime(2026, 1, 1, 12), end=datetime(2026, 3, 31, 8))

        shifted = shift_range(original, -1)

        assert shifted.start == datetime(2025, 12, 31, 12)
        assert shifted.end == datetime(2026, 3, 30, 8)

    def test_shift_range_sunday_is_noop(self):
        original = DateRange(start=date(2026, 1, 1), end=date(2026, 1, 31))
        assert shift_range(original, 0) == original

    def test_shift_daily_values(self):
        values = [DailyValue("2026/01/01", 3), DailyValue("2026/03/01", 4.5)]

        shifted = shift_daily_values(values, -1)

        assert shifted == [DailyValue("2025/12/31", 3), DailyValue("2026/02/28", 4.5)]
        assert values[0].date == "2026/01/01"

    def test_shift_daily_values_dash_dates(self):
        assert shift_daily_values([DailyValue("2026-01-10", 1)], -1) == [DailyValue("2026/01/09", 1)]

    def test_shift_daily_values_unparseable_kept(self):
        values = [DailyValue("someday", 1)]
        assert shift_daily_values(values, -1) == values

    def test_unshift_date(self):
        assert unshift_date("2026/01/04", -1) == "2026/01/05"
        assert unshift_date("2026-01-04", -1) == "2026/01/05"
        assert unshift_date(date(2025, 12, 31), -1) == "2026/01/01"
        assert unshift_date("2026/01/04", 0) == "2026/01/04"

    def test_unshift_date_unparseable_normalizes_separators(self):
        assert unshift_date("bad-date-value-x", -1) == "bad/date/value/x"

    @pytest.mark.parametrize("offset", [0, -1])
    def test_round_trip_range(self, offset):
        original = DateRange(start=date(2024, 2, 20), end=date(2024, 3, 10))
        shifted = shift_range(original, offset)

        day = shifted.start
        while day <= shifted.end:
            recovered = unshift_date(to_key(day), offset)
            assert recovered == to_key(day - timedelta(days=offset))
            day += timedelta(days=1)

        assert unshift_date(shifted.start, offset) == to_key(original.start)
        assert unshift_date(shifted.end, offset) == to_key(original.end)

    @pytest.mark.parametrize("offset", [0, -1])
    def test_round_trip_values(self, offset):
        values = [
            DailyValue("2024/02/28", 1),
            DailyValue("2024/02/29", 2),
            DailyValue("2024/03/01", 3),
            DailyValue("2025/01/01", 4),
        ]

        shifted = shift_daily_values(values, offset)

        assert [unshift_date(v.date, offset) for v in shifted] == [v.date for v in values]
        assert [v.value for v in shifted] == [v.value for v in values]


@pytest.mark.unit
class TestGrid:
    """Sunday-first grid placement."""

    def test_grid_start(self):
        # 2026/01/04 is a Sunday
        assert grid_start(date(2026, 1, 7)) == date(2026, 1, 4)
        assert grid_start(date(2026, 1, 4)) == date(2026, 1, 4)
        assert grid_start(datetime(2026, 1, 10, 23)) == date(2026, 1, 4)

    def test_grid_position(self):
        start = date(2026, 1, 4)
        assert grid_position("2026/01/04", start) == (0, 0)
        assert grid_position("2026/01/10", start) == (0, 6)
        assert grid_position("2026/01/11", start) == (1, 0)
        assert grid_position("garbage", start) is None

    def test_monday_lands_in_first_row(self):
        start = date(2026, 1, 4)
        offset = week_start_offset("monday")

        monday = shift_daily_values([DailyValue("2026/01/05", 1)], offset)[0]
        sunday = shift_daily_values([DailyValue("2026/01/11", 1)], offset)[0]

        assert grid_position(monday.date, start)[1] == 0
        assert grid_position(sunday.date, start)[1] == 6
