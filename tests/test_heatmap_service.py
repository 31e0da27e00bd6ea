"""
Unit tests for HeatmapService
"""
from datetime import date
from unittest.mock import patch

import pytest

from calendar_heatmap.models import DailyValue, DateRange
from calendar_heatmap.options import HeatmapOptions
from calendar_heatmap.palette import select_color
from calendar_heatmap.processing import process_time_series
from calendar_heatmap.services import HeatmapService, format_value

JANUARY = DateRange(start=date(2026, 1, 1), end=date(2026, 1, 31))


@pytest.mark.unit
class TestHeatmapService:
    """Test HeatmapService class."""

    @pytest.fixture
    def service(self):
        """Create a HeatmapService with caching disabled for testing."""
        return HeatmapService(cache_enabled=False)

    @pytest.fixture
    def monday_options(self):
        return HeatmapOptions.model_validate({"timeZone": "UTC", "weekStart": "monday"})

    def test_build_daily_values(self, service, sample_frame, monday_options, light):
        view = service.build([sample_frame], monday_options, light, JANUARY)

        assert view.status == "ok"
        assert view.daily_values == [
            DailyValue("2026/01/05", 8),
            DailyValue("2026/01/07", 2),
        ]
        assert view.max_value == 8

    def test_build_shifts_for_monday(self, service, sample_frame, monday_options, light):
        view = service.build([sample_frame], monday_options, light, JANUARY)

        assert view.offset_days == -1
        assert view.render_range == DateRange(start=date(2025, 12, 31), end=date(2026, 1, 30))
        assert [v.date for v in view.render_values] == ["2026/01/04", "2026/01/06"]

    def test_build_sunday_no_shift(self, service, sample_frame, light):
        options = HeatmapOptions.model_validate({"timeZone": "UTC"})

        view = service.build([sample_frame], options, light, JANUARY)

        assert view.offset_days == 0
        assert view.render_range == JANUARY
        assert view.render_values == view.daily_values

    def test_lookup_uses_original_date(self, service, sample_frame, monday_options, light):
        view = service.build([sample_frame], monday_options, light, JANUARY)

        assert view.value_for("2026/01/04") == 8
        assert view.value_for("2026-01-04") == 8
        assert view.value_for("2026/01/05") is None
        assert view.tooltip_for("2026/01/04") == "2026/01/05: 8"
        assert view.tooltip_for("2026/01/05") == "2026/01/06: No data"

    def test_cells(self, service, sample_frame, monday_options, light):
        view = service.build([sample_frame], monday_options, light, JANUARY)

        cells = list(view.cells())

        assert len(cells) == 31
        assert [c.original_date for c in cells][0] == "2026/01/01"
        assert [c.original_date for c in cells][-1] == "2026/01/31"

        by_date = {c.date: c for c in cells}
        busy = by_date["2026/01/04"]
        assert busy.value == 8
        assert busy.color == select_color(8, view.thresholds)
        assert busy.level == 4
        assert by_date["2026/01/06"].level == 1
        assert by_date["2026/01/10"].color == light.background_color

    def test_thresholds_and_legend(self, service, sample_frame, monday_options, light):
        view = service.build([sample_frame], monday_options, light, JANUARY)

        assert len(view.legend) == 5
        assert view.legend[0] == light.background_color
        assert list(view.thresholds)[3:] == [3, 5, 7, 9]

    def test_custom_buckets_from_options(self, service, sample_frame, light):
        options = HeatmapOptions.model_validate({
            "timeZone": "UTC",
            "bucketMode": "custom",
            "customBuckets": "0,1,2,9",
        })

        view = service.build([sample_frame], options, light, JANUARY)

        assert view.color_for("2026/01/05") == view.legend[3]
        assert view.color_for("2026/01/07") == view.legend[3]

    def test_options_as_dict(self, service, sample_frame, light):
        view = service.build([sample_frame], {"timeZone": "UTC", "aggregation": "count"}, light, JANUARY)
        assert [v.value for v in view.daily_values] == [2, 1]

    def test_default_range_spans_data(self, service, sample_frame):
        view = service.build([sample_frame], {"timeZone": "UTC"})
        assert view.date_range == DateRange(start=date(2026, 1, 5), end=date(2026, 1, 7))

    def test_no_usable_data(self, service, text_frame, light):
        view = service.build([text_frame], HeatmapOptions(), light, JANUARY)

        assert view.status == "no_data"
        assert not view.has_data
        assert view.daily_values == []
        assert view.max_value == 0
        assert len(view.legend) == 5
        assert view.tooltip_for("2026/01/05") == "2026/01/05: No data"

    def test_no_series(self, service, light):
        view = service.build([], HeatmapOptions(), light, JANUARY)
        assert view.status == "no_data"

    def test_get_daily_values_cached(self, sample_frame):
        """Aggregation is reused while inputs are unchanged."""
        service = HeatmapService(cache_enabled=True)
        options = HeatmapOptions.model_validate({"timeZone": "UTC"})

        with patch(
            "calendar_heatmap.services.heatmap_service.process_time_series",
            wraps=process_time_series,
        ) as mock_process:
            first = service.get_daily_values([sample_frame], options)
            second = service.get_daily_values([sample_frame], options)

            mock_process.assert_called_once()
            assert first == second

            service.get_daily_values([sample_frame], HeatmapOptions.model_validate({"timeZone": "UTC", "aggregation": "max"}))
            assert mock_process.call_count == 2

    @pytest.mark.parametrize("cache_enabled,expected_calls", [(True, 1), (False, 2)])
    def test_cache_toggle(self, sample_frame, cache_enabled, expected_calls):
        service = HeatmapService(cache_enabled=cache_enabled)
        options = HeatmapOptions.model_validate({"timeZone": "UTC"})

        with patch(
            "calendar_heatmap.services.heatmap_service.process_time_series",
            wraps=process_time_series,
        ) as mock_process:
            service.get_daily_values([sample_frame], options)
            service.get_daily_values([sample_frame], options)

        assert mock_process.call_count == expected_calls

    def test_invalidate_cache(self, sample_frame):
        service = HeatmapService(cache_enabled=True)
        options = HeatmapOptions.model_validate({"timeZone": "UTC"})
        service.get_daily_values([sample_frame], options)

        service.invalidate_cache()

        assert len(service._cache) == 0


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    (8.0, "8"),
    (1234.5, "1,234.5"),
    (0.25, "0.25"),
    (-3.1, "-3.1"),
    (100, "100"),
])
def test_format_value(value, expected):
    assert format_value(value) == expected
