"""
Pytest configuration and fixtures
"""
import sys
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def light():
    """Light theme with the default named palette."""
    from calendar_heatmap.models import light_theme
    return light_theme()


@pytest.fixture
def dark():
    """Dark theme with the default named palette."""
    from calendar_heatmap.models import dark_theme
    return dark_theme()


@pytest.fixture
def day_one():
    """A fixed UTC instant on 2026/01/05 (a Monday)."""
    return datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_frame():
    """Host frame with a time field and a numeric field."""
    return pd.DataFrame({
        "Time": pd.to_datetime([
            "2026-01-05 10:00:00",
            "2026-01-05 18:00:00",
            "2026-01-07 09:30:00",
        ], utc=True),
        "value": [3.0, 5.0, 2.0],
    })


@pytest.fixture
def text_frame():
    """Host frame without any usable fields."""
    return pd.DataFrame({"name": ["a", "b"], "note": ["x", "y"]})
