"""
Shared fixtures for the skyline test suite.

Grids are built on fixed dates in the past so the future-day handling of the
ASCII preview never depends on when the suite runs.
"""

from datetime import date, timedelta

import pytest

from skyline.geometry.assets import AssetProvider
from skyline.models import ContributionDay

# 2023-01-01 is a Sunday, so day index and calendar row coincide
GRID_START = date(2023, 1, 1)
PAST = date(2024, 6, 1)


def build_grid(weeks, days=7, count=lambda w, d: w * d, start=GRID_START):
    """weeks x days grid of consecutive dates; count(week, day) gives each count"""
    return [
        [
            ContributionDay(date=start + timedelta(days=w * 7 + d), count=count(w, d))
            for d in range(days)
        ]
        for w in range(weeks)
    ]


@pytest.fixture
def make_grid():
    return build_grid


@pytest.fixture
def today():
    return PAST


@pytest.fixture
def assets():
    """Provider that always renders with Pillow's embedded font"""
    return AssetProvider(font_path="/nonexistent/skyline-test-font.ttf")
