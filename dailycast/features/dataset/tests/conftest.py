"""Test fixtures for dataset module."""

from datetime import date
from pathlib import Path

import pytest

from dailycast.features.dataset.schemas import Observation, SeriesObservations


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write CSV text to a temporary file and return its path."""

    def _write(text: str, name: str = "daily_temp.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def three_day_csv(write_csv) -> Path:
    """Three days of min/max temperatures."""
    return write_csv(
        "date,min,max\n"
        "2024-01-01,10.0,20.0\n"
        "2024-01-02,12.0,22.0\n"
        "2024-01-03,11.0,21.0\n"
    )


@pytest.fixture
def min_series() -> SeriesObservations:
    """Min temperature series matching three_day_csv."""
    return SeriesObservations(
        name="min",
        observations=(
            Observation(date(2024, 1, 1), 10.0),
            Observation(date(2024, 1, 2), 12.0),
            Observation(date(2024, 1, 3), 11.0),
        ),
    )
