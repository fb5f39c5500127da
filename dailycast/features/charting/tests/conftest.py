"""Test fixtures for charting module."""

import struct
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pytest

from dailycast.features.registry.storage import ModelStore
from dailycast.features.training.models import ModelKind, create_candidate


@pytest.fixture
def png_size():
    """Read (width, height) from a PNG header."""

    def _size(path: Path) -> tuple[int, int]:
        header = path.read_bytes()[:24]
        assert header[:8] == b"\x89PNG\r\n\x1a\n"
        width, height = struct.unpack(">II", header[16:24])
        return width, height

    return _size


@pytest.fixture
def temperature_csv(tmp_path: Path) -> Path:
    """Forty days of min/max temperatures."""
    start = date(2024, 6, 1)
    lines = ["date,min,max"]
    for i in range(40):
        low = 12.0 + (i % 5)
        lines.append(f"{start + timedelta(days=i)},{low:.1f},{low + 10:.1f}")
    path = tmp_path / "daily_temp.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def trained_store(tmp_path: Path) -> ModelStore:
    """Store with a linear model for min and a forest for max (no selection)."""
    store = ModelStore(tmp_path / "model")
    X = np.arange(10.0, 30.0).reshape(-1, 1)
    y = X[:, 0] + 0.5
    store.save("min", create_candidate(ModelKind.LINEAR_REGRESSION).fit(X, y))
    store.save_selection("min", ModelKind.LINEAR_REGRESSION)
    store.save("max", create_candidate(ModelKind.RANDOM_FOREST).fit(X, y))
    return store
