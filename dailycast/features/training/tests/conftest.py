"""Test fixtures for training module."""

from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pytest

from dailycast.features.dataset.builder import build_training_set
from dailycast.features.dataset.schemas import Observation, SeriesObservations, TrainingSet
from dailycast.features.training.models import CandidateModel, ModelKind
from dailycast.features.training.schemas import ModelMetrics


def make_series(name: str, values: list[float], start: date = date(2024, 1, 1)) -> SeriesObservations:
    """Build a daily series starting at `start`."""
    return SeriesObservations(
        name=name,
        observations=tuple(
            Observation(start + timedelta(days=i), float(v)) for i, v in enumerate(values)
        ),
    )


class FakeStore:
    """In-memory stand-in for the model store."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or Path("memory")
        self.saved: dict[tuple[str, ModelKind], CandidateModel] = {}
        self.saved_metadata: dict[tuple[str, ModelKind], dict[str, object]] = {}
        self.selections: dict[str, ModelKind] = {}

    def series_key(self, series: str) -> str:
        return series.strip().lower().replace(" ", "_")

    def save(
        self,
        series: str,
        model: CandidateModel,
        metrics: ModelMetrics | None = None,
        metadata: dict[str, object] | None = None,
    ) -> Path:
        self.saved[(series, model.kind)] = model
        self.saved_metadata[(series, model.kind)] = dict(metadata or {})
        return self.root / series / f"{model.kind.value}.joblib"

    def save_selection(
        self, series: str, kind: ModelKind, metrics: ModelMetrics | None = None
    ) -> Path:
        self.selections[series] = kind
        return self.root / series / "selection.json"


@pytest.fixture
def series_factory():
    """Factory building daily SeriesObservations from plain values."""
    return make_series


@pytest.fixture
def fake_store() -> FakeStore:
    """Empty in-memory model store."""
    return FakeStore()


@pytest.fixture
def linear_training_set() -> TrainingSet:
    """40 pairs of a strictly linear series (next = current + 0.5)."""
    values = [10.0 + 0.5 * i for i in range(41)]
    return build_training_set(make_series("min", values))


@pytest.fixture
def noisy_training_set() -> TrainingSet:
    """60 pairs of a seasonal series with noise (seeded)."""
    rng = np.random.default_rng(7)
    days = np.arange(61)
    values = 18.0 + 6.0 * np.sin(2 * np.pi * days / 30) + rng.normal(0, 0.5, size=61)
    return build_training_set(make_series("max", values.tolist()))


@pytest.fixture
def temperature_csv(tmp_path: Path) -> Path:
    """Sixty days of min/max temperatures."""
    rng = np.random.default_rng(3)
    start = date(2024, 3, 1)
    lines = ["date,min,max"]
    for i in range(60):
        low = 10.0 + 3.0 * np.sin(i / 9) + rng.normal(0, 0.3)
        lines.append(f"{start + timedelta(days=i)},{low:.2f},{low + 9.0:.2f}")
    path = tmp_path / "daily_temp.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
