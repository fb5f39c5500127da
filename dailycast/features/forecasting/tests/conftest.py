"""Test fixtures for forecasting module."""

from pathlib import Path

import numpy as np
import pytest

from dailycast.features.registry.storage import ModelStore
from dailycast.features.training.models import ModelKind, create_candidate


class IncrementModel:
    """Predicts input + 1 (first feature only)."""

    def __init__(self) -> None:
        self.calls: list[list[float]] = []

    def predict(self, X):
        X = np.asarray(X, dtype=np.float64)
        self.calls.append(X[0].tolist())
        return X[:, 0] + 1.0


class MeanModel:
    """Always predicts a constant mean."""

    def __init__(self, mean: float) -> None:
        self.mean = mean

    def predict(self, X):
        return np.full(len(X), self.mean)


class FailingModel:
    """Rejects inputs above a threshold."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def predict(self, X):
        value = float(np.asarray(X)[0, 0])
        if value > self.threshold:
            raise ValueError(f"input {value} out of range")
        return np.array([value + 1.0])


@pytest.fixture
def increment_model() -> IncrementModel:
    """Mock model returning input + 1."""
    return IncrementModel()


@pytest.fixture
def mean_model_factory():
    """Factory for constant-mean models."""
    return MeanModel


@pytest.fixture
def failing_model_factory():
    """Factory for models failing above a threshold."""
    return FailingModel


@pytest.fixture
def populated_store(tmp_path: Path) -> ModelStore:
    """Store with linear (selected) and forest models for 'min'."""
    store = ModelStore(tmp_path / "model")
    X = np.arange(30, dtype=np.float64).reshape(-1, 1)
    y = X[:, 0] + 1.0
    store.save("min", create_candidate(ModelKind.LINEAR_REGRESSION).fit(X, y))
    store.save("min", create_candidate(ModelKind.RANDOM_FOREST).fit(X, y))
    store.save_selection("min", ModelKind.LINEAR_REGRESSION)
    return store
