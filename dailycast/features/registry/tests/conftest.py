"""Test fixtures for registry module."""

from pathlib import Path

import numpy as np
import pytest

from dailycast.features.registry.storage import ModelStore
from dailycast.features.training.models import CandidateModel, ModelKind, create_candidate
from dailycast.features.training.schemas import ModelMetrics


@pytest.fixture
def fitted_linear() -> CandidateModel:
    """Linear regression fitted on next = current + 1."""
    X = np.arange(20, dtype=np.float64).reshape(-1, 1)
    return create_candidate(ModelKind.LINEAR_REGRESSION).fit(X, X[:, 0] + 1.0)


@pytest.fixture
def fitted_forest() -> CandidateModel:
    """Random forest fitted on a short sine series."""
    X = np.linspace(0, 6, 40).reshape(-1, 1)
    return create_candidate(ModelKind.RANDOM_FOREST).fit(X, np.sin(X[:, 0]))


@pytest.fixture
def sample_metrics() -> ModelMetrics:
    """Plausible cross-validation metrics."""
    return ModelMetrics(
        rmse=0.8,
        mae=0.6,
        correlation=0.9,
        relative_absolute_error=35.0,
        n_samples=40,
        n_folds=10,
    )


@pytest.fixture
def store(tmp_path: Path) -> ModelStore:
    """Model store rooted in a temporary directory."""
    return ModelStore(tmp_path / "model")
