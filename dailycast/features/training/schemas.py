"""Result containers for model training and selection."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dailycast.core.exceptions import DailycastError
    from dailycast.features.training.models import CandidateModel, ModelKind

# Fixed selection policy: lower composite score is better
RMSE_WEIGHT = 0.4
MAE_WEIGHT = 0.4
CORRELATION_WEIGHT = 0.2


def composite_score(rmse: float, mae: float, correlation: float) -> float:
    """Weighted score used to rank candidates.

    Formula: 0.4 * RMSE + 0.4 * MAE + 0.2 * (1 - correlation)

    Args:
        rmse: Root mean squared error.
        mae: Mean absolute error.
        correlation: Correlation coefficient.

    Returns:
        Composite score (lower is better).
    """
    return RMSE_WEIGHT * rmse + MAE_WEIGHT * mae + CORRELATION_WEIGHT * (1.0 - correlation)


@dataclass(frozen=True)
class ModelMetrics:
    """Cross-validation metrics of one candidate.

    Attributes:
        rmse: Root mean squared error.
        mae: Mean absolute error.
        correlation: Pearson correlation of out-of-fold predictions.
        relative_absolute_error: RAE in percent.
        n_samples: Number of pairs scored.
        n_folds: Number of folds used.
        warnings: Edge cases hit while scoring (e.g. undefined correlation).
    """

    rmse: float
    mae: float
    correlation: float
    relative_absolute_error: float
    n_samples: int
    n_folds: int
    warnings: tuple[str, ...] = ()

    @property
    def composite_score(self) -> float:
        """Composite ranking score (lower is better)."""
        return composite_score(self.rmse, self.mae, self.correlation)

    @property
    def is_scorable(self) -> bool:
        """Whether the composite score is a finite number."""
        return math.isfinite(self.composite_score)

    def to_dict(self) -> dict[str, float | int]:
        """Plain dictionary form (for logging and manifests)."""
        return {
            "rmse": self.rmse,
            "mae": self.mae,
            "correlation": self.correlation,
            "relative_absolute_error": self.relative_absolute_error,
            "n_samples": self.n_samples,
            "n_folds": self.n_folds,
            "composite_score": self.composite_score,
        }


@dataclass
class CandidateResult:
    """Outcome of training and evaluating one candidate.

    Attributes:
        kind: Model kind.
        model: Fitted model (None if fitting failed).
        metrics: Cross-validation metrics (None if evaluation failed).
        error: Failure message if the candidate was excluded.
        model_path: Where the fitted model was persisted.
    """

    kind: ModelKind
    model: CandidateModel | None = None
    metrics: ModelMetrics | None = None
    error: str | None = None
    model_path: Path | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the candidate is eligible for selection."""
        return (
            self.error is None
            and self.model is not None
            and self.model.is_fitted
            and self.metrics is not None
            and self.metrics.is_scorable
        )


@dataclass
class SelectionResult:
    """Best model of one series for one training run.

    Attributes:
        series: Series name.
        best: Winning candidate.
        candidates: All candidates in registration order.
    """

    series: str
    best: CandidateResult
    candidates: list[CandidateResult]

    @property
    def best_kind(self) -> ModelKind:
        """Kind of the winning model."""
        return self.best.kind

    @property
    def best_model(self) -> CandidateModel:
        """The winning fitted model."""
        if self.best.model is None:
            raise RuntimeError("Selected candidate has no model")
        return self.best.model

    @property
    def best_metrics(self) -> ModelMetrics:
        """Metrics of the winning model."""
        if self.best.metrics is None:
            raise RuntimeError("Selected candidate has no metrics")
        return self.best.metrics

    @property
    def excluded(self) -> list[CandidateResult]:
        """Candidates that failed to fit or evaluate."""
        return [c for c in self.candidates if not c.succeeded]


@dataclass
class TrainingReport:
    """Outcome of training every series of one input file.

    Attributes:
        results: Selection result per successfully trained series.
        failures: Error per series that could not be trained (TrainingFailure
            or PersistenceError).
    """

    results: dict[str, SelectionResult] = field(default_factory=lambda: {})
    failures: dict[str, DailycastError] = field(default_factory=lambda: {})

    @property
    def ok(self) -> bool:
        """True when every series was trained."""
        return not self.failures
