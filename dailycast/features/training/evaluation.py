"""K-fold cross-validation and candidate selection.

Cross-validation shuffles pairs into k folds with a fixed seed, so re-running
on identical pairs gives identical metrics. Out-of-fold predictions of all
folds are pooled and scored once.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from sklearn.model_selection import KFold, cross_val_predict  # type: ignore[import-untyped]

from dailycast.core.exceptions import TrainingFailure
from dailycast.core.logging import get_logger
from dailycast.features.dataset.schemas import MIN_TRAINING_PAIRS, TrainingSet
from dailycast.features.training.metrics import MetricsCalculator
from dailycast.features.training.models import CandidateModel
from dailycast.features.training.schemas import CandidateResult, ModelMetrics

logger = get_logger(__name__)


def cross_validate(
    model: CandidateModel,
    training_set: TrainingSet,
    n_folds: int = 10,
    random_state: int = 1,
) -> ModelMetrics:
    """Estimate out-of-sample accuracy of a candidate with k-fold CV.

    The candidate itself is not refitted; each fold trains a fresh clone.
    When fewer pairs than folds exist, k drops to the number of pairs.

    Args:
        model: Candidate whose estimator configuration is evaluated.
        training_set: Pairs of one series.
        n_folds: Requested number of folds.
        random_state: Shuffle seed.

    Returns:
        ModelMetrics of pooled out-of-fold predictions.

    Raises:
        ValueError: If fewer than two pairs exist.
    """
    n_pairs = len(training_set)
    if n_pairs < MIN_TRAINING_PAIRS:
        raise ValueError(
            f"Need at least {MIN_TRAINING_PAIRS} training pairs for cross-validation, "
            f"got {n_pairs}"
        )

    k = min(n_folds, n_pairs)
    splitter = KFold(n_splits=k, shuffle=True, random_state=random_state)
    predictions: np.ndarray[Any, np.dtype[np.floating[Any]]] = np.asarray(
        cross_val_predict(model.unfitted_copy(), training_set.X, training_set.y, cv=splitter),
        dtype=np.float64,
    )

    results = MetricsCalculator().calculate_results(training_set.y, predictions)
    return ModelMetrics(
        rmse=results["rmse"].value,
        mae=results["mae"].value,
        correlation=results["correlation"].value,
        relative_absolute_error=results["rae"].value,
        n_samples=n_pairs,
        n_folds=k,
        warnings=tuple(w for result in results.values() for w in result.warnings),
    )


def select_best(series: str, candidates: Sequence[CandidateResult]) -> CandidateResult:
    """Pick the candidate with the strictly lowest composite score.

    Candidates are compared in the given (registration) order, so on equal
    scores the earlier candidate wins. Failed or unscorable candidates are
    never selected.

    Args:
        series: Series name for error context.
        candidates: Candidate results in registration order.

    Returns:
        Winning candidate.

    Raises:
        TrainingFailure: If no candidate is eligible.
    """
    best: CandidateResult | None = None
    best_score = float("inf")

    for candidate in candidates:
        if not candidate.succeeded or candidate.metrics is None:
            continue
        score = candidate.metrics.composite_score
        if best is None or score < best_score:
            best = candidate
            best_score = score

    if best is None:
        errors = {c.kind.value: c.error or "unscorable metrics" for c in candidates}
        raise TrainingFailure(
            f"No candidate model could be trained for series '{series}'",
            series=series,
            errors=errors,
        )

    return best
