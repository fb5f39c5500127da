"""Turn an observation series into (current -> next) training pairs.

For observations v[0..L-1] the pairs are (v[i], v[i+1]) for i < L-1; the last
observation has no successor and is dropped, so L observations yield L-1
pairs. Pairs are never built from non-adjacent observations.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import Any

import numpy as np

from dailycast.core.logging import get_logger
from dailycast.features.dataset.schemas import (
    FEATURE_NAMES,
    FeatureMode,
    SeriesObservations,
    TrainingSet,
)

logger = get_logger(__name__)


def feature_row(
    current: float, target_date: date_type | None, feature_mode: FeatureMode
) -> list[float]:
    """Build the feature vector used to predict the value of target_date.

    Shared by training and forecasting so both see identical columns.

    Args:
        current: Value of the day before target_date.
        target_date: Day being predicted (required for "lag1_calendar").
        feature_mode: Feature layout.

    Returns:
        Feature values in FEATURE_NAMES order.

    Raises:
        ValueError: If calendar features are requested without a date.
    """
    if feature_mode == "lag1":
        return [float(current)]
    if feature_mode == "lag1_calendar":
        if target_date is None:
            raise ValueError("lag1_calendar features need the predicted date")
        return [float(current), float(target_date.month), float(target_date.day)]
    raise ValueError(f"Unknown feature mode: {feature_mode}")


def build_training_set(
    series: SeriesObservations,
    feature_mode: FeatureMode = "lag1",
) -> TrainingSet:
    """Build the labeled training pairs of one series.

    A series with fewer than two observations yields an empty set flagged
    untrainable; this function never raises for short series.

    Args:
        series: Date-ordered observations.
        feature_mode: Feature layout for X.

    Returns:
        TrainingSet with len(series) - 1 pairs (0 for empty series).
    """
    observations = series.observations
    n_features = len(FEATURE_NAMES[feature_mode])

    rows: list[list[float]] = []
    targets: list[float] = []
    target_dates: list[date_type] = []
    for current, nxt in zip(observations[:-1], observations[1:], strict=True):
        rows.append(feature_row(current.value, nxt.date, feature_mode))
        targets.append(nxt.value)
        target_dates.append(nxt.date)

    X: np.ndarray[Any, np.dtype[np.floating[Any]]] = (
        np.array(rows, dtype=np.float64) if rows else np.empty((0, n_features), dtype=np.float64)
    )
    training_set = TrainingSet(
        series=series.name,
        X=X,
        y=np.array(targets, dtype=np.float64),
        target_dates=target_dates,
        feature_mode=feature_mode,
    )

    if not training_set.is_trainable:
        logger.warning(
            "dataset.series_untrainable",
            series=series.name,
            n_observations=len(series),
            n_pairs=training_set.n_pairs,
        )
    else:
        logger.debug(
            "dataset.training_set_built",
            series=series.name,
            n_pairs=training_set.n_pairs,
            feature_mode=feature_mode,
        )

    return training_set
