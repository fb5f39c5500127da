"""Data containers for observations and training pairs.

Observations are immutable once read. A TrainingSet holds one row per
(current, next) pair of adjacent observations of a single series.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Literal

import numpy as np

# "lag1": previous value only.
# "lag1_calendar": previous value plus month and day of the predicted day.
FeatureMode = Literal["lag1", "lag1_calendar"]

FEATURE_NAMES: dict[str, tuple[str, ...]] = {
    "lag1": ("current",),
    "lag1_calendar": ("current", "month", "day"),
}

# Cross-validation needs at least two pairs
MIN_TRAINING_PAIRS = 2


@dataclass(frozen=True)
class Observation:
    """A single (date, value) point of a series."""

    date: date_type
    value: float


@dataclass(frozen=True)
class SeriesObservations:
    """Date-ordered observations of one named series.

    Attributes:
        name: Series name (CSV header of the value column).
        observations: Observations ordered by date.
        skipped_rows: Number of input rows dropped as malformed.
    """

    name: str
    observations: tuple[Observation, ...]
    skipped_rows: int = 0

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def values(self) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
        """Observed values as a float array."""
        return np.array([obs.value for obs in self.observations], dtype=np.float64)

    @property
    def dates(self) -> list[date_type]:
        """Observation dates."""
        return [obs.date for obs in self.observations]

    def tail(self, n: int) -> SeriesObservations:
        """Return the last n observations as a new series."""
        if n <= 0:
            return SeriesObservations(name=self.name, observations=())
        return SeriesObservations(
            name=self.name,
            observations=self.observations[-n:],
            skipped_rows=self.skipped_rows,
        )


@dataclass
class TrainingSet:
    """Labeled (current -> next) pairs for one series.

    Attributes:
        series: Series name.
        X: Feature matrix of shape [n_pairs, n_features]; column 0 is the
            current value.
        y: Next values of shape [n_pairs].
        target_dates: Date of each next value.
        feature_mode: How X was built.
        n_pairs: Number of training pairs.
    """

    series: str
    X: np.ndarray[Any, np.dtype[np.floating[Any]]]
    y: np.ndarray[Any, np.dtype[np.floating[Any]]]
    target_dates: list[date_type]
    feature_mode: FeatureMode = "lag1"
    n_pairs: int = field(init=False)

    def __post_init__(self) -> None:
        """Compute derived fields and check shapes."""
        if self.X.shape[0] != len(self.y):
            raise ValueError(f"X and y must have same length: {self.X.shape[0]} vs {len(self.y)}")
        self.n_pairs = len(self.y)

    def __len__(self) -> int:
        return self.n_pairs

    @property
    def is_trainable(self) -> bool:
        """Whether enough pairs exist to fit and cross-validate a model."""
        return self.n_pairs >= MIN_TRAINING_PAIRS

    @property
    def feature_names(self) -> tuple[str, ...]:
        """Names of the feature columns."""
        return FEATURE_NAMES[self.feature_mode]

    def pairs(self) -> Iterator[tuple[float, float]]:
        """Yield (current, next) value pairs in order."""
        for current, nxt in zip(self.X[:, 0], self.y, strict=True):
            yield float(current), float(nxt)
