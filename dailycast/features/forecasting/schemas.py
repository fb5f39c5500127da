"""Forecast result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any

import numpy as np


@dataclass
class ForecastSequence:
    """Ordered predictions of one series.

    Element i+1 is always derived from the model output at element i.

    Attributes:
        series: Series name.
        seed: Value the first prediction was made from.
        values: Predicted values, one per step.
        dates: Date of each step (None when the forecast is undated).
        model_kind: Slug of the model that produced the forecast.
        horizon: Number of steps.
    """

    series: str
    seed: float
    values: list[float]
    dates: list[date_type] | None = None
    model_kind: str | None = None
    horizon: int = field(init=False)

    def __post_init__(self) -> None:
        """Compute derived fields."""
        if self.dates is not None and len(self.dates) != len(self.values):
            raise ValueError(
                f"dates and values must have same length: {len(self.dates)} vs {len(self.values)}"
            )
        self.horizon = len(self.values)

    def __len__(self) -> int:
        return self.horizon

    def as_array(self) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
        """Predictions as a float array."""
        return np.array(self.values, dtype=np.float64)
