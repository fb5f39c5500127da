"""Metrics calculator for cross-validated regression models.

Supported Metrics:
- RMSE: Root Mean Squared Error
- MAE: Mean Absolute Error
- Correlation: Pearson correlation of actuals and predictions
- RAE: Relative Absolute Error (vs. predicting the mean of actuals)

CRITICAL: All metrics handle edge cases (constant series, empty arrays).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass
class MetricResult:
    """Result of a single metric calculation.

    Attributes:
        name: Name of the metric.
        value: Calculated value (may be nan for edge cases).
        n_samples: Number of samples used in calculation.
        warnings: List of warnings generated during calculation.
    """

    name: str
    value: float
    n_samples: int
    warnings: list[str] = field(default_factory=lambda: [])


def _check_lengths(
    actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
    predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
) -> None:
    if len(actuals) != len(predictions):
        raise ValueError(
            f"Length mismatch: actuals={len(actuals)}, predictions={len(predictions)}"
        )


class MetricsCalculator:
    """Calculate accuracy metrics of out-of-fold predictions.

    CRITICAL: All metrics handle edge cases (constant series, empty arrays).
    """

    @staticmethod
    def rmse(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Root Mean Squared Error.

        Formula: sqrt(mean((actual - predicted)^2))

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with RMSE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="rmse", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        value = float(np.sqrt(np.mean((actuals - predictions) ** 2)))
        return MetricResult(name="rmse", value=value, n_samples=len(actuals))

    @staticmethod
    def mae(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Mean Absolute Error.

        Formula: mean(|actual - predicted|)

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="mae", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        value = float(np.mean(np.abs(actuals - predictions)))
        return MetricResult(name="mae", value=value, n_samples=len(actuals))

    @staticmethod
    def correlation(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Pearson correlation coefficient.

        Undefined when either side is constant; reported as 0.0 with a
        warning so the composite score treats it as "no correlation".

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with correlation in [-1, 1].

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(
                name="correlation", value=np.nan, n_samples=0, warnings=["Empty array"]
            )
        _check_lengths(actuals, predictions)

        if len(actuals) < 2 or np.std(actuals) == 0 or np.std(predictions) == 0:
            return MetricResult(
                name="correlation",
                value=0.0,
                n_samples=len(actuals),
                warnings=["Correlation undefined for constant values; using 0"],
            )

        value = float(np.corrcoef(actuals, predictions)[0, 1])
        return MetricResult(name="correlation", value=value, n_samples=len(actuals))

    @staticmethod
    def relative_absolute_error(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Relative Absolute Error, in percent.

        Formula: sum(|A - F|) / sum(|A - mean(A)|) * 100

        Returns inf when actuals are constant.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with RAE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="rae", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        sum_abs_error = float(np.sum(np.abs(actuals - predictions)))
        sum_abs_dev = float(np.sum(np.abs(actuals - np.mean(actuals))))
        if sum_abs_dev == 0:
            return MetricResult(
                name="rae",
                value=float("inf"),
                n_samples=len(actuals),
                warnings=["Actuals are constant; RAE undefined"],
            )

        return MetricResult(
            name="rae", value=(sum_abs_error / sum_abs_dev) * 100.0, n_samples=len(actuals)
        )

    def calculate_results(
        self,
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> dict[str, MetricResult]:
        """Calculate every metric, keeping per-metric warnings.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            Dictionary of metric name to MetricResult.
        """
        return {
            "rmse": self.rmse(actuals, predictions),
            "mae": self.mae(actuals, predictions),
            "correlation": self.correlation(actuals, predictions),
            "rae": self.relative_absolute_error(actuals, predictions),
        }

    def calculate_all(
        self,
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> dict[str, float]:
        """Calculate all metrics for pooled out-of-fold predictions.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            name: result.value
            for name, result in self.calculate_results(actuals, predictions).items()
        }
