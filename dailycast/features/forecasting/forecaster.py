"""Autoregressive (recursive) forecasting with a one-step model.

Formula:
    y_hat[0] = f(seed)
    y_hat[i] = f(y_hat[i-1])    for 1 <= i < horizon

CRITICAL: Step i+1 is fed the model's own output of step i, never ground
truth, so prediction error compounds across steps. This is expected
behavior, not corrected here.
"""

from __future__ import annotations

import math
from datetime import date as date_type
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

import numpy as np

from dailycast.core.exceptions import PredictionFailure
from dailycast.core.logging import get_logger
from dailycast.features.dataset.builder import feature_row
from dailycast.features.dataset.schemas import FeatureMode
from dailycast.features.forecasting.schemas import ForecastSequence

logger = get_logger(__name__)


@runtime_checkable
class PredictorProtocol(Protocol):
    """Anything with a scikit-learn style predict(X)."""

    def predict(self, X: Any) -> Any:  # noqa: ANN401
        """Predict one value per feature row."""
        ...


class AutoregressiveForecaster:
    """Forecast N steps by feeding each prediction back as the next input.

    Attributes:
        model: One-step predictor.
        feature_mode: Feature layout the model was trained with.
        series: Series name (for error context).
        model_kind: Model kind slug (recorded on results).
    """

    def __init__(
        self,
        model: PredictorProtocol,
        feature_mode: FeatureMode = "lag1",
        series: str | None = None,
        model_kind: str | None = None,
    ) -> None:
        """Initialize the forecaster.

        Args:
            model: One-step predictor.
            feature_mode: Feature layout the model was trained with.
            series: Series name (for error context).
            model_kind: Model kind slug.
        """
        self.model = model
        self.feature_mode = feature_mode
        self.series = series
        self.model_kind = model_kind

    def predict_step(
        self, current: float, target_date: date_type | None, step_index: int
    ) -> float:
        """Predict a single next value.

        Args:
            current: Value of the previous day.
            target_date: Day being predicted (needed for calendar features).
            step_index: Step position, for error context.

        Returns:
            Predicted value.

        Raises:
            PredictionFailure: If the model raises or returns a non-finite value.
        """
        try:
            X = np.array([feature_row(current, target_date, self.feature_mode)], dtype=np.float64)
            output = np.asarray(self.model.predict(X), dtype=np.float64).ravel()
        except Exception as e:  # model errors are opaque; re-raised with step context
            logger.error(
                "forecasting.prediction_failed",
                series=self.series,
                step_index=step_index,
                input_value=current,
                error=str(e),
            )
            raise PredictionFailure(
                f"Model rejected input at step {step_index}: {e}",
                step_index=step_index,
                series=self.series,
                input_value=current,
            ) from e

        if output.size != 1 or not math.isfinite(float(output[0])):
            logger.error(
                "forecasting.prediction_failed",
                series=self.series,
                step_index=step_index,
                input_value=current,
                error="invalid model output",
            )
            raise PredictionFailure(
                f"Model returned an invalid output at step {step_index}: {output.tolist()}",
                step_index=step_index,
                series=self.series,
                input_value=current,
            )

        return float(output[0])

    def forecast(
        self,
        seed: float,
        horizon: int,
        start_date: date_type | None = None,
    ) -> ForecastSequence:
        """Generate a recursive forecast.

        Args:
            seed: Last known value; input of the first step.
            horizon: Number of steps to forecast (>= 1).
            start_date: Date of the first predicted step. Defaults to
                tomorrow when calendar features are used; otherwise the
                forecast is undated unless given.

        Returns:
            ForecastSequence with `horizon` values.

        Raises:
            ValueError: If horizon < 1.
            PredictionFailure: If any step fails; earlier steps are discarded.
        """
        if horizon < 1:
            raise ValueError(f"horizon must be at least 1, got {horizon}")

        if start_date is None and self.feature_mode == "lag1_calendar":
            start_date = date_type.today() + timedelta(days=1)

        dates = (
            [start_date + timedelta(days=i) for i in range(horizon)]
            if start_date is not None
            else None
        )

        values: list[float] = []
        current = float(seed)
        for step in range(horizon):
            target_date = dates[step] if dates is not None else None
            current = self.predict_step(current, target_date, step)
            values.append(current)

        logger.debug(
            "forecasting.forecast_generated",
            series=self.series,
            seed=seed,
            horizon=horizon,
            model_kind=self.model_kind,
        )

        return ForecastSequence(
            series=self.series or "",
            seed=float(seed),
            values=values,
            dates=dates,
            model_kind=self.model_kind,
        )


def one_step_predictions(
    model: PredictorProtocol,
    values: np.ndarray[Any, np.dtype[np.floating[Any]]] | list[float],
    dates: list[date_type] | None = None,
    feature_mode: FeatureMode = "lag1",
    series: str | None = None,
) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
    """Predict each day from the actual value of the day before.

    Not autoregressive: every input is ground truth. Used to compare a model
    against recent history.

    Args:
        model: One-step predictor.
        values: Actual values in date order.
        dates: Dates of values (required for calendar features).
        feature_mode: Feature layout the model was trained with.
        series: Series name (for error context).

    Returns:
        Array of len(values) - 1 predictions for values[1:].

    Raises:
        PredictionFailure: If the model rejects an input (step index is
            the position of the predicted value).
    """
    actuals = [float(v) for v in values]
    if dates is not None and len(dates) != len(actuals):
        raise ValueError(f"dates and values must have same length: {len(dates)} vs {len(actuals)}")

    forecaster = AutoregressiveForecaster(model, feature_mode=feature_mode, series=series)
    predictions = [
        forecaster.predict_step(actuals[i - 1], dates[i] if dates is not None else None, i)
        for i in range(1, len(actuals))
    ]
    return np.array(predictions, dtype=np.float64)
