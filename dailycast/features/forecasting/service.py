"""Forecasting service: load stored models and run recursive forecasts.

Orchestrates:
- Resolving the model of a series (selected kind, or an explicit kind)
- Validating horizons against Settings
- Running the AutoregressiveForecaster
"""

from __future__ import annotations

import time
from datetime import date as date_type

from dailycast.core.config import get_settings
from dailycast.core.logging import get_logger
from dailycast.features.forecasting.forecaster import AutoregressiveForecaster
from dailycast.features.forecasting.schemas import ForecastSequence
from dailycast.features.registry.storage import ModelStore
from dailycast.features.training.models import ModelKind

logger = get_logger(__name__)


class ForecastingService:
    """Service for generating forecasts from stored models.

    CRITICAL: Models are loaded on every call so a forecast always uses the
    latest training run.
    """

    def __init__(self, store: ModelStore | None = None) -> None:
        """Initialize the forecasting service.

        Args:
            store: Model store to load from (default: Settings.model_store_dir).
        """
        self.store = store or ModelStore()
        self.settings = get_settings()

    def get_forecaster(
        self, series: str, kind: ModelKind | str | None = None
    ) -> AutoregressiveForecaster:
        """Build a forecaster around the stored model of a series.

        Args:
            series: Series name.
            kind: Explicit model kind; None loads the selected model.

        Returns:
            Forecaster bound to the loaded model.

        Raises:
            PersistenceError: If the model is missing or unreadable.
            ValueError: If kind is not a known model kind.
        """
        if kind is None:
            bundle = self.store.load_best(series)
        else:
            bundle = self.store.load(series, ModelKind.parse(kind))

        return AutoregressiveForecaster(
            bundle.model,
            feature_mode=bundle.feature_mode,
            series=series,
            model_kind=bundle.kind.value,
        )

    def forecast_series(
        self,
        series: str,
        seed: float,
        horizon: int | None = None,
        kind: ModelKind | str | None = None,
        start_date: date_type | None = None,
    ) -> ForecastSequence:
        """Forecast a series from a seed value.

        Args:
            series: Series name.
            seed: Last known value.
            horizon: Number of steps (default: Settings.forecast_default_horizon).
            kind: Explicit model kind; None uses the selected model.
            start_date: Date of the first predicted step.

        Returns:
            ForecastSequence of `horizon` values.

        Raises:
            ValueError: If horizon is outside [1, forecast_max_horizon].
            PersistenceError: If the model cannot be loaded.
            PredictionFailure: If any step fails.
        """
        start_time = time.perf_counter()
        horizon = horizon if horizon is not None else self.settings.forecast_default_horizon

        if horizon < 1:
            raise ValueError(f"horizon must be at least 1, got {horizon}")
        if horizon > self.settings.forecast_max_horizon:
            raise ValueError(
                f"horizon {horizon} exceeds forecast_max_horizon "
                f"({self.settings.forecast_max_horizon})"
            )

        forecaster = self.get_forecaster(series, kind)
        result = forecaster.forecast(seed, horizon, start_date=start_date)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "forecasting.forecast_completed",
            series=series,
            model_kind=result.model_kind,
            seed=seed,
            horizon=horizon,
            first_value=result.values[0],
            last_value=result.values[-1],
            duration_ms=duration_ms,
        )

        return result
