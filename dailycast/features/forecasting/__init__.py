"""Forecasting module: recursive multi-step forecasts from one-step models.

Exports:
    - AutoregressiveForecaster: Feeds each prediction back as the next input
    - PredictorProtocol: Anything with predict(X)
    - one_step_predictions: Predictions from actual previous values
    - ForecastSequence: Ordered forecast result
    - ForecastingService: Loads stored models and forecasts
"""

from dailycast.features.forecasting.forecaster import (
    AutoregressiveForecaster,
    PredictorProtocol,
    one_step_predictions,
)
from dailycast.features.forecasting.schemas import ForecastSequence
from dailycast.features.forecasting.service import ForecastingService

__all__ = [
    "AutoregressiveForecaster",
    "ForecastSequence",
    "ForecastingService",
    "PredictorProtocol",
    "one_step_predictions",
]
