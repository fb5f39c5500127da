"""Core infrastructure: config, logging, exceptions."""

from dailycast.core.config import Settings, get_settings
from dailycast.core.exceptions import (
    DailycastError,
    DataFormatError,
    PersistenceError,
    PredictionFailure,
    TrainingFailure,
)
from dailycast.core.logging import configure_logging, get_logger, run_id_ctx

__all__ = [
    "DailycastError",
    "DataFormatError",
    "PersistenceError",
    "PredictionFailure",
    "Settings",
    "TrainingFailure",
    "configure_logging",
    "get_logger",
    "get_settings",
    "run_id_ctx",
]
