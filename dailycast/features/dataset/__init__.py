"""Dataset module: CSV loading and training pair construction.

Exports:
    Schemas:
        - Observation, SeriesObservations, TrainingSet, FeatureMode

    Loading:
        - read_series: CSV file -> one SeriesObservations per value column
        - parse_row, parse_date, parse_value

    Building:
        - build_training_set: observations -> (current, next) pairs
        - feature_row: feature vector shared with the forecaster
"""

from dailycast.features.dataset.builder import build_training_set, feature_row
from dailycast.features.dataset.loader import parse_date, parse_row, parse_value, read_series
from dailycast.features.dataset.schemas import (
    FEATURE_NAMES,
    MIN_TRAINING_PAIRS,
    FeatureMode,
    Observation,
    SeriesObservations,
    TrainingSet,
)

__all__ = [
    "FEATURE_NAMES",
    "MIN_TRAINING_PAIRS",
    "FeatureMode",
    "Observation",
    "SeriesObservations",
    "TrainingSet",
    "build_training_set",
    "feature_row",
    "parse_date",
    "parse_row",
    "parse_value",
    "read_series",
]
