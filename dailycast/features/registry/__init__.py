"""Model store: persisted candidate models keyed by (series, model kind).

Exports:
    - ModelBundle: Container for model + metrics + metadata
    - save_model_bundle, load_model_bundle: joblib serialization
    - ModelStore: (series, kind) keyed store with selection manifests
"""

from dailycast.features.registry.persistence import (
    ModelBundle,
    load_model_bundle,
    save_model_bundle,
)
from dailycast.features.registry.storage import ModelStore, normalize_series_name

__all__ = [
    "ModelBundle",
    "ModelStore",
    "load_model_bundle",
    "normalize_series_name",
    "save_model_bundle",
]
