"""Model persistence layer using joblib serialization.

Provides ModelBundle container for storing model + metrics + metadata,
and save/load functions with version compatibility warnings.

CRITICAL: Models saved with one Python/sklearn version may not load in another.
"""

from __future__ import annotations

import hashlib
import json
import pickle
import sys
import zlib
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import joblib  # type: ignore[import-untyped]
import sklearn  # type: ignore[import-untyped]

from dailycast.core.exceptions import PersistenceError
from dailycast.core.logging import get_logger

if TYPE_CHECKING:
    from dailycast.features.dataset.schemas import FeatureMode
    from dailycast.features.training.models import CandidateModel, ModelKind
    from dailycast.features.training.schemas import ModelMetrics

logger = get_logger(__name__)

BUNDLE_SUFFIX = ".joblib"


@dataclass
class ModelBundle:
    """Bundle containing a fitted model, its metrics and metadata.

    CRITICAL: Includes version info for compatibility checking.

    Attributes:
        model: The fitted candidate model.
        series: Series the model was trained on.
        metrics: Cross-validation metrics (None if not evaluated).
        metadata: Additional metadata (e.g., n_pairs, train dates).
        created_at: Timestamp when bundle was created.
        python_version: Python version used when saving.
        sklearn_version: Scikit-learn version used when saving.
        bundle_hash: Deterministic hash of bundle contents.
    """

    model: CandidateModel
    series: str
    metrics: ModelMetrics | None = None
    metadata: dict[str, object] = field(default_factory=lambda: {})

    # Auto-populated on save
    created_at: datetime | None = None
    python_version: str | None = None
    sklearn_version: str | None = None
    bundle_hash: str | None = None

    @property
    def kind(self) -> ModelKind:
        """Kind of the bundled model."""
        return self.model.kind

    @property
    def feature_mode(self) -> FeatureMode:
        """Feature layout the bundled model expects."""
        return self.model.feature_mode

    def compute_hash(self) -> str:
        """Compute deterministic hash of bundle contents.

        Returns:
            16-character hex string hash.
        """
        content = {
            "series": self.series,
            "model_params": self.model.get_params(),
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "metadata": self.metadata,
        }
        return hashlib.sha256(
            json.dumps(content, sort_keys=True, default=str).encode()
        ).hexdigest()[:16]


def save_model_bundle(bundle: ModelBundle, path: str | Path) -> Path:
    """Save model bundle to disk using joblib.

    CRITICAL: Records Python and sklearn versions for compatibility warnings.

    Args:
        bundle: ModelBundle to save.
        path: File path (will add .joblib extension if missing).

    Returns:
        Path to saved file.

    Raises:
        PersistenceError: If unable to create directory or write file.
    """
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(BUNDLE_SUFFIX)

    bundle.created_at = datetime.now(UTC)
    bundle.python_version = sys.version
    bundle.sklearn_version = sklearn.__version__
    bundle.bundle_hash = bundle.compute_hash()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(bundle, path, compress=3)  # pyright: ignore[reportUnknownMemberType]
    except OSError as e:
        logger.error("registry.model_bundle_save_failed", path=str(path), error=str(e))
        raise PersistenceError(
            f"Unable to write model bundle {path}: {e}", path=str(path), operation="save"
        ) from e

    logger.info(
        "registry.model_bundle_saved",
        path=str(path),
        series=bundle.series,
        model_kind=bundle.kind.value,
        bundle_hash=bundle.bundle_hash,
        sklearn_version=bundle.sklearn_version,
    )

    return path


def load_model_bundle(path: str | Path) -> ModelBundle:
    """Load model bundle from disk.

    CRITICAL: Logs warning if versions don't match.

    Args:
        path: Path to saved bundle.

    Returns:
        Loaded ModelBundle.

    Raises:
        PersistenceError: If the file is missing, unreadable, corrupt or not
            a ModelBundle.
    """
    path = Path(path)

    if not path.exists():
        raise PersistenceError(f"Model bundle not found: {path}", path=str(path), operation="load")

    try:
        bundle = joblib.load(path)  # pyright: ignore[reportUnknownMemberType]
    except (
        OSError,
        EOFError,
        ValueError,
        TypeError,
        KeyError,
        IndexError,
        AttributeError,
        ImportError,
        pickle.UnpicklingError,
        zlib.error,
    ) as e:
        logger.error("registry.model_bundle_load_failed", path=str(path), error=str(e))
        raise PersistenceError(
            f"Unable to read model bundle {path}: {e}", path=str(path), operation="load"
        ) from e

    if not isinstance(bundle, ModelBundle):
        raise PersistenceError(
            f"File {path} does not contain a model bundle", path=str(path), operation="load"
        )

    # Version compatibility warnings
    current_python_major_minor = f"{sys.version_info.major}.{sys.version_info.minor}"
    if bundle.python_version:
        saved_python_major_minor = bundle.python_version.split()[0].rsplit(".", 1)[0]
        if saved_python_major_minor != current_python_major_minor:
            logger.warning(
                "registry.python_version_mismatch",
                saved_python=bundle.python_version,
                current_python=sys.version,
            )

    if bundle.sklearn_version and bundle.sklearn_version != sklearn.__version__:
        logger.warning(
            "registry.sklearn_version_mismatch",
            saved_sklearn=bundle.sklearn_version,
            current_sklearn=sklearn.__version__,
        )

    logger.info(
        "registry.model_bundle_loaded",
        path=str(path),
        series=bundle.series,
        model_kind=bundle.kind.value,
        bundle_hash=bundle.bundle_hash,
    )

    return bundle
