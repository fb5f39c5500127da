"""File-system model store keyed by (series, model kind).

Layout under the store root:

    <root>/<series>/<kind>.joblib      one bundle per trained candidate
    <root>/<series>/selection.json     kind selected by the last training run

CRITICAL: Series names are validated so keys cannot escape the root.
A single writer per key is assumed; training runs are sequential.
"""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dailycast.core.config import get_settings
from dailycast.core.exceptions import PersistenceError
from dailycast.core.logging import get_logger
from dailycast.features.registry.persistence import (
    BUNDLE_SUFFIX,
    ModelBundle,
    load_model_bundle,
    save_model_bundle,
)
from dailycast.features.training.models import ModelKind

if TYPE_CHECKING:
    from dailycast.features.training.models import CandidateModel
    from dailycast.features.training.schemas import ModelMetrics

logger = get_logger(__name__)

SELECTION_FILE = "selection.json"
_SERIES_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def normalize_series_name(series: str) -> str:
    """Normalize a series name into a store key.

    Args:
        series: Series name such as "min" or "Max Temp".

    Returns:
        Lowercase key with spaces replaced by underscores.

    Raises:
        PersistenceError: If the name contains path separators or other
            characters outside [a-z0-9_-].
    """
    key = series.strip().lower().replace(" ", "_")
    if not _SERIES_PATTERN.match(key):
        logger.warning("registry.invalid_series_key", series=series)
        raise PersistenceError(
            f"Invalid series name for model store: {series!r}", operation="resolve"
        )
    return key


class ModelStore:
    """Persist and retrieve trained models by (series, kind)."""

    def __init__(self, root_dir: Path | str | None = None) -> None:
        """Initialize with root directory.

        Args:
            root_dir: Root directory for models. Defaults to Settings value.
        """
        if root_dir is None:
            root_dir = get_settings().model_store_dir
        self.root_dir = Path(root_dir)

    def series_key(self, series: str) -> str:
        """Store key of a series; names differing only in case share a key."""
        return normalize_series_name(series)

    def series_dir(self, series: str) -> Path:
        """Directory holding all models of a series."""
        return self.root_dir / self.series_key(series)

    def model_path(self, series: str, kind: ModelKind) -> Path:
        """Path of the bundle for (series, kind)."""
        return self.series_dir(series) / f"{kind.value}{BUNDLE_SUFFIX}"

    def exists(self, series: str, kind: ModelKind) -> bool:
        """Check whether a model is stored for (series, kind)."""
        return self.model_path(series, kind).exists()

    def list_kinds(self, series: str) -> list[ModelKind]:
        """List stored model kinds of a series in registration order."""
        return [kind for kind in ModelKind if self.exists(series, kind)]

    def save(
        self,
        series: str,
        model: CandidateModel,
        metrics: ModelMetrics | None = None,
        metadata: dict[str, object] | None = None,
    ) -> Path:
        """Persist a fitted model under (series, model.kind).

        Args:
            series: Series the model was trained on.
            model: Fitted candidate.
            metrics: Cross-validation metrics.
            metadata: Extra metadata stored in the bundle.

        Returns:
            Path of the written bundle.

        Raises:
            PersistenceError: If the bundle cannot be written.
        """
        bundle = ModelBundle(
            model=model,
            series=normalize_series_name(series),
            metrics=metrics,
            metadata=dict(metadata or {}),
        )
        return save_model_bundle(bundle, self.model_path(series, model.kind))

    def load(self, series: str, kind: ModelKind) -> ModelBundle:
        """Load the bundle stored for (series, kind).

        Raises:
            PersistenceError: If missing or unreadable.
        """
        bundle = load_model_bundle(self.model_path(series, kind))
        if bundle.kind != kind:
            raise PersistenceError(
                f"Bundle at {self.model_path(series, kind)} holds a {bundle.kind.value} model",
                path=str(self.model_path(series, kind)),
                operation="load",
            )
        return bundle

    def save_selection(
        self, series: str, kind: ModelKind, metrics: ModelMetrics | None = None
    ) -> Path:
        """Record which kind won the last training run of a series.

        Args:
            series: Series name.
            kind: Selected model kind.
            metrics: Metrics of the selected model.

        Returns:
            Path of the selection manifest.

        Raises:
            PersistenceError: If the manifest cannot be written.
        """
        path = self.series_dir(series) / SELECTION_FILE
        manifest: dict[str, Any] = {
            "series": normalize_series_name(series),
            "model_kind": kind.value,
            "model_name": kind.display_name,
            "selected_at": datetime.now(UTC).isoformat(),
            "metrics": metrics.to_dict() if metrics else None,
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(manifest, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(
                f"Unable to write selection manifest {path}: {e}",
                path=str(path),
                operation="save",
            ) from e

        logger.info("registry.selection_saved", series=manifest["series"], model_kind=kind.value)
        return path

    def load_selection(self, series: str) -> ModelKind | None:
        """Return the kind selected by the last training run, if recorded.

        Raises:
            PersistenceError: If the manifest exists but is unreadable.
        """
        path = self.series_dir(series) / SELECTION_FILE
        if not path.exists():
            return None
        try:
            manifest = json.loads(path.read_text(encoding="utf-8"))
            return ModelKind.parse(manifest["model_kind"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Corrupt selection manifest {path}: {e}", path=str(path), operation="load"
            ) from e

    def load_best(self, series: str, default_kind: ModelKind | None = None) -> ModelBundle:
        """Load the selected model of a series.

        Falls back to default_kind (Settings.default_model_kind when None)
        when no selection has been recorded.

        Raises:
            PersistenceError: If the model is missing or unreadable.
        """
        kind = self.load_selection(series)
        if kind is None:
            kind = default_kind or ModelKind.parse(get_settings().default_model_kind)
            logger.info(
                "registry.selection_missing",
                series=series,
                fallback_kind=kind.value,
            )
        return self.load(series, kind)
