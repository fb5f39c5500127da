"""Training service: fit, cross-validate, persist and select per series.

Orchestrates:
- Building training pairs from CSV observations
- Fitting every candidate of the roster on all pairs
- Cross-validating each candidate (k-fold, fixed seed)
- Persisting every successful candidate to the model store
- Selecting and recording the best model of each series

CRITICAL: Candidates are evaluated in registration order; ties keep the
earlier candidate.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from dailycast.core.config import get_settings
from dailycast.core.exceptions import PersistenceError, TrainingFailure
from dailycast.core.logging import get_logger
from dailycast.features.dataset.builder import build_training_set
from dailycast.features.dataset.loader import read_series
from dailycast.features.dataset.schemas import FeatureMode, TrainingSet
from dailycast.features.training.evaluation import cross_validate, select_best
from dailycast.features.training.models import CANDIDATE_ROSTER, ModelKind, create_candidate
from dailycast.features.training.schemas import (
    CandidateResult,
    ModelMetrics,
    SelectionResult,
    TrainingReport,
)

if TYPE_CHECKING:
    from dailycast.features.training.models import CandidateModel

logger = get_logger(__name__)


@runtime_checkable
class ModelStoreProtocol(Protocol):
    """Write side of the model store used during training."""

    def series_key(self, series: str) -> str:
        """Store key a series name resolves to."""
        ...

    def save(
        self,
        series: str,
        model: CandidateModel,
        metrics: ModelMetrics | None = None,
        metadata: dict[str, object] | None = None,
    ) -> Path:
        """Persist a fitted model under (series, model.kind)."""
        ...

    def save_selection(
        self, series: str, kind: ModelKind, metrics: ModelMetrics | None = None
    ) -> Path:
        """Record the selected kind of a series."""
        ...


class TrainingService:
    """Service for training candidate models and selecting the best one.

    CRITICAL: All operations use Settings for reproducibility.
    """

    def __init__(
        self,
        store: ModelStoreProtocol,
        roster: Sequence[ModelKind] = CANDIDATE_ROSTER,
        n_folds: int | None = None,
        cv_random_seed: int | None = None,
        random_state: int | None = None,
    ) -> None:
        """Initialize the training service.

        Args:
            store: Model store receiving every trained candidate.
            roster: Candidate kinds in registration order.
            n_folds: CV folds (default: Settings.cv_folds).
            cv_random_seed: CV shuffle seed (default: Settings.cv_random_seed).
            random_state: Estimator seed (default: Settings.model_random_state).
        """
        settings = get_settings()
        self.store = store
        self.roster = tuple(roster)
        self.n_folds = n_folds if n_folds is not None else settings.cv_folds
        self.cv_random_seed = (
            cv_random_seed if cv_random_seed is not None else settings.cv_random_seed
        )
        self.random_state = (
            random_state if random_state is not None else settings.model_random_state
        )

    def train_candidate(self, kind: ModelKind, training_set: TrainingSet) -> CandidateResult:
        """Fit and cross-validate one candidate, then persist it.

        Fit or evaluation failures exclude the candidate instead of raising.
        A candidate that fitted but could not be scored is still persisted;
        it is only excluded from selection.

        Args:
            kind: Candidate kind.
            training_set: Pairs of one series.

        Returns:
            CandidateResult (with error set when excluded).

        Raises:
            PersistenceError: If the fitted model cannot be written.
        """
        series = training_set.series
        model = create_candidate(
            kind, feature_mode=training_set.feature_mode, random_state=self.random_state
        )

        try:
            model.fit(training_set.X, training_set.y)
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as e:
            logger.warning(
                "training.candidate_failed",
                series=series,
                model_kind=kind.value,
                stage="fit",
                error=str(e),
            )
            return CandidateResult(kind=kind, model=None, error=str(e))

        try:
            metrics = cross_validate(
                model,
                training_set,
                n_folds=self.n_folds,
                random_state=self.cv_random_seed,
            )
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as e:
            logger.warning(
                "training.candidate_failed",
                series=series,
                model_kind=kind.value,
                stage="cross_validation",
                error=str(e),
            )
            model_path = self._persist(model, training_set, metrics=None)
            return CandidateResult(kind=kind, model=model, error=str(e), model_path=model_path)

        if not metrics.is_scorable:
            logger.warning(
                "training.candidate_unscorable",
                series=series,
                model_kind=kind.value,
                metric_warnings=list(metrics.warnings),
                **metrics.to_dict(),
            )
            model_path = self._persist(model, training_set, metrics=metrics)
            return CandidateResult(
                kind=kind,
                model=model,
                metrics=metrics,
                error="Composite score is not finite",
                model_path=model_path,
            )

        logger.info(
            "training.candidate_evaluated",
            series=series,
            model_kind=kind.value,
            model_name=kind.display_name,
            metric_warnings=list(metrics.warnings),
            **metrics.to_dict(),
        )

        model_path = self._persist(model, training_set, metrics=metrics)
        return CandidateResult(kind=kind, model=model, metrics=metrics, model_path=model_path)

    def _persist(
        self,
        model: CandidateModel,
        training_set: TrainingSet,
        metrics: ModelMetrics | None,
    ) -> Path:
        return self.store.save(
            training_set.series,
            model,
            metrics=metrics,
            metadata={
                "n_pairs": training_set.n_pairs,
                "feature_mode": training_set.feature_mode,
                "train_start_date": str(training_set.target_dates[0]),
                "train_end_date": str(training_set.target_dates[-1]),
            },
        )

    def train_series(self, training_set: TrainingSet) -> SelectionResult:
        """Train every roster candidate on one series and select the best.

        Args:
            training_set: Pairs of one series.

        Returns:
            SelectionResult with the best model and all candidates.

        Raises:
            TrainingFailure: If the series is untrainable or every candidate failed.
            PersistenceError: If a model or the selection cannot be written.
        """
        start_time = time.perf_counter()
        series = training_set.series

        logger.info(
            "training.series_started",
            series=series,
            n_pairs=training_set.n_pairs,
            feature_mode=training_set.feature_mode,
            roster=[kind.value for kind in self.roster],
        )

        if not training_set.is_trainable:
            raise TrainingFailure(
                f"Series '{series}' has {training_set.n_pairs} training pairs; "
                "at least 2 are required",
                series=series,
                errors={"dataset": "untrainable"},
            )

        candidates = [self.train_candidate(kind, training_set) for kind in self.roster]
        best = select_best(series, candidates)
        self.store.save_selection(series, best.kind, best.metrics)

        duration_ms = (time.perf_counter() - start_time) * 1000
        result = SelectionResult(series=series, best=best, candidates=candidates)

        logger.info(
            "training.best_model_selected",
            series=series,
            model_kind=best.kind.value,
            model_name=best.kind.display_name,
            composite_score=result.best_metrics.composite_score,
            excluded=[c.kind.value for c in result.excluded],
            duration_ms=duration_ms,
        )

        return result

    def train_file(
        self,
        path: str | Path,
        series_names: list[str] | None = None,
        feature_mode: FeatureMode | None = None,
    ) -> TrainingReport:
        """Train every requested series of a CSV file independently.

        A failure of one series is recorded and does not stop the others.
        Two series resolving to the same store key (e.g. "Sales" and
        "sales") would overwrite each other's models, so only the first is
        trained and the later one is recorded as a PersistenceError.

        Args:
            path: CSV file with a date column and one column per series.
            series_names: Columns to train (default: all value columns).
            feature_mode: Feature layout (default: Settings.feature_mode).

        Returns:
            TrainingReport with results and per-series failures.

        Raises:
            DataFormatError: If the file cannot be read.
        """
        mode: FeatureMode = feature_mode or get_settings().feature_mode
        all_series = read_series(path, columns=series_names)
        report = TrainingReport()
        claimed_keys: dict[str, str] = {}

        for name, observations in all_series.items():
            training_set = build_training_set(observations, feature_mode=mode)
            try:
                key = self.store.series_key(name)
                if key in claimed_keys:
                    raise PersistenceError(
                        f"Series '{name}' maps to store key '{key}', "
                        f"already used by series '{claimed_keys[key]}'",
                        path=key,
                        operation="resolve",
                    )
                claimed_keys[key] = name
                report.results[name] = self.train_series(training_set)
            except (TrainingFailure, PersistenceError) as e:
                logger.error(
                    "training.series_failed",
                    series=name,
                    error_code=e.code,
                    error=e.message,
                    details=e.details,
                )
                report.failures[name] = e

        return report
