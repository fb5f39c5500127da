"""Training module: candidate regressors, cross-validation and selection.

Exports:
    Models:
        - ModelKind: Closed set of candidate kinds
        - CANDIDATE_ROSTER: Registration (and tie-break) order
        - CandidateModel, create_candidate, build_estimator

    Evaluation:
        - MetricsCalculator, MetricResult
        - cross_validate: k-fold metrics with a fixed seed
        - select_best: lowest composite score, earliest on ties

    Schemas:
        - ModelMetrics, CandidateResult, SelectionResult, TrainingReport
        - composite_score

    Service:
        - TrainingService: Orchestration layer for training runs
"""

from dailycast.features.training.evaluation import cross_validate, select_best
from dailycast.features.training.metrics import MetricResult, MetricsCalculator
from dailycast.features.training.models import (
    CANDIDATE_ROSTER,
    CandidateModel,
    ModelKind,
    build_estimator,
    create_candidate,
)
from dailycast.features.training.schemas import (
    CandidateResult,
    ModelMetrics,
    SelectionResult,
    TrainingReport,
    composite_score,
)
from dailycast.features.training.service import ModelStoreProtocol, TrainingService

__all__ = [
    "CANDIDATE_ROSTER",
    "CandidateModel",
    "CandidateResult",
    "MetricResult",
    "MetricsCalculator",
    "ModelKind",
    "ModelMetrics",
    "ModelStoreProtocol",
    "SelectionResult",
    "TrainingReport",
    "TrainingService",
    "build_estimator",
    "composite_score",
    "create_candidate",
    "cross_validate",
    "select_best",
]
