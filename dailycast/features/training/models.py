"""Candidate regression models behind one fit/predict interface.

The roster is a closed set of model kinds. Each CandidateModel wraps a
scikit-learn estimator and follows scikit-learn conventions:
- fit(X, y) -> self
- predict(X) -> np.ndarray
- get_params() -> dict

CRITICAL: All randomized estimators use a fixed random_state.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np
from sklearn.base import BaseEstimator, clone  # type: ignore[import-untyped]
from sklearn.ensemble import RandomForestRegressor  # type: ignore[import-untyped]
from sklearn.linear_model import LinearRegression  # type: ignore[import-untyped]
from sklearn.pipeline import make_pipeline  # type: ignore[import-untyped]
from sklearn.preprocessing import StandardScaler  # type: ignore[import-untyped]
from sklearn.svm import SVR  # type: ignore[import-untyped]

from dailycast.features.dataset.schemas import FeatureMode


class ModelKind(str, Enum):
    """Closed set of candidate model kinds.

    Values are the file slugs used as model store keys.
    """

    LINEAR_REGRESSION = "linear_regression"
    RANDOM_FOREST = "random_forest"
    SUPPORT_VECTOR_REGRESSION = "support_vector_regression"

    @property
    def display_name(self) -> str:
        """Human-readable model name."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: str | ModelKind) -> ModelKind:
        """Resolve a slug or display name to a ModelKind.

        Args:
            value: "random_forest", "Random Forest" or a ModelKind.

        Returns:
            Matching ModelKind.

        Raises:
            ValueError: If no kind matches.
        """
        if isinstance(value, ModelKind):
            return value
        slug = value.strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(slug)
        except ValueError:
            valid = [kind.value for kind in cls]
            raise ValueError(f"Unknown model kind '{value}'. Valid kinds: {valid}") from None


_DISPLAY_NAMES: dict[ModelKind, str] = {
    ModelKind.LINEAR_REGRESSION: "Linear Regression",
    ModelKind.RANDOM_FOREST: "Random Forest",
    ModelKind.SUPPORT_VECTOR_REGRESSION: "Support Vector Regression",
}

# Registration order; also the tie-break order during selection
CANDIDATE_ROSTER: tuple[ModelKind, ...] = (
    ModelKind.LINEAR_REGRESSION,
    ModelKind.RANDOM_FOREST,
    ModelKind.SUPPORT_VECTOR_REGRESSION,
)


def build_estimator(kind: ModelKind, random_state: int = 42) -> BaseEstimator:
    """Create an unfitted scikit-learn estimator for a model kind.

    SVR is wrapped with feature standardization since it is scale sensitive.

    Args:
        kind: Model kind.
        random_state: Seed for randomized estimators.

    Returns:
        Unfitted estimator.

    Raises:
        ValueError: If kind is unknown.
    """
    if kind == ModelKind.LINEAR_REGRESSION:
        return LinearRegression()
    elif kind == ModelKind.RANDOM_FOREST:
        return RandomForestRegressor(n_estimators=100, random_state=random_state)
    elif kind == ModelKind.SUPPORT_VECTOR_REGRESSION:
        return make_pipeline(StandardScaler(), SVR(kernel="rbf", C=1.0, epsilon=0.1))
    else:
        raise ValueError(f"Unknown model kind: {kind}")


class CandidateModel:
    """A named regressor trained on the pairs of one series.

    Attributes:
        kind: Model kind.
        estimator: Wrapped scikit-learn estimator.
        feature_mode: Feature layout the model expects.
        random_state: Random seed for reproducibility.
    """

    def __init__(
        self,
        kind: ModelKind,
        estimator: BaseEstimator,
        feature_mode: FeatureMode = "lag1",
        random_state: int = 42,
    ) -> None:
        """Initialize the candidate.

        Args:
            kind: Model kind.
            estimator: Unfitted scikit-learn estimator.
            feature_mode: Feature layout the model expects.
            random_state: Random seed for reproducibility.
        """
        self.kind = kind
        self.estimator = estimator
        self.feature_mode = feature_mode
        self.random_state = random_state
        self._is_fitted = False
        self.n_training_pairs = 0

    @property
    def name(self) -> str:
        """Display name of the model kind."""
        return self.kind.display_name

    @property
    def is_fitted(self) -> bool:
        """Check if the model has been fitted."""
        return self._is_fitted

    def fit(
        self,
        X: np.ndarray[Any, np.dtype[np.floating[Any]]],
        y: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> CandidateModel:
        """Fit the wrapped estimator on all training pairs.

        Args:
            X: Feature matrix [n_pairs, n_features].
            y: Next values [n_pairs].

        Returns:
            self (for method chaining).

        Raises:
            ValueError: If there is nothing to fit or data is not finite.
        """
        if len(y) == 0:
            raise ValueError("Cannot fit on empty training set")
        if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
            raise ValueError("Training data contains non-finite values")
        self.estimator.fit(X, y)
        self.n_training_pairs = len(y)
        self._is_fitted = True
        return self

    def predict(
        self, X: np.ndarray[Any, np.dtype[np.floating[Any]]]
    ) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
        """Predict next values for each feature row.

        Args:
            X: Feature matrix [n_rows, n_features].

        Returns:
            Predictions of shape [n_rows].

        Raises:
            RuntimeError: If model has not been fitted.
        """
        if not self._is_fitted:
            raise RuntimeError("Model must be fitted before predict")
        return np.asarray(self.estimator.predict(X), dtype=np.float64)

    def unfitted_copy(self) -> BaseEstimator:
        """Fresh unfitted estimator with the same parameters (for CV folds)."""
        return clone(self.estimator)

    def get_params(self) -> dict[str, Any]:
        """Get model parameters (scikit-learn convention).

        Returns:
            Dictionary with kind, feature_mode, random_state and the
            estimator's top-level parameters.
        """
        return {
            "kind": self.kind.value,
            "feature_mode": self.feature_mode,
            "random_state": self.random_state,
            "estimator": self.estimator.get_params(deep=False),
        }


def create_candidate(
    kind: ModelKind,
    feature_mode: FeatureMode = "lag1",
    random_state: int = 42,
) -> CandidateModel:
    """Create an unfitted candidate for a model kind.

    Args:
        kind: Model kind.
        feature_mode: Feature layout the model will be trained on.
        random_state: Seed for randomized estimators.

    Returns:
        Unfitted CandidateModel.
    """
    return CandidateModel(
        kind=kind,
        estimator=build_estimator(kind, random_state=random_state),
        feature_mode=feature_mode,
        random_state=random_state,
    )
