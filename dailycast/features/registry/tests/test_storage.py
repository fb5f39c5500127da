"""Tests for the (series, kind) model store."""

import json

import numpy as np
import pytest

from dailycast.core.exceptions import PersistenceError
from dailycast.features.registry.storage import SELECTION_FILE, ModelStore, normalize_series_name
from dailycast.features.training.models import ModelKind


class TestNormalizeSeriesName:
    """Tests for series key validation."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("min", "min"), ("Max", "max"), ("Max Temp", "max_temp"), ("sales-eu", "sales-eu")],
    )
    def test_valid_names(self, name, expected):
        """Test names are lowercased and spaces replaced."""
        assert normalize_series_name(name) == expected

    @pytest.mark.parametrize("name", ["../etc", "a/b", "", "_hidden", "min.max"])
    def test_invalid_names(self, name):
        """Test names that could escape the root are rejected."""
        with pytest.raises(PersistenceError, match="Invalid series name"):
            normalize_series_name(name)


class TestModelStore:
    """Tests for ModelStore save/load."""

    def test_layout(self, store, fitted_linear):
        """Test models are stored as <root>/<series>/<kind>.joblib."""
        path = store.save("min", fitted_linear)

        assert path == store.root_dir / "min" / "linear_regression.joblib"
        assert path.exists()

    def test_save_load_roundtrip(self, store, fitted_linear, sample_metrics):
        """Test a stored model predicts identically after loading."""
        store.save("min", fitted_linear, metrics=sample_metrics, metadata={"n_pairs": 20})

        bundle = store.load("min", ModelKind.LINEAR_REGRESSION)

        assert bundle.model.predict(np.array([[4.0]]))[0] == pytest.approx(5.0)
        assert bundle.metrics == sample_metrics
        assert bundle.metadata == {"n_pairs": 20}

    def test_keys_are_independent(self, store, fitted_linear, fitted_forest):
        """Test the same kind under two series and two kinds under one series."""
        store.save("min", fitted_linear)
        store.save("max", fitted_linear)
        store.save("min", fitted_forest)

        assert store.list_kinds("min") == [ModelKind.LINEAR_REGRESSION, ModelKind.RANDOM_FOREST]
        assert store.list_kinds("max") == [ModelKind.LINEAR_REGRESSION]
        assert not store.exists("max", ModelKind.RANDOM_FOREST)

    def test_overwrite_replaces_model(self, store, fitted_linear):
        """Test saving again under the same key replaces the model."""
        store.save("min", fitted_linear, metadata={"run": 1})
        store.save("min", fitted_linear, metadata={"run": 2})

        assert store.load("min", ModelKind.LINEAR_REGRESSION).metadata == {"run": 2}

    def test_load_missing_raises(self, store):
        """Test loading an absent key raises PersistenceError."""
        with pytest.raises(PersistenceError, match="not found"):
            store.load("min", ModelKind.RANDOM_FOREST)

    def test_load_kind_mismatch_raises(self, store, fitted_linear):
        """Test a bundle under the wrong kind file is rejected."""
        path = store.save("min", fitted_linear)
        path.rename(store.model_path("min", ModelKind.RANDOM_FOREST))

        with pytest.raises(PersistenceError, match="holds a linear_regression model"):
            store.load("min", ModelKind.RANDOM_FOREST)

    def test_default_root_from_settings(self):
        """Test the root defaults to Settings.model_store_dir."""
        assert str(ModelStore().root_dir) == "model"


class TestSelection:
    """Tests for the selection manifest."""

    def test_save_and_load_selection(self, store, sample_metrics):
        """Test the selected kind round-trips through the manifest."""
        path = store.save_selection("max", ModelKind.SUPPORT_VECTOR_REGRESSION, sample_metrics)

        assert path.name == SELECTION_FILE
        manifest = json.loads(path.read_text(encoding="utf-8"))
        assert manifest["model_kind"] == "support_vector_regression"
        assert manifest["model_name"] == "Support Vector Regression"
        assert manifest["metrics"]["rmse"] == 0.8
        assert store.load_selection("max") == ModelKind.SUPPORT_VECTOR_REGRESSION

    def test_missing_selection_is_none(self, store):
        """Test a series never trained has no selection."""
        assert store.load_selection("min") is None

    def test_corrupt_selection_raises(self, store):
        """Test an unreadable manifest raises PersistenceError."""
        path = store.series_dir("min") / SELECTION_FILE
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError, match="Corrupt selection manifest"):
            store.load_selection("min")

    def test_load_best_uses_selection(self, store, fitted_linear, fitted_forest):
        """Test load_best returns the selected kind."""
        store.save("min", fitted_linear)
        store.save("min", fitted_forest)
        store.save_selection("min", ModelKind.LINEAR_REGRESSION)

        assert store.load_best("min").kind == ModelKind.LINEAR_REGRESSION

    def test_load_best_falls_back_to_default(self, store, fitted_linear, fitted_forest):
        """Test a missing selection falls back to random forest."""
        store.save("min", fitted_linear)
        store.save("min", fitted_forest)

        assert store.load_best("min").kind == ModelKind.RANDOM_FOREST
        assert (
            store.load_best("min", default_kind=ModelKind.LINEAR_REGRESSION).kind
            == ModelKind.LINEAR_REGRESSION
        )
