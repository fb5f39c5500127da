"""Tests for chart export."""

import pytest

from dailycast.core.exceptions import PersistenceError
from dailycast.features.charting.chart import save_comparison_chart
from dailycast.features.charting.service import PlottingService, series_label
from dailycast.features.registry.storage import ModelStore


class TestSaveComparisonChart:
    """Tests for save_comparison_chart."""

    def test_writes_png_of_requested_size(self, tmp_path, png_size):
        """Test a 1000x600 PNG is written."""
        path = save_comparison_chart(
            actual=[10.0, 11.0, 12.0, 11.5],
            predicted=[10.8, 11.9, 12.2],
            title="Last 4 Days - Minimum Temperature: Actual vs Predicted",
            x_label="Days",
            y_label="Temperature (°C)",
            path=tmp_path / "plots" / "min_comparison.png",
        )

        assert path.exists()
        assert png_size(path) == (1000, 600)

    def test_custom_size(self, tmp_path, png_size):
        """Test width and height are honored."""
        path = save_comparison_chart(
            [1.0, 2.0], [2.0, 3.0], "t", "x", "y", tmp_path / "c.png", width_px=400, height_px=300
        )

        assert png_size(path) == (400, 300)

    def test_actual_only(self, tmp_path):
        """Test a chart without predictions is still written."""
        path = save_comparison_chart([1.0], [], "t", "x", "y", tmp_path / "single.png")

        assert path.exists()

    def test_empty_actual_rejected(self, tmp_path):
        """Test an empty series cannot be charted."""
        with pytest.raises(ValueError, match="empty"):
            save_comparison_chart([], [], "t", "x", "y", tmp_path / "empty.png")

    def test_too_many_predictions_rejected(self, tmp_path):
        """Test predictions cannot outnumber actual values."""
        with pytest.raises(ValueError, match="More predictions"):
            save_comparison_chart([1.0], [1.0, 2.0], "t", "x", "y", tmp_path / "bad.png")

    def test_unwritable_path(self, tmp_path):
        """Test write failures raise PersistenceError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(PersistenceError):
            save_comparison_chart([1.0, 2.0], [2.0], "t", "x", "y", blocker / "c.png")


class TestPlottingService:
    """Tests for PlottingService.plot_recent."""

    def test_writes_one_chart_per_series(self, trained_store, temperature_csv, tmp_path):
        """Test min and max charts are written to the output directory."""
        service = PlottingService(trained_store)

        paths = service.plot_recent(temperature_csv, output_dir=tmp_path / "plots")

        assert [p.name for p in paths] == ["min_comparison.png", "max_comparison.png"]
        assert all(p.exists() for p in paths)

    def test_series_subset_and_window(self, trained_store, temperature_csv, tmp_path):
        """Test a single series with a custom window."""
        service = PlottingService(trained_store)

        paths = service.plot_recent(
            temperature_csv, series_names=["min"], window_days=7, output_dir=tmp_path
        )

        assert paths == [tmp_path / "min_comparison.png"]

    def test_missing_model_raises(self, tmp_path, temperature_csv):
        """Test charting a series without a model raises PersistenceError."""
        service = PlottingService(ModelStore(tmp_path / "empty"))

        with pytest.raises(PersistenceError):
            service.plot_recent(temperature_csv, output_dir=tmp_path / "plots")


class TestSeriesLabel:
    """Tests for series labels."""

    @pytest.mark.parametrize(
        ("series", "expected"),
        [("min", "Minimum Temperature"), ("max", "Maximum Temperature"), ("sales", "Sales")],
    )
    def test_labels(self, series, expected):
        """Test temperature series get descriptive labels."""
        assert series_label(series) == expected
