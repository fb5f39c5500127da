"""Plotting service: chart recent history against one-step predictions."""

from __future__ import annotations

from pathlib import Path

from dailycast.core.config import get_settings
from dailycast.core.logging import get_logger
from dailycast.features.charting.chart import save_comparison_chart
from dailycast.features.dataset.loader import read_series
from dailycast.features.forecasting.forecaster import one_step_predictions
from dailycast.features.registry.storage import ModelStore

logger = get_logger(__name__)

SERIES_LABELS: dict[str, str] = {
    "min": "Minimum Temperature",
    "max": "Maximum Temperature",
}
TEMPERATURE_AXIS_LABEL = "Temperature (°C)"


def series_label(series: str) -> str:
    """Human-readable label of a series ("min" -> "Minimum Temperature")."""
    return SERIES_LABELS.get(series, series.replace("_", " ").title())


def value_axis_label(series: str) -> str:
    """Y axis label of a series."""
    return TEMPERATURE_AXIS_LABEL if series in SERIES_LABELS else series_label(series)


class PlottingService:
    """Write actual vs predicted charts for the most recent days.

    Predictions are one-step: day i is predicted from the actual value of
    day i-1, so the first day of the window has no prediction.
    """

    def __init__(self, store: ModelStore | None = None) -> None:
        self.store = store or ModelStore()
        self.settings = get_settings()

    def plot_recent(
        self,
        path: str | Path | None = None,
        series_names: list[str] | None = None,
        window_days: int | None = None,
        output_dir: str | Path | None = None,
    ) -> list[Path]:
        """Chart the last `window_days` observations of each series.

        Args:
            path: CSV file (default: Settings.data_file).
            series_names: Series to chart (default: all value columns).
            window_days: Days to show (default: Settings.plot_window_days).
            output_dir: Directory for PNG files (default: Settings.plots_dir).

        Returns:
            Paths of the written charts, in series order.

        Raises:
            DataFormatError: If the file cannot be read.
            PersistenceError: If a model is missing or a chart cannot be written.
            PredictionFailure: If a model rejects an input.
        """
        path = path or self.settings.data_file
        window = window_days or self.settings.plot_window_days
        out_dir = Path(output_dir or self.settings.plots_dir)

        written: list[Path] = []
        for name, observations in read_series(path, columns=series_names).items():
            recent = observations.tail(window)
            bundle = self.store.load_best(name)
            predicted = one_step_predictions(
                bundle.model,
                recent.values,
                dates=recent.dates,
                feature_mode=bundle.feature_mode,
                series=name,
            )

            chart_path = save_comparison_chart(
                actual=recent.values.tolist(),
                predicted=predicted.tolist(),
                title=f"Last {window} Days - {series_label(name)}: Actual vs Predicted",
                x_label="Days",
                y_label=value_axis_label(name),
                path=out_dir / f"{name}_comparison.png",
            )
            logger.info(
                "charting.series_plotted",
                series=name,
                model_kind=bundle.kind.value,
                n_days=len(recent),
                path=str(chart_path),
            )
            written.append(chart_path)

        return written
