"""Actual vs predicted line charts rendered with matplotlib.

CRITICAL: The Agg backend is selected before pyplot is imported so charts
render without a display.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from dailycast.core.exceptions import PersistenceError  # noqa: E402
from dailycast.core.logging import get_logger  # noqa: E402

logger = get_logger(__name__)

ACTUAL_COLOR = "#0066cc"
PREDICTED_COLOR = "#ff6666"
GRID_COLOR = "#d3d3d3"
DPI = 100


def save_comparison_chart(
    actual: Sequence[float],
    predicted: Sequence[float],
    title: str,
    x_label: str,
    y_label: str,
    path: str | Path,
    width_px: int = 1000,
    height_px: int = 600,
) -> Path:
    """Write a PNG line chart comparing actual and predicted values.

    Actual values are drawn as a solid line with circle markers, predictions
    as a dashed line with square markers. When fewer predictions than actual
    values are given, they are aligned to the right end of the x axis.

    Args:
        actual: Observed values in date order.
        predicted: Predicted values (len <= len(actual)).
        title: Chart title.
        x_label: X axis label.
        y_label: Y axis label.
        path: Output PNG path (parent directories are created).
        width_px: Image width in pixels.
        height_px: Image height in pixels.

    Returns:
        Path of the written PNG.

    Raises:
        ValueError: If there is nothing to plot or more predictions than actuals.
        PersistenceError: If the file cannot be written.
    """
    if len(actual) == 0:
        raise ValueError("Cannot chart an empty series")
    if len(predicted) > len(actual):
        raise ValueError(
            f"More predictions ({len(predicted)}) than actual values ({len(actual)})"
        )

    path = Path(path)
    x_actual = list(range(1, len(actual) + 1))
    x_predicted = x_actual[len(actual) - len(predicted) :]

    fig, ax = plt.subplots(figsize=(width_px / DPI, height_px / DPI), dpi=DPI)
    try:
        fig.patch.set_facecolor("white")
        ax.set_facecolor("white")
        ax.plot(
            x_actual,
            list(actual),
            color=ACTUAL_COLOR,
            linestyle="-",
            linewidth=2,
            marker="o",
            markersize=5,
            label="Actual",
        )
        if len(predicted) > 0:
            ax.plot(
                x_predicted,
                list(predicted),
                color=PREDICTED_COLOR,
                linestyle="--",
                linewidth=2,
                marker="s",
                markersize=5,
                label="Predicted",
            )
        ax.set_title(title)
        ax.set_xlabel(x_label)
        ax.set_ylabel(y_label)
        ax.grid(True, color=GRID_COLOR)
        ax.legend()

        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, format="png", dpi=DPI, facecolor="white")
    except OSError as e:
        logger.error("charting.chart_save_failed", path=str(path), error=str(e))
        raise PersistenceError(
            f"Unable to write chart {path}: {e}", path=str(path), operation="save"
        ) from e
    finally:
        plt.close(fig)

    logger.info(
        "charting.chart_saved",
        path=str(path),
        n_actual=len(actual),
        n_predicted=len(predicted),
    )
    return path
