"""Charting module: actual vs predicted PNG charts.

Exports:
    - save_comparison_chart: Render one comparison chart
    - PlottingService: Chart the recent window of every series
    - series_label: Human-readable series label
"""

from dailycast.features.charting.chart import save_comparison_chart
from dailycast.features.charting.service import PlottingService, series_label

__all__ = [
    "PlottingService",
    "save_comparison_chart",
    "series_label",
]
