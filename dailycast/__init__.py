"""dailycast: next-day regression forecasting for daily time series."""

__version__ = "0.1.0"
