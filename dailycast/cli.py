"""Command line interface for dailycast.

Usage:
    # Train and select the best model for every series of the data file
    dailycast train --data data/daily_temp.csv

    # Forecast 7 days of minimum temperature from 15.0
    dailycast forecast --series min --seed 15.0 --horizon 7

    # Train on sales history and forecast the next 5 days
    dailycast sales --data data/sales.csv

    # Chart the last 30 days against one-step predictions
    dailycast plot --window-days 30 --output-dir plots

    # Open the forecast display
    dailycast display

Exit codes: 0 on success, 1 when a run (or any series of it) failed,
2 on invalid arguments.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import uuid
from datetime import date, timedelta
from pathlib import Path

from dailycast import __version__
from dailycast.core.config import get_settings
from dailycast.core.exceptions import DailycastError
from dailycast.core.logging import configure_logging, get_logger, run_id_ctx
from dailycast.features.charting.service import PlottingService
from dailycast.features.dataset.builder import build_training_set
from dailycast.features.dataset.loader import read_series
from dailycast.features.forecasting.schemas import ForecastSequence
from dailycast.features.forecasting.service import ForecastingService
from dailycast.features.registry.storage import ModelStore
from dailycast.features.training.models import ModelKind
from dailycast.features.training.schemas import SelectionResult
from dailycast.features.training.service import TrainingService

logger = get_logger(__name__)

EXAMPLE_SEED_SETTINGS = {"min": "example_min_temp", "max": "example_max_temp"}


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format.

    Raises:
        argparse.ArgumentTypeError: If date format is invalid.
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date format: {date_str}. Use YYYY-MM-DD") from e


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If value is not an integer >= 1.
    """
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a value >= 1, got {number}")
    return number


def model_kind(value: str) -> ModelKind:
    """Parse a model kind argument.

    Raises:
        argparse.ArgumentTypeError: If value is not a known kind.
    """
    try:
        return ModelKind.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="dailycast",
        description="Train, select and forecast daily time series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dailycast train --data data/daily_temp.csv --series min max
  dailycast forecast --series max --seed 25.0 --horizon 5 --kind random_forest
  dailycast sales --horizon 5
  dailycast plot --window-days 30
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    train = subparsers.add_parser("train", help="Train candidates and select the best per series")
    train.add_argument("--data", type=Path, help="CSV file (default: DATA_FILE setting)")
    train.add_argument("--series", nargs="+", help="Series columns to train (default: all)")
    train.add_argument(
        "--feature-mode",
        choices=["lag1", "lag1_calendar"],
        help="Feature layout (default: FEATURE_MODE setting)",
    )

    forecast = subparsers.add_parser("forecast", help="Forecast a series from a seed value")
    forecast.add_argument("--series", required=True, help="Series name (e.g. min, max)")
    forecast.add_argument("--seed", type=float, required=True, help="Last known value")
    forecast.add_argument("--horizon", type=positive_int, help="Number of days to forecast")
    forecast.add_argument("--kind", type=model_kind, help="Model kind (default: selected)")
    forecast.add_argument("--start-date", type=parse_date, help="Date of the first forecast day")

    sales = subparsers.add_parser("sales", help="Train on sales history and forecast ahead")
    sales.add_argument("--data", type=Path, help="CSV file (default: SALES_DATA_FILE setting)")
    sales.add_argument("--horizon", type=positive_int, help="Number of days to forecast")

    plot = subparsers.add_parser("plot", help="Chart recent actual vs predicted values")
    plot.add_argument("--data", type=Path, help="CSV file (default: DATA_FILE setting)")
    plot.add_argument("--series", nargs="+", help="Series columns to chart (default: all)")
    plot.add_argument("--window-days", type=positive_int, help="Days to chart")
    plot.add_argument("--output-dir", type=Path, help="Directory for PNG files")

    subparsers.add_parser("display", help="Open the forecast display")

    return parser


def print_banner() -> None:
    """Print CLI banner."""
    print()
    print("=" * 60)
    print("  dailycast - daily time series forecasting")
    print("=" * 60)
    print()


def print_selection(result: SelectionResult) -> None:
    """Print the candidate comparison of one series."""
    print(f"\nSeries: {result.series}")
    print("-" * 60)
    print(f"  {'Model':<28} {'RMSE':>7} {'MAE':>7} {'Corr':>6} {'Score':>7}")
    for candidate in result.candidates:
        name = candidate.kind.display_name
        if candidate.metrics is None or not candidate.succeeded:
            print(f"  {name:<28} excluded: {candidate.error}")
            continue
        m = candidate.metrics
        marker = "  <- best" if candidate is result.best else ""
        print(
            f"  {name:<28} {m.rmse:>7.3f} {m.mae:>7.3f} {m.correlation:>6.3f} "
            f"{m.composite_score:>7.3f}{marker}"
        )
    print("-" * 60)


def print_forecast(sequence: ForecastSequence) -> None:
    """Print forecast values, one per line."""
    print(f"\nForecast for '{sequence.series}' ({sequence.model_kind}) from {sequence.seed:.2f}:")
    for i, value in enumerate(sequence.values):
        day = f"{sequence.dates[i]}" if sequence.dates is not None else f"Day {i + 1}"
        print(f"  {day:<12} {value:>10.2f}")
    print()


def run_train(args: argparse.Namespace) -> int:
    """Train every requested series and show an example next-day forecast."""
    settings = get_settings()
    store = ModelStore()
    report = TrainingService(store).train_file(
        args.data or settings.data_file,
        series_names=args.series,
        feature_mode=args.feature_mode,
    )

    for result in report.results.values():
        print_selection(result)

    # Report failures before the example forecast, which may itself raise
    if report.failures:
        print("\nFailed series:")
        for series, error in report.failures.items():
            print(f"  - {series}: {error.message}")

    forecasting = ForecastingService(store)
    for series, setting_name in EXAMPLE_SEED_SETTINGS.items():
        if series not in report.results:
            continue
        seed = getattr(settings, setting_name)
        example = forecasting.forecast_series(series, seed, horizon=1)
        print(f"Example: next-day {series} from {seed:.1f} -> {example.values[0]:.2f}")

    if report.failures:
        return 1

    print("\nTraining complete.")
    return 0


def run_forecast(args: argparse.Namespace) -> int:
    """Forecast one series from a seed value."""
    sequence = ForecastingService().forecast_series(
        args.series,
        args.seed,
        horizon=args.horizon,
        kind=args.kind,
        start_date=args.start_date,
    )
    print_forecast(sequence)
    return 0


def run_sales(args: argparse.Namespace) -> int:
    """Train on the sales series and forecast from its last observation."""
    settings = get_settings()
    store = ModelStore()
    observations = read_series(args.data or settings.sales_data_file, columns=["sales"])["sales"]

    result = TrainingService(store).train_series(
        build_training_set(observations, feature_mode=settings.feature_mode)
    )
    print_selection(result)

    sequence = ForecastingService(store).forecast_series(
        "sales",
        float(observations.values[-1]),
        horizon=args.horizon or settings.sales_forecast_horizon,
        start_date=observations.dates[-1] + timedelta(days=1),
    )
    print_forecast(sequence)
    return 0


def run_plot(args: argparse.Namespace) -> int:
    """Write actual vs predicted charts."""
    paths = PlottingService().plot_recent(
        args.data,
        series_names=args.series,
        window_days=args.window_days,
        output_dir=args.output_dir,
    )
    for path in paths:
        print(f"Chart written: {path}")
    return 0


def run_display(args: argparse.Namespace) -> int:
    """Launch the Streamlit forecast page."""
    app_path = Path(__file__).parent / "features" / "display" / "app.py"
    logger.info("display.launching", app_path=str(app_path))
    return subprocess.call([sys.executable, "-m", "streamlit", "run", str(app_path)])


COMMANDS = {
    "train": run_train,
    "forecast": run_forecast,
    "sales": run_sales,
    "plot": run_plot,
    "display": run_display,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Each invocation is one run with its own run_id attached to every log
    event.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging()
    token = run_id_ctx.set(uuid.uuid4().hex)
    print_banner()

    try:
        logger.info("cli.run_started", command=args.command)
        code = COMMANDS[args.command](args)
        logger.info("cli.run_completed", command=args.command, exit_code=code)
        return code
    except DailycastError as e:
        logger.error(
            "cli.run_failed",
            command=args.command,
            error_code=e.code,
            error=e.message,
            details=e.details,
        )
        print(f"ERROR: {e.title}: {e.message}")
        return 1
    except ValueError as e:
        logger.error("cli.run_failed", command=args.command, error=str(e))
        print(f"ERROR: {e}")
        return 1
    finally:
        run_id_ctx.reset(token)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
