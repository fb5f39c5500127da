"""CSV loading for daily series.

The first column holds ISO-8601 dates, every other column is a named series:

    date,min,max
    2024-01-01,10.0,20.0
    2024-01-02,12.0,22.0

Malformed rows are skipped with a warning; an unreadable file is fatal.
"""

from __future__ import annotations

import math
from datetime import date as date_type
from pathlib import Path
from typing import Any

import pandas as pd

from dailycast.core.exceptions import DataFormatError
from dailycast.core.logging import get_logger
from dailycast.features.dataset.schemas import Observation, SeriesObservations

logger = get_logger(__name__)


def parse_date(raw: Any, row_number: int | None = None) -> date_type:  # noqa: ANN401
    """Parse an ISO-8601 date field.

    Args:
        raw: Raw field value.
        row_number: Data row number for error context.

    Returns:
        Parsed date.

    Raises:
        DataFormatError: If the field is missing or not an ISO date.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise DataFormatError("Missing date", row_number=row_number)
    try:
        return date_type.fromisoformat(raw.strip())
    except ValueError:
        raise DataFormatError(f"Invalid date: {raw!r}", row_number=row_number) from None


def parse_value(raw: Any, column: str, row_number: int | None = None) -> float:  # noqa: ANN401
    """Parse a decimal value field.

    Args:
        raw: Raw field value.
        column: Column name for error context.
        row_number: Data row number for error context.

    Returns:
        Parsed finite float.

    Raises:
        DataFormatError: If the field is missing, non-numeric or not finite.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise DataFormatError(
            f"Missing value for {column}", row_number=row_number, details={"column": column}
        )
    try:
        value = float(raw.strip())
    except ValueError:
        raise DataFormatError(
            f"Non-numeric value for {column}: {raw!r}",
            row_number=row_number,
            details={"column": column},
        ) from None
    if not math.isfinite(value):
        raise DataFormatError(
            f"Non-finite value for {column}: {raw!r}",
            row_number=row_number,
            details={"column": column},
        )
    return value


def parse_row(
    row: dict[str, Any], date_column: str, columns: list[str], row_number: int
) -> tuple[date_type, dict[str, float]]:
    """Parse one data row into a date and one value per requested column.

    Args:
        row: Mapping of header name to raw field.
        date_column: Name of the date column.
        columns: Value columns to parse.
        row_number: 1-based data row number.

    Returns:
        Tuple of (date, {column: value}).

    Raises:
        DataFormatError: If any requested field is malformed.
    """
    row_date = parse_date(row.get(date_column), row_number)
    values = {col: parse_value(row.get(col), col, row_number) for col in columns}
    return row_date, values


def read_series(
    path: str | Path,
    columns: list[str] | None = None,
) -> dict[str, SeriesObservations]:
    """Read a delimited file into one observation series per value column.

    A row whose date or any requested value is malformed is dropped for all
    series so that min/max style series stay aligned on the same dates.

    Args:
        path: CSV file with a header row.
        columns: Value columns to read (default: every non-date column).

    Returns:
        Mapping of series name to date-ordered observations, in column order.

    Raises:
        DataFormatError: If the file cannot be read, has no value columns, or
            lacks a requested column.
    """
    path = Path(path)
    bad_lines: list[list[str]] = []

    def _on_bad_line(fields: list[str]) -> None:
        bad_lines.append(fields)
        logger.warning(
            "dataset.row_skipped",
            path=str(path),
            reason="wrong_field_count",
            fields=fields,
        )
        return None

    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            on_bad_lines=_on_bad_line,
            engine="python",
        )
    except FileNotFoundError:
        raise DataFormatError(f"Data file not found: {path}", details={"path": str(path)}) from None
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataFormatError(
            f"Unable to read data file {path}: {e}", details={"path": str(path)}
        ) from e

    header = [str(col).strip() for col in frame.columns]
    frame.columns = header
    if len(header) < 2:
        raise DataFormatError(
            f"Data file {path} needs a date column and at least one value column",
            details={"path": str(path), "header": header},
        )

    date_column = header[0]
    available = header[1:]
    wanted = list(columns) if columns else available
    missing = [col for col in wanted if col not in available]
    if missing:
        raise DataFormatError(
            f"Columns not found in {path}: {missing}",
            details={"path": str(path), "available": available},
        )

    rows: list[tuple[date_type, dict[str, float]]] = []
    skipped = len(bad_lines)
    for idx, record in enumerate(frame.to_dict(orient="records")):
        row_number = idx + 1
        try:
            rows.append(parse_row(record, date_column, wanted, row_number))
        except DataFormatError as e:
            skipped += 1
            logger.warning(
                "dataset.row_skipped",
                path=str(path),
                row_number=row_number,
                reason=e.message,
            )

    # Stable sort keeps file order for equal dates
    ordered = sorted(rows, key=lambda item: item[0])
    if ordered != rows:
        logger.warning("dataset.rows_reordered", path=str(path), n_rows=len(rows))

    result = {
        col: SeriesObservations(
            name=col,
            observations=tuple(Observation(date=d, value=vals[col]) for d, vals in ordered),
            skipped_rows=skipped,
        )
        for col in wanted
    }

    logger.info(
        "dataset.file_loaded",
        path=str(path),
        series=wanted,
        n_rows=len(ordered),
        skipped_rows=skipped,
    )

    return result
