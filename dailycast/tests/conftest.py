"""Test fixtures for the command line interface."""

from collections.abc import Generator
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pytest
import structlog

from dailycast import cli


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch) -> Generator[list[str], None, None]:
    """Record configure_logging calls instead of binding loggers to captured stdout.

    Cached loggers would keep writing to capsys streams closed after each test.
    """
    calls: list[str] = []
    monkeypatch.setattr(cli, "configure_logging", lambda: calls.append("configured"))
    yield calls
    structlog.reset_defaults()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Run inside a temporary directory with default-located data files."""
    monkeypatch.chdir(tmp_path)
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    rng = np.random.default_rng(11)
    start = date(2024, 4, 1)

    temp_lines = ["date,min,max"]
    sales_lines = ["date,sales"]
    for i in range(45):
        day = start + timedelta(days=i)
        low = 11.0 + 4.0 * np.sin(i / 7) + rng.normal(0, 0.4)
        temp_lines.append(f"{day},{low:.2f},{low + 8.5:.2f}")
        sales_lines.append(f"{day},{200 + 3 * i + rng.normal(0, 5):.1f}")

    (data_dir / "daily_temp.csv").write_text("\n".join(temp_lines) + "\n", encoding="utf-8")
    (data_dir / "sales.csv").write_text("\n".join(sales_lines) + "\n", encoding="utf-8")
    return tmp_path
