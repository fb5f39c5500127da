"""Day cards for the forecast display."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date as date_type
from datetime import timedelta

DATE_FORMAT = "%A, %b %d"


def relative_day_label(offset: int) -> str:
    """Describe a day relative to today.

    Args:
        offset: Days from today (negative for past days).

    Returns:
        "Today", "Tomorrow", "Yesterday", "In N days" or "N days ago".
    """
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    if offset == -1:
        return "Yesterday"
    if offset > 0:
        return f"In {offset} days"
    return f"{-offset} days ago"


def format_temperature(label: str, value: float) -> str:
    """Format a temperature line such as "Min: 15.0°C"."""
    return f"{label}: {value:.1f}°C"


@dataclass(frozen=True)
class DayCard:
    """One day of the forecast display.

    Attributes:
        day: Calendar date of the card.
        offset: Days from today.
        min_value: Minimum temperature.
        max_value: Maximum temperature.
    """

    day: date_type
    offset: int
    min_value: float
    max_value: float

    @property
    def label(self) -> str:
        """Relative label ("Today", "2 days ago", ...)."""
        return relative_day_label(self.offset)

    @property
    def date_text(self) -> str:
        """Formatted date such as "Monday, Jan 01"."""
        return self.day.strftime(DATE_FORMAT)

    @property
    def min_text(self) -> str:
        return format_temperature("Min", self.min_value)

    @property
    def max_text(self) -> str:
        return format_temperature("Max", self.max_value)

    @property
    def is_today(self) -> bool:
        return self.offset == 0


def build_day_cards(
    today: date_type,
    min_values: Sequence[float],
    max_values: Sequence[float],
    days_back: int = 3,
) -> list[DayCard]:
    """Build consecutive day cards starting `days_back` days before today.

    Args:
        today: Reference date.
        min_values: Minimum temperature of each card.
        max_values: Maximum temperature of each card.
        days_back: How many days before today the first card is.

    Returns:
        One card per value, in date order.

    Raises:
        ValueError: If min and max values differ in length.
    """
    if len(min_values) != len(max_values):
        raise ValueError(
            f"min and max values must have same length: {len(min_values)} vs {len(max_values)}"
        )

    return [
        DayCard(
            day=today + timedelta(days=i - days_back),
            offset=i - days_back,
            min_value=float(low),
            max_value=float(high),
        )
        for i, (low, high) in enumerate(zip(min_values, max_values, strict=True))
    ]
