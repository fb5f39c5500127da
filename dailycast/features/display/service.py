"""Display service: turn min/max forecasts into day cards."""

from __future__ import annotations

from datetime import date as date_type
from datetime import timedelta

from dailycast.core.config import get_settings
from dailycast.core.logging import get_logger
from dailycast.features.display.cards import DayCard, build_day_cards
from dailycast.features.forecasting.service import ForecastingService

logger = get_logger(__name__)


class DisplayService:
    """Build the cards shown by the forecast display.

    The first card shows the seed values; every later card is the
    autoregressive forecast of the card before it.
    """

    def __init__(self, forecasting: ForecastingService | None = None) -> None:
        self.forecasting = forecasting or ForecastingService()
        self.settings = get_settings()

    def build_forecast_cards(
        self,
        today: date_type | None = None,
        min_seed: float | None = None,
        max_seed: float | None = None,
        days: int | None = None,
        days_back: int | None = None,
    ) -> list[DayCard]:
        """Forecast min and max temperatures and lay them out as cards.

        Args:
            today: Reference date (default: today).
            min_seed: Minimum temperature of the first card
                (default: Settings.example_min_temp).
            max_seed: Maximum temperature of the first card
                (default: Settings.example_max_temp).
            days: Number of cards (default: Settings.display_days).
            days_back: Days before today of the first card
                (default: Settings.display_days_back).

        Returns:
            `days` cards in date order.

        Raises:
            ValueError: If days < 1.
            PersistenceError: If a model cannot be loaded.
            PredictionFailure: If a forecast step fails.
        """
        today = today or date_type.today()
        min_seed = min_seed if min_seed is not None else self.settings.example_min_temp
        max_seed = max_seed if max_seed is not None else self.settings.example_max_temp
        days = days if days is not None else self.settings.display_days
        days_back = days_back if days_back is not None else self.settings.display_days_back

        if days < 1:
            raise ValueError(f"days must be at least 1, got {days}")

        min_values = [min_seed]
        max_values = [max_seed]
        if days > 1:
            first_forecast_day = today - timedelta(days=days_back - 1)
            min_values += self.forecasting.forecast_series(
                "min", min_seed, horizon=days - 1, start_date=first_forecast_day
            ).values
            max_values += self.forecasting.forecast_series(
                "max", max_seed, horizon=days - 1, start_date=first_forecast_day
            ).values

        cards = build_day_cards(today, min_values, max_values, days_back=days_back)
        logger.info(
            "display.cards_built",
            today=str(today),
            n_cards=len(cards),
            min_seed=min_seed,
            max_seed=max_seed,
        )
        return cards
