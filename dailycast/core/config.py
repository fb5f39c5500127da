"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "dailycast"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Data
    data_file: str = "data/daily_temp.csv"
    sales_data_file: str = "data/sales.csv"

    # Training
    cv_folds: int = 10
    cv_random_seed: int = 1
    model_random_state: int = 42
    feature_mode: Literal["lag1", "lag1_calendar"] = "lag1"
    model_store_dir: str = "model"
    default_model_kind: Literal[
        "linear_regression", "random_forest", "support_vector_regression"
    ] = "random_forest"

    # Forecasting
    forecast_default_horizon: int = 7
    forecast_max_horizon: int = 90
    sales_forecast_horizon: int = 5
    example_min_temp: float = 15.0
    example_max_temp: float = 25.0

    # Display
    display_days_back: int = 3
    display_days: int = 7

    # Charting
    plots_dir: str = "plots"
    plot_window_days: int = 30

    @field_validator("cv_folds")
    @classmethod
    def validate_cv_folds(cls, v: int) -> int:
        """Cross-validation needs at least two folds.

        Args:
            v: Requested number of folds.

        Returns:
            Validated number of folds.

        Raises:
            ValueError: If fewer than 2 folds are requested.
        """
        if v < 2:
            raise ValueError(f"cv_folds must be at least 2, got {v}")
        return v

    @model_validator(mode="after")
    def validate_display_window(self) -> "Settings":
        """Ensure the display shows at least one day after today."""
        if self.display_days <= self.display_days_back:
            raise ValueError(
                f"display_days ({self.display_days}) must exceed "
                f"display_days_back ({self.display_days_back})"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
