"""Application configuration using Pydantic Settings.

All environment variables are read through this module. Nested settings
classes carry their own env prefix; Settings aggregates them and also reads
a local .env file.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_", case_sensitive=False)

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_format: bool = Field(
        default=True,
        description="Render log events as JSON (console renderer otherwise)",
    )
    service_name: str = Field(
        default="indicator-analytics",
        description="Service name bound to every log event",
    )


class AnalyticsSettings(BaseSettings):
    """KPI analytics windows and thresholds."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_", case_sensitive=False)

    trend_days_back: int = Field(
        default=30,
        gt=0,
        description="Default trend lookback window (days)",
    )
    trend_slope_threshold: float = Field(
        default=0.1,
        ge=0.0,
        description="Slope magnitude below which a trend is stable",
    )
    prediction_lookback_days: int = Field(
        default=90,
        gt=0,
        description="History used for predictions (days)",
    )
    prediction_min_points: int = Field(
        default=10,
        ge=2,
        description="Successful points required to predict",
    )
    prediction_max_confidence: float = Field(
        default=95.0,
        ge=0.0,
        le=100.0,
        description="Upper bound of prediction confidence (percent)",
    )
    anomaly_lookback_days: int = Field(
        default=30,
        gt=0,
        description="History scanned for anomalies (days)",
    )
    anomaly_min_points: int = Field(
        default=10,
        ge=2,
        description="Successful points required for anomaly detection",
    )
    anomaly_z_threshold: float = Field(
        default=2.5,
        gt=0.0,
        description="z-score above which a point is anomalous",
    )
    anomaly_high_z_threshold: float = Field(
        default=3.0,
        gt=0.0,
        description="z-score above which an anomaly is High severity",
    )
    seasonality_lookback_days: int = Field(
        default=365,
        gt=0,
        description="History used for seasonality analysis (days)",
    )
    seasonality_min_points: int = Field(
        default=50,
        ge=1,
        description="Successful points required for seasonality analysis",
    )

    @model_validator(mode="after")
    def check_z_thresholds(self) -> "AnalyticsSettings":
        if self.anomaly_high_z_threshold < self.anomaly_z_threshold:
            raise ValueError(
                "anomaly_high_z_threshold must be >= anomaly_z_threshold"
            )
        return self


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration modules and provides a single settings object.
    Load from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )

    # Sub-settings
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)


# Global settings instance (singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern).

    Returns:
        Settings instance loaded from environment
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
