"""Infrastructure configuration module.

Centralized configuration management using Pydantic Settings.
"""

from src.infrastructure.config.settings import (
    AnalyticsSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "AnalyticsSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
