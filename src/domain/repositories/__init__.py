"""Repository interfaces - Abstract data access contracts."""

from src.domain.repositories.alert_log_repository import AlertLogRepositoryInterface
from src.domain.repositories.historical_data_repository import (
    HistoricalDataRepositoryInterface,
)
from src.domain.repositories.indicator_repository import IndicatorRepositoryInterface

__all__ = [
    "IndicatorRepositoryInterface",
    "HistoricalDataRepositoryInterface",
    "AlertLogRepositoryInterface",
]
