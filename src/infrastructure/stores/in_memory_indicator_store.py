"""In-memory indicator, history and alert store (development and tests).

Implements the three read repositories over process-local collections.
Data is lost on restart; a persistent store implements the same interfaces.
"""

from collections import defaultdict
from datetime import datetime

from src.domain.entities.historical_data import AlertLogEntry, HistoricalDataPoint
from src.domain.entities.indicator import Indicator
from src.domain.repositories.alert_log_repository import AlertLogRepositoryInterface
from src.domain.repositories.historical_data_repository import (
    HistoricalDataRepositoryInterface,
)
from src.domain.repositories.indicator_repository import IndicatorRepositoryInterface
from src.domain.services.schedule_calculator import ensure_utc
from src.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class InMemoryIndicatorStore(
    IndicatorRepositoryInterface,
    HistoricalDataRepositoryInterface,
    AlertLogRepositoryInterface,
):
    """Single object serving indicators, execution history and alerts."""

    def __init__(self) -> None:
        self._indicators: dict[int, Indicator] = {}
        self._history: dict[int, list[HistoricalDataPoint]] = defaultdict(list)
        self._alerts: dict[int, list[AlertLogEntry]] = defaultdict(list)

    def add_indicator(self, indicator: Indicator) -> None:
        """Insert or replace an indicator."""
        self._indicators[indicator.indicator_id] = indicator
        logger.debug("Indicator stored", indicator_id=indicator.indicator_id)

    def add_data_points(self, points: list[HistoricalDataPoint]) -> None:
        """Append execution records, keeping each indicator's history ordered.

        Raises:
            ValueError: If a point references an unknown indicator
        """
        touched: set[int] = set()
        for point in points:
            if point.indicator_id not in self._indicators:
                raise ValueError(f"Unknown indicator: {point.indicator_id}")
            self._history[point.indicator_id].append(point)
            touched.add(point.indicator_id)

        for indicator_id in touched:
            self._history[indicator_id].sort(key=lambda p: ensure_utc(p.timestamp))
        logger.debug("Data points stored", count=len(points), indicators=sorted(touched))

    def add_alert(self, alert: AlertLogEntry) -> None:
        """Append an alert entry.

        Raises:
            ValueError: If the alert references an unknown indicator
        """
        if alert.indicator_id not in self._indicators:
            raise ValueError(f"Unknown indicator: {alert.indicator_id}")
        self._alerts[alert.indicator_id].append(alert)

    def clear(self) -> None:
        self._indicators.clear()
        self._history.clear()
        self._alerts.clear()

    async def get_by_id(self, indicator_id: int) -> Indicator | None:
        return self._indicators.get(indicator_id)

    async def list_active(self) -> list[Indicator]:
        return [
            indicator
            for _, indicator in sorted(self._indicators.items())
            if indicator.is_active
        ]

    async def get_for_indicator(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list[HistoricalDataPoint]:
        start, end = ensure_utc(start), ensure_utc(end)
        return [
            point
            for point in self._history.get(indicator_id, [])
            if start <= ensure_utc(point.timestamp) <= end
        ]

    async def list_for_indicator(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list[AlertLogEntry]:
        start, end = ensure_utc(start), ensure_utc(end)
        alerts = [
            alert
            for alert in self._alerts.get(indicator_id, [])
            if start <= ensure_utc(alert.trigger_time) <= end
        ]
        return sorted(alerts, key=lambda a: ensure_utc(a.trigger_time))
