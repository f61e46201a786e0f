"""Historical data repository interface module."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.entities.historical_data import HistoricalDataPoint


class HistoricalDataRepositoryInterface(ABC):
    """Read access to recorded indicator executions."""

    @abstractmethod
    async def get_for_indicator(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list["HistoricalDataPoint"]:
        """Get execution records for an indicator within [start, end].

        Args:
            indicator_id: Indicator identifier
            start: Inclusive window start (UTC)
            end: Inclusive window end (UTC)

        Returns:
            Data points ordered by timestamp ascending (failed executions included)
        """
        pass
