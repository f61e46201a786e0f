"""Alert log repository interface module."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.entities.historical_data import AlertLogEntry


class AlertLogRepositoryInterface(ABC):
    """Read access to alerts raised by indicators."""

    @abstractmethod
    async def list_for_indicator(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list["AlertLogEntry"]:
        """Get alerts raised by an indicator with trigger_time within [start, end].

        Returns:
            Alert entries ordered by trigger_time ascending
        """
        pass
