"""Indicator repository interface module.

This module defines the abstract interface for reading Indicator aggregates.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.entities.indicator import Indicator


class IndicatorRepositoryInterface(ABC):
    """Repository interface for Indicator reads.

    Implementations load the indicator together with its scheduler and
    owner contact when those are configured.
    """

    @abstractmethod
    async def get_by_id(self, indicator_id: int) -> "Indicator | None":
        """Get indicator by identifier.

        Args:
            indicator_id: Indicator identifier

        Returns:
            Indicator entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_active(self) -> list["Indicator"]:
        """List all active indicators, ordered by indicator_id.

        Returns:
            List of active Indicator entities
        """
        pass
