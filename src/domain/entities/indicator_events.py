"""Domain events emitted for indicator state changes.

Events are immutable records handed to an external dispatcher; the domain
layer only creates them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for domain events.

    Attributes:
        event_id: Unique identifier of this event
        occurred_on: When the event was created (UTC)
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, kw_only=True)
class IndicatorEvent(DomainEvent):
    """Event about a single indicator.

    Attributes:
        indicator_id: Indicator identifier
        indicator_name: Indicator display name
        owner: Owner contact name ("Unknown" when no owner is loaded)
    """

    indicator_id: int
    indicator_name: str
    owner: str = "Unknown"


@dataclass(frozen=True, kw_only=True)
class IndicatorCreatedEvent(IndicatorEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class IndicatorUpdatedEvent(IndicatorEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class IndicatorDeletedEvent(IndicatorEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class IndicatorExecutedEvent(IndicatorEvent):
    """An indicator execution finished, successfully or not."""

    was_successful: bool
    current_value: Decimal | None = None
    historical_value: Decimal | None = None
    error_message: str | None = None
    execution_duration: timedelta | None = None
    collector_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class IndicatorThresholdBreachedEvent(IndicatorEvent):
    """An indicator's value breached its configured threshold."""

    current_value: Decimal
    threshold_value: Decimal
    comparison: str
    priority: str
