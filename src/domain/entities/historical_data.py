"""Execution history records read by analytics."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.value_objects.threshold_value import to_decimal


@dataclass(frozen=True)
class HistoricalDataPoint:
    """One recorded indicator execution.

    Attributes:
        indicator_id: Indicator that produced the value
        timestamp: Execution time (UTC)
        current_value: Measured value
        is_successful: False when the execution failed
        execution_time_ms: Execution duration in milliseconds
        historical_value: Reference (historical average) value, if computed
        deviation_percent: Deviation of current from historical, if computed
    """

    indicator_id: int
    timestamp: datetime
    current_value: Decimal
    is_successful: bool = True
    execution_time_ms: int | None = None
    historical_value: Decimal | None = None
    deviation_percent: Decimal | None = None

    def __post_init__(self):
        """Normalize numeric fields and validate duration."""
        object.__setattr__(self, "current_value", to_decimal(self.current_value))
        if self.historical_value is not None:
            object.__setattr__(self, "historical_value", to_decimal(self.historical_value))
        if self.deviation_percent is not None:
            object.__setattr__(
                self, "deviation_percent", to_decimal(self.deviation_percent)
            )
        if self.execution_time_ms is not None and self.execution_time_ms < 0:
            raise ValueError(
                f"execution_time_ms must be non-negative, got {self.execution_time_ms}"
            )


@dataclass(frozen=True)
class AlertLogEntry:
    """An alert raised for an indicator.

    Attributes:
        alert_id: Internal identifier
        indicator_id: Indicator that raised the alert
        trigger_time: When the alert fired (UTC)
        current_value: Value that triggered the alert
        deviation_percent: Deviation at trigger time, if known
        is_resolved: Whether the alert has been resolved
    """

    alert_id: int
    indicator_id: int
    trigger_time: datetime
    current_value: Decimal | None = None
    deviation_percent: Decimal | None = None
    is_resolved: bool = False
