"""Outcomes produced by indicator domain rules."""

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from enum import Enum


class EscalationLevel(str, Enum):
    """Response urgency for a threshold breach."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    IMMEDIATE = "immediate"


class IndicatorChangeType(str, Enum):
    """Kind of indicator state change."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    EXECUTED = "executed"
    THRESHOLD_BREACHED = "threshold_breached"


class HealthLevel(str, Enum):
    """Operational health bucket for an indicator."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


@dataclass
class ValidationResult:
    """Result of checking an indicator's configuration.

    Attributes:
        errors: Problems that make the configuration invalid
        warnings: Suspicious but allowed settings
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class IndicatorStateChange:
    """Description of a change used to build domain events.

    Attributes:
        change_type: What happened
        was_successful: Execution outcome (executed changes)
        current_value: Measured value, if any
        historical_value: Reference value, if any
        error_message: Failure message (failed executions)
        execution_duration: How long the execution took
        collector_name: Data collector used by the execution
    """

    change_type: IndicatorChangeType
    was_successful: bool = True
    current_value: Decimal | None = None
    historical_value: Decimal | None = None
    error_message: str | None = None
    execution_duration: timedelta | None = None
    collector_name: str | None = None


@dataclass(frozen=True)
class IndicatorHealthScore:
    """Composite 0-100 health rating of an indicator.

    Attributes:
        indicator_id: Rated indicator
        score: Final score after deductions, floored at 0
        health_level: Bucket derived from score
        success_rate: Percent of successful recent executions (None without data)
        recent_failures: Failed executions among the recent ones
        issues: Reasons for each deduction
    """

    indicator_id: int
    score: int
    health_level: HealthLevel
    success_rate: float | None = None
    recent_failures: int = 0
    issues: tuple[str, ...] = ()
