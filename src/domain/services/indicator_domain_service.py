"""Indicator business rules that span several value objects.

Execution eligibility, priority ordering, configuration validation,
escalation, recommended check frequency, state-change events and health
scoring. Every method is a pure function of its arguments.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from src.domain.entities.historical_data import HistoricalDataPoint
from src.domain.entities.indicator import Indicator
from src.domain.entities.indicator_evaluation import (
    EscalationLevel,
    HealthLevel,
    IndicatorChangeType,
    IndicatorHealthScore,
    IndicatorStateChange,
    ValidationResult,
)
from src.domain.entities.indicator_events import (
    DomainEvent,
    IndicatorCreatedEvent,
    IndicatorDeletedEvent,
    IndicatorExecutedEvent,
    IndicatorThresholdBreachedEvent,
    IndicatorUpdatedEvent,
)
from src.domain.entities.result import DomainError, Result
from src.domain.services.schedule_calculator import ensure_utc
from src.domain.services.trend_calculator import TrendCalculator
from src.domain.value_objects.execution_context import ExecutionContext
from src.domain.value_objects.indicator_code import IndicatorCode
from src.domain.value_objects.priority import Priority
from src.domain.value_objects.sql_query import SqlQuery
from src.domain.value_objects.threshold_value import BreachSeverity, ThresholdValue

logger = logging.getLogger(__name__)

# (breach severity, is high priority) -> escalation level
_ESCALATION_TABLE: dict[tuple[BreachSeverity, bool], EscalationLevel] = {
    (BreachSeverity.CRITICAL, True): EscalationLevel.IMMEDIATE,
    (BreachSeverity.CRITICAL, False): EscalationLevel.HIGH,
    (BreachSeverity.HIGH, True): EscalationLevel.HIGH,
    (BreachSeverity.HIGH, False): EscalationLevel.MEDIUM,
    (BreachSeverity.MEDIUM, True): EscalationLevel.MEDIUM,
    (BreachSeverity.MEDIUM, False): EscalationLevel.LOW,
}

_BASE_FREQUENCY: dict[Priority, timedelta] = {
    Priority.HIGH: timedelta(minutes=5),
    Priority.MEDIUM: timedelta(minutes=15),
    Priority.LOW: timedelta(minutes=30),
}


class IndicatorDomainService:
    """Stateless indicator business rules.

    Constants:
    - PRIORITY_SCORE_MULTIPLIER: base score per priority rank (lower = more urgent)
    - OVERDUE_POINTS_PER_MINUTE / MAX_OVERDUE_BONUS: urgency bonus for overdue indicators
    - MAX_LAST_MINUTES / MAX_AVERAGE_LAST_DAYS: warning limits for data windows
    - MAX_TABLE_REFERENCES: distinct tables allowed in an indicator query
    """

    PRIORITY_SCORE_MULTIPLIER: int = 1000
    OVERDUE_POINTS_PER_MINUTE: int = 10
    MAX_OVERDUE_BONUS: int = 500
    MAX_LAST_MINUTES: int = 10080  # 7 days
    MAX_AVERAGE_LAST_DAYS: int = 365
    MAX_TABLE_REFERENCES: int = 10
    MIN_VALUES_FOR_VOLATILITY: int = 5
    HIGH_VOLATILITY: float = 0.5
    LOW_VOLATILITY: float = 0.1

    def __init__(self, trend_calculator: TrendCalculator | None = None):
        self._trend_calculator = trend_calculator or TrendCalculator()

    def should_execute_indicator(self, indicator: Indicator, current_time: datetime) -> bool:
        """Decide whether an indicator is eligible to run now.

        Args:
            indicator: Indicator snapshot
            current_time: Reference time

        Returns:
            False if inactive, already running, without an enabled scheduler,
            or if the next execution time after last_run is unknown or still
            in the future; True otherwise (never-run indicators are eligible)
        """
        if not indicator.is_active:
            return False

        if indicator.is_currently_running:
            return False

        if indicator.scheduler is None or not indicator.scheduler.is_enabled:
            return False

        if indicator.last_run is not None:
            next_execution = indicator.scheduler.get_next_execution_time(
                indicator.last_run
            )
            if next_execution is None or ensure_utc(current_time) < next_execution:
                return False

        return True

    def calculate_priority_score(
        self, indicator: Indicator, current_time: datetime | None = None
    ) -> int:
        """Score used to order execution queues; sort ascending.

        Base score is priority rank * 1000 (high=1000, medium=2000, low=3000).
        Overdue indicators subtract 10 points per overdue minute, up to 500.

        Raises:
            ValueError: If the indicator's priority string is invalid
        """
        priority = Priority.from_string(indicator.priority)
        score = priority.numeric_value * self.PRIORITY_SCORE_MULTIPLIER

        if indicator.last_run is not None and indicator.scheduler is not None:
            next_execution = indicator.scheduler.get_next_execution_time(
                indicator.last_run
            )
            if next_execution is not None:
                now = ensure_utc(current_time or datetime.now(timezone.utc))
                overdue_minutes = (now - next_execution).total_seconds() / 60
                if overdue_minutes > 0:
                    score -= int(
                        min(
                            overdue_minutes * self.OVERDUE_POINTS_PER_MINUTE,
                            self.MAX_OVERDUE_BONUS,
                        )
                    )

        return score

    def order_by_priority(
        self, indicators: Sequence[Indicator], current_time: datetime | None = None
    ) -> list[Indicator]:
        """Indicators sorted most urgent first (ascending priority score)."""
        now = current_time or datetime.now(timezone.utc)
        return sorted(
            indicators, key=lambda indicator: self.calculate_priority_score(indicator, now)
        )

    def validate_indicator_configuration(
        self, indicator: Indicator
    ) -> Result[ValidationResult]:
        """Check an indicator's configuration against business rules.

        Always returns a successful Result; invalid configurations are
        reported through ValidationResult.is_valid and its error list.
        """
        validation = ValidationResult()

        if indicator.threshold_value > 0:
            try:
                ThresholdValue(
                    indicator.threshold_value,
                    indicator.threshold_comparison,
                    indicator.threshold_type,
                )
            except ValueError as e:
                validation.errors.append(f"Invalid threshold configuration: {e}")

        try:
            Priority.from_string(indicator.priority)
        except ValueError:
            validation.errors.append(f"Invalid priority: {indicator.priority}")

        if indicator.last_minutes <= 0:
            validation.errors.append("LastMinutes must be greater than 0")
        elif indicator.last_minutes > self.MAX_LAST_MINUTES:
            validation.warnings.append(
                "LastMinutes is very large (> 7 days), consider if this is intentional"
            )

        if indicator.average_last_days <= 0:
            validation.errors.append("AverageLastDays must be greater than 0")
        elif indicator.average_last_days > self.MAX_AVERAGE_LAST_DAYS:
            validation.warnings.append(
                "AverageLastDays is very large (> 1 year), consider performance impact"
            )

        if indicator.scheduler_id is not None and indicator.scheduler is None:
            validation.warnings.append(
                "Scheduler ID is set but Scheduler entity is not loaded"
            )

        return Result.success(validation)

    def determine_escalation_level(
        self,
        indicator: Indicator,
        current_value: Decimal | int | float,
        historical_value: Decimal | int | float | None = None,
    ) -> EscalationLevel:
        """Combine breach severity with indicator priority.

        Returns EscalationLevel.NONE when threshold alerting is disabled
        (threshold <= 0) or the threshold is not breached.

        Raises:
            ValueError: If the threshold or priority configuration is invalid
        """
        if indicator.threshold_value <= 0:
            return EscalationLevel.NONE

        threshold = ThresholdValue(
            indicator.threshold_value,
            indicator.threshold_comparison,
            indicator.threshold_type,
        )
        reference = historical_value if historical_value is not None else current_value

        if not threshold.is_breached(current_value, reference):
            return EscalationLevel.NONE

        severity = threshold.get_breach_severity(current_value, reference)
        priority = Priority.from_string(indicator.priority)

        return _ESCALATION_TABLE.get(
            (severity, priority is Priority.HIGH), EscalationLevel.LOW
        )

    def calculate_recommended_frequency(
        self, indicator: Indicator, recent_values: Sequence[Decimal | float]
    ) -> timedelta:
        """Suggest how often an indicator should run.

        Base interval by priority (high 5 min, medium 15 min, low 30 min).
        With at least five recent values, the interval is halved when
        volatility (stddev / mean) exceeds 0.5 and doubled when below 0.1.
        """
        priority = Priority.from_string(indicator.priority)
        frequency = _BASE_FREQUENCY[priority]

        if len(recent_values) >= self.MIN_VALUES_FOR_VOLATILITY:
            volatility = self._trend_calculator.coefficient_of_variation(
                [float(v) for v in recent_values]
            )
            if volatility > self.HIGH_VOLATILITY:
                frequency = frequency / 2
            elif volatility < self.LOW_VOLATILITY:
                frequency = frequency * 2

        return frequency

    def create_indicator_state_change_events(
        self, indicator: Indicator, change: IndicatorStateChange
    ) -> list[DomainEvent]:
        """Map a state change to the domain events it produces.

        ThresholdBreached produces an event only when threshold alerting is
        enabled and the change carries a current value.
        """
        events: list[DomainEvent] = []
        common = {
            "indicator_id": indicator.indicator_id,
            "indicator_name": indicator.indicator_name,
            "owner": indicator.owner_name,
        }

        if change.change_type is IndicatorChangeType.EXECUTED:
            events.append(
                IndicatorExecutedEvent(
                    **common,
                    was_successful=change.was_successful,
                    current_value=change.current_value,
                    historical_value=change.historical_value,
                    error_message=change.error_message,
                    execution_duration=change.execution_duration,
                    collector_name=change.collector_name,
                )
            )
        elif change.change_type is IndicatorChangeType.THRESHOLD_BREACHED:
            if indicator.threshold_value > 0 and change.current_value is not None:
                events.append(
                    IndicatorThresholdBreachedEvent(
                        **common,
                        current_value=change.current_value,
                        threshold_value=indicator.threshold_value,
                        comparison=indicator.threshold_comparison,
                        priority=indicator.priority,
                    )
                )
        elif change.change_type is IndicatorChangeType.CREATED:
            events.append(IndicatorCreatedEvent(**common))
        elif change.change_type is IndicatorChangeType.UPDATED:
            events.append(IndicatorUpdatedEvent(**common))
        elif change.change_type is IndicatorChangeType.DELETED:
            events.append(IndicatorDeletedEvent(**common))

        return events

    def validate_sql_query(self, query: str) -> Result[SqlQuery]:
        """Validate an indicator query and reject queries touching too many tables."""
        try:
            sql_query = SqlQuery(query)
        except ValueError as e:
            return Result.failure(DomainError.validation("INVALID_SQL_QUERY", str(e)))

        table_count = len(sql_query.table_references)
        if table_count > self.MAX_TABLE_REFERENCES:
            return Result.failure(
                DomainError.validation(
                    "SQL_QUERY_TOO_COMPLEX",
                    f"Query references {table_count} tables; "
                    f"at most {self.MAX_TABLE_REFERENCES} are allowed",
                )
            )

        return Result.success(sql_query)

    def validate_indicator_code(
        self, code: str, is_update: bool = False
    ) -> Result[IndicatorCode]:
        """Validate an indicator code; system codes are only allowed on update."""
        try:
            indicator_code = IndicatorCode(code)
        except ValueError as e:
            return Result.failure(DomainError.validation("INVALID_INDICATOR_CODE", str(e)))

        if indicator_code.is_system_code and not is_update:
            return Result.failure(
                DomainError.forbidden(
                    "SYSTEM_CODE_NOT_ALLOWED",
                    f"System indicator codes cannot be used for new indicators: {indicator_code}",
                )
            )

        return Result.success(indicator_code)

    def validate_execution_context(
        self,
        context: str,
        initiated_by: str | None = None,
        requires_user_permission: bool = False,
    ) -> Result[ExecutionContext]:
        """Validate an execution context.

        Args:
            context: Context tag ("scheduled", "manual", ...)
            initiated_by: User or component starting the run
            requires_user_permission: Caller has checked the user's permission
                to start user-initiated runs

        Returns:
            Failure PERMISSION_REQUIRED when the context needs user permission
            that the caller did not declare
        """
        try:
            execution_context = ExecutionContext(context, initiated_by)
        except ValueError as e:
            return Result.failure(
                DomainError.validation("INVALID_EXECUTION_CONTEXT", str(e))
            )

        if execution_context.requires_user_permission and not requires_user_permission:
            return Result.failure(
                DomainError.forbidden(
                    "PERMISSION_REQUIRED",
                    f"Execution context '{execution_context.context.value}' requires user permission",
                )
            )

        return Result.success(execution_context)

    def calculate_health_score(
        self,
        indicator: Indicator,
        recent_executions: Sequence[HistoricalDataPoint],
        current_time: datetime | None = None,
    ) -> Result[IndicatorHealthScore]:
        """Rate an indicator's operational health from 0 to 100.

        Deductions from 100:
        - 40 if success rate < 50%, else 20 if < 80%
        - 30 if 3 or more of the recent executions failed
        - 25 if more than one hour past the next scheduled execution
        - 15 if the configuration is invalid

        Levels: Healthy >= 90, Warning >= 70, Critical >= 50, otherwise Unknown.
        Unexpected errors yield a HEALTH_CALCULATION_ERROR failure.
        """
        try:
            now = ensure_utc(current_time or datetime.now(timezone.utc))
            score = 100
            issues: list[str] = []

            total = len(recent_executions)
            failures = sum(1 for e in recent_executions if not e.is_successful)
            success_rate = (total - failures) / total * 100 if total else None

            if success_rate is not None:
                if success_rate < 50:
                    score -= 40
                    issues.append(f"Low success rate: {success_rate:.1f}%")
                elif success_rate < 80:
                    score -= 20
                    issues.append(f"Degraded success rate: {success_rate:.1f}%")

            if failures >= 3:
                score -= 30
                issues.append(f"{failures} recent execution failures")

            if indicator.last_run is not None and indicator.scheduler is not None:
                next_execution = indicator.scheduler.get_next_execution_time(
                    indicator.last_run
                )
                if next_execution is not None and now - next_execution > timedelta(hours=1):
                    score -= 25
                    issues.append("Execution overdue by more than 1 hour")

            configuration = self.validate_indicator_configuration(indicator).value
            if not configuration.is_valid:
                score -= 15
                issues.append("Invalid configuration")

            score = max(score, 0)
            return Result.success(
                IndicatorHealthScore(
                    indicator_id=indicator.indicator_id,
                    score=score,
                    health_level=self._health_level(score),
                    success_rate=success_rate,
                    recent_failures=failures,
                    issues=tuple(issues),
                )
            )
        except Exception as e:
            logger.exception(
                f"Health score calculation failed for indicator "
                f"{indicator.indicator_id}: {type(e).__name__}: {e}"
            )
            return Result.failure(
                DomainError(
                    "HEALTH_CALCULATION_ERROR",
                    f"Failed to calculate health score for indicator {indicator.indicator_id}",
                )
            )

    @staticmethod
    def _health_level(score: int) -> HealthLevel:
        if score >= 90:
            return HealthLevel.HEALTHY
        if score >= 70:
            return HealthLevel.WARNING
        if score >= 50:
            return HealthLevel.CRITICAL
        return HealthLevel.UNKNOWN
