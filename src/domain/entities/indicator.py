"""Indicator aggregate: the indicator, its scheduler and its owner contact.

These entities are loaded by the persistence layer and read by domain
services; services never mutate or persist them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from src.domain.services.schedule_calculator import (
    build_cron_trigger,
    describe_interval,
    ensure_utc,
    next_cron_execution,
    next_whole_time_execution,
    resolve_timezone,
)
from src.domain.value_objects.email_address import EmailAddress
from src.domain.value_objects.phone_number import PhoneNumber
from src.domain.value_objects.threshold_value import to_decimal


class ScheduleType(str, Enum):
    """Kind of execution schedule."""

    INTERVAL = "interval"
    CRON = "cron"
    ONETIME = "onetime"


@dataclass
class Scheduler:
    """Execution schedule shared by one or more indicators.

    Attributes:
        scheduler_id: Internal identifier
        scheduler_name: Display name
        schedule_type: interval, cron or onetime
        interval_minutes: Interval length (interval schedules)
        cron_expression: Five-field crontab expression (cron schedules)
        execution_datetime: Single run time (onetime schedules)
        start_date: Earliest allowed execution
        end_date: Latest allowed execution
        timezone: Timezone used to evaluate cron expressions
        is_enabled: Disabled schedulers never trigger executions
    """

    scheduler_id: int
    schedule_type: ScheduleType
    scheduler_name: str = ""
    interval_minutes: int | None = None
    cron_expression: str | None = None
    execution_datetime: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    timezone: str = "UTC"
    is_enabled: bool = True

    def __post_init__(self):
        """Coerce schedule_type from its stored string form."""
        if not isinstance(self.schedule_type, ScheduleType):
            try:
                self.schedule_type = ScheduleType(str(self.schedule_type).strip().lower())
            except ValueError:
                raise ValueError(
                    f"Invalid schedule type: {self.schedule_type}. "
                    "Must be 'interval', 'cron', or 'onetime'"
                ) from None

    def validate(self, now: datetime | None = None) -> list[str]:
        """Check the configuration rules for this schedule type.

        Args:
            now: Reference time for one-time schedules (defaults to now UTC)

        Returns:
            List of validation errors (empty when valid)
        """
        errors: list[str] = []
        now = ensure_utc(now or datetime.now(timezone.utc))

        if self.schedule_type is ScheduleType.INTERVAL:
            if self.interval_minutes is None or self.interval_minutes <= 0:
                errors.append(
                    "Interval minutes must be greater than 0 for interval schedules"
                )
        elif self.schedule_type is ScheduleType.CRON:
            if not self.cron_expression or not self.cron_expression.strip():
                errors.append("Cron expression is required for cron schedules")
            else:
                try:
                    resolve_timezone(self.timezone)
                except ValueError as e:
                    errors.append(str(e))
                else:
                    try:
                        build_cron_trigger(self.cron_expression, self.timezone)
                    except ValueError:
                        errors.append("Invalid cron expression format")
        elif self.execution_datetime is None:
            errors.append("Execution date/time is required for one-time schedules")
        elif ensure_utc(self.execution_datetime) <= now:
            errors.append(
                "Execution date/time must be in the future for one-time schedules"
            )

        if (
            self.start_date is not None
            and self.end_date is not None
            and ensure_utc(self.start_date) >= ensure_utc(self.end_date)
        ):
            errors.append("Start date must be before end date")

        return errors

    def get_next_execution_time(
        self, last_run: datetime | None = None, now: datetime | None = None
    ) -> datetime | None:
        """Compute when the schedule next fires after last_run.

        When the indicator has never run, the next fire time after now is
        returned. Results before start_date are clamped to start_date; results
        after end_date (or malformed configurations) yield None.

        Args:
            last_run: Time of the previous execution, if any
            now: Reference time when last_run is None (defaults to now UTC)

        Returns:
            Next execution time as aware UTC datetime, or None if the
            schedule will not fire again
        """
        reference = ensure_utc(last_run or now or datetime.now(timezone.utc))

        if self.schedule_type is ScheduleType.INTERVAL:
            if not self.interval_minutes or self.interval_minutes <= 0:
                return None
            next_time = next_whole_time_execution(self.interval_minutes, reference)
        elif self.schedule_type is ScheduleType.CRON:
            if not self.cron_expression:
                return None
            try:
                next_time = next_cron_execution(
                    self.cron_expression, reference, self.timezone
                )
            except ValueError:
                return None
        else:
            if self.execution_datetime is None:
                return None
            execution_time = ensure_utc(self.execution_datetime)
            if last_run is not None and ensure_utc(last_run) >= execution_time:
                return None
            next_time = execution_time

        if next_time is None:
            return None
        if self.start_date is not None and next_time < ensure_utc(self.start_date):
            next_time = ensure_utc(self.start_date)
        if self.end_date is not None and next_time > ensure_utc(self.end_date):
            return None
        return next_time

    @property
    def display_text(self) -> str:
        if self.schedule_type is ScheduleType.INTERVAL and self.interval_minutes:
            return describe_interval(self.interval_minutes)
        if self.schedule_type is ScheduleType.CRON:
            return f"Cron: {self.cron_expression}"
        if self.execution_datetime is not None:
            return f"Once at {ensure_utc(self.execution_datetime).isoformat()}"
        return "Not configured"


@dataclass
class Contact:
    """Person notified about an indicator's alerts.

    Attributes:
        contact_id: Internal identifier
        name: Display name
        email: Email address, if any
        phone: Phone number for SMS, if any
        is_active: Inactive contacts receive no notifications
    """

    contact_id: int
    name: str
    email: str | None = None
    phone: str | None = None
    is_active: bool = True

    def __post_init__(self):
        """Validate contact details."""
        if not self.name or not self.name.strip():
            raise ValueError("Contact name cannot be empty")
        if self.email is not None:
            self.email = EmailAddress(self.email).value
        if self.phone is not None:
            self.phone = PhoneNumber(self.phone).normalized

    @property
    def email_address(self) -> EmailAddress | None:
        return EmailAddress(self.email) if self.email else None

    @property
    def phone_number(self) -> PhoneNumber | None:
        return PhoneNumber(self.phone) if self.phone else None


@dataclass
class Indicator:
    """A configured, schedulable check compared against a threshold.

    Threshold and priority fields keep their stored string form; domain
    services turn them into value objects and report invalid values.

    Attributes:
        indicator_id: Internal identifier
        indicator_name: Display name
        indicator_code: Unique code (see IndicatorCode)
        priority: "high", "medium" or "low"
        threshold_value: Threshold; 0 disables threshold alerting
        threshold_comparison: Comparison operator tag ("gt", "lte", ...)
        threshold_type: Threshold type tag ("threshold_value", "percentage", ...)
        last_minutes: Data window evaluated per run, in minutes
        average_last_days: Days of history used for the historical average
        is_active: Inactive indicators never run
        is_currently_running: True while an execution is in progress
        last_run: Time of the previous execution
        scheduler_id: Foreign key of the scheduler
        scheduler: Loaded scheduler, if any
        owner_contact: Owner notified about alerts
    """

    indicator_id: int
    indicator_name: str
    indicator_code: str = ""
    priority: str = "medium"
    threshold_value: Decimal = Decimal(0)
    threshold_comparison: str = "gt"
    threshold_type: str = "threshold_value"
    last_minutes: int = 1440
    average_last_days: int = 28
    is_active: bool = True
    is_currently_running: bool = False
    last_run: datetime | None = None
    scheduler_id: int | None = None
    scheduler: Scheduler | None = None
    owner_contact: Contact | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Normalize numeric and scheduler fields."""
        if not self.indicator_name:
            raise ValueError("indicator_name cannot be empty")
        self.threshold_value = to_decimal(self.threshold_value or 0)
        if self.scheduler is not None and self.scheduler_id is None:
            self.scheduler_id = self.scheduler.scheduler_id

    @property
    def owner_name(self) -> str:
        if self.owner_contact is None:
            return "Unknown"
        return self.owner_contact.name

    def next_execution_time(self, now: datetime | None = None) -> datetime | None:
        """Scheduler's next execution time after last_run, if a scheduler is loaded."""
        if self.scheduler is None:
            return None
        return self.scheduler.get_next_execution_time(self.last_run, now)
