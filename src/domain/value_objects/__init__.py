"""Value objects - Immutable, self-validating wrappers around primitives."""

from src.domain.value_objects.deviation_percentage import (
    DeviationPercentage,
    DeviationSeverity,
)
from src.domain.value_objects.email_address import EmailAddress
from src.domain.value_objects.execution_context import (
    ExecutionContext,
    ExecutionContextType,
)
from src.domain.value_objects.indicator_code import IndicatorCode
from src.domain.value_objects.phone_number import PhoneNumber
from src.domain.value_objects.priority import Priority
from src.domain.value_objects.sql_query import SqlQuery
from src.domain.value_objects.threshold_value import (
    BreachSeverity,
    ComparisonOperator,
    ThresholdType,
    ThresholdValue,
)

__all__ = [
    "Priority",
    "ThresholdValue",
    "ComparisonOperator",
    "ThresholdType",
    "BreachSeverity",
    "DeviationPercentage",
    "DeviationSeverity",
    "IndicatorCode",
    "SqlQuery",
    "PhoneNumber",
    "EmailAddress",
    "ExecutionContext",
    "ExecutionContextType",
]
