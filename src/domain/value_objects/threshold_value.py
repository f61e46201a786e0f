"""Threshold value object.

Encodes an indicator's alert threshold and the rule for deciding whether a
measured value breaches it.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

EQUALITY_EPSILON = Decimal("0.01")


class ComparisonOperator(str, Enum):
    """Comparison applied between the measured value and the threshold."""

    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    EQ = "eq"
    NE = "ne"

    @classmethod
    def parse(cls, value: "ComparisonOperator | str") -> "ComparisonOperator":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Comparison operator cannot be empty")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid comparison operator: {value}. "
                f"Must be one of: {', '.join(op.value for op in cls)}"
            ) from None

    def compare(self, measured: Decimal, threshold: Decimal) -> bool:
        if self is ComparisonOperator.GT:
            return measured > threshold
        if self is ComparisonOperator.GTE:
            return measured >= threshold
        if self is ComparisonOperator.LT:
            return measured < threshold
        if self is ComparisonOperator.LTE:
            return measured <= threshold
        if self is ComparisonOperator.EQ:
            return abs(measured - threshold) < EQUALITY_EPSILON
        return abs(measured - threshold) >= EQUALITY_EPSILON


class ThresholdType(str, Enum):
    """Whether the threshold applies to the raw value or to its deviation."""

    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"

    @classmethod
    def parse(cls, value: "ThresholdType | str") -> "ThresholdType":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Threshold type cannot be empty")
        normalized = value.strip().lower()
        resolved = _THRESHOLD_TYPE_ALIASES.get(normalized)
        if resolved is None:
            raise ValueError(
                f"Invalid threshold type: {value}. Must be one of: absolute, percentage"
            )
        return resolved


# Legacy stored tags map onto the two canonical types
_THRESHOLD_TYPE_ALIASES: dict[str, ThresholdType] = {
    "absolute": ThresholdType.ABSOLUTE,
    "threshold_value": ThresholdType.ABSOLUTE,
    "percentage": ThresholdType.PERCENTAGE,
    "threshold_percentage": ThresholdType.PERCENTAGE,
}


class BreachSeverity(str, Enum):
    """How far a breaching value lies beyond its threshold."""

    NONE = "None"
    MINIMAL = "Minimal"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric input to Decimal without binary float artefacts.

    Raises:
        ValueError: If the input is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a numeric value")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid numeric value: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Numeric value must be finite, got {value!r}")
    return result


@dataclass(frozen=True)
class ThresholdValue:
    """Alert threshold with its comparison rule.

    Domain invariants:
    - comparison and threshold_type come from closed sets, checked at construction
    - value is non-negative

    Attributes:
        value: Threshold value (absolute units or percent, per threshold_type)
        comparison: Comparison operator
        threshold_type: Absolute or percentage threshold
    """

    value: Decimal
    comparison: ComparisonOperator
    threshold_type: ThresholdType = ThresholdType.ABSOLUTE

    def __post_init__(self):
        """Validate and normalize threshold fields."""
        value = to_decimal(self.value)
        if value < 0:
            raise ValueError(f"Threshold value must be non-negative, got {value}")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "comparison", ComparisonOperator.parse(self.comparison))
        object.__setattr__(
            self, "threshold_type", ThresholdType.parse(self.threshold_type)
        )

    def measured_value(
        self, current: Decimal, historical: Decimal | None = None
    ) -> Decimal | None:
        """Quantity compared against the threshold.

        Absolute thresholds compare the current value itself. Percentage
        thresholds compare the deviation of current from historical, in percent
        of |historical|, which is undefined (None) when there is no non-zero
        historical value.
        """
        current = to_decimal(current)
        if self.threshold_type is ThresholdType.ABSOLUTE:
            return current

        if historical is None:
            return None
        historical = to_decimal(historical)
        if historical == 0:
            return None
        return abs(current - historical) / abs(historical) * 100

    def is_breached(
        self,
        current: Decimal | int | float,
        historical: Decimal | int | float | None = None,
    ) -> bool:
        """Check whether the current (or deviation) value breaches the threshold.

        Args:
            current: Current measured value
            historical: Reference value, required for percentage thresholds

        Returns:
            True if the comparison holds; False when a percentage deviation
            cannot be computed (missing or zero historical value)
        """
        measured = self.measured_value(
            to_decimal(current), None if historical is None else to_decimal(historical)
        )
        if measured is None:
            return False
        return self.comparison.compare(measured, self.value)

    def get_breach_severity(
        self,
        current: Decimal | int | float,
        historical: Decimal | int | float | None = None,
    ) -> BreachSeverity:
        """Classify how severely the threshold is breached.

        Cutoffs on the deviation from the threshold: Critical >= 100%,
        High >= 50%, Medium >= 25%, Low >= 10%, otherwise Minimal.
        These are twice the DeviationPercentage severity cutoffs.

        Returns:
            BreachSeverity.NONE when the threshold is not breached
        """
        if not self.is_breached(current, historical):
            return BreachSeverity.NONE

        measured = self.measured_value(
            to_decimal(current), None if historical is None else to_decimal(historical)
        )
        if self.value == 0:
            deviation = abs(measured)
        else:
            deviation = abs(measured - self.value) / self.value * 100

        if deviation >= 100:
            return BreachSeverity.CRITICAL
        if deviation >= 50:
            return BreachSeverity.HIGH
        if deviation >= 25:
            return BreachSeverity.MEDIUM
        if deviation >= 10:
            return BreachSeverity.LOW
        return BreachSeverity.MINIMAL

    def __str__(self) -> str:
        suffix = "%" if self.threshold_type is ThresholdType.PERCENTAGE else ""
        return f"{self.comparison.value} {self.value}{suffix}"
