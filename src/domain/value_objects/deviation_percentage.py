"""Deviation percentage value object."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from src.domain.value_objects.threshold_value import to_decimal

_TWO_PLACES = Decimal("0.01")


class DeviationSeverity(str, Enum):
    """Severity tier of a deviation percentage."""

    MINIMAL = "Minimal"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True)
class DeviationPercentage:
    """Non-negative deviation, rounded to two decimal places.

    Attributes:
        value: Deviation in percent
    """

    value: Decimal

    def __post_init__(self):
        """Validate and round the deviation."""
        value = to_decimal(self.value)
        if value < 0:
            raise ValueError(f"Deviation percentage cannot be negative, got {value}")
        object.__setattr__(self, "value", value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))

    @classmethod
    def between(
        cls, current: Decimal | int | float, reference: Decimal | int | float
    ) -> "DeviationPercentage":
        """Deviation of current from reference, in percent of the reference.

        Raises:
            ValueError: If reference is zero and current differs from it
        """
        current = to_decimal(current)
        reference = to_decimal(reference)
        if reference == 0:
            if current == 0:
                return cls(Decimal(0))
            raise ValueError("Cannot compute deviation from a zero reference value")
        return cls(abs(current - reference) / abs(reference) * 100)

    @property
    def severity_level(self) -> DeviationSeverity:
        if self.value >= 50:
            return DeviationSeverity.CRITICAL
        if self.value >= 25:
            return DeviationSeverity.HIGH
        if self.value >= 10:
            return DeviationSeverity.MEDIUM
        if self.value >= 5:
            return DeviationSeverity.LOW
        return DeviationSeverity.MINIMAL

    def is_significant(self, minimum: Decimal | int | float = 5) -> bool:
        """True if the deviation reaches the given minimum percent."""
        return self.value >= to_decimal(minimum)

    def __str__(self) -> str:
        return f"{self.value}%"
