"""Unit tests for ThresholdValue value object."""

from decimal import Decimal

import pytest

from src.domain.value_objects.threshold_value import (
    BreachSeverity,
    ComparisonOperator,
    ThresholdType,
    ThresholdValue,
)


class TestThresholdValueConstruction:
    """Tests for construction-time validation."""

    def test_accepts_string_tags(self):
        threshold = ThresholdValue(Decimal("10"), "GT", "percentage")

        assert threshold.comparison is ComparisonOperator.GT
        assert threshold.threshold_type is ThresholdType.PERCENTAGE
        assert threshold.value == Decimal("10")

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("threshold_value", ThresholdType.ABSOLUTE),
            ("threshold_percentage", ThresholdType.PERCENTAGE),
            ("absolute", ThresholdType.ABSOLUTE),
        ],
    )
    def test_accepts_stored_type_aliases(self, tag, expected):
        assert ThresholdValue(5, "gt", tag).threshold_type is expected

    def test_rejects_unknown_operator(self):
        with pytest.raises(ValueError, match="Invalid comparison operator"):
            ThresholdValue(10, "between")

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError, match="Invalid threshold type"):
            ThresholdValue(10, "gt", "relative")

    def test_rejects_negative_value(self):
        with pytest.raises(ValueError, match="non-negative"):
            ThresholdValue(-1, "gt")

    def test_float_input_converted_without_binary_artefacts(self):
        assert ThresholdValue(0.1, "gt").value == Decimal("0.1")

    @pytest.mark.parametrize(
        "raw", ["abc", "", float("nan"), Decimal("NaN"), float("inf"), Decimal("Infinity")]
    )
    def test_rejects_non_finite_or_non_numeric_value(self, raw):
        with pytest.raises(ValueError, match="numeric value|finite"):
            ThresholdValue(raw, "gt", "absolute")

    def test_rejects_non_numeric_current_value(self):
        with pytest.raises(ValueError, match="Invalid numeric value"):
            ThresholdValue(10, "gt").is_breached("n/a")

    def test_is_immutable(self):
        threshold = ThresholdValue(10, "gt")
        with pytest.raises(AttributeError):
            threshold.value = Decimal("20")  # type: ignore[misc]

    def test_structural_equality(self):
        assert ThresholdValue(10, "gt") == ThresholdValue(Decimal("10"), ComparisonOperator.GT)


class TestIsBreached:
    """Tests for breach evaluation."""

    @pytest.mark.parametrize("operator", ["gte", "lte", "eq"])
    def test_inclusive_operators_breach_at_boundary(self, operator):
        assert ThresholdValue(50, operator).is_breached(50) is True

    @pytest.mark.parametrize("operator", ["gt", "lt", "ne"])
    def test_exclusive_operators_do_not_breach_at_boundary(self, operator):
        assert ThresholdValue(50, operator).is_breached(50) is False

    def test_absolute_compares_current_value(self):
        threshold = ThresholdValue(10, "gt")

        assert threshold.is_breached(25) is True
        assert threshold.is_breached(5) is False

    def test_equality_uses_epsilon(self):
        threshold = ThresholdValue(Decimal("10"), "eq")

        assert threshold.is_breached(Decimal("10.009")) is True
        assert threshold.is_breached(Decimal("10.01")) is False
        assert ThresholdValue(Decimal("10"), "ne").is_breached(Decimal("10.005")) is False

    def test_percentage_compares_deviation(self):
        threshold = ThresholdValue(20, "gt", "percentage")

        # |130 - 100| / 100 * 100 = 30% > 20%
        assert threshold.is_breached(130, 100) is True
        # 10% deviation
        assert threshold.is_breached(90, 100) is False

    def test_percentage_with_zero_historical_is_not_breached(self):
        threshold = ThresholdValue(20, "gt", "percentage")

        assert threshold.is_breached(500, 0) is False

    def test_percentage_without_historical_is_not_breached(self):
        assert ThresholdValue(20, "gt", "percentage").is_breached(500) is False

    def test_percentage_uses_magnitude_of_negative_historical(self):
        threshold = ThresholdValue(20, "gt", "percentage")

        # |-70 - (-100)| / |-100| * 100 = 30%
        assert threshold.measured_value(Decimal(-70), Decimal(-100)) == Decimal(30)
        assert threshold.is_breached(-70, -100) is True


class TestBreachSeverity:
    """Tests for breach severity buckets (cutoffs 100/50/25/10)."""

    def test_not_breached_returns_none(self):
        assert ThresholdValue(10, "gt").get_breach_severity(5) is BreachSeverity.NONE

    @pytest.mark.parametrize(
        "current,expected",
        [
            (25, BreachSeverity.CRITICAL),  # 150%
            (20, BreachSeverity.CRITICAL),  # 100%
            (16, BreachSeverity.HIGH),  # 60%
            (13, BreachSeverity.MEDIUM),  # 30%
            (11, BreachSeverity.LOW),  # 10%
            (Decimal("10.5"), BreachSeverity.MINIMAL),  # 5%
        ],
    )
    def test_absolute_severity_buckets(self, current, expected):
        assert ThresholdValue(10, "gt").get_breach_severity(current) is expected

    def test_percentage_severity_uses_deviation(self):
        threshold = ThresholdValue(10, "gt", "percentage")

        # deviation 40% vs threshold 10% -> 300% beyond threshold
        assert threshold.get_breach_severity(140, 100) is BreachSeverity.CRITICAL

    def test_zero_threshold_uses_measured_magnitude(self):
        threshold = ThresholdValue(0, "gt")

        assert threshold.get_breach_severity(150) is BreachSeverity.CRITICAL
        assert threshold.get_breach_severity(Decimal("0.5")) is BreachSeverity.MINIMAL
