"""Unit tests for DeviationPercentage value object."""

from decimal import Decimal

import pytest

from src.domain.value_objects.deviation_percentage import (
    DeviationPercentage,
    DeviationSeverity,
)


class TestDeviationPercentage:
    """Tests for DeviationPercentage rounding, validation and severity."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (Decimal("12.345"), Decimal("12.35")),
            (Decimal("12.344"), Decimal("12.34")),
            (0, Decimal("0.00")),
            ("7.5", Decimal("7.50")),
        ],
    )
    def test_rounds_half_up_to_two_places(self, raw, expected):
        assert DeviationPercentage(raw).value == expected

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            DeviationPercentage(Decimal("-0.01"))

    @pytest.mark.parametrize("raw", ["twelve", float("nan"), Decimal("Infinity")])
    def test_rejects_non_finite_or_non_numeric(self, raw):
        with pytest.raises(ValueError, match="numeric value|finite"):
            DeviationPercentage(raw)

    @pytest.mark.parametrize(
        "value,expected",
        [
            (75, DeviationSeverity.CRITICAL),
            (50, DeviationSeverity.CRITICAL),
            (30, DeviationSeverity.HIGH),
            (10, DeviationSeverity.MEDIUM),
            (5, DeviationSeverity.LOW),
            (Decimal("4.99"), DeviationSeverity.MINIMAL),
        ],
    )
    def test_severity_level(self, value, expected):
        assert DeviationPercentage(value).severity_level is expected

    def test_between_computes_relative_deviation(self):
        assert DeviationPercentage.between(120, 100).value == Decimal("20.00")
        assert DeviationPercentage.between(80, 100).value == Decimal("20.00")

    def test_between_zero_reference(self):
        assert DeviationPercentage.between(0, 0).value == Decimal("0.00")
        with pytest.raises(ValueError):
            DeviationPercentage.between(5, 0)

    def test_is_significant(self):
        assert DeviationPercentage(5).is_significant()
        assert not DeviationPercentage(Decimal("4.9")).is_significant()
        assert DeviationPercentage(12).is_significant(minimum=10)

    def test_str(self):
        assert str(DeviationPercentage(Decimal("3.1"))) == "3.10%"
