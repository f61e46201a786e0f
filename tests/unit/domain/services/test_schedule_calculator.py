"""Unit tests for whole-time and cron next-execution computation."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.services.schedule_calculator import (
    build_cron_trigger,
    describe_interval,
    ensure_utc,
    is_due_for_whole_time_execution,
    next_cron_execution,
    next_whole_time_execution,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestNextWholeTimeExecution:
    """Tests for whole-time interval boundaries."""

    @pytest.mark.parametrize(
        "frequency,base,expected",
        [
            (1, utc(2026, 3, 1, 10, 7, 30), utc(2026, 3, 1, 10, 8)),
            (5, utc(2026, 3, 1, 10, 7, 30), utc(2026, 3, 1, 10, 10)),
            (5, utc(2026, 3, 1, 10, 10), utc(2026, 3, 1, 10, 15)),
            (15, utc(2026, 3, 1, 10, 44, 59), utc(2026, 3, 1, 10, 45)),
            (60, utc(2026, 3, 1, 10, 59), utc(2026, 3, 1, 11, 0)),
            (360, utc(2026, 3, 1, 13, 0), utc(2026, 3, 1, 18, 0)),
            (720, utc(2026, 3, 1, 12, 0), utc(2026, 3, 2, 0, 0)),
            (1440, utc(2026, 3, 1, 0, 0), utc(2026, 3, 2, 0, 0)),
        ],
    )
    def test_boundaries(self, frequency, base, expected):
        assert next_whole_time_execution(frequency, base) == expected

    def test_uneven_interval_rolls_over_to_next_midnight(self):
        assert next_whole_time_execution(45, utc(2026, 3, 1, 23, 50)) == utc(2026, 3, 2)

    def test_uneven_interval_counts_from_midnight(self):
        # 07:00 is 420 minutes after midnight; next multiple of 45 is 450 (07:30)
        assert next_whole_time_execution(45, utc(2026, 3, 1, 7, 0)) == utc(2026, 3, 1, 7, 30)

    def test_naive_input_is_treated_as_utc(self):
        result = next_whole_time_execution(5, datetime(2026, 3, 1, 10, 7))

        assert result == utc(2026, 3, 1, 10, 10)
        assert result.tzinfo is not None

    @pytest.mark.parametrize("frequency", [0, -5])
    def test_rejects_non_positive_frequency(self, frequency):
        with pytest.raises(ValueError):
            next_whole_time_execution(frequency, utc(2026, 3, 1))


class TestIsDueForWholeTimeExecution:
    """Tests for due checks."""

    def test_never_run_is_due(self):
        assert is_due_for_whole_time_execution(None, 15) is True

    def test_due_once_boundary_reached(self):
        last_run = utc(2026, 3, 1, 10, 0)

        assert not is_due_for_whole_time_execution(last_run, 15, utc(2026, 3, 1, 10, 14))
        assert is_due_for_whole_time_execution(last_run, 15, utc(2026, 3, 1, 10, 15))


class TestDescribeInterval:
    """Tests for interval descriptions."""

    @pytest.mark.parametrize(
        "frequency,expected",
        [
            (5, "Every 5 minutes (xx:00, xx:05, xx:10, xx:15, etc.)"),
            (1440, "Daily at 00:00"),
            (7, "Every 7 minutes at whole minute boundaries"),
            (480, "Every 8 hours at hour boundaries"),
            (90, "Every 90 minutes at calculated boundaries"),
        ],
    )
    def test_descriptions(self, frequency, expected):
        assert describe_interval(frequency) == expected


class TestCronExecution:
    """Tests for cron next-fire computation."""

    def test_next_fire_is_strictly_after(self):
        after = utc(2026, 3, 1, 10, 15)

        assert next_cron_execution("*/15 * * * *", after) == utc(2026, 3, 1, 10, 30)

    def test_daily_expression(self):
        result = next_cron_execution("0 9 * * *", utc(2026, 3, 1, 10, 0))

        assert result == utc(2026, 3, 2, 9, 0)

    def test_timezone_is_applied(self):
        # 09:00 in New York during EST is 14:00 UTC
        result = next_cron_execution("0 9 * * *", utc(2026, 1, 5, 0, 0), "America/New_York")

        assert result == utc(2026, 1, 5, 14, 0)

    @pytest.mark.parametrize("expression", ["", "* * *", "61 * * * *"])
    def test_invalid_expression_raises(self, expression):
        with pytest.raises(ValueError):
            build_cron_trigger(expression)

    @pytest.mark.parametrize("tz", ["Mars/Base", "", "../etc"])
    def test_unknown_timezone_raises_value_error(self, tz):
        with pytest.raises(ValueError, match="(?i)timezone"):
            build_cron_trigger("0 * * * *", tz)


def test_ensure_utc_converts_offsets():
    value = datetime(2026, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(value) == utc(2026, 3, 1, 10, 0)
