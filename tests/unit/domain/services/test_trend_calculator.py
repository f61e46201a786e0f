"""Unit tests for TrendCalculator."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.entities.historical_data import HistoricalDataPoint
from src.domain.entities.kpi_analytics import AnomalySeverity, TrendDirection
from src.domain.services.trend_calculator import TrendCalculator

START = datetime(2026, 3, 2, 0, 0, tzinfo=timezone.utc)  # Monday


def make_points(values, step=timedelta(hours=1)) -> list[HistoricalDataPoint]:
    return [
        HistoricalDataPoint(1, START + i * step, value) for i, value in enumerate(values)
    ]


class TestLinearRegression:
    """Tests for least squares fitting and direction."""

    @pytest.fixture
    def calculator(self):
        return TrendCalculator()

    def test_perfect_linear_series(self, calculator):
        fit = calculator.fit_linear_regression([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

        assert fit.slope == pytest.approx(10.0)
        assert fit.intercept == pytest.approx(10.0)
        assert fit.r_squared == pytest.approx(1.0)
        assert calculator.classify_direction(fit.slope) is TrendDirection.INCREASING

    def test_decreasing_series(self, calculator):
        fit = calculator.fit_linear_regression([50, 40, 30, 20])

        assert fit.slope == pytest.approx(-10.0)
        assert calculator.classify_direction(fit.slope) is TrendDirection.DECREASING

    def test_constant_series_is_stable_with_perfect_fit(self, calculator):
        fit = calculator.fit_linear_regression([7, 7, 7, 7])

        assert fit.slope == 0
        assert fit.r_squared == 1.0
        assert calculator.classify_direction(fit.slope) is TrendDirection.STABLE

    def test_noisy_series_has_partial_fit(self, calculator):
        fit = calculator.fit_linear_regression([1, 3, 2, 4, 3, 5])

        assert 0 < fit.r_squared < 1

    def test_single_point(self, calculator):
        fit = calculator.fit_linear_regression([42])

        assert fit.slope == 0
        assert fit.intercept == 42

    def test_empty_series_raises(self, calculator):
        with pytest.raises(ValueError):
            calculator.fit_linear_regression([])

    @pytest.mark.parametrize(
        "slope,expected",
        [
            (0.1, TrendDirection.STABLE),
            (0.11, TrendDirection.INCREASING),
            (-0.1, TrendDirection.STABLE),
            (-0.11, TrendDirection.DECREASING),
        ],
    )
    def test_direction_dead_band(self, calculator, slope, expected):
        assert calculator.classify_direction(slope) is expected

    def test_custom_threshold(self, calculator):
        assert calculator.classify_direction(0.5, threshold=1.0) is TrendDirection.STABLE


class TestDispersion:
    """Tests for standard deviations and coefficient of variation."""

    @pytest.fixture
    def calculator(self):
        return TrendCalculator()

    def test_population_and_sample_std_differ(self, calculator):
        values = [2, 4, 4, 4, 5, 5, 7, 9]

        assert calculator.population_std(values) == pytest.approx(2.0)
        assert calculator.sample_std(values) == pytest.approx((32 / 7) ** 0.5)

    def test_small_inputs(self, calculator):
        assert calculator.population_std([]) == 0.0
        assert calculator.sample_std([5]) == 0.0

    def test_coefficient_of_variation(self, calculator):
        assert calculator.coefficient_of_variation([90, 110]) == pytest.approx(0.1)
        assert calculator.coefficient_of_variation([-1, 1]) == 0.0


class TestPrediction:
    """Tests for mean-anchored projection."""

    def test_predict_linear_series(self):
        predicted, fit = TrendCalculator().predict([10, 20, 30, 40, 50, 60, 70, 80, 90, 100], 7)

        # slope * (n + days) + mean = 10 * 17 + 55
        assert predicted == pytest.approx(225.0)
        assert fit.r_squared == pytest.approx(1.0)


class TestAnomalies:
    """Tests for z-score anomaly flagging."""

    @pytest.fixture
    def calculator(self):
        return TrendCalculator()

    def test_single_planted_outlier_is_high(self, calculator):
        noise = [98, 102, 99, 101, 100, 97, 103, 100, 99, 101,
                 100, 98, 102, 100, 99, 101, 100, 100, 101]
        points = make_points(noise[:10] + [1000] + noise[10:])

        mean, std, anomalies = calculator.find_anomalies(points, 2.5, 3.0)

        assert len(anomalies) == 1
        anomaly = anomalies[0]
        assert anomaly.value == 1000
        assert anomaly.timestamp == START + timedelta(hours=10)
        assert anomaly.severity is AnomalySeverity.HIGH
        assert anomaly.expected_value == pytest.approx(mean)
        assert anomaly.z_score == pytest.approx(anomaly.deviation / std)

    def test_medium_severity_between_thresholds(self, calculator):
        points = make_points([0] * 9 + [10])

        _, _, anomalies = calculator.find_anomalies(points, 2.5, 3.0)

        # z = 9 / 3 = 3.0, not above the high threshold
        assert len(anomalies) == 1
        assert anomalies[0].z_score == pytest.approx(3.0)
        assert anomalies[0].severity is AnomalySeverity.MEDIUM

    def test_constant_series_has_no_anomalies(self, calculator):
        mean, std, anomalies = calculator.find_anomalies(make_points([5] * 12), 2.5, 3.0)

        assert mean == 5
        assert std == 0
        assert anomalies == []


class TestSeasonality:
    """Tests for bucket averages and strength."""

    def test_hour_and_weekday_buckets(self):
        calculator = TrendCalculator()
        points = make_points([10, 20, 30, 40], step=timedelta(hours=12))

        hourly = calculator.bucket_averages(points, calculator.hour_of_day)
        weekly = calculator.bucket_averages(points, calculator.day_of_week)

        assert hourly == {"00:00": 20.0, "12:00": 30.0}
        assert weekly == {"Monday": 15.0, "Tuesday": 35.0}

    def test_buckets_are_keyed_by_utc_instant(self):
        calculator = TrendCalculator()
        tokyo = timezone(timedelta(hours=9))
        points = [
            HistoricalDataPoint(1, START, 10),
            # same instant as START, expressed in UTC+9
            HistoricalDataPoint(1, START.astimezone(tokyo), 30),
        ]

        assert calculator.bucket_averages(points, calculator.hour_of_day) == {"00:00": 20.0}
        assert calculator.bucket_averages(points, calculator.day_of_week) == {"Monday": 20.0}

    def test_strength_relative_to_mean(self):
        assert TrendCalculator.seasonality_strength({"a": 80.0, "b": 120.0}, 100.0) == 40.0
        assert TrendCalculator.seasonality_strength({"a": 1.0}, 0.0) == 0.0
