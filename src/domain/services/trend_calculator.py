"""Statistical building blocks for KPI analytics.

Pure functions over in-memory value series: ordinary least squares trend
fitting, dispersion measures, z-score anomaly flagging and seasonal
bucketing. No I/O; callers supply already-windowed data.
"""

import math
from collections import defaultdict
from collections.abc import Callable, Sequence
from statistics import fmean, pstdev, stdev

from src.domain.entities.historical_data import HistoricalDataPoint
from src.domain.entities.kpi_analytics import (
    AnomalySeverity,
    KpiAnomaly,
    LinearRegressionFit,
    TrendDirection,
)
from src.domain.services.schedule_calculator import ensure_utc

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class TrendCalculator:
    """Computes trend, dispersion and anomaly statistics for value series.

    Trend direction uses a dead band around zero slope:
    slope > threshold -> increasing, slope < -threshold -> decreasing,
    otherwise stable.
    """

    DEFAULT_SLOPE_THRESHOLD: float = 0.1

    def fit_linear_regression(self, values: Sequence[float]) -> LinearRegressionFit:
        """Fit value = slope * index + intercept by ordinary least squares.

        x is the sample index 0..n-1, not the timestamp.

        Args:
            values: Value series in chronological order

        Returns:
            LinearRegressionFit; a series with fewer than two points has zero
            slope, and a constant series has R^2 = 1.0

        Raises:
            ValueError: If values is empty
        """
        n = len(values)
        if n == 0:
            raise ValueError("values cannot be empty")
        if n == 1:
            return LinearRegressionFit(slope=0.0, intercept=float(values[0]), r_squared=0.0)

        ys = [float(v) for v in values]
        mean_x = (n - 1) / 2
        mean_y = fmean(ys)

        sxx = sum((x - mean_x) ** 2 for x in range(n))
        sxy = sum((x - mean_x) * (y - mean_y) for x, y in enumerate(ys))
        slope = sxy / sxx
        intercept = mean_y - slope * mean_x

        ss_tot = sum((y - mean_y) ** 2 for y in ys)
        ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in enumerate(ys))
        r_squared = 1.0 if ss_tot == 0 else max(0.0, 1.0 - ss_res / ss_tot)

        return LinearRegressionFit(slope=slope, intercept=intercept, r_squared=r_squared)

    def classify_direction(
        self, slope: float, threshold: float = DEFAULT_SLOPE_THRESHOLD
    ) -> TrendDirection:
        if slope > threshold:
            return TrendDirection.INCREASING
        if slope < -threshold:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE

    @staticmethod
    def population_std(values: Sequence[float]) -> float:
        """Standard deviation with n denominator (0.0 for empty input)."""
        if not values:
            return 0.0
        return pstdev(float(v) for v in values)

    @staticmethod
    def sample_std(values: Sequence[float]) -> float:
        """Standard deviation with n-1 denominator (0.0 below two points)."""
        if len(values) < 2:
            return 0.0
        return stdev(float(v) for v in values)

    def coefficient_of_variation(self, values: Sequence[float]) -> float:
        """Population stddev divided by mean; 0.0 when undefined."""
        if len(values) < 2:
            return 0.0
        mean = fmean(float(v) for v in values)
        if mean == 0:
            return 0.0
        return self.population_std(values) / mean

    def predict(
        self, values: Sequence[float], steps_ahead: int
    ) -> tuple[float, LinearRegressionFit]:
        """Project the series forward.

        predicted = slope * (n + steps_ahead) + mean(values), a mean-anchored
        projection rather than the intercept form.

        Returns:
            Tuple of (predicted_value, fit used for the projection)
        """
        fit = self.fit_linear_regression(values)
        predicted = fit.slope * (len(values) + steps_ahead) + fmean(float(v) for v in values)
        return predicted, fit

    def find_anomalies(
        self,
        points: Sequence[HistoricalDataPoint],
        z_threshold: float,
        high_z_threshold: float,
    ) -> tuple[float, float, list[KpiAnomaly]]:
        """Flag points whose population z-score exceeds z_threshold.

        Args:
            points: Successful data points in chronological order
            z_threshold: Minimum |z| (exclusive) to flag a point
            high_z_threshold: |z| above which a flagged point is High severity

        Returns:
            Tuple of (mean, population stddev, anomalies); a zero stddev
            flags nothing
        """
        if not points:
            return 0.0, 0.0, []

        values = [float(p.current_value) for p in points]
        mean = fmean(values)
        std = self.population_std(values)
        if std == 0:
            return mean, 0.0, []

        anomalies: list[KpiAnomaly] = []
        for point, value in zip(points, values):
            deviation = abs(value - mean)
            z_score = deviation / std
            if z_score > z_threshold:
                anomalies.append(
                    KpiAnomaly(
                        timestamp=point.timestamp,
                        value=value,
                        expected_value=mean,
                        deviation=deviation,
                        z_score=z_score,
                        severity=(
                            AnomalySeverity.HIGH
                            if z_score > high_z_threshold
                            else AnomalySeverity.MEDIUM
                        ),
                    )
                )
        return mean, std, anomalies

    def bucket_averages(
        self,
        points: Sequence[HistoricalDataPoint],
        key: Callable[[HistoricalDataPoint], str],
    ) -> dict[str, float]:
        """Mean value per bucket, buckets in first-seen order."""
        buckets: dict[str, list[float]] = defaultdict(list)
        for point in points:
            buckets[key(point)].append(float(point.current_value))
        return {bucket: fmean(values) for bucket, values in buckets.items()}

    @staticmethod
    def seasonality_strength(averages: dict[str, float], overall_mean: float) -> float:
        """Peak-to-trough spread of bucket means in percent of the overall mean."""
        if not averages or overall_mean == 0 or math.isnan(overall_mean):
            return 0.0
        spread = max(averages.values()) - min(averages.values())
        return spread / abs(overall_mean) * 100

    @staticmethod
    def hour_of_day(point: HistoricalDataPoint) -> str:
        return f"{ensure_utc(point.timestamp).hour:02d}:00"

    @staticmethod
    def day_of_week(point: HistoricalDataPoint) -> str:
        return WEEKDAY_NAMES[ensure_utc(point.timestamp).weekday()]
