"""Analytics result entities for KPI history.

This module defines the records returned by the analytics service: trend
analysis, performance metrics, predictions, anomaly detection, seasonality
and correlation results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

INSUFFICIENT_DATA = "Insufficient Data"


class TrendDirection(str, Enum):
    """Direction of a fitted linear trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    UNKNOWN = "unknown"


class AnomalySeverity(str, Enum):
    """Severity of an anomalous point, by z-score."""

    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class LinearRegressionFit:
    """Ordinary least squares fit of value against sample index.

    Attributes:
        slope: Change in value per sample
        intercept: Fitted value at index 0
        r_squared: Coefficient of determination (0.0-1.0)
    """

    slope: float
    intercept: float
    r_squared: float


@dataclass
class KpiTrendAnalysis:
    """Trend of an indicator's values over a lookback window.

    Attributes:
        indicator_id: Analyzed indicator
        analysis_period_days: Lookback window in days
        data_points: Number of points in the window
        trend_direction: Increasing, decreasing, stable or unknown
        trend_strength: Absolute slope of the fit
        slope: Regression slope (value per sample)
        intercept: Regression intercept
        r_squared: Goodness of fit
        volatility: Sample standard deviation (n-1 denominator)
        standard_deviation: Population standard deviation (n denominator)
        last_value: Most recent value
        average_value: Mean value
        min_value: Minimum value
        max_value: Maximum value
        message: Human-readable summary
    """

    indicator_id: int
    analysis_period_days: int
    data_points: int = 0
    trend_direction: TrendDirection = TrendDirection.UNKNOWN
    trend_strength: float = 0.0
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0
    volatility: float = 0.0
    standard_deviation: float = 0.0
    last_value: float | None = None
    average_value: float | None = None
    min_value: float | None = None
    max_value: float | None = None
    message: str = ""


@dataclass
class KpiPerformanceMetrics:
    """Execution and alerting statistics for one indicator over a period.

    Value statistics cover successful executions only.
    """

    indicator_id: int
    indicator_name: str
    execution_count: int
    successful_executions: int
    failed_executions: int
    alert_count: int
    average_execution_time_ms: float
    average_value: float
    min_value: float
    max_value: float
    reliability: float
    alert_rate: float


@dataclass
class KpiPrediction:
    """Predicted indicator value some days ahead."""

    indicator_id: int
    prediction_date: datetime
    predicted_value: float
    confidence_level: float
    method: str
    data_points: int = 0
    trend_direction: TrendDirection = TrendDirection.UNKNOWN


@dataclass(frozen=True)
class KpiAnomaly:
    """A single point flagged as anomalous.

    Attributes:
        timestamp: When the value was recorded
        value: The anomalous value
        expected_value: Window mean
        deviation: Absolute difference from the mean
        z_score: Deviation in standard deviations
        severity: Medium (z > threshold) or High (z > high threshold)
    """

    timestamp: datetime
    value: float
    expected_value: float
    deviation: float
    z_score: float
    severity: AnomalySeverity


@dataclass
class KpiAnomalyDetection:
    """Z-score anomaly detection result for an indicator."""

    indicator_id: int
    method: str
    data_points: int = 0
    mean: float = 0.0
    standard_deviation: float = 0.0
    threshold: float = 0.0
    anomalies: list[KpiAnomaly] = field(default_factory=list)

    @property
    def anomalies_detected(self) -> int:
        return len(self.anomalies)


@dataclass
class KpiSeasonalityAnalysis:
    """Seasonal pattern of an indicator over one period type.

    Attributes:
        indicator_id: Analyzed indicator
        pattern_type: "hourly", "weekly" or "Insufficient Data"
        bucket_averages: Mean value per bucket (hour 0-23 or weekday name)
        peak_bucket: Bucket with the highest mean
        trough_bucket: Bucket with the lowest mean
        seasonality_strength: Peak-to-trough spread in percent of the overall mean
        data_points: Number of points analyzed
    """

    indicator_id: int
    pattern_type: str
    bucket_averages: dict[str, float] = field(default_factory=dict)
    peak_bucket: str | None = None
    trough_bucket: str | None = None
    seasonality_strength: float = 0.0
    data_points: int = 0


@dataclass
class KpiCorrelationAnalysis:
    """Correlation between two indicators' value series."""

    indicator_id_1: int
    indicator_id_2: int
    correlation_coefficient: float
    data_points: int
