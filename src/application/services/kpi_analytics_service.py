"""KPI analytics over recorded indicator executions.

Loads a time window of history through the repository interfaces and hands
the values to TrendCalculator:
1. Trend: least squares slope, fit quality, volatility and value range
2. Performance metrics: execution, reliability and alert statistics per indicator
3. Prediction: mean-anchored linear projection with R^2-based confidence
4. Anomaly detection: population z-scores
5. Seasonality: hour-of-day and day-of-week averages
6. Correlations: pair enumeration only, no coefficients are computed
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from itertools import combinations

from src.domain.entities.historical_data import AlertLogEntry, HistoricalDataPoint
from src.domain.entities.indicator import Indicator
from src.domain.entities.kpi_analytics import (
    INSUFFICIENT_DATA,
    KpiAnomalyDetection,
    KpiCorrelationAnalysis,
    KpiPerformanceMetrics,
    KpiPrediction,
    KpiSeasonalityAnalysis,
    KpiTrendAnalysis,
    TrendDirection,
)
from src.domain.repositories.alert_log_repository import AlertLogRepositoryInterface
from src.domain.repositories.historical_data_repository import (
    HistoricalDataRepositoryInterface,
)
from src.domain.repositories.indicator_repository import IndicatorRepositoryInterface
from src.domain.services.trend_calculator import TrendCalculator
from src.infrastructure.config import AnalyticsSettings, get_settings

logger = logging.getLogger(__name__)

PREDICTION_METHOD = "Linear Trend"
ANOMALY_METHOD = "Standard Deviation"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class KpiAnalyticsService:
    """Statistics over indicator history.

    The service holds no per-call state; every method reads one window of
    data and computes its result in memory. Repository errors are logged
    and re-raised unchanged.
    """

    def __init__(
        self,
        indicator_repository: IndicatorRepositoryInterface,
        historical_data_repository: HistoricalDataRepositoryInterface,
        alert_log_repository: AlertLogRepositoryInterface,
        trend_calculator: TrendCalculator | None = None,
        settings: AnalyticsSettings | None = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        """Initialize service with dependencies.

        Args:
            indicator_repository: Indicator lookups
            historical_data_repository: Execution history reads
            alert_log_repository: Alert history reads
            trend_calculator: Statistics helper (default instance if omitted)
            settings: Windows and thresholds (global settings if omitted)
            now: Clock returning the current aware UTC time
        """
        self._indicator_repo = indicator_repository
        self._history_repo = historical_data_repository
        self._alert_repo = alert_log_repository
        self._calculator = trend_calculator or TrendCalculator()
        self._settings = settings or get_settings().analytics
        self._now = now

    async def get_kpi_trend(
        self, indicator_id: int, days_back: int | None = None
    ) -> KpiTrendAnalysis:
        """Analyze the trend of an indicator over the last days_back days.

        All recorded executions in the window are used, in timestamp order.

        Returns:
            KpiTrendAnalysis; UNKNOWN direction with zero strength when the
            window is empty

        Raises:
            ValueError: If days_back is negative
        """
        if days_back is None:
            days_back = self._settings.trend_days_back
        if days_back < 0:
            raise ValueError(f"days_back must be non-negative, got {days_back}")
        logger.debug(f"Trend analysis for indicator {indicator_id}, days_back={days_back}")

        points = await self._load_history(indicator_id, days_back)
        if not points:
            return KpiTrendAnalysis(
                indicator_id=indicator_id,
                analysis_period_days=days_back,
                message="Insufficient data for trend analysis",
            )

        values = [float(p.current_value) for p in points]
        fit = self._calculator.fit_linear_regression(values)

        return KpiTrendAnalysis(
            indicator_id=indicator_id,
            analysis_period_days=days_back,
            data_points=len(values),
            trend_direction=self._calculator.classify_direction(
                fit.slope, self._settings.trend_slope_threshold
            ),
            trend_strength=abs(fit.slope),
            slope=fit.slope,
            intercept=fit.intercept,
            r_squared=fit.r_squared,
            volatility=self._calculator.sample_std(values),
            standard_deviation=self._calculator.population_std(values),
            last_value=values[-1],
            average_value=sum(values) / len(values),
            min_value=min(values),
            max_value=max(values),
            message=f"Trend analysis completed for {len(values)} data points",
        )

    async def get_kpi_performance_metrics(
        self, start: datetime, end: datetime
    ) -> list[KpiPerformanceMetrics]:
        """Aggregate execution and alert statistics for every active indicator.

        Indicators without executions in [start, end] are left out. Results
        are sorted by alert rate, highest first.
        """
        logger.debug(f"Performance metrics for {start.isoformat()} - {end.isoformat()}")

        indicators = await self._load_active_indicators()
        metrics: list[KpiPerformanceMetrics] = []

        for indicator in indicators:
            points = await self._load_window(indicator.indicator_id, start, end)
            if not points:
                continue
            alerts = await self._load_alerts(indicator.indicator_id, start, end)
            metrics.append(self._performance_for(indicator, points, alerts))

        metrics.sort(key=lambda m: m.alert_rate, reverse=True)
        return metrics

    async def predict_kpi_value(
        self, indicator_id: int, days_ahead: int = 7
    ) -> KpiPrediction:
        """Predict an indicator's value days_ahead days from now.

        Uses successful executions from the prediction lookback window.
        Confidence is R^2 * 100, capped at the configured maximum.
        """
        logger.debug(f"Prediction for indicator {indicator_id}, days_ahead={days_ahead}")

        points = await self._load_successful(
            indicator_id, self._settings.prediction_lookback_days
        )
        prediction_date = self._now() + timedelta(days=days_ahead)

        if len(points) < self._settings.prediction_min_points:
            return KpiPrediction(
                indicator_id=indicator_id,
                prediction_date=prediction_date,
                predicted_value=0.0,
                confidence_level=0.0,
                method=INSUFFICIENT_DATA,
                data_points=len(points),
            )

        values = [float(p.current_value) for p in points]
        predicted, fit = self._calculator.predict(values, days_ahead)

        return KpiPrediction(
            indicator_id=indicator_id,
            prediction_date=prediction_date,
            predicted_value=predicted,
            confidence_level=min(
                fit.r_squared * 100, self._settings.prediction_max_confidence
            ),
            method=PREDICTION_METHOD,
            data_points=len(values),
            trend_direction=self._calculator.classify_direction(
                fit.slope, self._settings.trend_slope_threshold
            ),
        )

    async def detect_anomalies(self, indicator_id: int) -> KpiAnomalyDetection:
        """Flag successful executions far from the window mean.

        A point is anomalous when |value - mean| / stddev exceeds the z
        threshold (population stddev); High severity above the high threshold.
        """
        logger.debug(f"Anomaly detection for indicator {indicator_id}")

        points = await self._load_successful(
            indicator_id, self._settings.anomaly_lookback_days
        )
        if len(points) < self._settings.anomaly_min_points:
            return KpiAnomalyDetection(
                indicator_id=indicator_id,
                method=INSUFFICIENT_DATA,
                data_points=len(points),
            )

        mean, std, anomalies = self._calculator.find_anomalies(
            points,
            self._settings.anomaly_z_threshold,
            self._settings.anomaly_high_z_threshold,
        )
        if anomalies:
            logger.info(
                f"Detected {len(anomalies)} anomalies for indicator {indicator_id}"
            )

        return KpiAnomalyDetection(
            indicator_id=indicator_id,
            method=ANOMALY_METHOD,
            data_points=len(points),
            mean=mean,
            standard_deviation=std,
            threshold=self._settings.anomaly_z_threshold,
            anomalies=anomalies,
        )

    async def get_kpi_seasonality(self, indicator_id: int) -> list[KpiSeasonalityAnalysis]:
        """Hour-of-day and day-of-week patterns of successful executions."""
        logger.debug(f"Seasonality analysis for indicator {indicator_id}")

        points = await self._load_successful(
            indicator_id, self._settings.seasonality_lookback_days
        )
        if len(points) < self._settings.seasonality_min_points:
            return [
                KpiSeasonalityAnalysis(
                    indicator_id=indicator_id,
                    pattern_type=INSUFFICIENT_DATA,
                    data_points=len(points),
                )
            ]

        overall_mean = sum(float(p.current_value) for p in points) / len(points)
        patterns = (
            ("hourly", self._calculator.hour_of_day),
            ("weekly", self._calculator.day_of_week),
        )

        results: list[KpiSeasonalityAnalysis] = []
        for pattern_type, key in patterns:
            averages = self._calculator.bucket_averages(points, key)
            results.append(
                KpiSeasonalityAnalysis(
                    indicator_id=indicator_id,
                    pattern_type=pattern_type,
                    bucket_averages=averages,
                    peak_bucket=max(averages, key=averages.__getitem__),
                    trough_bucket=min(averages, key=averages.__getitem__),
                    seasonality_strength=self._calculator.seasonality_strength(
                        averages, overall_mean
                    ),
                    data_points=len(points),
                )
            )
        return results

    async def get_kpi_correlations(self) -> list[KpiCorrelationAnalysis]:
        """Pairs of active indicators; correlation coefficients are not computed yet."""
        indicators = await self._load_active_indicators()
        pairs = list(combinations(indicators, 2))
        logger.debug(
            f"Correlation analysis over {len(indicators)} indicators ({len(pairs)} pairs)"
        )
        return []

    def _performance_for(
        self,
        indicator: Indicator,
        points: list[HistoricalDataPoint],
        alerts: list[AlertLogEntry],
    ) -> KpiPerformanceMetrics:
        total = len(points)
        successful = [float(p.current_value) for p in points if p.is_successful]
        durations = [p.execution_time_ms for p in points if p.execution_time_ms is not None]

        return KpiPerformanceMetrics(
            indicator_id=indicator.indicator_id,
            indicator_name=indicator.indicator_name,
            execution_count=total,
            successful_executions=len(successful),
            failed_executions=total - len(successful),
            alert_count=len(alerts),
            average_execution_time_ms=sum(durations) / len(durations) if durations else 0.0,
            average_value=sum(successful) / len(successful) if successful else 0.0,
            min_value=min(successful, default=0.0),
            max_value=max(successful, default=0.0),
            reliability=len(successful) / total * 100,
            alert_rate=len(alerts) / total * 100,
        )

    async def _load_history(
        self, indicator_id: int, days_back: int
    ) -> list[HistoricalDataPoint]:
        end = self._now()
        return await self._load_window(indicator_id, end - timedelta(days=days_back), end)

    async def _load_successful(
        self, indicator_id: int, days_back: int
    ) -> list[HistoricalDataPoint]:
        points = await self._load_history(indicator_id, days_back)
        return [p for p in points if p.is_successful]

    async def _load_window(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list[HistoricalDataPoint]:
        try:
            points = await self._history_repo.get_for_indicator(indicator_id, start, end)
        except Exception:
            logger.exception(f"Failed to load history for indicator {indicator_id}")
            raise
        return sorted(points, key=lambda p: p.timestamp)

    async def _load_alerts(
        self, indicator_id: int, start: datetime, end: datetime
    ) -> list[AlertLogEntry]:
        try:
            return await self._alert_repo.list_for_indicator(indicator_id, start, end)
        except Exception:
            logger.exception(f"Failed to load alerts for indicator {indicator_id}")
            raise

    async def _load_active_indicators(self) -> list[Indicator]:
        try:
            return await self._indicator_repo.list_active()
        except Exception:
            logger.exception("Failed to load active indicators")
            raise
