"""Domain entities - Core business objects."""

from src.domain.entities.historical_data import AlertLogEntry, HistoricalDataPoint
from src.domain.entities.indicator import Contact, Indicator, Scheduler, ScheduleType
from src.domain.entities.indicator_evaluation import (
    EscalationLevel,
    HealthLevel,
    IndicatorChangeType,
    IndicatorHealthScore,
    IndicatorStateChange,
    ValidationResult,
)
from src.domain.entities.indicator_events import (
    DomainEvent,
    IndicatorCreatedEvent,
    IndicatorDeletedEvent,
    IndicatorEvent,
    IndicatorExecutedEvent,
    IndicatorThresholdBreachedEvent,
    IndicatorUpdatedEvent,
)
from src.domain.entities.kpi_analytics import (
    AnomalySeverity,
    KpiAnomaly,
    KpiAnomalyDetection,
    KpiCorrelationAnalysis,
    KpiPerformanceMetrics,
    KpiPrediction,
    KpiSeasonalityAnalysis,
    KpiTrendAnalysis,
    TrendDirection,
)
from src.domain.entities.result import DomainError, ErrorType, Result

__all__ = [
    # Indicator aggregate
    "Indicator",
    "Scheduler",
    "ScheduleType",
    "Contact",
    # History
    "HistoricalDataPoint",
    "AlertLogEntry",
    # Evaluation
    "EscalationLevel",
    "HealthLevel",
    "IndicatorChangeType",
    "IndicatorHealthScore",
    "IndicatorStateChange",
    "ValidationResult",
    # Events
    "DomainEvent",
    "IndicatorEvent",
    "IndicatorCreatedEvent",
    "IndicatorUpdatedEvent",
    "IndicatorDeletedEvent",
    "IndicatorExecutedEvent",
    "IndicatorThresholdBreachedEvent",
    # Analytics
    "TrendDirection",
    "AnomalySeverity",
    "KpiTrendAnalysis",
    "KpiPerformanceMetrics",
    "KpiPrediction",
    "KpiAnomaly",
    "KpiAnomalyDetection",
    "KpiSeasonalityAnalysis",
    "KpiCorrelationAnalysis",
    # Result
    "Result",
    "DomainError",
    "ErrorType",
]
