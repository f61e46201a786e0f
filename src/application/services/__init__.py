"""Application services - Repository-backed orchestration of domain logic."""

from src.application.services.kpi_analytics_service import KpiAnalyticsService

__all__ = ["KpiAnalyticsService"]
