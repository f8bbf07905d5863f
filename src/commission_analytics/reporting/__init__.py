"""Commission reporting and analytics."""

from .models import (
    AgentPerformanceMetrics,
    AgentSummary,
    CommissionDistribution,
    CommissionForecast,
    CommissionReport,
    DistributionRange,
)
from .service import CommissionReportService

__all__ = [
    "CommissionReportService",
    "CommissionReport",
    "AgentSummary",
    "AgentPerformanceMetrics",
    "CommissionForecast",
    "CommissionDistribution",
    "DistributionRange",
]
