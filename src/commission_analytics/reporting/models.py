"""Report values returned by the commission analytics entry points.

All report types are frozen dataclasses with tuple collections, so a report
cannot be mutated once assembled. Each one has an ``empty`` builder used
when a report has to degrade to zeros.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple


def _serialize(value: Any) -> Any:
    if hasattr(value, "__dataclass_fields__"):
        return {f.name: _serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form of the report."""
        return _serialize(self)


@dataclass(frozen=True)
class AgentSummary(_Serializable):
    """One agent's commissions within a report window."""
    agent_id: str
    agent_name: str
    total_commissions: float
    count: int
    average_rate: float
    rank: int = 0
    percent_of_total: float = 0.0


@dataclass(frozen=True)
class PropertyTypeSummary(_Serializable):
    type: str
    total_commissions: float
    count: int
    average_commission: float


@dataclass(frozen=True)
class StatusSummary(_Serializable):
    status: str
    amount: float
    count: int


@dataclass(frozen=True)
class MonthlyTrend(_Serializable):
    month: str  # YYYY-MM
    total: float
    paid: float
    pending: float
    count: int


@dataclass(frozen=True)
class CommissionReport(_Serializable):
    """Agency-wide (or single-agent) commission report for a date window."""
    period: str
    start_date: str
    end_date: str
    total_commissions: float = 0.0
    paid_commissions: float = 0.0
    pending_commissions: float = 0.0
    overdue_commissions: float = 0.0
    total_count: int = 0
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    average_commission: float = 0.0
    average_rate: float = 0.0
    by_agent: Tuple[AgentSummary, ...] = ()
    top_agents: Tuple[AgentSummary, ...] = ()
    by_property_type: Tuple[PropertyTypeSummary, ...] = ()
    by_status: Tuple[StatusSummary, ...] = ()
    monthly_trend: Tuple[MonthlyTrend, ...] = ()

    @classmethod
    def empty(cls, start_date: str, end_date: str) -> "CommissionReport":
        return cls(
            period=f"{start_date} to {end_date}",
            start_date=start_date,
            end_date=end_date,
        )


@dataclass(frozen=True)
class TopProperty(_Serializable):
    property_id: str
    property_title: str
    commission: float
    date: str


@dataclass(frozen=True)
class MonthlyBreakdown(_Serializable):
    month: str
    commissions: float
    count: int


@dataclass(frozen=True)
class AgentPerformanceMetrics(_Serializable):
    """Performance of a single agent over a date window."""
    agent_id: str
    agent_name: str
    period: str
    total_commissions: float = 0.0
    paid_commissions: float = 0.0
    pending_commissions: float = 0.0
    commission_count: int = 0
    properties_sold: int = 0
    average_commission_rate: float = 0.0
    average_commission_amount: float = 0.0
    conversion_rate: float = 0.0
    total_sales_value: float = 0.0
    rank: int = 0
    percent_of_total: float = 0.0
    top_properties: Tuple[TopProperty, ...] = ()
    monthly_breakdown: Tuple[MonthlyBreakdown, ...] = ()

    @classmethod
    def empty(cls, agent_id: str, start_date: str, end_date: str) -> "AgentPerformanceMetrics":
        return cls(
            agent_id=agent_id,
            agent_name="",
            period=f"{start_date} to {end_date}",
        )


@dataclass(frozen=True)
class CommissionForecast(_Serializable):
    current_month: float = 0.0
    projected_month: float = 0.0
    current_quarter: float = 0.0
    projected_quarter: float = 0.0
    current_year: float = 0.0
    projected_year: float = 0.0
    confidence: str = "low"

    @classmethod
    def empty(cls) -> "CommissionForecast":
        return cls()


@dataclass(frozen=True)
class DistributionRange(_Serializable):
    range: str
    count: int
    total_amount: float
    percentage: float


@dataclass(frozen=True)
class CommissionDistribution(_Serializable):
    """Descriptive statistics over commission amounts.

    modal_bucket_mean is the mean amount of the most populous range bucket,
    not the most frequent exact amount.
    """
    ranges: Tuple[DistributionRange, ...] = ()
    mean: float = 0.0
    median: float = 0.0
    modal_bucket_mean: float = 0.0
    standard_deviation: float = 0.0

    @classmethod
    def empty(cls) -> "CommissionDistribution":
        return cls()
