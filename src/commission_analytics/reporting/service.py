"""Commission report assembly.

Every public method here always returns a well-shaped report. Any failure
while reading or computing is logged and turned into the empty report of
the same type, so dashboards only ever see "no data", never an error.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from ..storage.models import Commission
from ..storage.store import RecordStore
from .aggregation import (
    aggregate_by_agent,
    aggregate_by_month,
    aggregate_by_property_type,
    aggregate_by_status,
    monthly_breakdown,
    summarize_totals,
)
from .distribution import describe_commissions
from .filters import (
    DEFAULT_ELEVATED_ROLE,
    DateLike,
    filter_by_agent_scope,
    filter_commissions,
    filter_leads,
)
from .forecast import forecast_commissions
from .models import (
    AgentPerformanceMetrics,
    CommissionDistribution,
    CommissionForecast,
    CommissionReport,
    TopProperty,
)
from .ranking import rank_agents, top_agents

logger = logging.getLogger(__name__)

TOP_PROPERTIES_LIMIT = 5


def _label(value: DateLike) -> str:
    if isinstance(value, str):
        return value
    isoformat = getattr(value, "isoformat", None)
    return isoformat() if isoformat else str(value)


def total_sales_value(commissions: Sequence[Commission]) -> float:
    """Sum of sale prices reconstructed from amount and rate.

    Commissions with a zero rate have no defined sale price and are skipped.
    """
    total = 0.0
    for c in commissions:
        value = c.sales_value
        if value is None:
            logger.debug(f"Skipping sales value for commission {c.id} with zero rate")
            continue
        total += value
    return total


class CommissionReportService:
    """Commission reports, agent metrics, forecasts and distributions.

    Reports are recomputed from a fresh store read on every call.
    """

    def __init__(
        self,
        store: RecordStore,
        elevated_role: str = DEFAULT_ELEVATED_ROLE,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.elevated_role = elevated_role
        self.clock = clock

    def generate_commission_report(
        self,
        start_date: DateLike,
        end_date: DateLike,
        agent_id: Optional[str] = None,
        role: Optional[str] = None,
    ) -> CommissionReport:
        """Totals, leaderboards and breakdowns for a date window."""
        start_label, end_label = _label(start_date), _label(end_date)
        try:
            commissions = filter_commissions(
                self.store.list_commissions(), start_date, end_date,
                agent_id, role, self.elevated_role,
            )
            totals = summarize_totals(commissions)
            ranked = rank_agents(aggregate_by_agent(commissions))

            return CommissionReport(
                period=f"{start_label} to {end_label}",
                start_date=start_label,
                end_date=end_label,
                total_commissions=totals.total_amount,
                paid_commissions=totals.paid_amount,
                pending_commissions=totals.pending_amount,
                overdue_commissions=totals.overdue_amount,
                total_count=totals.total_count,
                paid_count=totals.paid_count,
                pending_count=totals.pending_count,
                overdue_count=totals.overdue_count,
                average_commission=totals.average_commission,
                average_rate=totals.average_rate,
                by_agent=tuple(ranked),
                top_agents=tuple(top_agents(ranked)),
                by_property_type=tuple(
                    aggregate_by_property_type(commissions, self.store.list_properties())
                ),
                by_status=tuple(aggregate_by_status(commissions)),
                monthly_trend=tuple(aggregate_by_month(commissions)),
            )
        except Exception as e:
            logger.error(f"Error generating commission report: {e}")
            return CommissionReport.empty(start_label, end_label)

    def get_agent_performance_metrics(
        self,
        agent_id: str,
        start_date: DateLike,
        end_date: DateLike,
    ) -> AgentPerformanceMetrics:
        """One agent's performance, ranked against every agent in the window."""
        start_label, end_label = _label(start_date), _label(end_date)
        try:
            window = filter_commissions(
                self.store.list_commissions(), start_date, end_date,
                role=self.elevated_role, elevated_role=self.elevated_role,
            )
            commissions = [c for c in window if c.agent_id == agent_id]
            if not commissions:
                return AgentPerformanceMetrics.empty(agent_id, start_label, end_label)

            totals = summarize_totals(commissions)
            ranked = rank_agents(aggregate_by_agent(window))
            own = next(entry for entry in ranked if entry.agent_id == agent_id)

            leads = filter_leads(self.store.list_leads(), agent_id, start_date, end_date)
            converted = sum(1 for l in leads if l.is_converted)

            top_properties = sorted(commissions, key=lambda c: c.amount, reverse=True)
            top_properties = top_properties[:TOP_PROPERTIES_LIMIT]

            return AgentPerformanceMetrics(
                agent_id=agent_id,
                agent_name=commissions[0].agent_name,
                period=f"{start_label} to {end_label}",
                total_commissions=totals.total_amount,
                paid_commissions=totals.paid_amount,
                pending_commissions=totals.pending_amount,
                commission_count=totals.total_count,
                properties_sold=len({c.property_id for c in commissions}),
                average_commission_rate=totals.average_rate,
                average_commission_amount=totals.average_commission,
                conversion_rate=(converted / len(leads) * 100) if leads else 0,
                total_sales_value=total_sales_value(commissions),
                rank=own.rank,
                percent_of_total=own.percent_of_total,
                top_properties=tuple(
                    TopProperty(
                        property_id=c.property_id,
                        # Snapshot title, as it was when the commission closed
                        property_title=c.property_title,
                        commission=c.amount,
                        date=c.created_at.isoformat(),
                    )
                    for c in top_properties
                ),
                monthly_breakdown=tuple(monthly_breakdown(commissions)),
            )
        except Exception as e:
            logger.error(f"Error getting agent performance metrics: {e}")
            return AgentPerformanceMetrics.empty(agent_id, start_label, end_label)

    def compare_agents(
        self,
        agent_ids: Sequence[str],
        start_date: DateLike,
        end_date: DateLike,
    ) -> List[AgentPerformanceMetrics]:
        """Metrics for several agents, highest total first."""
        metrics = [
            self.get_agent_performance_metrics(agent_id, start_date, end_date)
            for agent_id in agent_ids
        ]
        return sorted(metrics, key=lambda m: (-m.total_commissions, m.agent_id))

    def get_commission_forecast(
        self,
        agent_id: Optional[str] = None,
        role: Optional[str] = None,
    ) -> CommissionForecast:
        """Month, quarter and year projections over all-time commissions."""
        try:
            commissions = filter_by_agent_scope(
                self.store.list_commissions(), agent_id, role, self.elevated_role
            )
            return forecast_commissions(commissions, self.clock())
        except Exception as e:
            logger.error(f"Error getting commission forecast: {e}")
            return CommissionForecast.empty()

    def get_commission_distribution(
        self,
        start_date: DateLike,
        end_date: DateLike,
        agent_id: Optional[str] = None,
        role: Optional[str] = None,
    ) -> CommissionDistribution:
        """Amount histogram and descriptive statistics for a date window."""
        try:
            commissions = filter_commissions(
                self.store.list_commissions(), start_date, end_date,
                agent_id, role, self.elevated_role,
            )
            return describe_commissions(commissions)
        except Exception as e:
            logger.error(f"Error getting commission distribution: {e}")
            return CommissionDistribution.empty()
