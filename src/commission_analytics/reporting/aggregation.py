"""Grouped sums, counts and averages over commission records."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ..storage.models import Commission, CommissionStatus, Property
from .models import MonthlyBreakdown, MonthlyTrend, PropertyTypeSummary, StatusSummary

UNKNOWN_PROPERTY_TYPE = "Unknown"


@dataclass
class AgentGroup:
    """Running totals for one agent."""
    agent_id: str
    agent_name: str
    total: float = 0
    count: int = 0
    rates: List[float] = field(default_factory=list)

    @property
    def average_rate(self) -> float:
        # Plain mean of per-record rates, not weighted by amount
        return sum(self.rates) / len(self.rates) if self.rates else 0


@dataclass
class Totals:
    """Headline totals for a filtered set of commissions."""
    total_amount: float = 0
    paid_amount: float = 0
    pending_amount: float = 0
    overdue_amount: float = 0
    total_count: int = 0
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    average_commission: float = 0
    average_rate: float = 0


def month_key(commission: Commission) -> str:
    """Zero-padded YYYY-MM key, so lexicographic order is chronological."""
    created = commission.created_at
    return f"{created.year:04d}-{created.month:02d}"


def summarize_totals(commissions: Sequence[Commission]) -> Totals:
    """Amount and count totals by status, plus averages."""
    paid = [c for c in commissions if c.status == CommissionStatus.PAID.value]
    pending = [c for c in commissions if c.status == CommissionStatus.PENDING.value]
    overdue = [c for c in commissions if c.is_overdue]

    total_amount = sum(c.amount for c in commissions)
    count = len(commissions)

    return Totals(
        total_amount=total_amount,
        paid_amount=sum(c.amount for c in paid),
        pending_amount=sum(c.amount for c in pending),
        overdue_amount=sum(c.amount for c in overdue),
        total_count=count,
        paid_count=len(paid),
        pending_count=len(pending),
        overdue_count=len(overdue),
        average_commission=total_amount / count if count else 0,
        average_rate=sum(c.rate for c in commissions) / count if count else 0,
    )


def aggregate_by_agent(commissions: Iterable[Commission]) -> List[AgentGroup]:
    """Group by agent id, sorted by total descending then agent id ascending.

    The first agent name seen for an id is kept.
    """
    groups: Dict[str, AgentGroup] = {}
    for c in commissions:
        group = groups.get(c.agent_id)
        if group is None:
            group = groups[c.agent_id] = AgentGroup(agent_id=c.agent_id, agent_name=c.agent_name)
        group.total += c.amount
        group.count += 1
        group.rates.append(c.rate)

    return sorted(groups.values(), key=lambda g: (-g.total, g.agent_id))


def aggregate_by_property_type(
    commissions: Iterable[Commission],
    properties: Iterable[Property],
) -> List[PropertyTypeSummary]:
    """Group by the type of the commission's property.

    Commissions whose property can't be found are counted under "Unknown".
    """
    type_by_property: Dict[str, str] = {}
    for p in properties:
        type_by_property.setdefault(p.id, p.type)

    stats: Dict[str, List[float]] = {}
    for c in commissions:
        prop_type = type_by_property.get(c.property_id) or UNKNOWN_PROPERTY_TYPE
        stats.setdefault(prop_type, [0, 0])
        stats[prop_type][0] += c.amount
        stats[prop_type][1] += 1

    summaries = [
        PropertyTypeSummary(
            type=prop_type,
            total_commissions=total,
            count=int(count),
            average_commission=total / count,
        )
        for prop_type, (total, count) in stats.items()
    ]
    summaries.sort(key=lambda s: (-s.total_commissions, s.type))
    return summaries


def aggregate_by_status(commissions: Iterable[Commission]) -> List[StatusSummary]:
    """Group by the literal status string, in first-seen order."""
    stats: Dict[str, List[float]] = {}
    for c in commissions:
        stats.setdefault(c.status, [0, 0])
        stats[c.status][0] += c.amount
        stats[c.status][1] += 1

    return [
        StatusSummary(status=status, amount=amount, count=int(count))
        for status, (amount, count) in stats.items()
    ]


def aggregate_by_month(commissions: Iterable[Commission]) -> List[MonthlyTrend]:
    """Monthly totals with paid and pending sub-totals, oldest month first."""
    months: Dict[str, Dict[str, float]] = {}
    for c in commissions:
        stats = months.setdefault(month_key(c), {'total': 0, 'paid': 0, 'pending': 0, 'count': 0})
        stats['total'] += c.amount
        stats['count'] += 1
        if c.status == CommissionStatus.PAID.value:
            stats['paid'] += c.amount
        elif c.status == CommissionStatus.PENDING.value:
            stats['pending'] += c.amount

    return [
        MonthlyTrend(
            month=month,
            total=stats['total'],
            paid=stats['paid'],
            pending=stats['pending'],
            count=int(stats['count']),
        )
        for month, stats in sorted(months.items())
    ]


def monthly_breakdown(commissions: Iterable[Commission]) -> List[MonthlyBreakdown]:
    """Per-month amount and count for a single agent's commissions."""
    return [
        MonthlyBreakdown(month=m.month, commissions=m.total, count=m.count)
        for m in aggregate_by_month(commissions)
    ]
