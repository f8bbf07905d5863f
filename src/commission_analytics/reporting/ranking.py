"""Agent leaderboards built from the by-agent aggregation."""

from typing import List, Sequence

from .aggregation import AgentGroup
from .models import AgentSummary

TOP_AGENTS_LIMIT = 10


def rank_agents(groups: Sequence[AgentGroup]) -> List[AgentSummary]:
    """Rank every agent by total commissions.

    Ties are broken by agent id ascending. percent_of_total is each agent's
    share of the window's grand total, or 0 when that total is 0.
    """
    ordered = sorted(groups, key=lambda g: (-g.total, g.agent_id))
    grand_total = sum(g.total for g in ordered)

    return [
        AgentSummary(
            agent_id=g.agent_id,
            agent_name=g.agent_name,
            total_commissions=g.total,
            count=g.count,
            average_rate=g.average_rate,
            rank=position,
            percent_of_total=(g.total / grand_total * 100) if grand_total else 0,
        )
        for position, g in enumerate(ordered, start=1)
    ]


def top_agents(ranked: Sequence[AgentSummary], limit: int = TOP_AGENTS_LIMIT) -> List[AgentSummary]:
    return list(ranked[:limit])
