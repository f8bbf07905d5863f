"""Date-window and agent-scope filtering of records."""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from ..storage.models import Commission, Lead

DateLike = Union[date, datetime, str]

DEFAULT_ELEVATED_ROLE = "admin"


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text).date()


def in_window(created_at: datetime, start: date, end: date) -> bool:
    """Inclusive on both bounds, compared as dates (time of day ignored)."""
    return start <= created_at.date() <= end


def filter_by_agent_scope(
    commissions: Iterable[Commission],
    agent_id: Optional[str] = None,
    role: Optional[str] = None,
    elevated_role: str = DEFAULT_ELEVATED_ROLE,
) -> List[Commission]:
    """Restrict non-elevated callers to their own commissions.

    A caller without the elevated role and without an agent id sees nothing.
    """
    if role == elevated_role:
        return list(commissions)
    return [c for c in commissions if c.agent_id == agent_id]


def filter_commissions(
    commissions: Iterable[Commission],
    start_date: DateLike,
    end_date: DateLike,
    agent_id: Optional[str] = None,
    role: Optional[str] = None,
    elevated_role: str = DEFAULT_ELEVATED_ROLE,
) -> List[Commission]:
    """Commissions created within [start_date, end_date] visible to the caller.

    An inverted range simply matches nothing.
    """
    start = to_date(start_date)
    end = to_date(end_date)
    in_range = [c for c in commissions if in_window(c.created_at, start, end)]
    return filter_by_agent_scope(in_range, agent_id, role, elevated_role)


def filter_leads(
    leads: Iterable[Lead],
    agent_id: str,
    start_date: DateLike,
    end_date: DateLike,
) -> List[Lead]:
    """Leads owned by agent_id and created within the window."""
    start = to_date(start_date)
    end = to_date(end_date)
    return [
        l for l in leads
        if l.agent_id == agent_id and in_window(l.created_at, start, end)
    ]
