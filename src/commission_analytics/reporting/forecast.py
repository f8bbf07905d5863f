"""Linear projection of month, quarter and year commission totals."""

import calendar
from datetime import date
from typing import Sequence

from ..storage.models import Commission
from .models import CommissionForecast

HIGH_CONFIDENCE_MIN_RECORDS = 50
MEDIUM_CONFIDENCE_MIN_RECORDS = 20


def confidence_label(record_count: int) -> str:
    """Confidence from sample size alone: >50 high, >20 medium, else low."""
    if record_count > HIGH_CONFIDENCE_MIN_RECORDS:
        return "high"
    if record_count > MEDIUM_CONFIDENCE_MIN_RECORDS:
        return "medium"
    return "low"


def _months_ago(created: date, today: date) -> int:
    return (today.year - created.year) * 12 + (today.month - created.month)


def trailing_monthly_average(commissions: Sequence[Commission], today: date, months: int = 3) -> float:
    """Average monthly total over the `months` full months before today's."""
    total = sum(
        c.amount for c in commissions
        if 0 < _months_ago(c.created_at.date(), today) <= months
    )
    return total / months


def project_month(current_total: float, progress: float, fallback: float) -> float:
    """Extrapolate a partial month assuming uniform daily accrual.

    Early in the month this is volatile; the confidence label is what flags it.
    """
    if progress > 0:
        return current_total / progress
    return fallback


def forecast_commissions(commissions: Sequence[Commission], today: date) -> CommissionForecast:
    """Project current month, quarter and year totals to full periods.

    commissions must already be scoped to the caller's agent/role and are
    never date filtered.
    """
    year, month = today.year, today.month
    quarter_start_month = ((month - 1) // 3) * 3 + 1

    this_month = 0.0
    this_quarter = 0.0
    this_year = 0.0
    for c in commissions:
        created = c.created_at
        if created.year != year:
            continue
        this_year += c.amount
        if quarter_start_month <= created.month <= month:
            this_quarter += c.amount
        if created.month == month:
            this_month += c.amount

    days_in_month = calendar.monthrange(year, month)[1]
    progress = today.day / days_in_month

    months_into_quarter = month - quarter_start_month + 1
    months_into_year = month

    return CommissionForecast(
        current_month=this_month,
        projected_month=project_month(
            this_month, progress, trailing_monthly_average(commissions, today)
        ),
        current_quarter=this_quarter,
        projected_quarter=this_quarter / months_into_quarter * 3,
        current_year=this_year,
        projected_year=this_year / months_into_year * 12,
        confidence=confidence_label(len(commissions)),
    )
