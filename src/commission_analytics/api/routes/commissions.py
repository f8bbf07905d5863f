"""Commission reporting routes."""

from datetime import date, timedelta
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query

from ...reporting import CommissionReportService
from ...storage import RecordNotFoundError, StatusTransitionError, StorageError
from ..dependencies import get_report_service

router = APIRouter(prefix="/v1/commissions", tags=["commissions"])


def _window(start: Optional[date], end: Optional[date]) -> Tuple[date, date]:
    end = end or date.today()
    start = start or end - timedelta(days=30)
    return start, end


@router.get("/report")
async def commission_report(
    start: Optional[date] = None,
    end: Optional[date] = None,
    agent_id: Optional[str] = None,
    role: Optional[str] = None,
    service: CommissionReportService = Depends(get_report_service),
):
    """Commission totals, leaderboard and breakdowns for a window."""
    start, end = _window(start, end)
    return service.generate_commission_report(start, end, agent_id, role).to_dict()


@router.get("/agents/{agent_id}")
async def agent_performance(
    agent_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    service: CommissionReportService = Depends(get_report_service),
):
    """Performance metrics for one agent."""
    start, end = _window(start, end)
    return service.get_agent_performance_metrics(agent_id, start, end).to_dict()


@router.get("/compare")
async def compare_agents(
    agent_ids: List[str] = Query(..., alias="agent_id"),
    start: Optional[date] = None,
    end: Optional[date] = None,
    service: CommissionReportService = Depends(get_report_service),
):
    """Side-by-side metrics for several agents (repeat ?agent_id=)."""
    start, end = _window(start, end)
    return [m.to_dict() for m in service.compare_agents(agent_ids, start, end)]


@router.get("/forecast")
async def commission_forecast(
    agent_id: Optional[str] = None,
    role: Optional[str] = None,
    service: CommissionReportService = Depends(get_report_service),
):
    """Month, quarter and year projections."""
    return service.get_commission_forecast(agent_id, role).to_dict()


@router.get("/distribution")
async def commission_distribution(
    start: Optional[date] = None,
    end: Optional[date] = None,
    agent_id: Optional[str] = None,
    role: Optional[str] = None,
    service: CommissionReportService = Depends(get_report_service),
):
    """Amount histogram and descriptive statistics."""
    start, end = _window(start, end)
    return service.get_commission_distribution(start, end, agent_id, role).to_dict()


@router.post("/{commission_id}/paid")
async def mark_paid(
    commission_id: str,
    service: CommissionReportService = Depends(get_report_service),
):
    """Mark a commission as paid."""
    try:
        commission = service.store.mark_paid(commission_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=f"Commission {commission_id} not found")
    except StatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return commission.to_dict()


@router.post("/{commission_id}/overdue")
async def flag_overdue(
    commission_id: str,
    payload: dict,
    service: CommissionReportService = Depends(get_report_service),
):
    """Set or clear a commission's overdue flag ({"overdue": true|false})."""
    overdue = payload.get("overdue", True)
    if not isinstance(overdue, bool):
        raise HTTPException(400, "overdue must be true or false")
    try:
        commission = service.store.set_overdue(commission_id, overdue)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=f"Commission {commission_id} not found")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return commission.to_dict()
