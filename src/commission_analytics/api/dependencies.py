"""FastAPI dependencies for the commission routes."""

from ..config import settings
from ..reporting import CommissionReportService
from ..storage import JSONRecordStore


def get_report_service() -> CommissionReportService:
    """Report service over the configured data directory.

    Built per request so every report reads the store afresh.
    """
    return CommissionReportService(
        JSONRecordStore(settings.data_dir),
        elevated_role=settings.elevated_role,
    )
