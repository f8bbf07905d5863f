"""Commission analytics for real-estate agencies."""

from .reporting import CommissionReportService
from .storage import InMemoryRecordStore, JSONRecordStore

__version__ = "1.0.0"

__all__ = ["CommissionReportService", "InMemoryRecordStore", "JSONRecordStore"]
