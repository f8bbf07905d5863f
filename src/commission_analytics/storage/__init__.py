"""Storage layer for commission, property and lead records."""

from .models import Commission, CommissionStatus, Lead, LeadStatus, Property
from .store import (
    InMemoryRecordStore,
    JSONRecordStore,
    RecordNotFoundError,
    RecordStore,
    StatusTransitionError,
    StorageError,
)

__all__ = [
    "Commission",
    "CommissionStatus",
    "Lead",
    "LeadStatus",
    "Property",
    "RecordStore",
    "InMemoryRecordStore",
    "JSONRecordStore",
    "RecordNotFoundError",
    "StatusTransitionError",
    "StorageError",
]
