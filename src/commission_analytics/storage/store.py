"""Record stores backing the commission reports."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .models import Commission, CommissionStatus, Lead, Property

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_payable(commission_id: str, status: str):
    """Only pending commissions can be paid; paying a paid one is a no-op."""
    if status not in (CommissionStatus.PENDING.value, CommissionStatus.PAID.value):
        raise StatusTransitionError(
            f"Commission {commission_id} is '{status}' and cannot be marked as paid"
        )


class RecordNotFoundError(KeyError):
    """Raised when a write targets a record id that does not exist."""


class StorageError(Exception):
    """Raised when a collection file cannot be safely rewritten."""


class StatusTransitionError(ValueError):
    """Raised when a commission cannot move to the requested status."""


class RecordStore(ABC):
    """Read access to the agency's commission, property and lead records.

    Reads must tolerate missing state by returning empty lists.
    """

    @abstractmethod
    def list_commissions(self) -> List[Commission]:
        ...

    @abstractmethod
    def list_properties(self) -> List[Property]:
        ...

    @abstractmethod
    def list_leads(self) -> List[Lead]:
        ...

    @abstractmethod
    def add_commission(self, commission: Commission):
        ...

    @abstractmethod
    def add_property(self, prop: Property):
        ...

    @abstractmethod
    def add_lead(self, lead: Lead):
        ...

    @abstractmethod
    def mark_paid(self, commission_id: str) -> Commission:
        ...

    @abstractmethod
    def set_overdue(self, commission_id: str, overdue: bool = True) -> Commission:
        ...


class InMemoryRecordStore(RecordStore):
    """Record store over plain lists, used for fixtures and embedding."""

    def __init__(
        self,
        commissions: Optional[List[Commission]] = None,
        properties: Optional[List[Property]] = None,
        leads: Optional[List[Lead]] = None,
    ):
        self.commissions: List[Commission] = list(commissions or [])
        self.properties: List[Property] = list(properties or [])
        self.leads: List[Lead] = list(leads or [])

    def list_commissions(self) -> List[Commission]:
        return list(self.commissions)

    def list_properties(self) -> List[Property]:
        return list(self.properties)

    def list_leads(self) -> List[Lead]:
        return list(self.leads)

    def add_commission(self, commission: Commission):
        self.commissions.append(commission)

    def add_property(self, prop: Property):
        self.properties.append(prop)

    def add_lead(self, lead: Lead):
        self.leads.append(lead)

    def _find(self, commission_id: str) -> Commission:
        for commission in self.commissions:
            if commission.id == commission_id:
                return commission
        raise RecordNotFoundError(commission_id)

    def mark_paid(self, commission_id: str) -> Commission:
        commission = self._find(commission_id)
        _check_payable(commission_id, commission.status)
        commission.status = CommissionStatus.PAID.value
        return commission

    def set_overdue(self, commission_id: str, overdue: bool = True) -> Commission:
        commission = self._find(commission_id)
        commission.is_overdue = overdue
        return commission


class JSONRecordStore(RecordStore):
    """Record store keeping one JSON array per collection in a directory.

    Files are re-read on every call so reports always see the latest writes.
    """

    COMMISSIONS_FILE = "commissions.json"
    PROPERTIES_FILE = "properties.json"
    LEADS_FILE = "leads.json"

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            data_dir = Path.home() / ".commission-analytics"
        self.data_dir = Path(data_dir)

    def _read_raw(self, filename: str) -> List[Dict[str, Any]]:
        """Read a collection file, returning [] when missing or unreadable."""
        try:
            return self._read_for_update(filename)
        except StorageError as e:
            logger.error(f"Error reading {e}")
            return []

    def _read_for_update(self, filename: str) -> List[Dict[str, Any]]:
        """Read a collection file that is about to be rewritten.

        A file that exists but is not a JSON array raises StorageError, so
        the stored history is never replaced by a partial list.
        """
        path = self.data_dir / filename
        if not path.exists():
            return []
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"{path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"{path}: expected a JSON array")
        return data

    def _write_raw(self, filename: str, records: List[Dict[str, Any]]):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{filename}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.data_dir / filename)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _load(self, filename: str, decode: Callable[[Dict[str, Any]], T]) -> List[T]:
        return [decode(item) for item in self._read_raw(filename)]

    def list_commissions(self) -> List[Commission]:
        return self._load(self.COMMISSIONS_FILE, Commission.from_dict)

    def list_properties(self) -> List[Property]:
        return self._load(self.PROPERTIES_FILE, Property.from_dict)

    def list_leads(self) -> List[Lead]:
        return self._load(self.LEADS_FILE, Lead.from_dict)

    def _append(self, filename: str, record: Dict[str, Any]):
        records = self._read_for_update(filename)
        records.append(record)
        self._write_raw(filename, records)

    def add_commission(self, commission: Commission):
        self._append(self.COMMISSIONS_FILE, commission.to_dict())

    def add_property(self, prop: Property):
        self._append(self.PROPERTIES_FILE, prop.to_dict())

    def add_lead(self, lead: Lead):
        self._append(self.LEADS_FILE, lead.to_dict())

    def _update_commission(
        self,
        commission_id: str,
        changes: Dict[str, Any],
        check: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> Commission:
        records = self._read_for_update(self.COMMISSIONS_FILE)
        for record in records:
            if str(record.get("id")) == commission_id:
                if check:
                    check(record)
                record.update(changes)
                self._write_raw(self.COMMISSIONS_FILE, records)
                return Commission.from_dict(record)
        raise RecordNotFoundError(commission_id)

    def mark_paid(self, commission_id: str) -> Commission:
        commission = self._update_commission(
            commission_id,
            {"status": CommissionStatus.PAID.value},
            check=lambda record: _check_payable(commission_id, str(record.get("status", ""))),
        )
        logger.info(f"Commission {commission_id} marked as paid")
        return commission

    def set_overdue(self, commission_id: str, overdue: bool = True) -> Commission:
        return self._update_commission(commission_id, {"isOverdue": overdue})
