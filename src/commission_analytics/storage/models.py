"""Data models for commission, property and lead records."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class CommissionStatus(Enum):
    """Known commission statuses.

    Records keep whatever status string was stored; this enum is only used
    for comparisons.
    """

    PENDING = "pending"
    PAID = "paid"


class LeadStatus(Enum):
    """Lead statuses relevant to conversion tracking."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    LOST = "lost"


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored ISO-8601 timestamp (a trailing 'Z' is accepted)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (camelCase or snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass
class Commission:
    """A single earned commission.

    agent_name and property_title are snapshots taken when the commission
    was created and are never refreshed from live agent or property data.
    """

    id: str
    amount: float
    rate: float
    status: str
    created_at: datetime
    agent_id: str
    agent_name: str = ""
    property_id: str = ""
    property_title: str = ""
    is_overdue: bool = False

    @property
    def sales_value(self) -> Optional[float]:
        """Sale price reconstructed from amount and rate, None for a zero rate."""
        if not self.rate:
            return None
        return self.amount / (self.rate / 100)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Commission":
        return cls(
            id=str(data["id"]),
            amount=float(data["amount"]),
            rate=float(data["rate"]),
            status=str(data["status"]),
            created_at=parse_timestamp(_pick(data, "createdAt", "created_at")),
            agent_id=str(_pick(data, "agentId", "agent_id")),
            agent_name=_pick(data, "agentName", "agent_name", default="") or "",
            property_id=str(_pick(data, "propertyId", "property_id", default="") or ""),
            property_title=_pick(data, "propertyTitle", "property_title", default="") or "",
            is_overdue=bool(_pick(data, "isOverdue", "is_overdue", default=False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "rate": self.rate,
            "status": self.status,
            "isOverdue": self.is_overdue,
            "createdAt": self.created_at.isoformat(),
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "propertyId": self.property_id,
            "propertyTitle": self.property_title,
        }


@dataclass
class Property:
    """A listed property; only id, title and type matter for reporting."""

    id: str
    title: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Property":
        return cls(
            id=str(data["id"]),
            title=data.get("title", "") or "",
            type=data.get("type", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "type": self.type}


@dataclass
class Lead:
    """A prospective client contact, used for conversion rates."""

    agent_id: str
    created_at: datetime
    status: str = LeadStatus.NEW.value
    id: str = ""

    @property
    def is_converted(self) -> bool:
        return self.status == LeadStatus.CONVERTED.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lead":
        return cls(
            id=str(data.get("id", "")),
            agent_id=str(_pick(data, "agentId", "agent_id", default="") or ""),
            created_at=parse_timestamp(_pick(data, "createdAt", "created_at")),
            status=str(data.get("status", LeadStatus.NEW.value)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "agentId": self.agent_id,
            "createdAt": self.created_at.isoformat(),
            "status": self.status,
        }
