"""Shared fixtures for commission analytics tests."""

import itertools
from datetime import datetime

import pytest

from commission_analytics.storage import Commission


@pytest.fixture
def make_commission():
    """Factory building commissions with sensible defaults."""
    ids = itertools.count(1)

    def _make(
        amount=100000,
        rate=3,
        status="pending",
        created_at="2024-06-15T10:00:00",
        agent_id="A",
        agent_name=None,
        property_id="P1",
        property_title="",
        is_overdue=False,
    ):
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return Commission(
            id=f"c{next(ids)}",
            amount=amount,
            rate=rate,
            status=status,
            created_at=created_at,
            agent_id=agent_id,
            agent_name=agent_name if agent_name is not None else f"Agent {agent_id}",
            property_id=property_id,
            property_title=property_title or f"Property {property_id}",
            is_overdue=is_overdue,
        )

    return _make
