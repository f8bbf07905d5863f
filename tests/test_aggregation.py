"""Tests for grouped commission aggregation."""

import pytest

from commission_analytics.reporting.aggregation import (
    UNKNOWN_PROPERTY_TYPE,
    aggregate_by_agent,
    aggregate_by_month,
    aggregate_by_property_type,
    aggregate_by_status,
    summarize_totals,
)
from commission_analytics.storage import Property


class TestAggregateByAgent:
    """Tests for aggregate_by_agent."""

    def test_average_rate_is_not_amount_weighted(self, make_commission):
        """1% on 1M and 10% on 10 average to 5.5%, not ~1%."""
        groups = aggregate_by_agent([
            make_commission(amount=1000000, rate=1),
            make_commission(amount=10, rate=10),
        ])

        assert len(groups) == 1
        assert groups[0].average_rate == pytest.approx(5.5)
        assert groups[0].total == 1000010
        assert groups[0].count == 2

    def test_first_agent_name_wins(self, make_commission):
        groups = aggregate_by_agent([
            make_commission(agent_id="A", agent_name="Old Name"),
            make_commission(agent_id="A", agent_name="New Name"),
        ])
        assert groups[0].agent_name == "Old Name"

    def test_sorted_by_total_then_agent_id(self, make_commission):
        groups = aggregate_by_agent([
            make_commission(agent_id="C", amount=100),
            make_commission(agent_id="B", amount=500),
            make_commission(agent_id="A", amount=100),
        ])
        assert [g.agent_id for g in groups] == ["B", "A", "C"]


class TestAggregateByPropertyType:
    """Tests for aggregate_by_property_type."""

    def test_joins_property_type_and_buckets_unknown(self, make_commission):
        properties = [Property(id="P1", type="house"), Property(id="P2", type="plot")]
        summaries = aggregate_by_property_type([
            make_commission(property_id="P1", amount=300),
            make_commission(property_id="P1", amount=100),
            make_commission(property_id="P2", amount=50),
            make_commission(property_id="gone", amount=70),
        ], properties)

        assert [s.type for s in summaries] == ["house", UNKNOWN_PROPERTY_TYPE, "plot"]
        house = summaries[0]
        assert house.total_commissions == 400
        assert house.count == 2
        assert house.average_commission == 200

    def test_duplicate_property_id_uses_first_type(self, make_commission):
        properties = [Property(id="P1", type="house"), Property(id="P1", type="plot")]
        summaries = aggregate_by_property_type([make_commission(property_id="P1")], properties)
        assert [s.type for s in summaries] == ["house"]

    def test_property_without_type_is_unknown(self, make_commission):
        summaries = aggregate_by_property_type(
            [make_commission(property_id="P1")], [Property(id="P1", type="")]
        )
        assert summaries[0].type == "Unknown"


class TestAggregateByStatus:
    """Tests for aggregate_by_status."""

    def test_unexpected_status_gets_own_bucket(self, make_commission):
        summaries = aggregate_by_status([
            make_commission(status="pending", amount=10),
            make_commission(status="paid", amount=20),
            make_commission(status="disputed", amount=30),
            make_commission(status="pending", amount=40),
        ])

        assert [(s.status, s.amount, s.count) for s in summaries] == [
            ("pending", 50, 2),
            ("paid", 20, 1),
            ("disputed", 30, 1),
        ]


class TestAggregateByMonth:
    """Tests for aggregate_by_month."""

    def test_month_keys_sorted_with_paid_pending_split(self, make_commission):
        trend = aggregate_by_month([
            make_commission(created_at="2024-11-03T10:00:00", status="paid", amount=100),
            make_commission(created_at="2024-02-10T10:00:00", status="pending", amount=40),
            make_commission(created_at="2024-11-20T10:00:00", status="pending", amount=60),
            make_commission(created_at="2024-11-21T10:00:00", status="disputed", amount=5),
        ])

        assert [m.month for m in trend] == ["2024-02", "2024-11"]
        november = trend[1]
        assert november.total == 165
        assert november.paid == 100
        assert november.pending == 60
        assert november.count == 3


class TestSummarizeTotals:
    """Tests for summarize_totals."""

    def test_empty(self):
        totals = summarize_totals([])
        assert totals.total_amount == 0
        assert totals.average_commission == 0
        assert totals.average_rate == 0

    def test_counts_partition_by_status(self, make_commission):
        records = [
            make_commission(status="paid"),
            make_commission(status="pending", is_overdue=True, amount=5),
            make_commission(status="disputed"),
        ]
        totals = summarize_totals(records)

        assert totals.paid_count + totals.pending_count + 1 == totals.total_count
        assert totals.overdue_count == 1
        assert totals.overdue_amount == 5

    def test_all_groupings_partition_the_same_total(self, make_commission):
        records = [
            make_commission(agent_id="A", property_id="P1", status="paid", amount=120),
            make_commission(agent_id="B", property_id="P2", status="pending", amount=80),
            make_commission(agent_id="B", property_id="P9", status="odd", amount=33),
        ]
        properties = [Property(id="P1", type="house"), Property(id="P2", type="flat")]
        total = summarize_totals(records).total_amount

        assert sum(g.total for g in aggregate_by_agent(records)) == total
        assert sum(s.total_commissions for s in aggregate_by_property_type(records, properties)) == total
        assert sum(s.amount for s in aggregate_by_status(records)) == total
        assert sum(m.total for m in aggregate_by_month(records)) == total
