"""Tests for commission distribution statistics."""

import math

import pytest

from commission_analytics.reporting.distribution import (
    AMOUNT_BUCKETS,
    bucket_amounts,
    describe_commissions,
    modal_bucket_mean,
)


class TestDescribeCommissions:
    """Tests for describe_commissions."""

    def test_three_amounts(self, make_commission):
        records = [make_commission(amount=a) for a in (1200000, 10000, 60000)]

        dist = describe_commissions(records)

        counts = {r.range: r.count for r in dist.ranges}
        assert counts == {
            '< 50K': 1,
            '50K - 100K': 1,
            '100K - 250K': 0,
            '250K - 500K': 0,
            '500K - 1M': 0,
            '> 1M': 1,
        }
        assert dist.mean == pytest.approx(423333.33, abs=0.01)
        assert dist.median == 60000

    def test_even_count_median(self, make_commission):
        records = [make_commission(amount=a) for a in (10, 40, 20, 30)]
        assert describe_commissions(records).median == 25

    def test_population_standard_deviation(self, make_commission):
        records = [make_commission(amount=a) for a in (2, 4, 4, 4, 5, 5, 7, 9)]
        assert describe_commissions(records).standard_deviation == pytest.approx(2.0)

    def test_buckets_cover_every_record(self, make_commission):
        amounts = [0, 49999, 50000, 99999.5, 100000, 250000, 499999, 500000, 1000000, 7500000]
        records = [make_commission(amount=a) for a in amounts]

        dist = describe_commissions(records)

        assert sum(r.count for r in dist.ranges) == len(amounts)
        assert sum(r.total_amount for r in dist.ranges) == pytest.approx(sum(amounts))
        assert sum(r.percentage for r in dist.ranges) == pytest.approx(100)

    def test_empty_input_is_all_zero(self):
        dist = describe_commissions([])

        assert dist.ranges == ()
        assert dist.mean == 0
        assert dist.median == 0
        assert dist.modal_bucket_mean == 0
        assert dist.standard_deviation == 0

    def test_bounds_lower_inclusive_upper_exclusive(self):
        ranges = bucket_amounts([50000, 1000000])
        assert ranges[1].count == 1
        assert ranges[5].count == 1
        assert ranges[0].count == 0


class TestModalBucketMean:
    """Tests for modal_bucket_mean."""

    def test_mean_of_most_populous_bucket(self):
        ranges = bucket_amounts([10000, 20000, 60000, 2000000])
        assert modal_bucket_mean(ranges) == 15000

    def test_first_bucket_wins_ties(self):
        ranges = bucket_amounts([70000, 300000])
        assert modal_bucket_mean(ranges) == 70000

    def test_last_bucket_is_unbounded(self):
        assert AMOUNT_BUCKETS[-1].max == math.inf
