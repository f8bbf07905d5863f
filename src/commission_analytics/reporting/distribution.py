"""Histogram and descriptive statistics over commission amounts."""

import math
import statistics
from typing import List, NamedTuple, Sequence

from ..storage.models import Commission
from .models import CommissionDistribution, DistributionRange


class AmountBucket(NamedTuple):
    label: str
    min: float
    max: float  # exclusive


AMOUNT_BUCKETS = (
    AmountBucket('< 50K', 0, 50_000),
    AmountBucket('50K - 100K', 50_000, 100_000),
    AmountBucket('100K - 250K', 100_000, 250_000),
    AmountBucket('250K - 500K', 250_000, 500_000),
    AmountBucket('500K - 1M', 500_000, 1_000_000),
    AmountBucket('> 1M', 1_000_000, math.inf),
)


def bucket_amounts(amounts: Sequence[float]) -> List[DistributionRange]:
    """Count and sum amounts per bucket, with each bucket's share of the total."""
    total = sum(amounts)
    ranges = []
    for bucket in AMOUNT_BUCKETS:
        in_bucket = [a for a in amounts if bucket.min <= a < bucket.max]
        bucket_total = sum(in_bucket)
        ranges.append(DistributionRange(
            range=bucket.label,
            count=len(in_bucket),
            total_amount=bucket_total,
            percentage=(bucket_total / total * 100) if total > 0 else 0,
        ))
    return ranges


def modal_bucket_mean(ranges: Sequence[DistributionRange]) -> float:
    """Mean amount of the most populous bucket (earliest bucket wins ties)."""
    if not ranges:
        return 0
    modal = ranges[0]
    for r in ranges[1:]:
        if r.count > modal.count:
            modal = r
    return modal.total_amount / (modal.count or 1)


def describe_commissions(commissions: Sequence[Commission]) -> CommissionDistribution:
    """Distribution statistics for a filtered set of commissions."""
    if not commissions:
        return CommissionDistribution.empty()

    amounts = sorted(c.amount for c in commissions)
    ranges = bucket_amounts(amounts)

    return CommissionDistribution(
        ranges=tuple(ranges),
        mean=sum(amounts) / len(amounts),
        median=statistics.median(amounts),
        modal_bucket_mean=modal_bucket_mean(ranges),
        standard_deviation=statistics.pstdev(amounts),
    )
