"""Descriptive price statistics and distribution over valid bids."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from bid_evaluation.models import Bid, PriceBucket, StatisticsSummary, valid_bids

logger = logging.getLogger(__name__)

BUCKET_COUNT = 5


class StatisticsAggregator:
    """Summarize the amounts of valid bids (positive ``total_amount``)."""

    def __init__(self, bucket_count: int = BUCKET_COUNT):
        self.bucket_count = bucket_count

    def summarize(self, bids: Sequence[Bid]) -> StatisticsSummary:
        valid = valid_bids(bids)
        if not valid:
            logger.debug("No valid bid amounts among %s bids", len(bids))
            return StatisticsSummary(valid_count=0, total_count=len(bids))

        amounts = [bid.total_amount for bid in valid]
        low = min(amounts)
        high = max(amounts)

        return StatisticsSummary(
            valid_count=len(valid),
            total_count=len(bids),
            average=sum(amounts) / len(amounts),
            median=self.median(amounts),
            min=low,
            max=high,
            buckets=self.distribution(amounts, low, high),
        )

    @staticmethod
    def median(amounts: Sequence[float]) -> float:
        # Upper-middle element for even counts; no averaging of the two middles.
        ordered = sorted(amounts)
        return ordered[len(ordered) // 2]

    def distribution(
        self, amounts: Sequence[float], low: float, high: float
    ) -> list[PriceBucket]:
        bucket_size = (high - low) / self.bucket_count
        counts = [0] * self.bucket_count

        for amount in amounts:
            if bucket_size == 0:
                index = 0
            else:
                index = min(
                    math.floor((amount - low) / bucket_size), self.bucket_count - 1
                )
            counts[index] += 1

        return [
            PriceBucket(
                index=index,
                lower=low + index * bucket_size,
                upper=low + (index + 1) * bucket_size,
                count=count,
                percentage=count / len(amounts) * 100,
            )
            for index, count in enumerate(counts)
        ]
