"""Price trend between early and recent submissions."""

from __future__ import annotations

import logging
from typing import Sequence

from bid_evaluation.models import Bid, Trend, TrendResult, valid_bids

logger = logging.getLogger(__name__)

RECENT_WINDOW = 3
MIN_GROUP_SIZE = 2
INCREASE_FACTOR = 1.1
DECREASE_FACTOR = 0.9


class TrendAnalyzer:
    """Compare the latest submissions' prices against the earlier ones."""

    def analyze(self, bids: Sequence[Bid]) -> TrendResult:
        ordered = sorted(valid_bids(bids), key=lambda bid: bid.submitted_at)
        split = max(len(ordered) - RECENT_WINDOW, 0)
        earlier, recent = ordered[:split], ordered[split:]

        if len(recent) < MIN_GROUP_SIZE or len(earlier) < MIN_GROUP_SIZE:
            logger.debug(
                "Not enough bids for a trend (recent=%s, earlier=%s)",
                len(recent),
                len(earlier),
            )
            return TrendResult(
                trend=Trend.STABLE,
                sufficient_data=False,
                recent_count=len(recent),
                earlier_count=len(earlier),
            )

        recent_avg = _average(recent)
        earlier_avg = _average(earlier)
        if recent_avg > earlier_avg * INCREASE_FACTOR:
            trend = Trend.INCREASING
        elif recent_avg < earlier_avg * DECREASE_FACTOR:
            trend = Trend.DECREASING
        else:
            trend = Trend.STABLE

        return TrendResult(
            trend=trend,
            sufficient_data=True,
            recent_count=len(recent),
            earlier_count=len(earlier),
            recent_average=recent_avg,
            earlier_average=earlier_avg,
        )


def _average(bids: Sequence[Bid]) -> float:
    return sum(bid.total_amount for bid in bids) / len(bids)
