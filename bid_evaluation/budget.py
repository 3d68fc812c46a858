from __future__ import annotations

from typing import Sequence

from bid_evaluation.models import (
    Bid,
    BudgetComplianceResult,
    has_budget,
    valid_bids,
)


class BudgetComplianceEvaluator:
    """Classify valid bids against the bid request's budget ceiling."""

    def evaluate(
        self, bids: Sequence[Bid], budget_limit: float | None
    ) -> BudgetComplianceResult | None:
        # None means "no compliance data", not "fully compliant".
        if not has_budget(budget_limit):
            return None

        valid = valid_bids(bids)
        compliant = [bid for bid in valid if bid.total_amount <= budget_limit]
        within = len(compliant)

        percentage = within / len(valid) * 100 if valid else 0.0
        compliant_average = (
            sum(bid.total_amount for bid in compliant) / within if within else None
        )

        return BudgetComplianceResult(
            budget_limit=budget_limit,
            valid_count=len(valid),
            within_budget=within,
            over_budget=len(valid) - within,
            percentage=percentage,
            compliant_average=compliant_average,
            compliant_bid_ids=[bid.id for bid in compliant],
        )
