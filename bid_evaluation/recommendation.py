from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from bid_evaluation.models import (
    Bid,
    BidScore,
    BudgetComplianceResult,
    QualityMetrics,
    StatisticsSummary,
    Trend,
    TrendResult,
)

COMPETITIVE_SPREAD = 0.3
MIN_BIDS_FOR_SPREAD = 3
BUDGET_ALERT_PERCENTAGE = 50
DOCUMENTATION_MIN_RATIO = 0.5


@dataclass(frozen=True)
class Insight:
    kind: str
    title: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "title": self.title, "message": self.message}


@dataclass(frozen=True)
class RecommendedBid:
    bid_id: str
    company_name: str
    total_amount: float | None
    weighted_score: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "bid_id": self.bid_id,
            "company_name": self.company_name,
            "total_amount": self.total_amount,
            "weighted_score": self.weighted_score,
        }


@dataclass(frozen=True)
class Recommendation:
    top_recommendation: RecommendedBid | None = None
    budget_alternate: RecommendedBid | None = None
    insights: list[Insight] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "top_recommendation": (
                self.top_recommendation.as_dict() if self.top_recommendation else None
            ),
            "budget_alternate": (
                self.budget_alternate.as_dict() if self.budget_alternate else None
            ),
            "insights": [insight.as_dict() for insight in self.insights],
        }


class RecommendationGenerator:
    """Pick the top bid and a budget alternate, and phrase market insights."""

    def generate(
        self,
        bids: Sequence[Bid],
        scores: Sequence[BidScore],
        statistics: StatisticsSummary,
        quality: QualityMetrics,
        trend: TrendResult,
        budget: BudgetComplianceResult | None,
    ) -> Recommendation:
        by_id = {bid.id: bid for bid in bids}
        ranked = sorted(scores, key=lambda score: score.rank)

        top = _recommended(by_id, ranked[0]) if ranked else None

        alternate = None
        if budget is not None and ranked:
            compliant = set(budget.compliant_bid_ids)
            best_compliant = next((s for s in ranked if s.bid_id in compliant), None)
            if best_compliant is not None and best_compliant.bid_id != ranked[0].bid_id:
                alternate = _recommended(by_id, best_compliant)

        return Recommendation(
            top_recommendation=top,
            budget_alternate=alternate,
            insights=self.insights(statistics, quality, trend, budget),
        )

    @staticmethod
    def insights(
        statistics: StatisticsSummary,
        quality: QualityMetrics,
        trend: TrendResult,
        budget: BudgetComplianceResult | None,
    ) -> list[Insight]:
        insights: list[Insight] = []

        spread = statistics.price_spread
        if statistics.valid_count >= MIN_BIDS_FOR_SPREAD and spread is not None:
            if spread < COMPETITIVE_SPREAD:
                insights.append(
                    Insight(
                        "competitive_market",
                        "Price Analysis",
                        f"You received {statistics.valid_count} bids with a "
                        f"{spread * 100:.0f}% price spread. "
                        "This suggests a competitive market.",
                    )
                )
            else:
                insights.append(
                    Insight(
                        "varied_pricing",
                        "Price Analysis",
                        f"You received {statistics.valid_count} bids with a "
                        f"{spread * 100:.0f}% price spread. "
                        "This indicates varied pricing strategies.",
                    )
                )

        if (
            budget is not None
            and budget.valid_count
            and budget.percentage < BUDGET_ALERT_PERCENTAGE
        ):
            insights.append(
                Insight(
                    "budget_alert",
                    "Budget Alert",
                    f"Only {budget.percentage:.0f}% of bids are within budget. "
                    "Consider adjusting your budget or requirements to increase "
                    "viable options.",
                )
            )

        if quality.total_bids and quality.documentation_ratio < DOCUMENTATION_MIN_RATIO:
            insights.append(
                Insight(
                    "documentation",
                    "Documentation",
                    "Less than half of the bids include supporting documents. "
                    "Consider requiring documentation for better evaluation.",
                )
            )

        if trend.trend is Trend.INCREASING:
            insights.append(
                Insight(
                    "close_bidding_soon",
                    "Rising Prices",
                    "Recent bids are trending higher. Consider closing the bidding "
                    "process soon to avoid further price increases.",
                )
            )
        elif trend.trend is Trend.DECREASING:
            insights.append(
                Insight(
                    "favorable_wait",
                    "Falling Prices",
                    "Recent bids are trending lower. This is favorable for your "
                    "budget - you may get even better deals if you wait.",
                )
            )

        return insights


def _recommended(by_id: dict[str, Bid], score: BidScore) -> RecommendedBid:
    bid = by_id.get(score.bid_id)
    return RecommendedBid(
        bid_id=score.bid_id,
        company_name=bid.company_name if bid else "",
        total_amount=bid.total_amount if bid else None,
        weighted_score=score.weighted_score,
    )
