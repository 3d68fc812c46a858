"""Bid Evaluation Module.

Runs the full evaluation of one bid request's bids in a single call:
statistics, quality, trend and budget compliance, weighted ranking, an
optional side-by-side comparison, and the recommendation bundle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from bid_evaluation.budget import BudgetComplianceEvaluator
from bid_evaluation.comparison import Comparison, ComparisonSelector
from bid_evaluation.criteria import ScoringCriterion, load_scoring_criteria
from bid_evaluation.models import (
    Bid,
    BudgetComplianceResult,
    QualityMetrics,
    StatisticsSummary,
    TrendResult,
    parse_bids,
)
from bid_evaluation.price_statistics import StatisticsAggregator
from bid_evaluation.quality import QualityMetricsCollector
from bid_evaluation.recommendation import Recommendation, RecommendationGenerator
from bid_evaluation.scoring import ScoringEngine, ScoringResult
from bid_evaluation.trend import TrendAnalyzer

logger = logging.getLogger(__name__)

__all__ = ["BidEvaluationReport", "BidEvaluator", "build_bid_evaluator"]


@dataclass
class BidEvaluationReport:
    """Complete evaluation of the bids received for one bid request."""

    budget_limit: float | None
    statistics: StatisticsSummary
    quality: QualityMetrics
    trend: TrendResult
    budget: BudgetComplianceResult | None
    scoring: ScoringResult
    recommendation: Recommendation
    comparison: Comparison | None = None
    evaluated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict[str, Any]:
        return {
            "budget_limit": self.budget_limit,
            "statistics": self.statistics.as_dict(),
            "quality": self.quality.as_dict(),
            "trend": self.trend.as_dict(),
            "budget": self.budget.as_dict() if self.budget else None,
            "scoring": self.scoring.as_dict(),
            "comparison": self.comparison.as_dict() if self.comparison else None,
            "recommendation": self.recommendation.as_dict(),
            "evaluated_at": self.evaluated_at.isoformat(),
        }


class BidEvaluator:
    """Evaluates competing bids with pluggable components.

    Usage:
        evaluator = BidEvaluator()

        report = evaluator.evaluate(
            bids,
            budget_limit=50000,
            overrides={"bid-1": {"Communication": 8}},
            selection=["bid-1", "bid-2"],
        )

        print(report.recommendation.top_recommendation)
    """

    def __init__(
        self,
        statistics_aggregator: StatisticsAggregator | None = None,
        quality_collector: QualityMetricsCollector | None = None,
        trend_analyzer: TrendAnalyzer | None = None,
        budget_evaluator: BudgetComplianceEvaluator | None = None,
        scoring_engine: ScoringEngine | None = None,
        recommendation_generator: RecommendationGenerator | None = None,
        criteria: Sequence[ScoringCriterion] | None = None,
    ):
        self.statistics_aggregator = statistics_aggregator or StatisticsAggregator()
        self.quality_collector = quality_collector or QualityMetricsCollector()
        self.trend_analyzer = trend_analyzer or TrendAnalyzer()
        self.budget_evaluator = budget_evaluator or BudgetComplianceEvaluator()
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.recommendation_generator = (
            recommendation_generator or RecommendationGenerator()
        )
        self.criteria = tuple(criteria) if criteria is not None else None

    def evaluate(
        self,
        bids: Sequence[Bid | dict[str, Any]],
        budget_limit: float | None = None,
        criteria: Sequence[ScoringCriterion] | None = None,
        overrides: Mapping[Any, Any] | None = None,
        selection: Sequence[str] | None = None,
    ) -> BidEvaluationReport:
        """Evaluate a bid request's bids.

        Args:
            bids: Bid objects or raw records (validated with parse_bids)
            budget_limit: Optional budget ceiling of the bid request
            criteria: Weighted criteria for this call (default: evaluator's)
            overrides: Manual scores keyed by (bid_id, criterion)
            selection: Bid ids to compare side by side (at most 3 are kept)

        Returns:
            BidEvaluationReport
        """
        parsed = parse_bids(bids)
        selected_criteria = criteria if criteria is not None else self.criteria

        statistics = self.statistics_aggregator.summarize(parsed)
        quality = self.quality_collector.collect(parsed)
        trend = self.trend_analyzer.analyze(parsed)
        budget = self.budget_evaluator.evaluate(parsed, budget_limit)

        scoring = self.scoring_engine.score_bids(
            parsed,
            criteria=selected_criteria,
            overrides=overrides,
            budget_limit=budget_limit,
        )

        comparison = None
        if selection is not None:
            selector = ComparisonSelector(parsed)
            chosen = selector.select(selection)
            if len(chosen) < len(set(selection)):
                logger.info(
                    "Comparison kept %s of %s requested bids",
                    len(chosen),
                    len(set(selection)),
                )
            comparison = selector.build_comparison(chosen)

        recommendation = self.recommendation_generator.generate(
            parsed, scoring.scores, statistics, quality, trend, budget
        )

        logger.debug(
            "Evaluated %s bids (%s valid, %s ranked)",
            len(parsed),
            statistics.valid_count,
            len(scoring.scores),
        )

        return BidEvaluationReport(
            budget_limit=budget_limit,
            statistics=statistics,
            quality=quality,
            trend=trend,
            budget=budget,
            scoring=scoring,
            recommendation=recommendation,
            comparison=comparison,
        )


def build_bid_evaluator(settings: Mapping[str, Any] | None = None) -> BidEvaluator:
    """Build BidEvaluator with criteria and tie-break policy from settings."""
    settings = settings or {}
    criteria_path = settings.get("BID_EVALUATION_CRITERIA_PATH")
    criteria = load_scoring_criteria(criteria_path) if criteria_path else load_scoring_criteria()
    return BidEvaluator(
        scoring_engine=ScoringEngine(
            tie_break=settings.get("BID_EVALUATION_TIE_BREAK", "submission")
        ),
        criteria=criteria,
    )
