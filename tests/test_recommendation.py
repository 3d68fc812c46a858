from __future__ import annotations

import pytest

from bid_evaluation.budget import BudgetComplianceEvaluator
from bid_evaluation.models import Trend, TrendResult
from bid_evaluation.price_statistics import StatisticsAggregator
from bid_evaluation.quality import QualityMetricsCollector
from bid_evaluation.recommendation import RecommendationGenerator
from bid_evaluation.scoring import ScoringEngine
from bid_evaluation.trend import TrendAnalyzer


def _recommend(bids, budget=None, trend=None):
    scoring = ScoringEngine().score_bids(bids, budget_limit=budget)
    return RecommendationGenerator().generate(
        bids,
        scoring.scores,
        StatisticsAggregator().summarize(bids),
        QualityMetricsCollector().collect(bids),
        trend or TrendAnalyzer().analyze(bids),
        BudgetComplianceEvaluator().evaluate(bids, budget),
    )


def _kinds(recommendation):
    return [insight.kind for insight in recommendation.insights]


def test_budget_alternate_when_top_pick_is_over_budget(bid_factory, complete_fields):
    bids = [bid_factory("premium", 1200, **complete_fields), bid_factory("lean", 900)]

    recommendation = _recommend(bids, budget=1000)

    assert recommendation.top_recommendation.bid_id == "premium"
    assert recommendation.top_recommendation.weighted_score == pytest.approx(6.0)
    assert recommendation.budget_alternate.bid_id == "lean"
    assert recommendation.budget_alternate.weighted_score == pytest.approx(3.0)
    assert recommendation.budget_alternate.total_amount == 900


def test_no_alternate_when_top_pick_is_within_budget(bid_factory, complete_fields):
    bids = [bid_factory("best", 900, **complete_fields), bid_factory("other", 950)]

    recommendation = _recommend(bids, budget=1000)

    assert recommendation.top_recommendation.bid_id == "best"
    assert recommendation.budget_alternate is None


def test_no_alternate_without_budget(bid_factory, complete_fields):
    bids = [bid_factory("premium", 1200, **complete_fields), bid_factory("lean", 900)]

    assert _recommend(bids).budget_alternate is None


def test_competitive_market_insight(bid_factory):
    bids = [bid_factory(str(i), amount, has_uploaded_file=True) for i, amount in enumerate([1000, 1100, 1200])]

    assert _kinds(_recommend(bids)) == ["competitive_market"]


def test_varied_pricing_insight(bid_factory):
    bids = [bid_factory(str(i), amount, has_uploaded_file=True) for i, amount in enumerate([900, 1000, 1500])]

    assert _kinds(_recommend(bids)) == ["varied_pricing"]


def test_spread_insight_needs_three_valid_bids(bid_factory):
    bids = [bid_factory("a", 900, has_uploaded_file=True), bid_factory("b", 1500, has_uploaded_file=True)]

    assert _kinds(_recommend(bids)) == []


def test_budget_alert_below_half_compliance(bid_factory):
    bids = [bid_factory("a", 1000, has_uploaded_file=True), bid_factory("b", 2000, has_uploaded_file=True)]

    assert _kinds(_recommend(bids, budget=1500)) == []
    assert _kinds(_recommend(bids, budget=900)) == ["budget_alert"]


def test_no_budget_alert_without_priced_bids(bid_factory):
    bids = [bid_factory("a", None, has_uploaded_file=True)]

    assert _kinds(_recommend(bids, budget=900)) == []


def test_documentation_insight_when_few_bids_have_files(bid_factory):
    bids = [
        bid_factory("a", 1000, has_uploaded_file=True),
        bid_factory("b", 1000),
        bid_factory("c", None),
    ]

    recommendation = _recommend(bids)

    assert _kinds(recommendation) == ["documentation"]
    assert "documentation" in recommendation.insights[0].message


def test_trend_insights(bid_factory):
    bids = [bid_factory("a", 1000, has_uploaded_file=True)]

    rising = TrendResult(trend=Trend.INCREASING, sufficient_data=True)
    falling = TrendResult(trend=Trend.DECREASING, sufficient_data=True)

    assert _kinds(_recommend(bids, trend=rising)) == ["close_bidding_soon"]
    assert _kinds(_recommend(bids, trend=falling)) == ["favorable_wait"]


def test_nothing_to_recommend_without_open_bids(bid_factory):
    bids = [bid_factory("a", 1000, status="ACCEPTED", has_uploaded_file=True)]

    recommendation = _recommend(bids, budget=2000)

    assert recommendation.top_recommendation is None
    assert recommendation.budget_alternate is None
