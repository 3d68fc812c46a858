from __future__ import annotations

from types import SimpleNamespace

import pytest

from bid_evaluation.criteria import PRICE, ScoringCriterion
from bid_evaluation.evaluator import BidEvaluator, build_bid_evaluator
from bid_evaluation.models import BidValidationError


def _records() -> list[dict]:
    return [
        {
            "id": "a",
            "companyName": "Acme Remodeling",
            "contactName": "Ana Ruiz",
            "contactEmail": "ana@acme.example",
            "totalAmount": 1000,
            "submittedAt": "2025-03-01T09:00:00Z",
        },
        {
            "id": "b",
            "companyName": "Beta Builders",
            "contactName": "Bo Chen",
            "contactEmail": "bo@beta.example",
            "contactPhone": "555-0142",
            "totalAmount": 1200,
            "licenseNumber": "CA-778812",
            "insuranceInfo": "General liability $2M",
            "warranty": "2 years workmanship",
            "paymentTerms": "Net 30",
            "hasUploadedFile": True,
            "lineItems": "Framing 700; Drywall 500",
            "notes": "Crew of six available from the 15th; all permits handled in house.",
            "timeline": "2 weeks",
            "submittedAt": "2025-03-02T09:00:00Z",
            "status": "under review",
        },
        {
            "id": "c",
            "companyName": "Cobalt Contracting",
            "totalAmount": 900,
            "submittedAt": "2025-03-03T09:00:00",
            "status": "WITHDRAWN",
        },
    ]


def test_evaluate_full_report_from_camel_case_records():
    report = BidEvaluator().evaluate(
        _records(), budget_limit=1100, selection=["a", "c", "b"]
    )

    assert report.statistics.valid_count == 3
    assert report.statistics.median == 1000
    assert report.budget.within_budget == 2
    assert report.budget.compliant_bid_ids == ["a", "c"]

    # Withdrawn bids count toward the price range but are not ranked.
    assert [(s.bid_id, s.rank) for s in report.scoring.scores] == [("b", 1), ("a", 2)]
    assert report.scoring.by_bid_id()["a"].scores[PRICE] == 7
    assert report.scoring.by_bid_id()["b"].weighted_score == pytest.approx(6.0)

    recommendation = report.recommendation
    assert recommendation.top_recommendation.bid_id == "b"
    assert recommendation.budget_alternate.bid_id == "a"
    assert [insight.kind for insight in recommendation.insights] == [
        "competitive_market",
        "documentation",
    ]

    assert report.comparison.selection.bid_ids == ("a", "b")
    assert report.comparison.metrics.potential_savings == 200


def test_report_as_dict_is_plain_data():
    payload = BidEvaluator().evaluate(_records(), budget_limit=1100).as_dict()

    assert payload["budget_limit"] == 1100
    assert payload["comparison"] is None
    assert payload["trend"]["trend"] == "stable"
    assert payload["scoring"]["scores"][0]["bid_id"] == "b"
    assert payload["recommendation"]["top_recommendation"]["company_name"] == (
        "Beta Builders"
    )
    assert payload["evaluated_at"].endswith("+00:00")


def test_evaluate_without_budget_has_no_compliance_block():
    report = BidEvaluator().evaluate(_records())

    assert report.budget is None
    assert report.recommendation.budget_alternate is None


def test_evaluate_rejects_invalid_records():
    records = _records()
    del records[0]["submittedAt"]

    with pytest.raises(BidValidationError, match="bid #0"):
        BidEvaluator().evaluate(records)


def test_evaluator_default_criteria_can_be_replaced_per_call():
    price_only = (ScoringCriterion(PRICE, 100),)
    evaluator = BidEvaluator(criteria=price_only)

    report = evaluator.evaluate(_records(), budget_limit=1100)
    assert [s.bid_id for s in report.scoring.scores] == ["a", "b"]
    assert report.scoring.criteria == price_only

    report = evaluator.evaluate(_records(), criteria=[ScoringCriterion("Timeline", 100)])
    assert [s.bid_id for s in report.scoring.scores] == ["b", "a"]


class _Recorder:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def _record(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.result


class _Aggregator(_Recorder):
    summarize = _Recorder._record


class _Collector(_Recorder):
    collect = _Recorder._record


class _Trend(_Recorder):
    analyze = _Recorder._record


class _Budget(_Recorder):
    evaluate = _Recorder._record


class _Engine(_Recorder):
    score_bids = _Recorder._record


class _Recommender(_Recorder):
    generate = _Recorder._record


def test_bid_evaluator_supports_component_injection():
    class _Scoring:
        scores = ["scored"]

    stats = SimpleNamespace(valid_count=3)
    aggregator = _Aggregator(stats)
    collector = _Collector("quality")
    trend = _Trend("trend")
    budget = _Budget("budget")
    engine = _Engine(_Scoring())
    recommender = _Recommender("custom-recommendation")

    evaluator = BidEvaluator(
        statistics_aggregator=aggregator,
        quality_collector=collector,
        trend_analyzer=trend,
        budget_evaluator=budget,
        scoring_engine=engine,
        recommendation_generator=recommender,
    )
    report = evaluator.evaluate(
        _records(), budget_limit=500, overrides={"a": {"Communication": 9}}
    )

    parsed = aggregator.calls[0][0][0]
    assert [bid.id for bid in parsed] == ["a", "b", "c"]
    assert budget.calls[0][0][1] == 500
    assert engine.calls[0][1]["overrides"] == {"a": {"Communication": 9}}
    assert engine.calls[0][1]["budget_limit"] == 500
    assert recommender.calls[0][0][1:] == (["scored"], stats, "quality", "trend", "budget")
    assert report.recommendation == "custom-recommendation"


def test_build_bid_evaluator_reads_settings(tmp_path):
    config_path = tmp_path / "criteria.yaml"
    config_path.write_text(
        "criteria:\n  - name: Price Competitiveness\n    weight: 100\n",
        encoding="utf-8",
    )

    evaluator = build_bid_evaluator(
        {
            "BID_EVALUATION_CRITERIA_PATH": str(config_path),
            "BID_EVALUATION_TIE_BREAK": "bid_id",
        }
    )

    assert [c.name for c in evaluator.criteria] == [PRICE]
    assert evaluator.scoring_engine.tie_break == "bid_id"
