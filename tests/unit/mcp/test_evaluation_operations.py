from __future__ import annotations

import pytest

from bid_evaluation.criteria import ScoringCriterion
from bid_evaluation.evaluator import BidEvaluator
from mcp_servers.evaluation.operations import (
    compare_bids,
    evaluate_bids,
    get_criteria,
    score_bids,
)
from mcp_servers.evaluation.validation import ValidationError


def _bids() -> list[dict]:
    return [
        {"id": "a", "totalAmount": 1000, "submittedAt": "2025-03-01T09:00:00Z"},
        {"id": "b", "totalAmount": 1200, "submittedAt": "2025-03-02T09:00:00Z"},
        {
            "id": "c",
            "totalAmount": 900,
            "submittedAt": "2025-03-03T09:00:00Z",
            "status": "WITHDRAWN",
        },
    ]


def test_evaluate_bids_reports_weight_and_selection_warnings():
    result = evaluate_bids(
        evaluator=BidEvaluator(),
        bids=_bids(),
        budget_limit=1100,
        weights={"Communication": 20},
        compare=["a", "c", "b", "x"],
    )

    assert result["scoring"]["total_weight"] == 110
    assert result["comparison"]["selected_bid_ids"] == ["a", "b"]
    assert result["warnings"] == [
        "weights_not_100",
        "selection_limit_exceeded",
        "bids_not_selected:c,x",
    ]


def test_evaluate_bids_without_extras_has_no_warnings():
    result = evaluate_bids(evaluator=BidEvaluator(), bids=_bids())

    assert result["warnings"] == []
    assert result["budget"] is None
    assert result["comparison"] is None


def test_score_bids_applies_manual_scores():
    result = score_bids(
        evaluator=BidEvaluator(),
        bids=_bids(),
        overrides={"b": {"Communication": 10, "Timeline": 10}},
    )

    assert [row["bid_id"] for row in result["scores"]] == ["b", "a"]
    assert result["overrides_applied"] == 2
    assert result["warnings"] == []


def test_unknown_weight_name_is_rejected():
    with pytest.raises(ValidationError, match="unknown criteria: Vibes"):
        score_bids(evaluator=BidEvaluator(), bids=_bids(), weights={"Vibes": 10})


def test_invalid_bid_record_becomes_validation_error():
    with pytest.raises(ValidationError, match="bid #1 is invalid"):
        score_bids(evaluator=BidEvaluator(), bids=[_bids()[0], {"id": "b"}])


def test_compare_bids_lists_available_ids():
    result = compare_bids(bids=_bids(), bid_ids=["b", "a"])

    assert result["available_bid_ids"] == ["a", "b"]
    assert result["selected_bid_ids"] == ["b", "a"]
    assert result["metrics"]["potential_savings"] == 200
    rankings = {col["bid_id"]: col["price_ranking"] for col in result["columns"]}
    assert rankings["a"]["is_lowest"] is True
    assert rankings["b"]["is_highest"] is True
    assert result["warnings"] == []


def test_get_criteria_uses_evaluator_criteria():
    default = get_criteria(evaluator=BidEvaluator())
    assert default["total_weight"] == 100
    automatic = {row["name"]: row["automatic"] for row in default["criteria"]}
    assert automatic["Communication"] is False
    assert automatic["Price Competitiveness"] is True

    custom = get_criteria(
        evaluator=BidEvaluator(criteria=[ScoringCriterion("Timeline", 50)])
    )
    assert [row["name"] for row in custom["criteria"]] == ["Timeline"]
    assert custom["weights_valid"] is False
