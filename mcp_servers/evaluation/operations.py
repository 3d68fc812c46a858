"""Evaluation operations behind the MCP tools.

Each operation is stateless: the caller sends the bids, budget, weights and
manual scores with every request.
"""

from __future__ import annotations

from typing import Any, Sequence

from bid_evaluation.comparison import MAX_SELECTION, ComparisonSelector
from bid_evaluation.criteria import (
    DEFAULT_CRITERIA,
    ScoringCriterion,
    total_weight,
    weights_valid,
    with_weight,
)
from bid_evaluation.evaluator import BidEvaluator
from bid_evaluation.models import Bid, BidValidationError, parse_bids
from bid_evaluation.scoring import AUTOMATIC_SCORERS
from mcp_servers.evaluation.validation import (
    ValidationError,
    validate_bid_ids,
    validate_bids,
    validate_budget,
    validate_overrides,
    validate_weights,
)


def _parse(bids: Any) -> list[Bid]:
    try:
        return parse_bids(validate_bids(bids))
    except BidValidationError as exc:
        raise ValidationError(str(exc)) from exc


def _apply_weights(
    base: Sequence[ScoringCriterion], weights: dict[str, float] | None
) -> tuple[ScoringCriterion, ...]:
    criteria = tuple(base)
    if not weights:
        return criteria
    known = {criterion.name for criterion in criteria}
    unknown = sorted(set(weights) - known)
    if unknown:
        raise ValidationError(f"unknown criteria: {', '.join(unknown)}")
    for name, weight in weights.items():
        criteria = with_weight(criteria, name, weight)
    return criteria


def _base_criteria(evaluator: BidEvaluator) -> tuple[ScoringCriterion, ...]:
    return evaluator.criteria if evaluator.criteria is not None else DEFAULT_CRITERIA


def _selection_warnings(requested: list[str], kept: Sequence[str]) -> list[str]:
    warnings: list[str] = []
    dropped = [bid_id for bid_id in dict.fromkeys(requested) if bid_id not in kept]
    if len(dict.fromkeys(requested)) > MAX_SELECTION:
        warnings.append("selection_limit_exceeded")
    if dropped:
        warnings.append("bids_not_selected:" + ",".join(dropped))
    return warnings


def evaluate_bids(
    *,
    evaluator: BidEvaluator,
    bids: Any,
    budget_limit: Any = None,
    weights: Any = None,
    overrides: Any = None,
    compare: Any = None,
) -> dict[str, Any]:
    parsed = _parse(bids)
    budget = validate_budget(budget_limit)
    criteria = _apply_weights(_base_criteria(evaluator), validate_weights(weights))
    manual = validate_overrides(overrides)
    selection = validate_bid_ids(compare, "compare") if compare is not None else None

    report = evaluator.evaluate(
        parsed,
        budget_limit=budget,
        criteria=criteria,
        overrides=manual,
        selection=selection,
    )
    payload = report.as_dict()
    warnings: list[str] = []
    if not report.scoring.weights_valid:
        warnings.append("weights_not_100")
    if selection is not None and report.comparison is not None:
        warnings.extend(
            _selection_warnings(selection, report.comparison.selection.bid_ids)
        )
    payload["warnings"] = warnings
    return payload


def score_bids(
    *,
    evaluator: BidEvaluator,
    bids: Any,
    budget_limit: Any = None,
    weights: Any = None,
    overrides: Any = None,
) -> dict[str, Any]:
    parsed = _parse(bids)
    criteria = _apply_weights(_base_criteria(evaluator), validate_weights(weights))
    result = evaluator.scoring_engine.score_bids(
        parsed,
        criteria=criteria,
        overrides=validate_overrides(overrides),
        budget_limit=validate_budget(budget_limit),
    )
    payload = result.as_dict()
    payload["warnings"] = [] if result.weights_valid else ["weights_not_100"]
    return payload


def compare_bids(*, bids: Any, bid_ids: Any) -> dict[str, Any]:
    parsed = _parse(bids)
    requested = validate_bid_ids(bid_ids, "bid_ids")

    selector = ComparisonSelector(parsed)
    selection = selector.select(requested)
    payload = selector.build_comparison(selection).as_dict()
    payload["available_bid_ids"] = selector.available_ids
    payload["warnings"] = _selection_warnings(requested, selection.bid_ids)
    return payload


def get_criteria(*, evaluator: BidEvaluator) -> dict[str, Any]:
    criteria = _base_criteria(evaluator)
    return {
        "criteria": [
            {
                "name": criterion.name,
                "weight": criterion.weight,
                "description": criterion.description,
                "automatic": criterion.name in AUTOMATIC_SCORERS,
            }
            for criterion in criteria
        ],
        "total_weight": total_weight(criteria),
        "weights_valid": weights_valid(criteria),
    }
