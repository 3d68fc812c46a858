"""Validation helpers for evaluation MCP server inputs."""

from __future__ import annotations

from typing import Any

MAX_BIDS = 500


class ValidationError(ValueError):
    """Raised when input validation fails."""


def validate_bids(bids: Any) -> list[dict[str, Any]]:
    """Validate the outer shape of a bid list; field checks happen in parse_bids."""
    if not isinstance(bids, list):
        raise ValidationError("bids must be a list")
    if len(bids) > MAX_BIDS:
        raise ValidationError(f"bids exceeds maximum of {MAX_BIDS} items")
    for index, bid in enumerate(bids):
        if not isinstance(bid, dict):
            raise ValidationError(f"bids[{index}] must be an object")
    return bids


def validate_budget(budget_limit: Any) -> float | None:
    if budget_limit is None:
        return None
    if isinstance(budget_limit, bool) or not isinstance(budget_limit, (int, float)):
        raise ValidationError("budget_limit must be a number")
    if budget_limit < 0:
        raise ValidationError("budget_limit must not be negative")
    return float(budget_limit)


def validate_weights(weights: Any) -> dict[str, float] | None:
    """Validate {criterion_name: weight} with weights in [0, 100]."""
    if weights is None:
        return None
    if not isinstance(weights, dict):
        raise ValidationError("weights must be an object of criterion -> weight")
    for name, weight in weights.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValidationError(f"weight for '{name}' must be a number")
        if weight < 0 or weight > 100:
            raise ValidationError(f"weight for '{name}' must be within [0, 100]")
    return weights


def validate_overrides(overrides: Any) -> dict[str, dict[str, int]] | None:
    """Validate {bid_id: {criterion_name: score}} with integer scores in [0, 10]."""
    if overrides is None:
        return None
    if not isinstance(overrides, dict):
        raise ValidationError("overrides must be an object keyed by bid id")
    for bid_id, scores in overrides.items():
        if not isinstance(scores, dict):
            raise ValidationError(f"overrides['{bid_id}'] must be an object")
        for name, score in scores.items():
            if isinstance(score, bool) or not isinstance(score, int):
                raise ValidationError(
                    f"overrides['{bid_id}']['{name}'] must be an integer"
                )
            if score < 0 or score > 10:
                raise ValidationError(
                    f"overrides['{bid_id}']['{name}'] must be within [0, 10]"
                )
    return overrides


def validate_bid_ids(value: Any, name: str, min_items: int = 1) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError(f"{name} must be a list")
    if len(value) < min_items:
        raise ValidationError(f"{name} must have at least {min_items} item(s)")
    if not all(isinstance(item, str) and item for item in value):
        raise ValidationError(f"{name} must contain non-empty strings")
    return value
