"""Scoring criteria definitions and YAML loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Sequence

import yaml

from bid_evaluation.config import DEFAULT_CRITERIA_PATH

logger = logging.getLogger(__name__)

PRICE = "Price Competitiveness"
TIMELINE = "Timeline"
CREDENTIALS = "Credentials"
DOCUMENTATION = "Documentation"
COMMUNICATION = "Communication"

MIN_WEIGHT = 0.0
MAX_WEIGHT = 100.0
EXPECTED_TOTAL_WEIGHT = 100.0


class CriteriaLoadError(ValueError):
    """Raised when an explicitly requested criteria file cannot be used."""


@dataclass(frozen=True)
class ScoringCriterion:
    """A weighted evaluation criterion.

    ``name`` doubles as the key of the automatic scoring strategy; criteria
    without a registered strategy score 0 unless a manual override is given.
    """

    name: str
    weight: float
    description: str = ""


DEFAULT_CRITERIA: tuple[ScoringCriterion, ...] = (
    ScoringCriterion(
        PRICE, 30, "How competitive is the bid price compared to others and budget"
    ),
    ScoringCriterion(TIMELINE, 20, "Proposed timeline and delivery schedule"),
    ScoringCriterion(
        CREDENTIALS, 25, "License, insurance, and professional qualifications"
    ),
    ScoringCriterion(
        DOCUMENTATION, 15, "Quality and completeness of submitted documents"
    ),
    ScoringCriterion(
        COMMUNICATION, 10, "Responsiveness and professionalism in communication"
    ),
)


def total_weight(criteria: Sequence[ScoringCriterion]) -> float:
    return sum(criterion.weight for criterion in criteria)


def weights_valid(criteria: Sequence[ScoringCriterion]) -> bool:
    return abs(total_weight(criteria) - EXPECTED_TOTAL_WEIGHT) < 1e-9


def with_weight(
    criteria: Sequence[ScoringCriterion], name: str, weight: float
) -> tuple[ScoringCriterion, ...]:
    """Return a copy of ``criteria`` with one criterion re-weighted."""
    if not any(criterion.name == name for criterion in criteria):
        logger.warning("Unknown criterion '%s', weights unchanged", name)
        return tuple(criteria)
    clamped = _clamp_weight(weight)
    return tuple(
        replace(criterion, weight=clamped) if criterion.name == name else criterion
        for criterion in criteria
    )


def load_scoring_criteria(
    config_path: str | Path | None = None,
) -> tuple[ScoringCriterion, ...]:
    """Load criteria from YAML, falling back to the defaults on bad input.

    An explicit ``config_path`` that does not exist raises CriteriaLoadError;
    the default location is allowed to be missing.
    """

    selected_path = _resolve_criteria_path(config_path)
    if not selected_path.exists():
        if config_path is not None:
            raise CriteriaLoadError(f"criteria file not found: {selected_path}")
        logger.warning("Criteria file missing at %s, use defaults", selected_path)
        return DEFAULT_CRITERIA

    try:
        payload = yaml.safe_load(selected_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Invalid YAML in criteria file %s: %s", selected_path, exc)
        return DEFAULT_CRITERIA

    entries = payload.get("criteria") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        logger.warning("Invalid criteria schema at %s, use defaults", selected_path)
        return DEFAULT_CRITERIA

    criteria = _parse_criteria(entries)
    if not criteria:
        logger.warning("No valid criteria found at %s, use defaults", selected_path)
        return DEFAULT_CRITERIA

    if not weights_valid(criteria):
        logger.warning(
            "Criteria weights at %s sum to %s instead of %s",
            selected_path,
            total_weight(criteria),
            EXPECTED_TOTAL_WEIGHT,
        )
    return criteria


def _resolve_criteria_path(config_path: str | Path | None) -> Path:
    if config_path is not None:
        return Path(config_path)
    env_path = os.getenv("BID_EVALUATION_CRITERIA_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CRITERIA_PATH


def _parse_criteria(entries: list[Any]) -> tuple[ScoringCriterion, ...]:
    criteria: list[ScoringCriterion] = []
    seen: set[str] = set()
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skip criterion #%s: expected object", position)
            continue

        name = entry.get("name")
        weight = entry.get("weight")
        if not isinstance(name, str) or not name.strip():
            logger.warning("Skip criterion #%s: missing name", position)
            continue
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            logger.warning("Skip criterion '%s': invalid weight", name)
            continue
        if name in seen:
            logger.warning("Skip criterion '%s': duplicate name", name)
            continue

        description = entry.get("description")
        criteria.append(
            ScoringCriterion(
                name=name.strip(),
                weight=_clamp_weight(weight),
                description=description if isinstance(description, str) else "",
            )
        )
        seen.add(name)

    return tuple(criteria)


def _clamp_weight(weight: float) -> float:
    if weight < MIN_WEIGHT or weight > MAX_WEIGHT:
        logger.warning(
            "Criterion weight %s outside [%s, %s], clamped",
            weight,
            MIN_WEIGHT,
            MAX_WEIGHT,
        )
    return float(max(MIN_WEIGHT, min(MAX_WEIGHT, weight)))
