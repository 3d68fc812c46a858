"""Weighted multi-criteria scoring and ranking of eligible bids."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from bid_evaluation.criteria import (
    CREDENTIALS,
    DEFAULT_CRITERIA,
    DOCUMENTATION,
    PRICE,
    TIMELINE,
    ScoringCriterion,
    total_weight,
    weights_valid,
)
from bid_evaluation.models import (
    Bid,
    BidScore,
    eligible_bids,
    has_budget,
    valid_bids,
)
from bid_evaluation.timeline import DurationExtractor, RegexDurationExtractor, score_timeline

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 10

SOLE_BID_PRICE_SCORE = 5
PRICE_SCALE = 8
BUDGET_BONUS = 2
NOTES_MIN_LENGTH = 50


@dataclass(frozen=True)
class ScoringContext:
    """Bid-set facts the per-bid scorers compare against."""

    valid_count: int
    min_amount: float | None
    max_amount: float | None
    budget_limit: float | None
    duration_extractor: DurationExtractor

    @classmethod
    def from_bids(
        cls,
        bids: Sequence[Bid],
        budget_limit: float | None,
        duration_extractor: DurationExtractor,
    ) -> "ScoringContext":
        amounts = [bid.total_amount for bid in valid_bids(bids)]
        return cls(
            valid_count=len(amounts),
            min_amount=min(amounts) if amounts else None,
            max_amount=max(amounts) if amounts else None,
            budget_limit=budget_limit if has_budget(budget_limit) else None,
            duration_extractor=duration_extractor,
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_price(bid: Bid, context: ScoringContext) -> int:
    if not bid.is_valid:
        return 0
    if context.valid_count == 1:
        return SOLE_BID_PRICE_SCORE

    price_range = context.max_amount - context.min_amount
    if price_range == 0:
        return MAX_SCORE

    normalized = 1 - (bid.total_amount - context.min_amount) / price_range
    budget_bonus = 0
    if context.budget_limit is not None and bid.total_amount <= context.budget_limit:
        budget_bonus = BUDGET_BONUS
    return min(MAX_SCORE, _round_half_up(normalized * PRICE_SCALE + budget_bonus))


def score_credentials(bid: Bid, context: ScoringContext) -> int:
    score = 0
    if bid.license_number:
        score += 4
    if bid.insurance_info:
        score += 3
    if bid.warranty:
        score += 2
    if bid.payment_terms:
        score += 1
    return score


def score_documentation(bid: Bid, context: ScoringContext) -> int:
    score = 0
    if bid.has_uploaded_file:
        score += 4
    if bid.line_items:
        score += 3
    if bid.notes and len(bid.notes) > NOTES_MIN_LENGTH:
        score += 2
    if bid.contact_phone:
        score += 1
    return score


def score_timeline_criterion(bid: Bid, context: ScoringContext) -> int:
    return score_timeline(bid.timeline, context.duration_extractor)


AutomaticScorer = Callable[[Bid, ScoringContext], int]

# Criteria absent from this registry (e.g. Communication) rely on manual scores.
AUTOMATIC_SCORERS: dict[str, AutomaticScorer] = {
    PRICE: score_price,
    TIMELINE: score_timeline_criterion,
    CREDENTIALS: score_credentials,
    DOCUMENTATION: score_documentation,
}


def normalize_overrides(
    overrides: Mapping[Any, Any] | None,
) -> dict[tuple[str, str], int]:
    """Accept ``{(bid_id, criterion): score}`` or ``{bid_id: {criterion: score}}``.

    Scores are coerced to integers within [0, 10].
    """
    normalized: dict[tuple[str, str], int] = {}
    if not overrides:
        return normalized

    entries: list[tuple[tuple[str, str], Any]] = []
    for key, value in overrides.items():
        if isinstance(key, tuple) and len(key) == 2:
            entries.append(((str(key[0]), str(key[1])), value))
        elif isinstance(value, Mapping):
            for criterion_name, score in value.items():
                entries.append(((str(key), str(criterion_name)), score))
        else:
            logger.warning("Ignore malformed manual score entry for key %r", key)

    for pair, score in entries:
        try:
            normalized[pair] = max(MIN_SCORE, min(MAX_SCORE, int(score)))
        except (TypeError, ValueError):
            logger.warning("Ignore non-numeric manual score %r for %s", score, pair)
    return normalized


@dataclass(frozen=True)
class ScoringResult:
    scores: list[BidScore]
    criteria: tuple[ScoringCriterion, ...]
    total_weight: float
    weights_valid: bool
    tie_break: str = "submission"
    overrides_applied: int = 0
    unknown_override_keys: list[tuple[str, str]] = field(default_factory=list)

    @property
    def top(self) -> BidScore | None:
        return self.scores[0] if self.scores else None

    def by_bid_id(self) -> dict[str, BidScore]:
        return {score.bid_id: score for score in self.scores}

    def as_dict(self) -> dict[str, Any]:
        return {
            "scores": [score.as_dict() for score in self.scores],
            "criteria": [
                {
                    "name": criterion.name,
                    "weight": criterion.weight,
                    "description": criterion.description,
                    "automatic": criterion.name in AUTOMATIC_SCORERS,
                }
                for criterion in self.criteria
            ],
            "total_weight": self.total_weight,
            "weights_valid": self.weights_valid,
            "tie_break": self.tie_break,
            "overrides_applied": self.overrides_applied,
            "unknown_override_keys": [list(key) for key in self.unknown_override_keys],
        }


class ScoringEngine:
    """Score eligible bids per criterion and rank them by weighted score.

    Stateless: criteria, manual overrides and the budget are supplied on
    every call, so the same engine can serve concurrent evaluations.

    Usage:
        engine = ScoringEngine()
        result = engine.score_bids(bids, overrides={("bid-1", "Communication"): 8})
        best = result.top
    """

    def __init__(
        self,
        duration_extractor: DurationExtractor | None = None,
        tie_break: str = "submission",
        scorers: Mapping[str, AutomaticScorer] | None = None,
    ):
        """Initialize engine.

        Args:
            duration_extractor: Timeline parser (default: regex heuristic)
            tie_break: "submission" keeps input order for equal scores,
                "bid_id" orders equal scores by bid identifier
            scorers: Automatic scorer registry keyed by criterion name
        """
        self.duration_extractor = duration_extractor or RegexDurationExtractor()
        self.tie_break = tie_break
        self.scorers = dict(scorers if scorers is not None else AUTOMATIC_SCORERS)

    def automatic_score(
        self, bid: Bid, criterion_name: str, context: ScoringContext
    ) -> int:
        scorer = self.scorers.get(criterion_name)
        if scorer is None:
            return 0
        return max(MIN_SCORE, min(MAX_SCORE, scorer(bid, context)))

    def score_bids(
        self,
        bids: Sequence[Bid],
        criteria: Sequence[ScoringCriterion] | None = None,
        overrides: Mapping[Any, Any] | None = None,
        budget_limit: float | None = None,
    ) -> ScoringResult:
        """Score and rank the bids still under consideration.

        Args:
            bids: All bids of the request; price competitiveness is measured
                against every valid bid, only eligible bids are ranked
            criteria: Weighted criteria (default: DEFAULT_CRITERIA)
            overrides: Manual scores replacing automatic ones
            budget_limit: Optional budget ceiling

        Returns:
            ScoringResult with BidScore entries ordered by rank
        """
        selected_criteria = tuple(criteria if criteria is not None else DEFAULT_CRITERIA)
        manual = normalize_overrides(overrides)
        context = ScoringContext.from_bids(bids, budget_limit, self.duration_extractor)

        if not weights_valid(selected_criteria):
            logger.warning(
                "Criteria weights sum to %s, expected 100", total_weight(selected_criteria)
            )

        candidates = eligible_bids(bids)
        unscored: list[tuple[str, dict[str, int], int, float]] = []
        used_overrides: set[tuple[str, str]] = set()

        for bid in candidates:
            scores: dict[str, int] = {}
            total = 0
            weighted = 0.0
            for criterion in selected_criteria:
                key = (bid.id, criterion.name)
                if key in manual:
                    final = manual[key]
                    used_overrides.add(key)
                else:
                    final = self.automatic_score(bid, criterion.name, context)
                scores[criterion.name] = final
                total += final
                weighted += final * (criterion.weight / 100)
            unscored.append((bid.id, scores, total, weighted))

        if self.tie_break == "bid_id":
            unscored.sort(key=lambda item: (-item[3], item[0]))
        else:
            unscored.sort(key=lambda item: item[3], reverse=True)

        ranked = [
            BidScore(
                bid_id=bid_id,
                scores=scores,
                total_score=total,
                weighted_score=weighted,
                rank=position,
            )
            for position, (bid_id, scores, total, weighted) in enumerate(unscored, start=1)
        ]

        unknown = sorted(set(manual) - used_overrides)
        if unknown:
            logger.debug("Manual scores without a scored bid/criterion: %s", unknown)

        return ScoringResult(
            scores=ranked,
            criteria=selected_criteria,
            total_weight=total_weight(selected_criteria),
            weights_valid=weights_valid(selected_criteria),
            tie_break=self.tie_break,
            overrides_applied=len(used_overrides),
            unknown_override_keys=unknown,
        )
