"""Side-by-side comparison of up to three bids."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from bid_evaluation.models import Bid, eligible_bids

logger = logging.getLogger(__name__)

MAX_SELECTION = 3
MIN_PRICED_FOR_METRICS = 2
NOT_SPECIFIED = "Not specified"


@dataclass(frozen=True)
class ComparisonSelection:
    """Ordered, bounded set of bid ids chosen for review."""

    bid_ids: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.bid_ids)

    def __contains__(self, bid_id: object) -> bool:
        return bid_id in self.bid_ids

    @property
    def is_full(self) -> bool:
        return len(self.bid_ids) >= MAX_SELECTION


@dataclass(frozen=True)
class PriceRanking:
    bid_id: str
    rank: int | None
    is_lowest: bool = False
    is_highest: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "bid_id": self.bid_id,
            "rank": self.rank,
            "is_lowest": self.is_lowest,
            "is_highest": self.is_highest,
        }


@dataclass(frozen=True)
class ComparisonMetrics:
    average: float
    min: float
    max: float
    range: float
    # Same number as ``range``; reported under its own label.
    potential_savings: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "range": self.range,
            "potential_savings": self.potential_savings,
        }


@dataclass(frozen=True)
class ComparisonColumn:
    bid_id: str
    company_name: str
    contact_name: str
    contact_email: str
    contact_phone: str | None
    total_amount: float | None
    timeline: str
    license_number: str | None
    insurance_info: str | None
    warranty: str
    has_documents: bool
    notes: str | None
    price_ranking: PriceRanking

    def as_dict(self) -> dict[str, Any]:
        return {
            "bid_id": self.bid_id,
            "company_name": self.company_name,
            "contact_name": self.contact_name,
            "contact_email": self.contact_email,
            "contact_phone": self.contact_phone,
            "total_amount": self.total_amount,
            "timeline": self.timeline,
            "license_number": self.license_number,
            "insurance_info": self.insurance_info,
            "warranty": self.warranty,
            "has_documents": self.has_documents,
            "notes": self.notes,
            "price_ranking": self.price_ranking.as_dict(),
        }


@dataclass(frozen=True)
class Comparison:
    selection: ComparisonSelection
    columns: list[ComparisonColumn] = field(default_factory=list)
    metrics: ComparisonMetrics | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "selected_bid_ids": list(self.selection.bid_ids),
            "columns": [column.as_dict() for column in self.columns],
            "metrics": self.metrics.as_dict() if self.metrics else None,
        }


class ComparisonSelector:
    """Select bids for comparison and compute comparison figures.

    Selections are immutable; every edit returns a new ComparisonSelection.
    Only bids still under review can be selected, and a full selection
    silently ignores further additions.
    """

    def __init__(self, bids: Sequence[Bid]):
        self._available = {bid.id: bid for bid in eligible_bids(bids)}

    @property
    def available_ids(self) -> list[str]:
        return list(self._available)

    def add(self, selection: ComparisonSelection, bid_id: str) -> ComparisonSelection:
        if bid_id in selection:
            return selection
        if bid_id not in self._available:
            logger.debug("Bid %s is not available for comparison", bid_id)
            return selection
        if selection.is_full:
            logger.debug("Comparison already holds %s bids, ignore %s", MAX_SELECTION, bid_id)
            return selection
        return ComparisonSelection(selection.bid_ids + (bid_id,))

    def remove(self, selection: ComparisonSelection, bid_id: str) -> ComparisonSelection:
        return ComparisonSelection(tuple(i for i in selection.bid_ids if i != bid_id))

    def clear(self) -> ComparisonSelection:
        return ComparisonSelection()

    def toggle(self, selection: ComparisonSelection, bid_id: str) -> ComparisonSelection:
        if bid_id in selection:
            return self.remove(selection, bid_id)
        return self.add(selection, bid_id)

    def select(self, bid_ids: Sequence[str]) -> ComparisonSelection:
        selection = ComparisonSelection()
        for bid_id in bid_ids:
            selection = self.add(selection, bid_id)
        return selection

    def selected_bids(self, selection: ComparisonSelection) -> list[Bid]:
        return [self._available[i] for i in selection.bid_ids if i in self._available]

    def compute_metrics(self, selection: ComparisonSelection) -> ComparisonMetrics | None:
        amounts = [
            bid.total_amount
            for bid in self.selected_bids(selection)
            if bid.is_valid
        ]
        if len(amounts) < MIN_PRICED_FOR_METRICS:
            return None

        low = min(amounts)
        high = max(amounts)
        return ComparisonMetrics(
            average=sum(amounts) / len(amounts),
            min=low,
            max=high,
            range=high - low,
            potential_savings=high - low,
        )

    def price_rankings(self, selection: ComparisonSelection) -> list[PriceRanking]:
        selected = self.selected_bids(selection)
        priced = sorted(
            (bid for bid in selected if bid.is_valid),
            key=lambda bid: bid.total_amount,
        )
        positions = {bid.id: index for index, bid in enumerate(priced, start=1)}

        rankings: list[PriceRanking] = []
        for bid in selected:
            rank = positions.get(bid.id)
            if rank is None:
                rankings.append(PriceRanking(bid_id=bid.id, rank=None))
                continue
            rankings.append(
                PriceRanking(
                    bid_id=bid.id,
                    rank=rank,
                    is_lowest=rank == 1,
                    is_highest=rank == len(priced),
                )
            )
        return rankings

    def build_comparison(self, selection: ComparisonSelection) -> Comparison:
        rankings = {ranking.bid_id: ranking for ranking in self.price_rankings(selection)}
        columns = [
            ComparisonColumn(
                bid_id=bid.id,
                company_name=bid.company_name,
                contact_name=bid.contact_name,
                contact_email=bid.contact_email,
                contact_phone=bid.contact_phone,
                total_amount=bid.total_amount,
                timeline=bid.timeline or NOT_SPECIFIED,
                license_number=bid.license_number,
                insurance_info=bid.insurance_info,
                warranty=bid.warranty or NOT_SPECIFIED,
                has_documents=bid.has_uploaded_file,
                notes=bid.notes,
                price_ranking=rankings[bid.id],
            )
            for bid in self.selected_bids(selection)
        ]
        return Comparison(
            selection=selection,
            columns=columns,
            metrics=self.compute_metrics(selection),
        )
