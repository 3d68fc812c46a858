"""Data models for bid evaluation: input bid records and computed results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class BidStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


# Statuses still open for review; the rest are terminal.
ELIGIBLE_STATUSES = frozenset({BidStatus.SUBMITTED, BidStatus.UNDER_REVIEW})


class BidValidationError(ValueError):
    """Raised when a bid record does not match the expected shape."""


class Bid(BaseModel):
    """One vendor's submission against a bid request.

    Accepts both snake_case field names and the camelCase names used by
    the CRM API (``companyName``, ``totalAmount``, ``submittedAt``...).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    id: str = Field(..., min_length=1)
    company_name: str = ""
    contact_name: str = ""
    contact_email: str = ""
    contact_phone: str | None = None
    license_number: str | None = None
    insurance_info: str | None = None
    total_amount: float | None = None
    notes: str | None = None
    timeline: str | None = None
    warranty: str | None = None
    payment_terms: str | None = None
    line_items: str | None = None
    has_uploaded_file: bool = False
    file_name: str | None = None
    file_url: str | None = None
    status: BidStatus = BidStatus.SUBMITTED
    submitted_at: datetime

    @field_validator(
        "contact_phone",
        "license_number",
        "insurance_info",
        "notes",
        "timeline",
        "warranty",
        "payment_terms",
        "line_items",
        "file_name",
        "file_url",
    )
    @classmethod
    def blank_as_missing(cls, value: str | None) -> str | None:
        """Blank form fields are stored as empty strings; treat them as absent."""
        if value is None or not value.strip():
            return None
        return value

    @field_validator("submitted_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper().replace(" ", "_").replace("-", "_")
        return value

    @property
    def is_valid(self) -> bool:
        """True when the bid carries a positive amount usable in price statistics."""
        return self.total_amount is not None and self.total_amount > 0

    @property
    def is_eligible(self) -> bool:
        return self.status in ELIGIBLE_STATUSES


def parse_bids(records: Iterable[dict[str, Any] | Bid]) -> list[Bid]:
    """Validate raw records into Bid objects, preserving input order."""
    bids: list[Bid] = []
    for index, record in enumerate(records):
        if isinstance(record, Bid):
            bids.append(record)
            continue
        if not isinstance(record, dict):
            raise BidValidationError(f"bid #{index} must be an object")
        try:
            bids.append(Bid.model_validate(record))
        except ValidationError as exc:
            raise BidValidationError(f"bid #{index} is invalid: {exc}") from exc
    return bids


def valid_bids(bids: Iterable[Bid]) -> list[Bid]:
    return [bid for bid in bids if bid.is_valid]


def eligible_bids(bids: Iterable[Bid]) -> list[Bid]:
    return [bid for bid in bids if bid.is_eligible]


def has_budget(budget_limit: float | None) -> bool:
    """An unset budget is stored as null or 0 by the CRM."""
    return budget_limit is not None and budget_limit > 0


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class PriceBucket:
    index: int
    lower: float
    upper: float
    count: int
    percentage: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "lower": self.lower,
            "upper": self.upper,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class StatisticsSummary:
    """Descriptive statistics over valid bids.

    ``has_data`` is False when no bid carries a positive amount; the numeric
    fields are then None and ``buckets`` is empty.
    """

    valid_count: int
    total_count: int
    average: float | None = None
    median: float | None = None
    min: float | None = None
    max: float | None = None
    buckets: list[PriceBucket] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return self.valid_count > 0

    @property
    def price_range(self) -> float | None:
        if not self.has_data:
            return None
        return self.max - self.min

    @property
    def price_spread(self) -> float | None:
        """Range relative to the average price."""
        if not self.has_data or not self.average:
            return None
        return (self.max - self.min) / self.average

    @property
    def valid_percentage(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.valid_count / self.total_count * 100

    def as_dict(self) -> dict[str, Any]:
        return {
            "has_data": self.has_data,
            "average": self.average,
            "median": self.median,
            "min": self.min,
            "max": self.max,
            "valid_count": self.valid_count,
            "total_count": self.total_count,
            "valid_percentage": self.valid_percentage,
            "price_spread": self.price_spread,
            "buckets": [bucket.as_dict() for bucket in self.buckets],
        }


@dataclass(frozen=True)
class QualityMetrics:
    total_bids: int
    with_documents: int
    with_license: int
    with_insurance: int
    with_timeline: int
    quality_score: float

    def _ratio(self, count: int) -> float:
        if self.total_bids == 0:
            return 0.0
        return count / self.total_bids

    @property
    def documentation_ratio(self) -> float:
        return self._ratio(self.with_documents)

    def percentages(self) -> dict[str, float]:
        return {
            "documents": self._ratio(self.with_documents) * 100,
            "license": self._ratio(self.with_license) * 100,
            "insurance": self._ratio(self.with_insurance) * 100,
            "timeline": self._ratio(self.with_timeline) * 100,
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_bids": self.total_bids,
            "with_documents": self.with_documents,
            "with_license": self.with_license,
            "with_insurance": self.with_insurance,
            "with_timeline": self.with_timeline,
            "quality_score": self.quality_score,
            "documentation_ratio": self.documentation_ratio,
            "percentages": self.percentages(),
        }


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class TrendResult:
    trend: Trend
    sufficient_data: bool
    recent_count: int = 0
    earlier_count: int = 0
    recent_average: float | None = None
    earlier_average: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "trend": self.trend.value,
            "sufficient_data": self.sufficient_data,
            "recent_count": self.recent_count,
            "earlier_count": self.earlier_count,
            "recent_average": self.recent_average,
            "earlier_average": self.earlier_average,
        }


@dataclass(frozen=True)
class BudgetComplianceResult:
    budget_limit: float
    valid_count: int
    within_budget: int
    over_budget: int
    percentage: float
    compliant_average: float | None
    compliant_bid_ids: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "budget_limit": self.budget_limit,
            "valid_count": self.valid_count,
            "within_budget": self.within_budget,
            "over_budget": self.over_budget,
            "percentage": self.percentage,
            "compliant_average": self.compliant_average,
            "compliant_bid_ids": list(self.compliant_bid_ids),
        }


@dataclass(frozen=True)
class BidScore:
    bid_id: str
    scores: dict[str, int]
    total_score: int
    weighted_score: float
    rank: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "bid_id": self.bid_id,
            "scores": dict(self.scores),
            "total_score": self.total_score,
            "weighted_score": self.weighted_score,
            "rank": self.rank,
        }
