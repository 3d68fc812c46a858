from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from bid_evaluation.models import Bid

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_bid(
    bid_id: str,
    amount: float | None = None,
    *,
    day: int = 0,
    status: str = "SUBMITTED",
    **fields: Any,
) -> Bid:
    payload: dict[str, Any] = {
        "id": bid_id,
        "company_name": f"{bid_id.upper()} Builders",
        "contact_name": "Pat Lee",
        "contact_email": f"{bid_id}@example.com",
        "total_amount": amount,
        "status": status,
        "submitted_at": BASE_TIME + timedelta(days=day),
    }
    payload.update(fields)
    return Bid.model_validate(payload)


@pytest.fixture
def bid_factory() -> Callable[..., Bid]:
    return make_bid


@pytest.fixture
def three_bids() -> list[Bid]:
    """A 1000, B 1200, C 900 submitted on consecutive days."""
    return [
        make_bid("a", 1000, day=0),
        make_bid("b", 1200, day=1),
        make_bid("c", 900, day=2),
    ]


@pytest.fixture
def complete_fields() -> dict[str, Any]:
    """Fields that max out the credentials, documentation and timeline scores."""
    return {
        "license_number": "CA-778812",
        "insurance_info": "General liability $2M",
        "warranty": "2 years workmanship",
        "payment_terms": "Net 30",
        "has_uploaded_file": True,
        "line_items": "Framing 4000; Drywall 2500",
        "notes": "Crew of six available from the 15th; all permits handled in house.",
        "contact_phone": "555-0142",
        "timeline": "2 weeks",
    }
