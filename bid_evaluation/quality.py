from __future__ import annotations

from typing import Sequence

from bid_evaluation.models import Bid, QualityMetrics

QUALITY_INDICATORS = 4


class QualityMetricsCollector:
    """Completeness of submissions across all bids, priced or not."""

    def collect(self, bids: Sequence[Bid]) -> QualityMetrics:
        with_documents = sum(1 for bid in bids if bid.has_uploaded_file)
        with_license = sum(1 for bid in bids if bid.license_number)
        with_insurance = sum(1 for bid in bids if bid.insurance_info)
        with_timeline = sum(1 for bid in bids if bid.timeline)

        if bids:
            present = with_documents + with_license + with_insurance + with_timeline
            quality_score = present / (QUALITY_INDICATORS * len(bids)) * 100
        else:
            quality_score = 0.0

        return QualityMetrics(
            total_bids=len(bids),
            with_documents=with_documents,
            with_license=with_license,
            with_insurance=with_insurance,
            with_timeline=with_timeline,
            quality_score=quality_score,
        )
