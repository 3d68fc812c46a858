from __future__ import annotations

import pytest

from bid_evaluation.models import Trend
from bid_evaluation.trend import TrendAnalyzer


def _bids(bid_factory, amounts):
    return [bid_factory(f"b{i}", amount, day=i) for i, amount in enumerate(amounts)]


def test_increasing_when_recent_bids_are_over_ten_percent_higher(bid_factory):
    result = TrendAnalyzer().analyze(_bids(bid_factory, [1000, 1000, 1000, 1200, 1200, 1200]))

    assert result.trend is Trend.INCREASING
    assert result.sufficient_data
    assert result.recent_average == 1200
    assert result.earlier_average == 1000


def test_decreasing_when_recent_bids_are_over_ten_percent_lower(bid_factory):
    result = TrendAnalyzer().analyze(_bids(bid_factory, [1000, 1000, 800, 800, 800]))

    assert result.trend is Trend.DECREASING
    assert result.earlier_count == 2
    assert result.recent_count == 3


def test_stable_within_ten_percent(bid_factory):
    result = TrendAnalyzer().analyze(_bids(bid_factory, [1000, 1000, 1050, 1050, 1050]))

    assert result.trend is Trend.STABLE
    assert result.sufficient_data


@pytest.mark.parametrize("count", [0, 1, 3, 4])
def test_insufficient_history_defaults_to_stable(bid_factory, count):
    result = TrendAnalyzer().analyze(_bids(bid_factory, [1000, 2000, 3000, 4000][:count]))

    assert result.trend is Trend.STABLE
    assert not result.sufficient_data
    assert result.recent_average is None


def test_trend_orders_by_submission_time_not_input_order(bid_factory):
    bids = [
        bid_factory("late1", 1500, day=10),
        bid_factory("early1", 1000, day=1),
        bid_factory("late2", 1500, day=11),
        bid_factory("early2", 1000, day=2),
        bid_factory("late3", 1500, day=12),
    ]

    assert TrendAnalyzer().analyze(bids).trend is Trend.INCREASING


def test_unpriced_bids_are_ignored(bid_factory):
    bids = _bids(bid_factory, [1000, 1000, 1200, 1200, 1200]) + [
        bid_factory("late", None, day=30),
        bid_factory("zero", 0, day=31),
    ]

    assert TrendAnalyzer().analyze(bids).trend is Trend.INCREASING
