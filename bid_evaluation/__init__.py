"""Evaluation engine for competing vendor bids."""

from .budget import BudgetComplianceEvaluator
from .comparison import ComparisonSelection, ComparisonSelector
from .criteria import DEFAULT_CRITERIA, ScoringCriterion, load_scoring_criteria
from .evaluator import BidEvaluationReport, BidEvaluator, build_bid_evaluator
from .models import Bid, BidStatus, BidValidationError, parse_bids
from .price_statistics import StatisticsAggregator
from .quality import QualityMetricsCollector
from .recommendation import RecommendationGenerator
from .scoring import ScoringEngine
from .timeline import DurationExtractor, RegexDurationExtractor
from .trend import TrendAnalyzer

__all__ = [
    "Bid",
    "BidStatus",
    "BidValidationError",
    "parse_bids",
    "DEFAULT_CRITERIA",
    "ScoringCriterion",
    "load_scoring_criteria",
    "StatisticsAggregator",
    "QualityMetricsCollector",
    "TrendAnalyzer",
    "BudgetComplianceEvaluator",
    "DurationExtractor",
    "RegexDurationExtractor",
    "ScoringEngine",
    "ComparisonSelection",
    "ComparisonSelector",
    "RecommendationGenerator",
    "BidEvaluationReport",
    "BidEvaluator",
    "build_bid_evaluator",
]
