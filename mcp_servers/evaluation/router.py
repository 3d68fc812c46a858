"""Route registration for the bid evaluation MCP server.

Keeps FastMCP tool declarations separate from evaluation logic.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastmcp import FastMCP

from bid_evaluation.evaluator import BidEvaluator
from mcp_servers.evaluation.execution import get_tool_metrics, tool_wrapper
from mcp_servers.evaluation.operations import compare_bids as _compare_bids
from mcp_servers.evaluation.operations import evaluate_bids as _evaluate_bids
from mcp_servers.evaluation.operations import get_criteria as _get_criteria
from mcp_servers.evaluation.operations import score_bids as _score_bids


def register_mcp_routes(*, mcp: FastMCP, evaluator: BidEvaluator) -> None:
    """Register tool/resource routes on the provided FastMCP app."""

    @mcp.tool
    @tool_wrapper("evaluate_bids")
    def evaluate_bids(
        bids: List[Dict[str, Any]],
        budget_limit: float | None = None,
        weights: Dict[str, float] | None = None,
        overrides: Dict[str, Dict[str, int]] | None = None,
        compare: List[str] | None = None,
    ) -> Dict[str, Any]:
        """Full evaluation: analytics, weighted ranking, comparison, recommendations."""
        return _evaluate_bids(
            evaluator=evaluator,
            bids=bids,
            budget_limit=budget_limit,
            weights=weights,
            overrides=overrides,
            compare=compare,
        )

    @mcp.tool
    @tool_wrapper("score_bids")
    def score_bids(
        bids: List[Dict[str, Any]],
        budget_limit: float | None = None,
        weights: Dict[str, float] | None = None,
        overrides: Dict[str, Dict[str, int]] | None = None,
    ) -> Dict[str, Any]:
        """Weighted ranking of bids still under review."""
        return _score_bids(
            evaluator=evaluator,
            bids=bids,
            budget_limit=budget_limit,
            weights=weights,
            overrides=overrides,
        )

    @mcp.tool
    @tool_wrapper("compare_bids")
    def compare_bids(
        bids: List[Dict[str, Any]],
        bid_ids: List[str],
    ) -> Dict[str, Any]:
        """Side-by-side comparison of up to 3 bids."""
        return _compare_bids(bids=bids, bid_ids=bid_ids)

    @mcp.tool
    @tool_wrapper("get_default_criteria")
    def get_default_criteria() -> Dict[str, Any]:
        """Scoring criteria and weights used when none are supplied."""
        return _get_criteria(evaluator=evaluator)

    @mcp.resource("bid-evaluation://metrics")
    def tool_metrics() -> Dict[str, Any]:
        return {"tools": get_tool_metrics()}
