"""Shared building blocks for the bid evaluation MCP server."""

from .execution import ToolMetrics, ToolResult, get_tool_metrics, tool_wrapper
from .validation import (
    ValidationError,
    validate_bid_ids,
    validate_bids,
    validate_budget,
    validate_overrides,
    validate_weights,
)

__all__ = [
    "ToolMetrics",
    "ToolResult",
    "get_tool_metrics",
    "tool_wrapper",
    "ValidationError",
    "validate_bid_ids",
    "validate_bids",
    "validate_budget",
    "validate_overrides",
    "validate_weights",
]
