"""Execution wrapper and metrics for evaluation MCP tools."""

from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, TypeVar

from mcp_servers.evaluation.validation import ValidationError

logger = logging.getLogger("bid_evaluation.mcp")


@dataclass
class ToolResult:
    """Standardized failure payload returned to MCP clients."""

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    execution_time_ms: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolMetrics:
    call_count: int = 0
    total_execution_time_ms: float = 0.0
    error_count: int = 0
    rejected_count: int = 0

    @property
    def avg_execution_time_ms(self) -> float:
        if self.call_count == 0:
            return 0.0
        return self.total_execution_time_ms / self.call_count


_tool_metrics: Dict[str, ToolMetrics] = {}
T = TypeVar("T")


def get_tool_metrics() -> Dict[str, Dict[str, float]]:
    return {
        name: {
            "call_count": metrics.call_count,
            "error_count": metrics.error_count,
            "rejected_count": metrics.rejected_count,
            "avg_execution_time_ms": metrics.avg_execution_time_ms,
        }
        for name, metrics in _tool_metrics.items()
    }


def tool_wrapper(tool_name: str) -> Callable:
    """Time tool calls and turn failures into ToolResult payloads.

    Invalid input (ValidationError) is counted as rejected; anything else
    is logged with its traceback and counted as an error.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., ToolResult | T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> ToolResult | T:
            metrics = _tool_metrics.setdefault(tool_name, ToolMetrics())
            metrics.call_count += 1
            start_time = time.perf_counter()

            logger.info(
                "Executing tool %s with %s",
                tool_name,
                _summarize_parameters(kwargs),
            )

            try:
                result = func(*args, **kwargs)
            except ValidationError as exc:
                execution_time = (time.perf_counter() - start_time) * 1000
                metrics.total_execution_time_ms += execution_time
                metrics.rejected_count += 1
                logger.warning("Tool %s rejected input: %s", tool_name, exc)
                return ToolResult(
                    success=False,
                    error=f"{tool_name} rejected input: {exc}",
                    execution_time_ms=execution_time,
                    metadata={"error_type": "validation"},
                )
            except Exception as exc:
                execution_time = (time.perf_counter() - start_time) * 1000
                metrics.total_execution_time_ms += execution_time
                metrics.error_count += 1
                logger.error(
                    "Tool %s failed after %.1f ms: %s",
                    tool_name,
                    execution_time,
                    exc,
                    exc_info=True,
                )
                return ToolResult(
                    success=False,
                    error=f"{tool_name} failed: {exc}",
                    execution_time_ms=execution_time,
                    metadata={"error_type": type(exc).__name__},
                )

            execution_time = (time.perf_counter() - start_time) * 1000
            metrics.total_execution_time_ms += execution_time
            logger.info("Tool %s completed in %.1f ms", tool_name, execution_time)
            return result

        return wrapper

    return decorator


def _summarize_parameters(params: Dict[str, Any]) -> Dict[str, Any]:
    # Bid payloads carry contact details; log their size only.
    summary: Dict[str, Any] = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple, dict)):
            summary[key] = f"<{type(value).__name__} of {len(value)}>"
        else:
            summary[key] = value
    return summary
