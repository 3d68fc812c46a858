"""Bid evaluation MCP server (FastMCP) entrypoint."""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from bid_evaluation.config import load_settings
from bid_evaluation.evaluator import build_bid_evaluator
from mcp_servers.evaluation.router import register_mcp_routes

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("bid_evaluation.mcp")

__all__ = ["mcp", "evaluator"]

mcp = FastMCP(name="Bid Evaluation")
_SETTINGS = load_settings()
logging.getLogger().setLevel(_SETTINGS["BID_EVALUATION_LOG_LEVEL"])
evaluator = build_bid_evaluator(_SETTINGS)

register_mcp_routes(mcp=mcp, evaluator=evaluator)


if __name__ == "__main__":  # pragma: no cover
    logger.info("Starting bid evaluation MCP server")
    mcp.run()
