from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from bid_evaluation.config import load_settings
from bid_evaluation.criteria import CriteriaLoadError, load_scoring_criteria
from bid_evaluation.evaluator import BidEvaluator, build_bid_evaluator
from bid_evaluation.models import BidValidationError

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Raised when a CLI input file cannot be read."""


def _budget_arg(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("budget must be a number") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("budget must not be negative")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bid-evaluate", description="Evaluate and rank competing vendor bids"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--bids",
        required=True,
        help="JSON file: list of bids, or a bid request object with 'bids'",
    )
    common.add_argument(
        "--budget",
        type=_budget_arg,
        help="Budget limit (default: the bid request's 'budget' field)",
    )
    common.add_argument("--criteria", help="Scoring criteria YAML")
    common.add_argument(
        "--overrides",
        help="Manual scores JSON: {bid_id: {criterion: score}}",
    )
    common.add_argument("--output")

    evaluate = sub.add_parser(
        "evaluate",
        help="Full report: analytics, ranking, comparison, recommendations",
        parents=[common],
    )
    evaluate.add_argument(
        "--compare",
        nargs="+",
        metavar="BID_ID",
        help="Up to 3 bid ids to compare side by side",
    )

    sub.add_parser("rank", help="Ranking of bids under review only", parents=[common])
    return parser


def main(
    argv: Sequence[str] | None = None,
    evaluator: BidEvaluator | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = load_settings()
    logging.basicConfig(
        level=settings["BID_EVALUATION_LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        bids, request_budget = _load_bids(Path(args.bids))
        overrides = _load_overrides(Path(args.overrides)) if args.overrides else None
        criteria = load_scoring_criteria(args.criteria) if args.criteria else None
        runtime = evaluator or build_bid_evaluator(settings)
        budget = args.budget if args.budget is not None else request_budget

        if args.command == "evaluate":
            report = runtime.evaluate(
                bids,
                budget_limit=budget,
                criteria=criteria,
                overrides=overrides,
                selection=args.compare,
            )
            _emit_payload(report.as_dict(), output_path=args.output)
            return 0
        if args.command == "rank":
            report = runtime.evaluate(
                bids, budget_limit=budget, criteria=criteria, overrides=overrides
            )
            _emit_payload(report.scoring.as_dict(), output_path=args.output)
            return 0
    except (InputError, BidValidationError, CriteriaLoadError) as exc:
        print(f"bid-evaluate: {exc}", file=sys.stderr)
        return 2

    parser.error(f"Unsupported command: {args.command}")
    return 2


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise InputError(f"file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise InputError(f"invalid JSON in {path}: {exc}") from exc


def _load_bids(path: Path) -> tuple[list[Any], float | None]:
    payload = _read_json(path)
    if isinstance(payload, list):
        return payload, None
    if isinstance(payload, dict) and isinstance(payload.get("bids"), list):
        budget = payload.get("budgetLimit", payload.get("budget"))
        if budget is not None and (
            isinstance(budget, bool) or not isinstance(budget, (int, float))
        ):
            raise InputError(f"budget in {path} must be a number")
        return payload["bids"], budget
    raise InputError(f"{path} must hold a list of bids or an object with 'bids'")


def _load_overrides(path: Path) -> dict[str, Any]:
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise InputError(f"{path} must hold an object of manual scores")
    return payload


def _emit_payload(payload: dict[str, Any], output_path: str | None = None) -> None:
    rendered = json.dumps(payload, ensure_ascii=False)
    if output_path:
        Path(output_path).write_text(rendered, encoding="utf-8")
        print(
            json.dumps({"status": "written", "output": output_path}, ensure_ascii=False)
        )
        return
    print(rendered)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
