# bid_evaluation/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CRITERIA_PATH = Path(__file__).resolve().parents[1] / "config" / "scoring_criteria.yaml"
TIE_BREAK_CHOICES = ("submission", "bid_id")


def _tie_break(value: str | None) -> str:
    selected = (value or "submission").strip().lower()
    if selected not in TIE_BREAK_CHOICES:
        return "submission"
    return selected


def load_settings() -> dict:
    load_dotenv()
    return {
        "BID_EVALUATION_CRITERIA_PATH": os.getenv("BID_EVALUATION_CRITERIA_PATH"),
        "BID_EVALUATION_TIE_BREAK": _tie_break(os.getenv("BID_EVALUATION_TIE_BREAK")),
        "BID_EVALUATION_LOG_LEVEL": (os.getenv("BID_EVALUATION_LOG_LEVEL") or "INFO").upper(),
    }
