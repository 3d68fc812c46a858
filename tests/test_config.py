from bid_evaluation.config import load_settings


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("BID_EVALUATION_CRITERIA_PATH", "/etc/bids/criteria.yaml")
    monkeypatch.setenv("BID_EVALUATION_TIE_BREAK", "BID_ID")
    monkeypatch.setenv("BID_EVALUATION_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings["BID_EVALUATION_CRITERIA_PATH"] == "/etc/bids/criteria.yaml"
    assert settings["BID_EVALUATION_TIE_BREAK"] == "bid_id"
    assert settings["BID_EVALUATION_LOG_LEVEL"] == "DEBUG"


def test_unknown_tie_break_falls_back_to_submission_order(monkeypatch):
    monkeypatch.setenv("BID_EVALUATION_TIE_BREAK", "random")

    assert load_settings()["BID_EVALUATION_TIE_BREAK"] == "submission"
