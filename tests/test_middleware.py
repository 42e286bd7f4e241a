"""
tests/test_middleware.py — Request boundary, trace log, feature flags
"""

import os
import sys
import json
import random
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from geo_engine import ContentError, EngineError, TraceLogger, get_flags, get_settings, process_request
from geo_engine.feature_flags import DEFAULT_ANALYSIS_DELAY_MS

TEXT = "New York is great. Paris is also great."


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GEO_TRACE_ENABLED", "GEO_DELAY_ENABLED", "GEO_ANALYSIS_DELAY_MS", "GEO_TRACE_DIR", "GEO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _read_jsonl(path):
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


# ═══════════════════════════════════════════
# PROCESS REQUEST
# ═══════════════════════════════════════════

def test_process_request_shape():
    result = process_request(TEXT, "claude")
    assert result["status"] == "ok"
    assert result["engine"].id == "claude"
    assert len(result["optimizations"]) == 4
    assert len(result["recommendations"]) == 8
    assert result["trace_id"]


def test_process_request_propagates_content_error():
    with pytest.raises(ContentError):
        process_request("  ", "openai")


def test_process_request_propagates_engine_error():
    with pytest.raises(EngineError):
        process_request(TEXT, "bing")


def test_trace_written_without_text(tmp_path):
    logger = TraceLogger(log_dir=str(tmp_path))
    result = process_request(TEXT, "google", rng=random.Random(1), trace_logger=logger)
    records = _read_jsonl(logger.path)
    assert len(records) == 1
    rec = records[0]
    assert rec["request_id"] == result["trace_id"]
    assert rec["status"] == "COMPLETE"
    assert rec["engine"] == "google"
    assert rec["char_count"] == len(TEXT)
    assert rec["scores"]["Entity Recognition"] == 6
    assert "SERP Relevance" in rec["scores"]
    assert TEXT not in json.dumps(rec)


def test_trace_records_rejection(tmp_path):
    logger = TraceLogger(log_dir=str(tmp_path))
    with pytest.raises(ContentError):
        process_request("", "openai", trace_logger=logger)
    with pytest.raises(EngineError):
        process_request(TEXT, "bing", trace_logger=logger)
    records = _read_jsonl(logger.path)
    assert [(r["status"], r["reason"]) for r in records] == [
        ("REJECTED", "EMPTY"),
        ("REJECTED", "UNKNOWN_ENGINE"),
    ]


def test_trace_enabled_by_flag(tmp_path, monkeypatch):
    monkeypatch.setenv("GEO_TRACE_ENABLED", "1")
    monkeypatch.setenv("GEO_TRACE_DIR", str(tmp_path))
    process_request(TEXT, "claude")
    assert len(_read_jsonl(tmp_path / "geo_trace.jsonl")) == 1


def test_trace_off_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("GEO_TRACE_DIR", str(tmp_path))
    process_request(TEXT, "claude")
    assert not (tmp_path / "geo_trace.jsonl").exists()


def test_trace_write_failure_does_not_block(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    logger = TraceLogger(log_dir=str(blocker))
    assert logger.write({"status": "COMPLETE"}) is False
    result = process_request(TEXT, "claude", trace_logger=logger)
    assert result["status"] == "ok"


# ═══════════════════════════════════════════
# COSMETIC DELAY
# ═══════════════════════════════════════════

def test_delay_applied_when_enabled(monkeypatch):
    slept = []
    monkeypatch.setattr("geo_engine.middleware.time.sleep", slept.append)
    monkeypatch.setenv("GEO_DELAY_ENABLED", "true")
    monkeypatch.setenv("GEO_ANALYSIS_DELAY_MS", "250")
    process_request(TEXT, "claude")
    assert slept == [0.25]


def test_delay_skipped_by_default(monkeypatch):
    slept = []
    monkeypatch.setattr("geo_engine.middleware.time.sleep", slept.append)
    process_request(TEXT, "claude")
    assert slept == []


def test_delay_does_not_change_result(monkeypatch):
    monkeypatch.setattr("geo_engine.middleware.time.sleep", lambda s: None)
    plain = process_request(TEXT, "openai", rng=random.Random(9))
    delayed = process_request(TEXT, "openai", rng=random.Random(9), delay_ms=1500)
    assert plain["optimizations"] == delayed["optimizations"]
    assert plain["recommendations"] == delayed["recommendations"]


# ═══════════════════════════════════════════
# FLAGS / SETTINGS
# ═══════════════════════════════════════════

def test_flag_defaults():
    assert get_flags() == {"TRACE_ENABLED": False, "DELAY_ENABLED": False}
    settings = get_settings()
    assert settings["analysis_delay_ms"] == DEFAULT_ANALYSIS_DELAY_MS
    assert settings["log_level"] == "INFO"


@pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False)])
def test_flag_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("GEO_TRACE_ENABLED", raw)
    assert get_flags()["TRACE_ENABLED"] is expected


@pytest.mark.parametrize("raw, expected", [("400", 400), ("-5", 0), ("soon", DEFAULT_ANALYSIS_DELAY_MS)])
def test_delay_setting_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("GEO_ANALYSIS_DELAY_MS", raw)
    assert get_settings()["analysis_delay_ms"] == expected
