# report.py
# Plaintext GEO report. Deterministic: the caller supplies the timestamp,
# the renderer never reads the clock or draws random numbers.

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Union

from .engines import TargetEngine
from .metrics import Metric

REPORT_TITLE = "GEO Analysis Report"
REPORT_MIME_TYPE = "text/plain"


def format_timestamp(ts: datetime) -> str:
    """en-US locale style: 10/17/2026, 1:05:09 PM"""
    hour = ts.hour % 12 or 12
    meridiem = "AM" if ts.hour < 12 else "PM"
    return f"{ts.month}/{ts.day}/{ts.year}, {hour}:{ts.minute:02d}:{ts.second:02d} {meridiem}"


def _score_line(opt: Union[Metric, Mapping[str, Any]]) -> str:
    if isinstance(opt, Metric):
        return f"{opt.label}: {opt.score}%"
    return f"{opt['label']}: {opt['score']}%"


def render_report(
    engine,
    optimizations: Iterable[Union[Metric, Mapping[str, Any]]],
    recommendations: Iterable[str],
    timestamp: Union[datetime, str],
) -> str:
    engine_id = engine.id if isinstance(engine, TargetEngine) else str(engine)
    analyzed_at = format_timestamp(timestamp) if isinstance(timestamp, datetime) else str(timestamp)

    scores = "\n".join(_score_line(opt) for opt in optimizations)
    recs = "\n".join(f"{i}. {rec}" for i, rec in enumerate(recommendations, start=1))

    lines: List[str] = [
        REPORT_TITLE,
        f"Generated for: {engine_id}",
        "",
        "OPTIMIZATION SCORES:",
        scores,
        "",
        "RECOMMENDATIONS:",
        recs,
        "",
        f"Content analyzed at: {analyzed_at}",
    ]
    return "\n".join(lines)


def report_filename(epoch_millis: int) -> str:
    return f"GEO_Report_{int(epoch_millis)}.txt"
