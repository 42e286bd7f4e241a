"""
analysis_endpoint.py
--------------------
GEO analysis + report handlers (Flask-agnostic).

In app.py:
  @app.route('/api/analyze', methods=['POST'])
  def api_analyze():
      body, status = analysis_endpoint.handle_analyze(request.get_json(silent=True) or {})
      return jsonify(body), status
"""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from geo_engine import (
    ContentError,
    EngineError,
    generate_recommendations,
    process_request,
    render_report,
    report_filename,
    resolve_engine,
)


def _payload_text(payload: Dict[str, Any]):
    for key in ("text", "content", "input"):
        if key in payload:
            return payload[key]
    return None


def _payload_engine(payload: Dict[str, Any]):
    return payload.get("engine") or payload.get("targetEngine") or payload.get("target_engine")


def _bad_payload() -> Tuple[Dict[str, Any], int]:
    return {"error": "Request body must be a JSON object", "reason": "BAD_PAYLOAD"}, 400


def handle_analyze(payload: Dict[str, Any], rng=None) -> Tuple[Dict[str, Any], int]:
    if not isinstance(payload, dict):
        return _bad_payload()
    try:
        result = process_request(_payload_text(payload), _payload_engine(payload), rng=rng)
    except ContentError as e:
        return e.to_dict(), 400
    except EngineError as e:
        return {"error": str(e), "reason": "UNKNOWN_ENGINE"}, 400

    engine = result["engine"]
    return {
        "status": "ok",
        "engine": {"id": engine.id, "name": engine.display_name},
        "optimizations": [m.to_dict() for m in result["optimizations"]],
        "recommendations": result["recommendations"],
        "trace_id": result["trace_id"],
    }, 200


def _coerce_optimizations(raw) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        raise ValueError("optimizations must be a list")
    out = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("each optimization must be an object")
        # Accept the UI's {type, current} shape as well as {label, score}.
        label = item.get("label", item.get("type"))
        score = item.get("score", item.get("current"))
        if label is None or score is None:
            raise ValueError("each optimization needs a label and a score")
        out.append({"label": label, "score": score})
    return out


def _parse_timestamp(raw) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise ValueError("timestamp must be an ISO-8601 string")
    return datetime.fromisoformat(raw)


def handle_report(payload: Dict[str, Any], rng=None, now: Optional[datetime] = None) -> Tuple[Dict[str, Any], int]:
    """
    Renders the downloadable report. Uses the optimizations/recommendations the
    caller already holds; when only text is given it analyzes first.
    Returns ({"filename", "report"}, 200) or ({"error", ...}, 400).
    """
    if not isinstance(payload, dict):
        return _bad_payload()
    try:
        engine = resolve_engine(_payload_engine(payload))
        if "optimizations" in payload:
            optimizations = _coerce_optimizations(payload["optimizations"])
            recommendations = payload.get("recommendations")
            if recommendations is None:
                recommendations = generate_recommendations()
            elif not isinstance(recommendations, list):
                raise ValueError("recommendations must be a list")
        else:
            result = process_request(_payload_text(payload), engine, rng=rng)
            optimizations = result["optimizations"]
            recommendations = result["recommendations"]
        timestamp = _parse_timestamp(payload.get("timestamp")) or now or datetime.now()
    except ContentError as e:
        return e.to_dict(), 400
    except EngineError as e:
        return {"error": str(e), "reason": "UNKNOWN_ENGINE"}, 400
    except ValueError as e:
        return {"error": str(e), "reason": "BAD_REPORT_PAYLOAD"}, 400

    report = render_report(engine, optimizations, recommendations, timestamp)
    return {
        "filename": report_filename(int(time.time() * 1000)),
        "report": report,
    }, 200
