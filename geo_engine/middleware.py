import logging
import time
from typing import Any, Dict, Optional

from .engines import EngineError, resolve_engine
from .feature_flags import get_flags, get_settings
from .gate import ContentError
from .optimizer import generate_optimizations
from .recommendations import generate_recommendations
from .trace import TraceLogger, new_trace_context

log = logging.getLogger("geo.middleware")


def process_request(
    text: str,
    engine=None,
    rng=None,
    trace_logger: Optional[TraceLogger] = None,
    delay_ms: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Clean production boundary around the pure engine:
      gate -> metrics -> engine rule -> recommendations
    Adds a trace record when tracing is on and the cosmetic UI delay when
    enabled. Neither changes the result for identical inputs and rng.
    ContentError / EngineError propagate to the caller.
    """
    flags = get_flags()
    ctx = new_trace_context()
    started = time.monotonic()

    trace: Dict[str, Any] = {
        **ctx,
        "status": "INIT",
        "engine": None,
        "char_count": len(text) if isinstance(text, str) else 0,
    }

    try:
        target = resolve_engine(engine)
        trace["engine"] = target.id
        optimizations = generate_optimizations(text, target, rng=rng)
    except ContentError as e:
        trace["status"] = "REJECTED"
        trace["reason"] = e.reason
        _write_trace(flags, trace_logger, trace)
        raise
    except EngineError as e:
        trace["status"] = "REJECTED"
        trace["reason"] = "UNKNOWN_ENGINE"
        _write_trace(flags, trace_logger, trace)
        log.info("request rejected engine=%r err=%s", engine, e)
        raise

    recommendations = generate_recommendations(text, target)

    if delay_ms is None and flags["DELAY_ENABLED"]:
        delay_ms = get_settings()["analysis_delay_ms"]
    if delay_ms:
        time.sleep(delay_ms / 1000.0)

    latency_ms = int((time.monotonic() - started) * 1000)
    trace["status"] = "COMPLETE"
    trace["latency_ms"] = latency_ms
    trace["scores"] = {m.label: m.score for m in optimizations}
    _write_trace(flags, trace_logger, trace)

    log.info(
        "analysis complete request_id=%s engine=%s metrics=%d latency_ms=%d",
        ctx["request_id"], target.id, len(optimizations), latency_ms,
    )

    return {
        "status": "ok",
        "engine": target,
        "optimizations": optimizations,
        "recommendations": recommendations,
        "trace_id": ctx["request_id"],
        "timestamp": ctx["timestamp"],
    }


def _write_trace(flags: Dict[str, bool], trace_logger: Optional[TraceLogger], trace: Dict[str, Any]) -> None:
    # An explicitly passed logger always writes; otherwise the flag decides.
    if trace_logger is None:
        if not flags["TRACE_ENABLED"]:
            return
        trace_logger = TraceLogger()
    trace_logger.write(trace)
