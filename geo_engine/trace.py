import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .feature_flags import get_settings

DEFAULT_LOG_FILE = "geo_trace.jsonl"

log = logging.getLogger("geo.trace")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_trace_context() -> Dict[str, Any]:
    return {
        "request_id": str(uuid.uuid4()),
        "timestamp": utc_now_iso(),
    }


class TraceLogger:
    """
    Appends one JSON object per analysis request (JSONL).
    Records carry ids, engine, status and scores only, never the analyzed text.
    A failed write is logged and never blocks the request.
    """
    def __init__(self, log_dir: Optional[str] = None, filename: str = DEFAULT_LOG_FILE) -> None:
        self.log_dir = log_dir or get_settings()["trace_dir"]
        self.filename = filename
        self.path = os.path.join(self.log_dir, self.filename)

    def write(self, trace_obj: Dict[str, Any]) -> bool:
        try:
            os.makedirs(self.log_dir, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(trace_obj, ensure_ascii=False) + "\n")
        except OSError as e:
            log.warning("trace write failed path=%s err=%s", self.path, e)
            return False
        return True
