import os

DEFAULT_ANALYSIS_DELAY_MS = 1500
DEFAULT_TRACE_DIR = os.path.join(os.getcwd(), "geo_engine", "logs")


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_flags() -> dict:
    """
    Backend on/off switches.
    """
    return {
        "TRACE_ENABLED": _env_bool("GEO_TRACE_ENABLED", False),
        "DELAY_ENABLED": _env_bool("GEO_DELAY_ENABLED", False),
    }


def get_settings() -> dict:
    return {
        "analysis_delay_ms": max(0, _env_int("GEO_ANALYSIS_DELAY_MS", DEFAULT_ANALYSIS_DELAY_MS)),
        "trace_dir": os.getenv("GEO_TRACE_DIR") or DEFAULT_TRACE_DIR,
        "log_level": (os.getenv("GEO_LOG_LEVEL") or "INFO").upper(),
    }
