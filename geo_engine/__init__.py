from .gate import ContentError, check_content
from .metrics import (
    Metric,
    base_metrics,
    calculate_clarity,
    calculate_entities,
    calculate_keyword_density,
    calculate_structure,
)
from .engines import TargetEngine, EngineError, resolve_engine, engine_metric, list_engines
from .optimizer import AnalysisInput, analyze, generate_optimizations
from .recommendations import RECOMMENDATIONS, generate_recommendations
from .report import render_report, format_timestamp, report_filename
from .feature_flags import get_flags, get_settings
from .trace import TraceLogger, new_trace_context

# Request boundary (trace + cosmetic delay)
from .middleware import process_request

GEO_ENGINE_VERSION = "geo-v1.0"
