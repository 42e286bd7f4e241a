from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .engines import TargetEngine, engine_metric, resolve_engine
from .gate import check_content
from .metrics import Metric, base_metrics


@dataclass(frozen=True)
class AnalysisInput:
    text: str
    target_engine: TargetEngine = TargetEngine.OPENAI


def generate_optimizations(text: str, engine=TargetEngine.OPENAI, rng=None) -> List[Metric]:
    """
    Clarity, Keyword Density, Structure, Entity Recognition, then the
    engine-specific metric when the engine has one.
    Raises ContentError for blank text; no partial results.
    """
    check_content(text)
    engine = resolve_engine(engine)

    optimizations = base_metrics(text)
    extra = engine_metric(engine, rng=rng)
    if extra is not None:
        optimizations.append(extra)
    return optimizations


def analyze(analysis_input: AnalysisInput, rng=None) -> List[Metric]:
    return generate_optimizations(analysis_input.text, analysis_input.target_engine, rng=rng)
