# engines.py
# Target answer engines and their engine-specific metric rules.

from __future__ import annotations

import random
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .metrics import Metric

SERP_RELEVANCE = "SERP Relevance"
TOKEN_EFFICIENCY = "Token Efficiency"


class EngineError(ValueError):
    pass


class TargetEngine(Enum):
    OPENAI = ("openai", "ChatGPT")
    GOOGLE = ("google", "Google AI Overview")
    CLAUDE = ("claude", "Claude")
    PERPLEXITY = ("perplexity", "Perplexity")
    GEMINI = ("gemini", "Gemini")

    @property
    def id(self) -> str:
        return self.value[0]

    @property
    def display_name(self) -> str:
        return self.value[1]


DEFAULT_ENGINE = TargetEngine.OPENAI

# engine -> (label, low, high inclusive, suggestion)
ENGINE_RULES: Dict[TargetEngine, Tuple[str, int, int, str]] = {
    TargetEngine.GOOGLE: (SERP_RELEVANCE, 40, 79, "Align with common Google AI Overview formats"),
    TargetEngine.OPENAI: (TOKEN_EFFICIENCY, 50, 79, "Optimize for ChatGPT token usage patterns"),
}

_LOOKUP = {}
for _engine in TargetEngine:
    _LOOKUP[_engine.id] = _engine
    _LOOKUP[_engine.display_name.lower()] = _engine
    _LOOKUP[_engine.name.lower()] = _engine


def list_engines() -> List[Dict[str, str]]:
    return [{"id": e.id, "name": e.display_name} for e in TargetEngine]


def resolve_engine(value) -> TargetEngine:
    """
    Accepts a TargetEngine, an identifier ("openai"), or a display name
    ("Google AI Overview"), case-insensitive. Blank means the default engine.
    """
    if isinstance(value, TargetEngine):
        return value
    if value is None:
        return DEFAULT_ENGINE
    if not isinstance(value, str):
        raise EngineError(f"Unknown target engine: {value!r}")
    key = value.strip().lower()
    if not key:
        return DEFAULT_ENGINE
    engine = _LOOKUP.get(key)
    if engine is None:
        raise EngineError(f"Unknown target engine: {value!r}")
    return engine


def engine_metric(engine: TargetEngine, rng=None) -> Optional[Metric]:
    """
    Zero or one extra metric for the engine. The score is drawn fresh from
    `rng` (anything with randint) on every call.
    """
    rule = ENGINE_RULES.get(engine)
    if rule is None:
        return None
    label, low, high, suggestion = rule
    rng = rng if rng is not None else random
    return Metric(label, rng.randint(low, high), suggestion)
