# metrics.py
# Base GEO metrics. Rule-based, no NLU model.
#
# Each function maps raw text to an integer score. The heuristics are the
# calibrated approximations: "sentences" are pieces between periods and
# "entities" are runs of capitalized words.

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from .gate import WHITESPACE

SCORE_MIN = 0
SCORE_MAX = 100

CLARITY_FLOOR = 20
CLARITY_TARGET_WORD_LEN = 4
CLARITY_TARGET_SENTENCES = 10

HEADER_WEIGHT = 20
LIST_WEIGHT = 15
PARAGRAPH_WEIGHT = 5
PARAGRAPH_CAP = 50
ENTITY_WEIGHT = 3

CLARITY = "Clarity Score"
KEYWORD_DENSITY = "Keyword Density"
STRUCTURE = "Structure Optimization"
ENTITY_RECOGNITION = "Entity Recognition"

SUGGESTIONS = {
    CLARITY: "Use shorter sentences and clearer language for AI comprehension",
    KEYWORD_DENSITY: "Optimize primary keywords for better AI extraction",
    STRUCTURE: "Use headers and bullet points for AI parsing",
    ENTITY_RECOGNITION: "Include specific, named entities AI can recognize",
}

_WORD_RE = re.compile(r"\b\w+\b", re.ASCII)
_HEADER_RE = re.compile(r"^#+", re.MULTILINE)
_LIST_RE = re.compile("^[-*•]", re.MULTILINE)
_ENTITY_RE = re.compile(r"\b[A-Z][a-z]+(?:[" + WHITESPACE + r"][A-Z][a-z]+)*\b", re.ASCII)


def _utf16_len(s: str) -> int:
    # Lengths are UTF-16 code units: an emoji counts as 2.
    return len(s.encode("utf-16-le", "surrogatepass")) // 2


def clamp_score(value: float, low: int = SCORE_MIN, high: int = SCORE_MAX) -> int:
    return int(math.floor(max(low, min(high, value))))


@dataclass(frozen=True)
class Metric:
    """One labelled score in [0,100] with its fixed improvement suggestion."""
    label: str
    score: int
    suggestion: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", clamp_score(self.score))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_clarity(text: str) -> int:
    words = text.split(" ")
    avg_word_length = sum(_utf16_len(w) for w in words) / len(words)
    sentence_count = len(text.split("."))
    raw = 100 - (
        (avg_word_length - CLARITY_TARGET_WORD_LEN) * 5
        + (sentence_count - CLARITY_TARGET_SENTENCES) * 2
    )
    return clamp_score(raw, low=CLARITY_FLOOR)


def calculate_keyword_density(text: str) -> int:
    words = _WORD_RE.findall(text.lower())
    if not words:
        return SCORE_MIN
    return math.floor(len(set(words)) / len(words) * 100)


def calculate_structure(text: str) -> int:
    headers = len(_HEADER_RE.findall(text))
    lists = len(_LIST_RE.findall(text))
    paragraphs = len(text.split("\n\n"))
    return min(
        SCORE_MAX,
        headers * HEADER_WEIGHT + lists * LIST_WEIGHT + min(paragraphs * PARAGRAPH_WEIGHT, PARAGRAPH_CAP),
    )


def calculate_entities(text: str) -> int:
    capitalized = len(_ENTITY_RE.findall(text))
    return clamp_score(capitalized * ENTITY_WEIGHT)


METRIC_FUNCTIONS = (
    (CLARITY, calculate_clarity),
    (KEYWORD_DENSITY, calculate_keyword_density),
    (STRUCTURE, calculate_structure),
    (ENTITY_RECOGNITION, calculate_entities),
)


def base_metrics(text: str) -> List[Metric]:
    """The four base metrics in fixed declaration order."""
    return [Metric(label, fn(text), SUGGESTIONS[label]) for label, fn in METRIC_FUNCTIONS]
