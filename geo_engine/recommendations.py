from typing import List, Tuple

RECOMMENDATIONS: Tuple[str, ...] = (
    "Add a clear, concise summary in the first 100 words",
    "Include specific statistics and data points with sources",
    "Structure content with H2 and H3 headers for AI extraction",
    "Use natural language questions as section headers",
    "Include a FAQ or Q&A section for featured snippet optimization",
    "Add schema markup (structured data) for better understanding",
    "Include direct answers to common queries in your niche",
    "Optimize for long-form content (2000+ words) for AI models",
)


def generate_recommendations(text: str = "", engine=None) -> List[str]:
    """
    Advisory list for the report. Same eight entries, same order, for every
    text and engine; the arguments are accepted so callers can pass the
    analysis input through unchanged.
    """
    return list(RECOMMENDATIONS)
