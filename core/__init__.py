"""
Core search machinery for the Quran & Hadith MCP.

    Text            Arabic detection and normalization
    Similarity      Edit distance and relevance scoring
    Topics          Curated topic-to-keyword expansions
    Errors          Typed errors with stable codes
    Reliability     Retry with exponential backoff
    Metrics         Performance monitoring and reporting

The search orchestrator lives in ``core.orchestrator`` and is imported from
there directly, since it depends on the API and model packages.
"""

from core.errors import (
    ContentFetchError,
    FetchError,
    InvalidCollection,
    InvalidSearchQuery,
    InvalidTranslation,
    QuranMCPError,
)
from core.metrics import (
    APIMetrics,
    PerformanceMonitor,
    format_metrics_report,
    get_api_metrics,
    get_performance_monitor,
)
from core.reliability import (
    RetryStrategy,
    retry_async,
)
from core.similarity import (
    MatchType,
    RelevanceScore,
    edit_distance,
    score_relevance,
    similarity,
)
from core.text import (
    is_arabic_script,
    normalize_arabic,
    normalize_for_matching,
)
from core.topics import (
    HADITH_TOPICS,
    QURAN_TOPICS,
    expand_hadith_topic,
    expand_quran_topic,
)

__all__ = [
    # Text
    "is_arabic_script",
    "normalize_arabic",
    "normalize_for_matching",
    # Similarity
    "MatchType",
    "RelevanceScore",
    "edit_distance",
    "similarity",
    "score_relevance",
    # Topics
    "QURAN_TOPICS",
    "HADITH_TOPICS",
    "expand_quran_topic",
    "expand_hadith_topic",
    # Errors
    "QuranMCPError",
    "InvalidSearchQuery",
    "InvalidTranslation",
    "InvalidCollection",
    "FetchError",
    "ContentFetchError",
    # Reliability
    "RetryStrategy",
    "retry_async",
    # Metrics
    "APIMetrics",
    "PerformanceMonitor",
    "get_api_metrics",
    "get_performance_monitor",
    "format_metrics_report",
]
