"""
Utility functions for caching and query helpers.

All utilities are lightweight with no third-party dependencies.
"""

from utils.cache import CACHE_TTL_SECONDS, SearchCache, get_cache_key
from utils.helpers import (
    MIN_QUERY_LENGTH,
    advisory_note,
    extract_keywords,
    is_valid_query,
    rank_matches,
)

__all__ = [
    # Cache
    "SearchCache",
    "get_cache_key",
    "CACHE_TTL_SECONDS",
    # Helpers
    "is_valid_query",
    "extract_keywords",
    "rank_matches",
    "advisory_note",
    "MIN_QUERY_LENGTH",
]
