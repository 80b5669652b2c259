"""Query and result-set helpers shared by the Quran and Hadith searches."""

from typing import Any, Optional, Sequence, TypeVar

T = TypeVar("T")

MIN_QUERY_LENGTH = 2


def is_valid_query(query: Optional[str]) -> bool:
    """A query must have at least two characters once trimmed."""
    return bool(query) and len(query.strip()) >= MIN_QUERY_LENGTH


def extract_keywords(query: str) -> list[str]:
    """Lower-cased whitespace tokens longer than one character, in query order."""
    return [token for token in query.lower().split() if len(token) > 1]


def rank_matches(matches: Sequence[T], max_results: int) -> list[T]:
    """
    Order matches by tier (exact > fuzzy > partial), then by score.

    Ties keep their incoming order. Returns at most ``max_results`` items.
    """
    ordered = sorted(
        matches,
        key=lambda m: (-m.match_type.rank, -m.relevance_score),
    )
    return ordered[: max(0, max_results)]


def advisory_note(results: Sequence[Any], query: str, noun: str = "results") -> Optional[str]:
    """Human-readable hint when nothing, or nothing exact, was found."""
    if not results:
        return (
            f'No {noun} found for "{query}". '
            "Try different keywords or check spelling."
        )
    if all(r.match_type.value != "exact" for r in results):
        return f'No exact matches for "{query}". Showing {len(results)} similar {noun}.'
    return None
