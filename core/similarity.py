"""
Relevance scoring for Quran verses and hadith texts.

Combines three signals per keyword, strongest first:

    Exact phrase    keyword appears verbatim in the text        +100
    Exact word      a word of the text equals the keyword        +50
    Partial word    word and keyword contain one another         +25
    Fuzzy word      edit-distance similarity above threshold     up to +30

The match tier (exact > fuzzy > partial) is tracked alongside the numeric
score and is the primary sort key for search results.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

from core.text import is_arabic_script, normalize_arabic

__all__ = [
    "MatchType",
    "RelevanceScore",
    "edit_distance",
    "similarity",
    "score_relevance",
]

# ══════════════════════════════════════════════════════════════════════════════
# Scoring Weights
# ══════════════════════════════════════════════════════════════════════════════

EXACT_PHRASE_POINTS = 100
EXACT_WORD_POINTS = 50
PARTIAL_WORD_POINTS = 25
FUZZY_POINTS_SCALE = 30

ARABIC_FUZZY_THRESHOLD = 0.75
LATIN_FUZZY_THRESHOLD = 0.80

NON_WORD = re.compile(r"\W")

# ══════════════════════════════════════════════════════════════════════════════
# Types
# ══════════════════════════════════════════════════════════════════════════════


class MatchType(str, Enum):
    """Match quality tier."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    PARTIAL = "partial"

    @property
    def rank(self) -> int:
        return _MATCH_RANK[self]


_MATCH_RANK = {MatchType.EXACT: 2, MatchType.FUZZY: 1, MatchType.PARTIAL: 0}


@dataclass(frozen=True)
class RelevanceScore:
    score: int
    match_type: MatchType


# ══════════════════════════════════════════════════════════════════════════════
# String Similarity
# ══════════════════════════════════════════════════════════════════════════════


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    rows = len(a) + 1
    cols = len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )

    return matrix[-1][-1]


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] derived from edit distance.

    Case-insensitive. Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    distance = edit_distance(a.lower(), b.lower())
    return (longest - distance) / longest


# ══════════════════════════════════════════════════════════════════════════════
# Relevance
# ══════════════════════════════════════════════════════════════════════════════


def score_relevance(text: str, keywords: list[str]) -> RelevanceScore:
    """
    Score ``text`` against query keywords.

    Args:
        text: Candidate text (verse or hadith), Arabic or Latin script
        keywords: Query keywords, in query order

    Returns:
        RelevanceScore with the accumulated score and best match tier.
        A score of 0 means nothing matched.

    Example:
        >>> score_relevance("Indeed, Allah is with the patient", ["patient"])
        RelevanceScore(score=100, match_type=<MatchType.EXACT: 'exact'>)
    """
    lower_text = text.lower()
    arabic_text = is_arabic_script(text)
    normalized_text = normalize_arabic(text) if arabic_text else lower_text
    threshold = ARABIC_FUZZY_THRESHOLD if arabic_text else LATIN_FUZZY_THRESHOLD
    words = normalized_text.split()

    score = 0
    match_type = MatchType.PARTIAL

    for keyword in keywords:
        lower_keyword = keyword.lower()
        normalized_keyword = (
            normalize_arabic(keyword) if is_arabic_script(keyword) else lower_keyword
        )

        if lower_keyword in lower_text or normalized_keyword in normalized_text:
            score += EXACT_PHRASE_POINTS
            match_type = MatchType.EXACT
            continue

        for word in words:
            clean_word = word if arabic_text else NON_WORD.sub("", word)
            if not clean_word:
                continue

            if clean_word == normalized_keyword:
                score += EXACT_WORD_POINTS
                if match_type != MatchType.EXACT:
                    match_type = MatchType.FUZZY
            elif clean_word in normalized_keyword or normalized_keyword in clean_word:
                score += PARTIAL_WORD_POINTS
            else:
                ratio = similarity(clean_word, normalized_keyword)
                if ratio > threshold:
                    score += math.floor(ratio * FUZZY_POINTS_SCALE)
                    if match_type == MatchType.PARTIAL:
                        match_type = MatchType.FUZZY

    return RelevanceScore(score=score, match_type=match_type)
