"""
Search orchestration for the Quran and Hadith tools.

The orchestrator validates a request, fans out concurrent fetches over the
candidate documents, scores every candidate against the query keywords and
ranks the survivors. Results are memoized in an injected ``SearchCache``.

Quran search fetches all 114 surahs at once. Hadith search samples up to
``hadith_sample_size`` evenly spaced numbers from each of the first
``hadith_max_collections`` requested collections and fetches them in
batches, stopping early once a collection has produced enough exact
matches.

Per-document failures are logged and skipped; they never fail the search.
"""

import asyncio
import logging
import time
from functools import partial
from typing import Any, Awaitable, Callable, Optional, Sequence

from api.alquran import (
    ARABIC_EDITION,
    SURAHS,
    TRANSLATIONS,
    fetch_surah_verses,
    get_translation,
)
from api.client import FetchJSON, fetch_json
from api.hadith import COLLECTIONS as HADITH_COLLECTIONS
from api.hadith import edition_language, fetch_hadith
from core.errors import InvalidCollection, InvalidSearchQuery, InvalidTranslation
from core.metrics import PerformanceMonitor, get_performance_monitor
from core.similarity import MatchType, score_relevance
from core.text import is_arabic_script
from core.topics import expand_hadith_topic, expand_quran_topic
from models import HadithMatch, QuranMatch, SearchSettings
from utils.cache import SearchCache, get_cache_key
from utils.helpers import advisory_note, extract_keywords, is_valid_query, rank_matches

__all__ = ["SearchOrchestrator", "sample_hadith_numbers"]

logger = logging.getLogger(__name__)


def sample_hadith_numbers(total: int, sample_size: int = 50) -> list[int]:
    """
    Evenly spaced hadith numbers from 1..total.

    Returns at most ``sample_size`` numbers, ascending, starting at 1.

    Example:
        >>> sample_hadith_numbers(7563)[:3]
        [1, 152, 303]
    """
    size = min(sample_size, total)
    if size <= 0:
        return []
    step = max(1, total // size)
    return list(range(1, total + 1, step))[:size]


class SearchOrchestrator:
    """Run keyword and topic searches over the Quran and Hadith collections."""

    def __init__(
        self,
        cache: Optional[SearchCache] = None,
        fetch: Optional[FetchJSON] = None,
        settings: Optional[SearchSettings] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self.settings = settings or SearchSettings()
        if cache is None:
            cache = SearchCache(
                ttl_seconds=self.settings.cache_ttl_seconds,
                max_entries=self.settings.cache_max_entries,
            )
        self.cache = cache
        self.fetch = fetch or partial(
            fetch_json,
            timeout=self.settings.request_timeout,
            retries=self.settings.max_retries,
        )
        self.monitor = monitor if monitor is not None else get_performance_monitor()

    # ══════════════════════════════════════════════════════════════════════════
    # Quran
    # ══════════════════════════════════════════════════════════════════════════

    async def search_quran(
        self, query: str, translation_slug: str = "en.sahih", max_results: int = 20
    ) -> list[QuranMatch]:
        """
        Keyword search across every verse of the Quran.

        Arabic-script queries search the Arabic text; anything else searches
        the requested translation.

        Args:
            query: Keywords or phrase, at least 2 characters
            translation_slug: Translation to search (e.g. 'en.sahih')
            max_results: Maximum number of matches to return

        Returns:
            Matches ordered exact, then fuzzy, then partial, each tier by
            descending score

        Raises:
            InvalidSearchQuery: query shorter than 2 characters
            InvalidTranslation: unknown translation slug
        """
        _require_query(query)
        translation = get_translation(translation_slug)
        if translation is None:
            raise InvalidTranslation(
                f"Unknown translation: {translation_slug}. "
                f"Available: {', '.join(TRANSLATIONS)}"
            )

        key = get_cache_key(
            "search_quran",
            translation=translation_slug,
            query=query,
            max_results=max_results,
        )
        return await self._cached(
            key,
            "quran",
            lambda: self._scan_quran(
                query, translation_slug, translation["name"], max_results
            ),
        )

    async def search_quran_by_topic(
        self, topic: str, translation_slug: str = "en.sahih", max_results: int = 10
    ) -> list[QuranMatch]:
        """Expand a known topic into its keyword string and run ``search_quran``."""
        return await self.search_quran(
            expand_quran_topic(topic), translation_slug, max_results
        )

    async def _scan_quran(
        self, query: str, translation_slug: str, translation_name: str, max_results: int
    ) -> list[QuranMatch]:
        keywords = extract_keywords(query)
        arabic = is_arabic_script(query)
        edition = ARABIC_EDITION if arabic else translation_slug
        label = "Arabic" if arabic else translation_name

        per_surah = await asyncio.gather(
            *(self._scan_surah(number, edition, keywords, label) for number in SURAHS)
        )
        matches = [match for chunk in per_surah for match in chunk]
        ranked = rank_matches(matches, max_results)

        note = advisory_note(ranked, query, noun="verses")
        if note:
            logger.info(note)
        return ranked

    async def _scan_surah(
        self, number: int, edition: str, keywords: list[str], label: str
    ) -> list[QuranMatch]:
        try:
            verses = await fetch_surah_verses(
                number, edition, fetch=self.fetch, **self._api_base("quran")
            )
        except Exception as e:
            logger.warning(f"Error searching surah {number}: {e}")
            self.monitor.record_failed_document()
            return []

        surah_name = SURAHS[number]["name"]
        matches = []
        for verse in verses:
            relevance = score_relevance(verse.text, keywords)
            if relevance.score <= 0:
                continue
            matches.append(
                QuranMatch(
                    surah=verse.surah,
                    ayah=verse.ayah,
                    surah_name=surah_name,
                    text=verse.text,
                    translation=label,
                    relevance_score=relevance.score,
                    match_type=relevance.match_type,
                )
            )
        return matches

    # ══════════════════════════════════════════════════════════════════════════
    # Hadith
    # ══════════════════════════════════════════════════════════════════════════

    async def search_hadith(
        self,
        query: str,
        collections: Optional[Sequence[str]] = None,
        max_results: int = 20,
    ) -> list[HadithMatch]:
        """
        Keyword search over a sample of each requested Hadith collection.

        Args:
            query: Keywords or phrase, at least 2 characters
            collections: Collection slugs; all collections when None or empty.
                Only the first ``hadith_max_collections`` are sampled.
            max_results: Maximum number of matches to return

        Returns:
            Matches ordered exact, then fuzzy, then partial, each tier by
            descending score

        Raises:
            InvalidSearchQuery: query shorter than 2 characters
            InvalidCollection: unknown collection slug
        """
        _require_query(query)
        selected = list(collections) if collections else list(HADITH_COLLECTIONS)
        unknown = [slug for slug in selected if slug not in HADITH_COLLECTIONS]
        if unknown:
            raise InvalidCollection(
                f"Unknown collection: {unknown[0]}. "
                f"Available: {', '.join(HADITH_COLLECTIONS)}"
            )

        key = get_cache_key(
            "search_hadith",
            collections=",".join(sorted(selected)),
            query=query,
            max_results=max_results,
        )
        return await self._cached(
            key, "hadith", lambda: self._scan_hadith(query, selected, max_results)
        )

    async def search_hadith_by_topic(
        self,
        topic: str,
        collections: Optional[Sequence[str]] = None,
        max_results: int = 10,
    ) -> list[HadithMatch]:
        """Expand a known topic into its keyword string and run ``search_hadith``."""
        return await self.search_hadith(
            expand_hadith_topic(topic), collections, max_results
        )

    async def _scan_hadith(
        self, query: str, selected: list[str], max_results: int
    ) -> list[HadithMatch]:
        keywords = extract_keywords(query)
        language = edition_language(is_arabic_script(query))
        limited = selected[: self.settings.hadith_max_collections]

        per_collection = await asyncio.gather(
            *(
                self._scan_collection(slug, keywords, language, max_results)
                for slug in limited
            )
        )
        matches = [match for chunk in per_collection for match in chunk]
        ranked = rank_matches(matches, max_results)

        note = advisory_note(ranked, query, noun="hadiths")
        if note:
            logger.info(note)
        return ranked

    async def _scan_collection(
        self, slug: str, keywords: list[str], language: str, max_results: int
    ) -> list[HadithMatch]:
        info = HADITH_COLLECTIONS[slug]
        numbers = sample_hadith_numbers(
            info["total_hadiths"], self.settings.hadith_sample_size
        )
        batch_size = self.settings.hadith_batch_size

        matches: list[HadithMatch] = []
        for start in range(0, len(numbers), batch_size):
            batch = numbers[start : start + batch_size]
            found = await asyncio.gather(
                *(
                    self._score_hadith(slug, info["name"], number, language, keywords)
                    for number in batch
                )
            )
            matches.extend(match for match in found if match is not None)

            exact = sum(1 for m in matches if m.match_type == MatchType.EXACT)
            if exact >= max_results:
                logger.debug(
                    f"{slug}: {exact} exact matches after {start + len(batch)} hadiths, stopping"
                )
                break
        return matches

    async def _score_hadith(
        self,
        slug: str,
        collection_name: str,
        number: int,
        language: str,
        keywords: list[str],
    ) -> Optional[HadithMatch]:
        try:
            record = await fetch_hadith(
                slug, number, language, fetch=self.fetch, **self._api_base("hadith")
            )
        except Exception as e:
            logger.debug(f"Skipping {slug} #{number}: {e}")
            self.monitor.record_failed_document()
            return None

        if record is None:
            return None

        relevance = score_relevance(record.text, keywords)
        if relevance.score <= 0:
            return None

        return HadithMatch(
            hadith_number=record.hadith_number,
            collection=slug,
            collection_name=collection_name,
            text=record.text,
            book=record.book,
            chapter=record.chapter,
            relevance_score=relevance.score,
            match_type=relevance.match_type,
        )

    # ══════════════════════════════════════════════════════════════════════════
    # Helpers
    # ══════════════════════════════════════════════════════════════════════════

    async def _cached(
        self, key: str, domain: str, compute: Callable[[], Awaitable[list[Any]]]
    ) -> list[Any]:
        start = time.time()
        computed = False

        async def run() -> list[Any]:
            nonlocal computed
            computed = True
            return await compute()

        results = await self.cache.get_or_set(key, run)

        if computed:
            self.monitor.record_cache_miss()
            self.monitor.record_search(domain, time.time() - start, len(results))
        else:
            self.monitor.record_cache_hit()
            logger.debug(f"Cache hit for {domain} search")
        return list(results)

    def _api_base(self, domain: str) -> dict[str, str]:
        base = (
            self.settings.quran_api_base
            if domain == "quran"
            else self.settings.hadith_api_base
        )
        return {"api_base": base} if base else {}


def _require_query(query: Optional[str]) -> None:
    if not is_valid_query(query):
        raise InvalidSearchQuery("Search query must be at least 2 characters long")
