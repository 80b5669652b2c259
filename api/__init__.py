"""
Content API Integrations.

This module provides async fetch functions for the public Quran and Hadith
APIs the search tools scan. All functions follow a consistent pattern:

    async def fetch_xxx(<locator>, ..., *, fetch=fetch_json) -> <candidate(s)>

The ``fetch`` argument is the JSON fetcher; tests and the search
orchestrator inject their own.

Available Sources:
─────────────────────────────────────────────────────────────────────────────
    alquran     alquran.cloud: one surah per request, Arabic or translation
    hadith      fawazahmed0/hadith-api on jsDelivr: one hadith per request

Configuration:
─────────────────────────────────────────────────────────────────────────────
Override API roots in environment variables or .env file:

    QURAN_API_BASE     default https://api.alquran.cloud/v1
    HADITH_API_BASE    default https://cdn.jsdelivr.net/gh/fawazahmed0/hadith-api@1/editions
"""

# ══════════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════════

from dotenv import load_dotenv

load_dotenv()

# ══════════════════════════════════════════════════════════════════════════════
# Transport
# ══════════════════════════════════════════════════════════════════════════════

from api.client import (
    API_TIMEOUT,
    MAX_RETRIES,
    FetchJSON,
    fetch_json,
)

# ══════════════════════════════════════════════════════════════════════════════
# Quran
# ══════════════════════════════════════════════════════════════════════════════

from api.alquran import (
    ARABIC_EDITION,
    SURAHS,
    TRANSLATIONS,
    fetch_surah_verses,
    get_surah,
    get_translation,
)

# ══════════════════════════════════════════════════════════════════════════════
# Hadith
# ══════════════════════════════════════════════════════════════════════════════

from api.hadith import (
    COLLECTIONS as HADITH_COLLECTIONS,
    edition_language,
    fetch_hadith,
    get_collection,
    parse_hadith_payload,
)

# ══════════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════════

__all__ = [
    # Transport
    "fetch_json",
    "FetchJSON",
    "API_TIMEOUT",
    "MAX_RETRIES",
    # Quran
    "fetch_surah_verses",
    "get_surah",
    "get_translation",
    "SURAHS",
    "TRANSLATIONS",
    "ARABIC_EDITION",
    # Hadith
    "fetch_hadith",
    "parse_hadith_payload",
    "edition_language",
    "get_collection",
    "HADITH_COLLECTIONS",
]
