"""
Quran content API (alquran.cloud).

Fetches whole surahs in a single request and exposes the static catalogs
the search tools validate against: the 114 surahs and the supported
English translations.

API: https://alquran.cloud/api
Rate Limits: Not documented; one request per surah per search
"""

import logging
import os
from typing import Any, Optional

from api.client import FetchJSON, fetch_json
from core.errors import ContentFetchError
from models import Verse

__all__ = [
    "fetch_surah_verses",
    "get_surah",
    "get_translation",
    "SURAHS",
    "TRANSLATIONS",
    "ARABIC_EDITION",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_BASE = os.getenv("QURAN_API_BASE", "https://api.alquran.cloud/v1")
ARABIC_EDITION = "ar.alafasy"

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Translation Registry
# ══════════════════════════════════════════════════════════════════════════════

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en.asad": {"name": "Muhammad Asad", "language": "English"},
    "en.sahih": {"name": "Sahih International", "language": "English"},
    "en.pickthall": {"name": "Pickthall", "language": "English"},
    "en.yusufali": {"name": "Yusuf Ali", "language": "English"},
    "en.hilali": {"name": "Hilali & Khan", "language": "English"},
}

# ══════════════════════════════════════════════════════════════════════════════
# Surah Registry
# ══════════════════════════════════════════════════════════════════════════════

# (number, transliterated name, ayah count, revelation type)
_SURAH_TABLE: list[tuple[int, str, int, str]] = [
    (1, "Al-Fatihah", 7, "Meccan"),
    (2, "Al-Baqarah", 286, "Medinan"),
    (3, "Ali 'Imran", 200, "Medinan"),
    (4, "An-Nisa", 176, "Medinan"),
    (5, "Al-Ma'idah", 120, "Medinan"),
    (6, "Al-An'am", 165, "Meccan"),
    (7, "Al-A'raf", 206, "Meccan"),
    (8, "Al-Anfal", 75, "Medinan"),
    (9, "At-Tawbah", 129, "Medinan"),
    (10, "Yunus", 109, "Meccan"),
    (11, "Hud", 123, "Meccan"),
    (12, "Yusuf", 111, "Meccan"),
    (13, "Ar-Ra'd", 43, "Medinan"),
    (14, "Ibrahim", 52, "Meccan"),
    (15, "Al-Hijr", 99, "Meccan"),
    (16, "An-Nahl", 128, "Meccan"),
    (17, "Al-Isra", 111, "Meccan"),
    (18, "Al-Kahf", 110, "Meccan"),
    (19, "Maryam", 98, "Meccan"),
    (20, "Taha", 135, "Meccan"),
    (21, "Al-Anbya", 112, "Meccan"),
    (22, "Al-Hajj", 78, "Medinan"),
    (23, "Al-Mu'minun", 118, "Meccan"),
    (24, "An-Nur", 64, "Medinan"),
    (25, "Al-Furqan", 77, "Meccan"),
    (26, "Ash-Shu'ara", 227, "Meccan"),
    (27, "An-Naml", 93, "Meccan"),
    (28, "Al-Qasas", 88, "Meccan"),
    (29, "Al-'Ankabut", 69, "Meccan"),
    (30, "Ar-Rum", 60, "Meccan"),
    (31, "Luqman", 34, "Meccan"),
    (32, "As-Sajdah", 30, "Meccan"),
    (33, "Al-Ahzab", 73, "Medinan"),
    (34, "Saba", 54, "Meccan"),
    (35, "Fatir", 45, "Meccan"),
    (36, "Ya-Sin", 83, "Meccan"),
    (37, "As-Saffat", 182, "Meccan"),
    (38, "Sad", 88, "Meccan"),
    (39, "Az-Zumar", 75, "Meccan"),
    (40, "Ghafir", 85, "Meccan"),
    (41, "Fussilat", 54, "Meccan"),
    (42, "Ash-Shuraa", 53, "Meccan"),
    (43, "Az-Zukhruf", 89, "Meccan"),
    (44, "Ad-Dukhan", 59, "Meccan"),
    (45, "Al-Jathiyah", 37, "Meccan"),
    (46, "Al-Ahqaf", 35, "Meccan"),
    (47, "Muhammad", 38, "Medinan"),
    (48, "Al-Fath", 29, "Medinan"),
    (49, "Al-Hujurat", 18, "Medinan"),
    (50, "Qaf", 45, "Meccan"),
    (51, "Adh-Dhariyat", 60, "Meccan"),
    (52, "At-Tur", 49, "Meccan"),
    (53, "An-Najm", 62, "Meccan"),
    (54, "Al-Qamar", 55, "Meccan"),
    (55, "Ar-Rahman", 78, "Medinan"),
    (56, "Al-Waqi'ah", 96, "Meccan"),
    (57, "Al-Hadid", 29, "Medinan"),
    (58, "Al-Mujadila", 22, "Medinan"),
    (59, "Al-Hashr", 24, "Medinan"),
    (60, "Al-Mumtahanah", 13, "Medinan"),
    (61, "As-Saf", 14, "Medinan"),
    (62, "Al-Jumu'ah", 11, "Medinan"),
    (63, "Al-Munafiqun", 11, "Medinan"),
    (64, "At-Taghabun", 18, "Medinan"),
    (65, "At-Talaq", 12, "Medinan"),
    (66, "At-Tahrim", 12, "Medinan"),
    (67, "Al-Mulk", 30, "Meccan"),
    (68, "Al-Qalam", 52, "Meccan"),
    (69, "Al-Haqqah", 52, "Meccan"),
    (70, "Al-Ma'arij", 44, "Meccan"),
    (71, "Nuh", 28, "Meccan"),
    (72, "Al-Jinn", 28, "Meccan"),
    (73, "Al-Muzzammil", 20, "Meccan"),
    (74, "Al-Muddaththir", 56, "Meccan"),
    (75, "Al-Qiyamah", 40, "Meccan"),
    (76, "Al-Insan", 31, "Medinan"),
    (77, "Al-Mursalat", 50, "Meccan"),
    (78, "An-Naba", 40, "Meccan"),
    (79, "An-Nazi'at", 46, "Meccan"),
    (80, "'Abasa", 42, "Meccan"),
    (81, "At-Takwir", 29, "Meccan"),
    (82, "Al-Infitar", 19, "Meccan"),
    (83, "Al-Mutaffifin", 36, "Meccan"),
    (84, "Al-Inshiqaq", 25, "Meccan"),
    (85, "Al-Buruj", 22, "Meccan"),
    (86, "At-Tariq", 17, "Meccan"),
    (87, "Al-A'la", 19, "Meccan"),
    (88, "Al-Ghashiyah", 26, "Meccan"),
    (89, "Al-Fajr", 30, "Meccan"),
    (90, "Al-Balad", 20, "Meccan"),
    (91, "Ash-Shams", 15, "Meccan"),
    (92, "Al-Layl", 21, "Meccan"),
    (93, "Ad-Duhaa", 11, "Meccan"),
    (94, "Ash-Sharh", 8, "Meccan"),
    (95, "At-Tin", 8, "Meccan"),
    (96, "Al-'Alaq", 19, "Meccan"),
    (97, "Al-Qadr", 5, "Meccan"),
    (98, "Al-Bayyinah", 8, "Medinan"),
    (99, "Az-Zalzalah", 8, "Medinan"),
    (100, "Al-'Adiyat", 11, "Meccan"),
    (101, "Al-Qari'ah", 11, "Meccan"),
    (102, "At-Takathur", 8, "Meccan"),
    (103, "Al-'Asr", 3, "Meccan"),
    (104, "Al-Humazah", 9, "Meccan"),
    (105, "Al-Fil", 5, "Meccan"),
    (106, "Quraysh", 4, "Meccan"),
    (107, "Al-Ma'un", 7, "Meccan"),
    (108, "Al-Kawthar", 3, "Meccan"),
    (109, "Al-Kafirun", 6, "Meccan"),
    (110, "An-Nasr", 3, "Medinan"),
    (111, "Al-Masad", 5, "Meccan"),
    (112, "Al-Ikhlas", 4, "Meccan"),
    (113, "Al-Falaq", 5, "Meccan"),
    (114, "An-Nas", 6, "Meccan"),
]

SURAHS: dict[int, dict[str, Any]] = {
    number: {"number": number, "name": name, "ayahs": ayahs, "type": kind}
    for number, name, ayahs, kind in _SURAH_TABLE
}


def get_translation(slug: str) -> Optional[dict[str, str]]:
    """Look up a translation by slug (e.g. 'en.sahih')."""
    return TRANSLATIONS.get(slug)


def get_surah(number: int) -> Optional[dict[str, Any]]:
    return SURAHS.get(number)


# ══════════════════════════════════════════════════════════════════════════════
# Fetch Function
# ══════════════════════════════════════════════════════════════════════════════


async def fetch_surah_verses(
    surah: int,
    edition: str,
    *,
    fetch: FetchJSON = fetch_json,
    api_base: str = API_BASE,
) -> list[Verse]:
    """
    Fetch every verse of one surah in one edition.

    Args:
        surah: Surah number (1-114)
        edition: Edition slug, either a translation ('en.sahih') or an
            Arabic recitation edition ('ar.alafasy')
        fetch: JSON fetcher, injectable for tests
        api_base: API root URL

    Returns:
        Verses in order, with their number within the surah

    Raises:
        ContentFetchError: if the API reports a non-200 code or the verse
            list is missing
        FetchError: if the request itself fails
    """
    url = f"{api_base}/surah/{surah}/{edition}"
    payload = await fetch(url)

    if not isinstance(payload, dict) or payload.get("code") != 200:
        code = payload.get("code") if isinstance(payload, dict) else None
        raise ContentFetchError(
            f"Surah {surah} ({edition}): API returned code {code}",
            status_code=code if isinstance(code, int) else None,
        )

    data = payload.get("data")
    ayahs = data.get("ayahs") if isinstance(data, dict) else None
    if not isinstance(ayahs, list):
        raise ContentFetchError(f"Surah {surah} ({edition}): response has no ayahs")

    verses = []
    for index, ayah in enumerate(ayahs, start=1):
        if not isinstance(ayah, dict):
            continue
        verses.append(
            Verse(
                surah=surah,
                ayah=ayah.get("numberInSurah") or index,
                text=ayah.get("text") or "",
            )
        )
    logger.debug(f"Fetched {len(verses)} verses from {url}")
    return verses
