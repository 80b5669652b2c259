"""
Hadith content API (fawazahmed0/hadith-api via jsDelivr).

Fetches one hadith per request from the per-edition JSON files and exposes
the collection catalog.

API: https://github.com/fawazahmed0/hadith-api
Rate Limits: CDN hosted, generous

Response shapes:
─────────────────────────────────────────────────────────────────────────────
WRAPPED (current)
    {"metadata": {"section": {"1": "Revelation", ...}},
     "hadiths": [{"hadithnumber": 1, "text": "...", "reference": {"book": 1}}]}

FLAT (legacy)
    {"text" | "hadith": "...", "book": "...", "chapter" | "chapterName": "..."}

The wrapped form is tried first, then the flat form.
"""

import logging
import os
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from api.client import FetchJSON, fetch_json
from models import HadithRecord

__all__ = [
    "fetch_hadith",
    "parse_hadith_payload",
    "edition_language",
    "get_collection",
    "COLLECTIONS",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_BASE = os.getenv(
    "HADITH_API_BASE", "https://cdn.jsdelivr.net/gh/fawazahmed0/hadith-api@1/editions"
)

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Collection Registry
# ══════════════════════════════════════════════════════════════════════════════

COLLECTIONS: dict[str, dict[str, Any]] = {
    "bukhari": {"name": "Sahih Bukhari", "total_hadiths": 7563},
    "muslim": {"name": "Sahih Muslim", "total_hadiths": 7563},
    "abudawud": {"name": "Sunan Abu Dawud", "total_hadiths": 5274},
    "tirmidhi": {"name": "Jami' at-Tirmidhi", "total_hadiths": 3956},
    "nasai": {"name": "Sunan an-Nasa'i", "total_hadiths": 5758},
    "ibnmajah": {"name": "Sunan Ibn Majah", "total_hadiths": 4341},
}


def get_collection(slug: str) -> Optional[dict[str, Any]]:
    return COLLECTIONS.get(slug)


def edition_language(arabic: bool) -> Literal["ara", "eng"]:
    """Edition prefix: Arabic text for Arabic queries, English otherwise."""
    return "ara" if arabic else "eng"


# ══════════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════════


class _Reference(BaseModel):
    model_config = ConfigDict(extra="ignore")

    book: Optional[Union[int, str]] = None


class _HadithEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hadithnumber: Optional[Union[int, float, str]] = None
    text: Optional[str] = None
    reference: Optional[_Reference] = None


class _Metadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    section: Any = None


class WrappedHadithPayload(BaseModel):
    """Current edition format: metadata plus a list of hadiths."""

    model_config = ConfigDict(extra="ignore")

    kind: Literal["wrapped"] = "wrapped"
    metadata: Optional[_Metadata] = None
    hadiths: list[_HadithEntry] = Field(..., min_length=1)

    def to_record(self, collection: str, number: int) -> HadithRecord:
        entry = next(
            (h for h in self.hadiths if _same_number(h.hadithnumber, number)),
            self.hadiths[0],
        )
        book = entry.reference.book if entry.reference else None
        book_key = _format_number(book)
        chapter = None
        section = self.metadata.section if self.metadata else None
        if isinstance(section, dict) and book_key is not None:
            chapter = section.get(book_key)
        return HadithRecord(
            collection=collection,
            hadith_number=number,
            text=entry.text or "",
            book=book_key,
            chapter=str(chapter) if chapter else None,
        )


class FlatHadithPayload(BaseModel):
    """Legacy format: a single hadith with top-level fields."""

    model_config = ConfigDict(extra="ignore")

    kind: Literal["flat"] = "flat"
    text: Optional[str] = None
    hadith: Optional[str] = None
    book: Optional[Union[int, str]] = None
    chapter: Optional[str] = None
    chapterName: Optional[str] = None

    def to_record(self, collection: str, number: int) -> HadithRecord:
        return HadithRecord(
            collection=collection,
            hadith_number=number,
            text=self.text or self.hadith or "",
            book=_format_number(self.book),
            chapter=self.chapter or self.chapterName,
        )


HadithPayload = Union[WrappedHadithPayload, FlatHadithPayload]


def parse_hadith_payload(
    data: Any, collection: str, number: int
) -> Optional[HadithRecord]:
    """
    Extract one hadith from an API response.

    Prefers the entry whose ``hadithnumber`` equals ``number`` and falls back
    to the first entry. Returns None when no usable text is present.
    """
    if not isinstance(data, dict):
        return None

    payload: Optional[HadithPayload] = None
    for model in (WrappedHadithPayload, FlatHadithPayload):
        try:
            payload = model.model_validate(data)
            break
        except ValidationError:
            continue

    if payload is None:
        return None

    record = payload.to_record(collection, number)
    if not record.text.strip():
        return None
    return record


# ══════════════════════════════════════════════════════════════════════════════
# Fetch Function
# ══════════════════════════════════════════════════════════════════════════════


async def fetch_hadith(
    collection: str,
    number: int,
    language: str = "eng",
    *,
    fetch: FetchJSON = fetch_json,
    api_base: str = API_BASE,
) -> Optional[HadithRecord]:
    """
    Fetch one hadith by collection and number.

    Args:
        collection: Collection slug (e.g. 'bukhari')
        number: Hadith number within the collection
        language: Edition language prefix, 'eng' or 'ara'
        fetch: JSON fetcher, injectable for tests
        api_base: API root URL

    Returns:
        The hadith, or None if the response carries no text

    Raises:
        FetchError: if the request fails
    """
    url = f"{api_base}/{language}-{collection}/{number}.json"
    data = await fetch(url)
    record = parse_hadith_payload(data, collection, number)
    if record is None:
        logger.debug(f"No hadith text in {url}")
    return record


def _same_number(value: Any, number: int) -> bool:
    try:
        return float(value) == number
    except (TypeError, ValueError):
        return False


def _format_number(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)
