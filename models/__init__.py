"""
Data models for the Quran & Hadith MCP server.

Provides Pydantic models for tool input validation, the immutable
candidate and match records produced by the search subsystem, and
configuration settings.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.similarity import MatchType
from models.config import ResponseFormat, SearchSettings

__all__ = [
    "ResponseFormat",
    "SearchSettings",
    "MatchType",
    # Candidates
    "Verse",
    "HadithRecord",
    # Matches
    "QuranMatch",
    "HadithMatch",
    # Tool inputs
    "QuranSearchInput",
    "HadithSearchInput",
    "QuranTopicInput",
    "HadithTopicInput",
]

MAX_RESULTS_LIMIT = 50


def _clean_slugs(slugs: Optional[list[str]]) -> Optional[list[str]]:
    if slugs is None:
        return None
    return [slug.strip().lower() for slug in slugs if slug and slug.strip()]


# ══════════════════════════════════════════════════════════════════════════════
# Candidate Units
# ══════════════════════════════════════════════════════════════════════════════


class Verse(BaseModel):
    """One ayah as returned by the Quran API."""

    model_config = ConfigDict(frozen=True)

    surah: int
    ayah: int
    text: str


class HadithRecord(BaseModel):
    """One hadith extracted from a Hadith API response."""

    model_config = ConfigDict(frozen=True)

    collection: str
    hadith_number: int
    text: str
    book: Optional[str] = None
    chapter: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# Match Results
# ══════════════════════════════════════════════════════════════════════════════


class _Match(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    relevance_score: int = Field(..., ge=0)
    match_type: MatchType

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, omitting empty optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class QuranMatch(_Match):
    surah: int
    ayah: int
    surah_name: str
    text: str
    translation: Optional[str] = None


class HadithMatch(_Match):
    hadith_number: int
    collection: str
    collection_name: str
    text: str
    book: Optional[str] = None
    chapter: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# Tool Input Models
# ══════════════════════════════════════════════════════════════════════════════


class _ToolInput(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )

    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON,
        description="Output format: 'json' (default, machine-readable) or 'markdown'",
    )


class QuranSearchInput(_ToolInput):
    """Input model for keyword search over the Quran."""

    query: str = Field(
        ...,
        description=(
            "Keywords or phrase to search for, in English or Arabic. "
            "Examples: 'patience', 'those who believe', 'الصبر'. Minimum 2 characters."
        ),
        max_length=500,
    )
    translation: str = Field(
        default="en.sahih",
        description="Translation to search in: en.asad, en.sahih, en.pickthall, en.yusufali, en.hilali",
    )
    max_results: int = Field(
        default=20,
        description="Maximum number of results to return (default: 20, max: 50)",
        ge=1,
        le=MAX_RESULTS_LIMIT,
    )


class HadithSearchInput(_ToolInput):
    """Input model for keyword search over Hadith collections."""

    query: str = Field(
        ...,
        description="Keywords or phrase to search for in hadiths. Minimum 2 characters.",
        max_length=500,
    )
    collections: Optional[list[str]] = Field(
        default=None,
        description=(
            "Collections to search (optional, defaults to all): "
            "bukhari, muslim, abudawud, tirmidhi, nasai, ibnmajah. "
            "Only the first two are sampled per query."
        ),
    )
    max_results: int = Field(
        default=20,
        description="Maximum number of results to return (default: 20, max: 50)",
        ge=1,
        le=MAX_RESULTS_LIMIT,
    )

    @field_validator("collections")
    @classmethod
    def normalize_collections(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _clean_slugs(v)


class QuranTopicInput(_ToolInput):
    """Input model for topic search over the Quran."""

    topic: str = Field(
        ...,
        description=(
            "Topic to search for. Common topics: prayer, patience, charity, faith, "
            "paradise, hell, prophet, allah, mercy, justice, knowledge, family, "
            "death, creation, guidance"
        ),
        max_length=200,
    )
    translation: str = Field(
        default="en.sahih",
        description="Translation to search in (default: en.sahih)",
    )
    max_results: int = Field(
        default=10,
        description="Maximum number of results to return (default: 10, max: 50)",
        ge=1,
        le=MAX_RESULTS_LIMIT,
    )


class HadithTopicInput(_ToolInput):
    """Input model for topic search over Hadith collections."""

    topic: str = Field(
        ...,
        description=(
            "Topic to search for. Common topics: prayer, fasting, charity, hajj, "
            "faith, prophet, companions, knowledge, manners, family, marriage, "
            "death, jihad, repentance"
        ),
        max_length=200,
    )
    collections: Optional[list[str]] = Field(
        default=None,
        description="Collections to search (optional, defaults to all)",
    )
    max_results: int = Field(
        default=10,
        description="Maximum number of results to return (default: 10, max: 50)",
        ge=1,
        le=MAX_RESULTS_LIMIT,
    )

    @field_validator("collections")
    @classmethod
    def normalize_collections(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _clean_slugs(v)
