"""Configuration enums and settings for the Quran & Hadith MCP server."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    JSON = "json"
    MARKDOWN = "markdown"


class SearchSettings(BaseModel):
    """Tunables for upstream APIs and the search fan-out."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    # None keeps the API module defaults (QURAN_API_BASE / HADITH_API_BASE)
    quran_api_base: Optional[str] = None
    hadith_api_base: Optional[str] = None

    request_timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=1)

    cache_ttl_seconds: int = Field(default=1800, ge=0)
    cache_max_entries: int = Field(default=10000, ge=1)

    # Hadith sampling budget
    hadith_sample_size: int = Field(default=50, ge=1)
    hadith_batch_size: int = Field(default=10, ge=1)
    hadith_max_collections: int = Field(default=2, ge=1)
