#!/usr/bin/env python3
"""
Quran & Hadith MCP Server

An MCP server that searches the Quran and the major Hadith collections by
keyword or topic, in English or Arabic, with fuzzy matching for spelling
variants.

Features:
- Quran search across all 114 surahs in five English translations or Arabic
- Hadith search over a sample of Bukhari, Muslim, Abu Dawud, Tirmidhi,
  Nasa'i and Ibn Majah
- Arabic normalization (diacritics, alef/yeh/teh marbuta variants)
- Relevance tiers: exact, fuzzy and partial matches
- Curated topic expansions (prayer, patience, charity, ...)
- In-memory result caching and retry logic
"""

import io
import sys

# Fix Windows console encoding issues with Arabic text
if sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except (AttributeError, io.UnsupportedOperation):
        sys.stdout = io.TextIOWrapper(
            sys.stdout.buffer, encoding="utf-8", errors="replace"
        )
        sys.stderr = io.TextIOWrapper(
            sys.stderr.buffer, encoding="utf-8", errors="replace"
        )

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from api import HADITH_COLLECTIONS, TRANSLATIONS
from core import (
    HADITH_TOPICS,
    QURAN_TOPICS,
    QuranMCPError,
    format_metrics_report,
)
from core.orchestrator import SearchOrchestrator
from models import (
    HadithSearchInput,
    HadithTopicInput,
    QuranSearchInput,
    QuranTopicInput,
    ResponseFormat,
    SearchSettings,
)
from utils import SearchCache, advisory_note

# Load environment variables from .env file
load_dotenv()

# Set up logging; stdout belongs to the stdio transport
logging.basicConfig(
    stream=sys.stderr,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger().setLevel(
    getattr(logging, os.getenv("QURAN_MCP_LOG_LEVEL", "WARNING").upper(), logging.WARNING)
)

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "config.json"
ENV_PREFIX = "QURAN_MCP_"
TRANSPORTS = ("stdio", "sse", "streamable-http")


# Load configuration
def load_config(config_path: Optional[Path] = None) -> SearchSettings:
    """
    Build search settings from defaults, config.json and the environment.

    Later layers win: built-in defaults, then ``config.json`` next to this
    module (if present), then ``QURAN_MCP_<FIELD>`` environment variables
    (e.g. ``QURAN_MCP_HADITH_SAMPLE_SIZE=100``).
    """
    config_path = config_path or CONFIG_PATH
    values: dict[str, Any] = {}

    try:
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                values.update(loaded)
            else:
                logger.warning(f"Ignoring {config_path.name}: expected a JSON object")
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load {config_path.name}: {e}")

    for field_name in SearchSettings.model_fields:
        env_value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
        if env_value is not None and env_value.strip():
            values[field_name] = env_value.strip()

    try:
        return SearchSettings.model_validate(values)
    except ValidationError as e:
        logger.warning(f"Invalid configuration, using defaults: {e}")
        return SearchSettings()


CONFIG = load_config()

# Initialize MCP server
mcp = FastMCP("quran_hadith_mcp")

cache = SearchCache(
    ttl_seconds=CONFIG.cache_ttl_seconds, max_entries=CONFIG.cache_max_entries
)
orchestrator = SearchOrchestrator(cache=cache, settings=CONFIG)


# ============================================================================
# Response Formatting
# ============================================================================


def _error_response(error: QuranMCPError) -> str:
    return json.dumps({"error": error.to_dict()}, indent=2, ensure_ascii=False)


def _build_payload(query: str, results: Sequence[Any], noun: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "query": query,
        "count": len(results),
        "results": [r.to_dict() for r in results],
    }
    note = advisory_note(results, query, noun=noun)
    if note:
        payload["note"] = note
    return payload


def render_quran_markdown(payload: dict[str, Any]) -> str:
    """Render a Quran search payload as Markdown."""
    lines = [f'# Quran results for "{payload["query"]}"', ""]
    if payload.get("note"):
        lines.extend([f"_{payload['note']}_", ""])

    for i, verse in enumerate(payload["results"], 1):
        lines.append(
            f"## {i}. {verse['surahName']} {verse['surah']}:{verse['ayah']}"
        )
        lines.append(
            f"*{verse['matchType']} match, score {verse['relevanceScore']}"
            + (f", {verse['translation']}" if verse.get("translation") else "")
            + "*"
        )
        lines.append("")
        lines.append(f"> {verse['text']}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render_hadith_markdown(payload: dict[str, Any]) -> str:
    """Render a Hadith search payload as Markdown."""
    lines = [f'# Hadith results for "{payload["query"]}"', ""]
    if payload.get("note"):
        lines.extend([f"_{payload['note']}_", ""])

    for i, hadith in enumerate(payload["results"], 1):
        lines.append(f"## {i}. {hadith['collectionName']} #{hadith['hadithNumber']}")
        meta = [f"{hadith['matchType']} match, score {hadith['relevanceScore']}"]
        if hadith.get("book"):
            meta.append(f"book {hadith['book']}")
        if hadith.get("chapter"):
            meta.append(hadith["chapter"])
        lines.append(f"*{', '.join(meta)}*")
        lines.append("")
        lines.append(f"> {hadith['text']}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def format_results(
    query: str,
    results: Sequence[Any],
    response_format: ResponseFormat,
    domain: str,
) -> str:
    """Serialize matches as the JSON envelope or as Markdown."""
    noun = "verses" if domain == "quran" else "hadiths"
    payload = _build_payload(query, results, noun)

    if response_format == ResponseFormat.MARKDOWN:
        if domain == "quran":
            return render_quran_markdown(payload)
        return render_hadith_markdown(payload)
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ============================================================================
# Search Tools
# ============================================================================


@mcp.tool(
    name="search_quran",
    annotations={
        "title": "Search the Quran",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search_quran(params: QuranSearchInput) -> str:
    """
    Search every verse of the Quran for keywords or a phrase.

    English queries search the chosen translation; Arabic queries search the
    Arabic text with diacritics and letter variants normalized. Results are
    ranked exact matches first, then fuzzy (spelling variants), then partial
    (substring) matches.

    Args:
        params: QuranSearchInput with query, translation, max_results, response_format

    Example:
        params = QuranSearchInput(query="patience", translation="en.sahih")
        result = await search_quran(params)

    Returns:
        JSON string {"query", "count", "results": [{surah, ayah, surahName,
        text, translation, relevanceScore, matchType}], "note"?} or Markdown.
        On invalid input: {"error": {"message", "code"}}.
    """
    try:
        results = await orchestrator.search_quran(
            params.query, params.translation, params.max_results
        )
    except QuranMCPError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Quran search failed: {e}")
        return _error_response(QuranMCPError(f"Quran search failed: {e}"))

    return format_results(params.query, results, params.response_format, "quran")


@mcp.tool(
    name="search_hadith",
    annotations={
        "title": "Search Hadith Collections",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search_hadith(params: HadithSearchInput) -> str:
    """
    Search the major Hadith collections for keywords or a phrase.

    Each search samples up to 50 evenly spaced hadiths from each of the
    first two requested collections, so results are representative rather
    than exhaustive.

    Args:
        params: HadithSearchInput with query, collections, max_results, response_format

    Example:
        params = HadithSearchInput(query="intentions", collections=["bukhari"])
        result = await search_hadith(params)

    Returns:
        JSON string {"query", "count", "results": [{hadithNumber, collection,
        collectionName, text, book, chapter, relevanceScore, matchType}],
        "note"?} or Markdown. On invalid input: {"error": {"message", "code"}}.
    """
    try:
        results = await orchestrator.search_hadith(
            params.query, params.collections, params.max_results
        )
    except QuranMCPError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Hadith search failed: {e}")
        return _error_response(QuranMCPError(f"Hadith search failed: {e}"))

    return format_results(params.query, results, params.response_format, "hadith")


@mcp.tool(
    name="search_quran_by_topic",
    annotations={
        "title": "Search the Quran by Topic",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search_quran_by_topic(params: QuranTopicInput) -> str:
    """
    Search the Quran for a topic using a curated keyword expansion.

    Known topics (see list_search_topics) expand to several related
    keywords; any other topic is searched as given.

    Args:
        params: QuranTopicInput with topic, translation, max_results, response_format

    Returns:
        Same shape as search_quran, with "query" set to the topic.
    """
    try:
        results = await orchestrator.search_quran_by_topic(
            params.topic, params.translation, params.max_results
        )
    except QuranMCPError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Quran topic search failed: {e}")
        return _error_response(QuranMCPError(f"Quran topic search failed: {e}"))

    return format_results(params.topic, results, params.response_format, "quran")


@mcp.tool(
    name="search_hadith_by_topic",
    annotations={
        "title": "Search Hadith by Topic",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search_hadith_by_topic(params: HadithTopicInput) -> str:
    """
    Search the Hadith collections for a topic using a curated keyword expansion.

    Args:
        params: HadithTopicInput with topic, collections, max_results, response_format

    Returns:
        Same shape as search_hadith, with "query" set to the topic.
    """
    try:
        results = await orchestrator.search_hadith_by_topic(
            params.topic, params.collections, params.max_results
        )
    except QuranMCPError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Hadith topic search failed: {e}")
        return _error_response(QuranMCPError(f"Hadith topic search failed: {e}"))

    return format_results(params.topic, results, params.response_format, "hadith")


# ============================================================================
# Catalog Tools
# ============================================================================


@mcp.tool(
    name="list_translations",
    annotations={
        "title": "List Quran Translations",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def list_translations() -> str:
    """
    List the Quran translations accepted by search_quran.

    Returns:
        str: JSON list of {slug, name, language}
    """
    translations = [
        {"slug": slug, "name": info["name"], "language": info["language"]}
        for slug, info in TRANSLATIONS.items()
    ]
    return json.dumps(translations, indent=2)


@mcp.tool(
    name="list_hadith_collections",
    annotations={
        "title": "List Hadith Collections",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def list_hadith_collections() -> str:
    """
    List the Hadith collections accepted by search_hadith.

    Returns:
        str: JSON list of {slug, name, totalHadiths}
    """
    collections = [
        {"slug": slug, "name": info["name"], "totalHadiths": info["total_hadiths"]}
        for slug, info in HADITH_COLLECTIONS.items()
    ]
    return json.dumps(collections, indent=2)


@mcp.tool(
    name="list_search_topics",
    annotations={
        "title": "List Curated Search Topics",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def list_search_topics() -> str:
    """
    List the curated topics and the keywords each one expands to.

    Returns:
        str: JSON object {"quran": {topic: keywords}, "hadith": {topic: keywords}}
    """
    return json.dumps({"quran": QURAN_TOPICS, "hadith": HADITH_TOPICS}, indent=2)


# ============================================================================
# Maintenance Tools
# ============================================================================


@mcp.tool(
    name="get_performance_metrics",
    annotations={
        "title": "Get System Performance Metrics",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def get_performance_metrics() -> str:
    """
    Get performance metrics for the MCP server.

    Covers search latency per domain, cache effectiveness, content API
    reliability (success rate, retries, latency) and error distribution.

    Returns:
        str: Markdown performance report
    """
    report = format_metrics_report(orchestrator.monitor)
    stats = cache.stats()
    return "\n".join(
        [
            report,
            "",
            "## Cache",
            f"- Entries: {stats['keys']}",
            f"- Hits: {stats['hits']}",
            f"- Misses: {stats['misses']}",
            f"- TTL: {stats['ttl_seconds']}s",
        ]
    )


@mcp.tool(
    name="clear_cache",
    annotations={
        "title": "Clear Search Cache",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def clear_cache() -> str:
    """
    Clear the in-memory search cache.

    Forces fresh fetches on the next search.

    Returns:
        str: Status message with the number of entries removed
    """
    removed = cache.clear()
    if removed == 0:
        return "Cache was already empty."
    return f"Cache cleared ({removed} entries removed). Next searches will fetch fresh results."


# ============================================================================
# Main Entry Point
# ============================================================================


def get_transport() -> str:
    """Transport from QURAN_MCP_TRANSPORT; falls back to stdio."""
    transport = os.getenv("QURAN_MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        logger.warning(f"Unknown transport {transport!r}, using stdio")
        return "stdio"
    return transport


def main() -> None:
    """Run the MCP server."""
    mcp.run(transport=get_transport())


if __name__ == "__main__":
    main()
