"""Tests for the MCP tool layer in quran_hadith_mcp.py."""

import json

import pytest

import quran_hadith_mcp as server
from core.orchestrator import SearchOrchestrator
from models import (
    HadithSearchInput,
    HadithTopicInput,
    QuranSearchInput,
    QuranTopicInput,
    SearchSettings,
)
from utils.cache import SearchCache


@pytest.fixture
def wire_server(monkeypatch, monitor):
    """Point the module-level orchestrator and cache at a fake API."""

    def build(fetch):
        cache = SearchCache()
        orchestrator = SearchOrchestrator(
            cache=cache, fetch=fetch, settings=SearchSettings(), monitor=monitor
        )
        monkeypatch.setattr(server, "cache", cache)
        monkeypatch.setattr(server, "orchestrator", orchestrator)
        return orchestrator

    return build


class TestLoadConfig:
    """Test suite for load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("QURAN_MCP_MAX_RETRIES", raising=False)
        settings = server.load_config(tmp_path / "config.json")
        assert settings == SearchSettings()

    def test_file_then_environment(self, tmp_path, monkeypatch):
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps({"hadith_sample_size": 20, "max_retries": 5}), encoding="utf-8"
        )
        monkeypatch.setenv("QURAN_MCP_MAX_RETRIES", "2")

        settings = server.load_config(config)

        assert settings.hadith_sample_size == 20
        assert settings.max_retries == 2

    def test_bad_file_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv("QURAN_MCP_MAX_RETRIES", raising=False)
        config = tmp_path / "config.json"
        config.write_text("{not json", encoding="utf-8")
        assert server.load_config(config) == SearchSettings()

    def test_invalid_values_fall_back_to_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QURAN_MCP_MAX_RETRIES", "zero")
        assert server.load_config(tmp_path / "config.json") == SearchSettings()


class TestSearchTools:
    """Test suite for the search tools."""

    @pytest.mark.asyncio
    async def test_search_quran_json_envelope(self, quran_fetch, wire_server):
        wire_server(quran_fetch({2: ["Indeed, Allah is with the patient."]}))

        result = json.loads(await server.search_quran(QuranSearchInput(query="patient")))

        assert result["query"] == "patient"
        assert result["count"] == 1
        assert "note" not in result
        verse = result["results"][0]
        assert verse["surahName"] == "Al-Baqarah"
        assert verse["matchType"] == "exact"
        assert verse["relevanceScore"] == 100
        assert verse["translation"] == "Sahih International"

    @pytest.mark.asyncio
    async def test_search_quran_note_when_empty(self, quran_fetch, wire_server):
        wire_server(quran_fetch({}))

        result = json.loads(await server.search_quran(QuranSearchInput(query="patience")))

        assert result["count"] == 0
        assert result["results"] == []
        assert result["note"].startswith('No verses found for "patience"')

    @pytest.mark.asyncio
    async def test_search_quran_invalid_query(self, quran_fetch, wire_server):
        wire_server(quran_fetch({}))

        result = json.loads(await server.search_quran(QuranSearchInput(query="a")))

        assert result["error"]["code"] == "INVALID_SEARCH_QUERY"

    @pytest.mark.asyncio
    async def test_search_quran_invalid_translation(self, quran_fetch, wire_server):
        wire_server(quran_fetch({}))

        result = json.loads(
            await server.search_quran(QuranSearchInput(query="mercy", translation="xx"))
        )

        assert result["error"]["code"] == "INVALID_TRANSLATION"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self, quran_fetch, wire_server, monkeypatch):
        orchestrator = wire_server(quran_fetch({}))

        async def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(orchestrator, "search_quran", boom)

        result = json.loads(await server.search_quran(QuranSearchInput(query="mercy")))

        assert result["error"]["code"] == "INTERNAL_ERROR"
        assert "boom" in result["error"]["message"]

    @pytest.mark.asyncio
    async def test_search_quran_markdown(self, quran_fetch, wire_server):
        wire_server(quran_fetch({2: ["Indeed, Allah is with the patient."]}))

        result = await server.search_quran(
            QuranSearchInput(query="patient", response_format="markdown")
        )

        assert result.startswith('# Quran results for "patient"')
        assert "## 1. Al-Baqarah 2:1" in result
        assert "> Indeed, Allah is with the patient." in result

    @pytest.mark.asyncio
    async def test_search_hadith_json_envelope(self, hadith_fetch, wire_server):
        wire_server(hadith_fetch({("bukhari", 1): "Actions are judged by intentions."}))

        result = json.loads(
            await server.search_hadith(
                HadithSearchInput(query="intentions", collections=[" Bukhari "])
            )
        )

        assert result["count"] == 1
        hadith = result["results"][0]
        assert hadith["hadithNumber"] == 1
        assert hadith["collection"] == "bukhari"
        assert hadith["collectionName"] == "Sahih Bukhari"
        assert hadith["chapter"] == "Book of Tests"

    @pytest.mark.asyncio
    async def test_search_hadith_invalid_collection(self, hadith_fetch, wire_server):
        wire_server(hadith_fetch({}))

        result = json.loads(
            await server.search_hadith(
                HadithSearchInput(query="prayer", collections=["malik"])
            )
        )

        assert result["error"]["code"] == "INVALID_COLLECTION"

    @pytest.mark.asyncio
    async def test_search_hadith_markdown(self, hadith_fetch, wire_server):
        wire_server(hadith_fetch({("bukhari", 1): "Actions are judged by intentions."}))

        result = await server.search_hadith(
            HadithSearchInput(
                query="intentions", collections=["bukhari"], response_format="markdown"
            )
        )

        assert "## 1. Sahih Bukhari #1" in result
        assert "book 1" in result

    @pytest.mark.asyncio
    async def test_topic_tools_report_topic_as_query(
        self, quran_fetch, hadith_fetch, wire_server
    ):
        wire_server(quran_fetch({2: ["Establish prayer and give zakah"]}))
        quran = json.loads(
            await server.search_quran_by_topic(QuranTopicInput(topic="prayer"))
        )
        assert quran["query"] == "prayer"
        assert quran["count"] == 1

        wire_server(hadith_fetch({("bukhari", 1): "Whoever fasts Ramadan"}))
        hadith = json.loads(
            await server.search_hadith_by_topic(
                HadithTopicInput(topic="fasting", collections=["bukhari"])
            )
        )
        assert hadith["query"] == "fasting"
        assert hadith["count"] == 1


class TestInputModels:
    """Tool input validation."""

    def test_max_results_bounds(self):
        with pytest.raises(ValueError):
            QuranSearchInput(query="mercy", max_results=51)
        with pytest.raises(ValueError):
            HadithSearchInput(query="mercy", max_results=0)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValueError):
            QuranSearchInput(query="mercy", language="en")

    def test_defaults(self):
        assert QuranSearchInput(query="mercy").max_results == 20
        assert QuranTopicInput(topic="mercy").max_results == 10
        assert QuranTopicInput(topic="mercy").translation == "en.sahih"


class TestCatalogAndMaintenanceTools:
    """Test suite for the list, metrics and cache tools."""

    @pytest.mark.asyncio
    async def test_list_translations(self):
        translations = json.loads(await server.list_translations())
        assert {t["slug"] for t in translations} >= {"en.sahih", "en.asad"}

    @pytest.mark.asyncio
    async def test_list_hadith_collections(self):
        collections = json.loads(await server.list_hadith_collections())
        bukhari = next(c for c in collections if c["slug"] == "bukhari")
        assert bukhari == {"slug": "bukhari", "name": "Sahih Bukhari", "totalHadiths": 7563}

    @pytest.mark.asyncio
    async def test_list_search_topics(self):
        topics = json.loads(await server.list_search_topics())
        assert "guidance" in topics["quran"]
        assert "hajj" in topics["hadith"]

    @pytest.mark.asyncio
    async def test_performance_metrics_report(self, quran_fetch, wire_server):
        wire_server(quran_fetch({}))
        await server.search_quran(QuranSearchInput(query="patience"))

        report = await server.get_performance_metrics()

        assert "# Performance Metrics" in report
        assert "Avg Quran Search Time" in report
        assert "## Cache" in report
        assert "- Entries: 1" in report

    @pytest.mark.asyncio
    async def test_clear_cache(self, quran_fetch, wire_server):
        wire_server(quran_fetch({}))
        assert await server.clear_cache() == "Cache was already empty."

        await server.search_quran(QuranSearchInput(query="patience"))
        message = await server.clear_cache()

        assert message.startswith("Cache cleared (1 entries removed)")
        assert len(server.cache) == 0


def test_transport_from_environment(monkeypatch):
    monkeypatch.setenv("QURAN_MCP_TRANSPORT", "SSE")
    assert server.get_transport() == "sse"
    monkeypatch.setenv("QURAN_MCP_TRANSPORT", "carrier-pigeon")
    assert server.get_transport() == "stdio"
    monkeypatch.delenv("QURAN_MCP_TRANSPORT")
    assert server.get_transport() == "stdio"
