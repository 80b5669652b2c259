"""Shared fixtures: fake content APIs and an isolated orchestrator."""

from typing import Any, Callable, Iterable, Union

import pytest

from core.errors import FetchError
from core.metrics import PerformanceMonitor
from core.orchestrator import SearchOrchestrator
from models import SearchSettings
from utils.cache import SearchCache


class FakeFetch:
    """Stands in for ``fetch_json``: records URLs and answers from a handler."""

    def __init__(self, handler: Callable[[str], Any]):
        self.handler = handler
        self.urls: list[str] = []

    async def __call__(self, url: str) -> Any:
        self.urls.append(url)
        result = self.handler(url)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def calls(self) -> int:
        return len(self.urls)


def _server_error() -> FetchError:
    return FetchError("HTTP 500: Internal Server Error", code="HTTP_ERROR", status_code=500)


def surah_payload(number: int, texts: Iterable[str]) -> dict[str, Any]:
    return {
        "code": 200,
        "status": "OK",
        "data": {
            "number": number,
            "ayahs": [
                {"numberInSurah": i, "text": text} for i, text in enumerate(texts, 1)
            ],
        },
    }


def hadith_payload(number: int, text: str, book: int = 1) -> dict[str, Any]:
    return {
        "metadata": {"name": "Test", "section": {str(book): "Book of Tests"}},
        "hadiths": [
            {"hadithnumber": number, "text": text, "reference": {"book": book, "hadith": number}}
        ],
    }


@pytest.fixture
def quran_fetch():
    """
    Build a fake Quran API.

    ``verses`` maps surah number to verse texts; other surahs are empty.
    Surahs listed in ``failing`` raise a server error.
    """

    def build(verses: dict[int, list[str]], failing: Iterable[int] = ()) -> FakeFetch:
        failing = set(failing)

        def handler(url: str) -> Any:
            number = int(url.split("/")[-2])
            if number in failing:
                return _server_error()
            return surah_payload(number, verses.get(number, []))

        return FakeFetch(handler)

    return build


@pytest.fixture
def hadith_fetch():
    """
    Build a fake Hadith API.

    ``texts`` is either a mapping of (collection, number) to text or a
    callable taking (collection, number). Missing texts come back empty.
    Pairs listed in ``failing`` raise a server error.
    """

    def build(
        texts: Union[dict[tuple[str, int], str], Callable[[str, int], str]],
        failing: Iterable[tuple[str, int]] = (),
    ) -> FakeFetch:
        failing = set(failing)

        def handler(url: str) -> Any:
            edition, filename = url.split("/")[-2:]
            collection = edition.split("-", 1)[1]
            number = int(filename[: -len(".json")])
            if (collection, number) in failing:
                return _server_error()
            if callable(texts):
                text = texts(collection, number)
            else:
                text = texts.get((collection, number), "")
            return hadith_payload(number, text)

        return FakeFetch(handler)

    return build


@pytest.fixture
def monitor() -> PerformanceMonitor:
    return PerformanceMonitor()


@pytest.fixture
def make_orchestrator(monitor):
    """Orchestrator wired to a fake fetch, a fresh cache and a private monitor."""

    def build(fetch: FakeFetch, **settings: Any) -> SearchOrchestrator:
        return SearchOrchestrator(
            cache=SearchCache(),
            fetch=fetch,
            settings=SearchSettings(**settings),
            monitor=monitor,
        )

    return build
