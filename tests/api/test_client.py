"""Comprehensive unit tests for api/client.py module."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from api.client import HEADERS, fetch_json
from core.errors import FetchError


def _response(payload=None, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


def _status_error(status, reason="Error"):
    response = MagicMock(status_code=status, reason_phrase=reason)
    return httpx.HTTPStatusError(f"{status} {reason}", request=MagicMock(), response=response)


@pytest.fixture
def no_sleep():
    """Skip backoff delays."""
    with patch("core.reliability.asyncio.sleep", new=AsyncMock()) as sleep:
        yield sleep


class TestFetchJson:
    """Test suite for fetch_json."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Decoded JSON is returned."""
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=_response({"code": 200}))
            mock_client.return_value.__aenter__.return_value.get = get
            result = await fetch_json("https://example.com/a.json")

        assert result == {"code": 200}
        get.assert_awaited_once_with("https://example.com/a.json", headers=HEADERS)

    @pytest.mark.asyncio
    async def test_client_timeout(self):
        """The timeout is applied to the client."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response([])
            )
            await fetch_json("https://example.com/a.json", timeout=3.0)

        mock_client.assert_called_once_with(timeout=3.0)

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self, no_sleep):
        """4xx responses fail immediately with their status."""
        response = _response()
        response.raise_for_status.side_effect = _status_error(404, "Not Found")

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=response)
            mock_client.return_value.__aenter__.return_value.get = get
            with pytest.raises(FetchError) as exc:
                await fetch_json("https://example.com/missing.json")

        assert exc.value.status_code == 404
        assert exc.value.code == "HTTP_ERROR"
        assert get.await_count == 1
        no_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self, no_sleep):
        """5xx responses are retried, then wrapped."""
        response = _response()
        response.raise_for_status.side_effect = _status_error(503, "Service Unavailable")

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=response)
            mock_client.return_value.__aenter__.return_value.get = get
            with pytest.raises(FetchError) as exc:
                await fetch_json("https://example.com/a.json", retries=3)

        assert get.await_count == 3
        assert no_sleep.await_count == 2
        assert exc.value.code == "FETCH_ERROR"
        assert exc.value.status_code == 503
        assert "Failed after 3 attempts" in exc.value.message

    @pytest.mark.asyncio
    async def test_timeout_then_success(self, no_sleep):
        """A transient timeout is retried."""
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(
                side_effect=[httpx.ReadTimeout("timed out"), _response({"ok": True})]
            )
            mock_client.return_value.__aenter__.return_value.get = get
            result = await fetch_json("https://example.com/a.json")

        assert result == {"ok": True}
        assert get.await_count == 2

    @pytest.mark.asyncio
    async def test_single_attempt_keeps_original_error(self, no_sleep):
        """With one attempt the underlying error is raised as is."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ReadTimeout("timed out")
            )
            with pytest.raises(FetchError) as exc:
                await fetch_json("https://example.com/a.json", retries=1)

        assert exc.value.code == "TIMEOUT_ERROR"
        assert exc.value.status_code is None

    @pytest.mark.asyncio
    async def test_network_error(self, no_sleep):
        """Connection failures surface as FetchError after retries."""
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(side_effect=httpx.ConnectError("refused"))
            mock_client.return_value.__aenter__.return_value.get = get
            with pytest.raises(FetchError):
                await fetch_json("https://example.com/a.json", retries=2)

        assert get.await_count == 2

    @pytest.mark.asyncio
    async def test_invalid_json_is_not_retried(self, no_sleep):
        """A body that is not JSON fails once with JSON_PARSE_ERROR."""
        response = _response()
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=response)
            mock_client.return_value.__aenter__.return_value.get = get
            with pytest.raises(FetchError) as exc:
                await fetch_json("https://example.com/a.json")

        assert exc.value.code == "JSON_PARSE_ERROR"
        assert get.await_count == 1

    @pytest.mark.asyncio
    async def test_shared_client(self):
        """A caller-supplied client is used directly."""
        client = MagicMock()
        client.get = AsyncMock(return_value=_response({"shared": True}))

        result = await fetch_json("https://example.com/a.json", timeout=5.0, client=client)

        assert result == {"shared": True}
        client.get.assert_awaited_once_with(
            "https://example.com/a.json", headers=HEADERS, timeout=5.0
        )
