"""
JSON fetching for upstream content APIs.

All content APIs used by the search tools are plain GET endpoints that
return JSON. This module wraps them with a timeout, retries for transient
failures and a typed error, so callers can treat any failure uniformly.

Retry policy:
    4xx responses      raised immediately
    5xx responses      retried with exponential backoff
    network/timeouts   retried with exponential backoff
"""

import json
import logging
import time
from typing import Any, Awaitable, Optional, Protocol

import httpx

from core.errors import FetchError
from core.metrics import get_api_metrics
from core.reliability import RetryStrategy, retry_async

__all__ = ["fetch_json", "FetchJSON", "API_TIMEOUT", "MAX_RETRIES"]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_TIMEOUT = 10.0
MAX_RETRIES = 3
RETRY_BASE_DELAY = 1.0
RETRY_MAX_DELAY = 5.0

HEADERS = {
    "User-Agent": "Quran-Hadith-MCP/1.0",
    "Accept": "application/json",
}

logger = logging.getLogger(__name__)


class FetchJSON(Protocol):
    """Signature shared by ``fetch_json`` and test doubles."""

    def __call__(self, url: str) -> Awaitable[Any]: ...


# ══════════════════════════════════════════════════════════════════════════════
# Fetch Function
# ══════════════════════════════════════════════════════════════════════════════


async def fetch_json(
    url: str,
    *,
    timeout: float = API_TIMEOUT,
    retries: int = MAX_RETRIES,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    GET ``url`` and return the decoded JSON body.

    Args:
        url: Absolute URL to fetch
        timeout: Per-attempt timeout in seconds
        retries: Total attempts for transient failures
        client: Optional shared client; a short-lived one is used otherwise

    Returns:
        Parsed JSON (dict, list or scalar)

    Raises:
        FetchError: on timeout, network failure, non-2xx status or bad JSON.
            ``status_code`` is set when the server answered.

    Example:
        >>> data = await fetch_json("https://api.alquran.cloud/v1/surah/1/en.sahih")
    """
    metrics = get_api_metrics()
    start = time.time()

    try:
        data = await retry_async(
            _get_json,
            url,
            timeout,
            client,
            max_attempts=retries,
            base_delay=RETRY_BASE_DELAY,
            max_delay=RETRY_MAX_DELAY,
            strategy=RetryStrategy.EXPONENTIAL,
            should_retry=_is_transient,
            on_retry=lambda attempt, error: metrics.record_retry(),
        )
    except FetchError as e:
        metrics.record_failure(e.code)
        if not e.retryable or retries <= 1:
            raise
        raise FetchError(
            f"Failed after {retries} attempts: {e.message}",
            code="FETCH_ERROR",
            status_code=e.status_code,
        ) from e

    metrics.record_success((time.time() - start) * 1000)
    return data


async def _get_json(
    url: str, timeout: float, client: Optional[httpx.AsyncClient]
) -> Any:
    """Single attempt: GET, check status, decode JSON."""
    try:
        if client is not None:
            response = await client.get(url, headers=HEADERS, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as session:
                response = await session.get(url, headers=HEADERS)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise FetchError(
            f"Request timeout after {timeout:.0f}s: {url}", code="TIMEOUT_ERROR"
        ) from e
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise FetchError(
            f"HTTP {status}: {e.response.reason_phrase}",
            code="HTTP_ERROR",
            status_code=status,
        ) from e
    except httpx.HTTPError as e:
        raise FetchError(f"{type(e).__name__}: {e}", code="FETCH_ERROR") from e

    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise FetchError(
            f"Failed to decode JSON from {url}: {e}",
            code="JSON_PARSE_ERROR",
            status_code=response.status_code,
        ) from e


def _is_transient(error: Exception) -> bool:
    return isinstance(error, FetchError) and error.retryable
