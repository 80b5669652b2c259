"""
Error taxonomy.

Every error raised to the tool layer carries a stable ``code`` so MCP
clients can tell invalid input apart from upstream failures.
"""

from typing import Optional

__all__ = [
    "QuranMCPError",
    "InvalidSearchQuery",
    "InvalidTranslation",
    "InvalidCollection",
    "FetchError",
    "ContentFetchError",
]


class QuranMCPError(Exception):
    """Base error with a machine-readable code and optional HTTP status."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code}


# ══════════════════════════════════════════════════════════════════════════════
# Validation Errors
# ══════════════════════════════════════════════════════════════════════════════


class InvalidSearchQuery(QuranMCPError):
    code = "INVALID_SEARCH_QUERY"


class InvalidTranslation(QuranMCPError):
    code = "INVALID_TRANSLATION"


class InvalidCollection(QuranMCPError):
    code = "INVALID_COLLECTION"


# ══════════════════════════════════════════════════════════════════════════════
# Fetch Errors
# ══════════════════════════════════════════════════════════════════════════════


class FetchError(QuranMCPError):
    """Network failure, timeout, non-2xx response or undecodable body."""

    code = "FETCH_ERROR"

    @property
    def retryable(self) -> bool:
        # 4xx responses are final
        return self.status_code is None or self.status_code >= 500


class ContentFetchError(FetchError):
    """The API answered but the payload is not usable."""

    code = "CONTENT_FETCH_ERROR"
