"""
services/exceptions.py – Structured custom exception hierarchy for GamerStore.

All service-level errors derive from GamerStoreError so callers can catch
broadly or specifically depending on context.
"""

from typing import Optional


class GamerStoreError(Exception):
    """Base class for all GamerStore exceptions."""


class CatalogFetchError(GamerStoreError):
    """Raised when the game list cannot be retrieved."""


class FetchTimeoutError(CatalogFetchError):
    """Raised when no response arrives before the request deadline."""


class HTTPStatusFailure(CatalogFetchError):
    """
    Raised when the proxy or relay answers with a non-success status.

    Attributes
    ----------
    status_code : HTTP status returned by the server.
    url         : Requested URL, when known.
    """

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Server returned HTTP {status_code}.")


class CatalogNetworkError(CatalogFetchError):
    """Raised on transport failures other than timeouts (DNS, refused, …)."""


class CatalogParseError(CatalogFetchError):
    """Raised when the response body is not valid JSON."""


class CatalogStateError(GamerStoreError):
    """Raised when the catalog store is populated more than once."""


class ThumbnailError(GamerStoreError):
    """Raised when a card thumbnail cannot be downloaded."""
