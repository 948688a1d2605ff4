"""
Error taxonomy shared by the registry, the search service, and the tools.
"""

from __future__ import annotations

from typing import Optional


class OramaIntegrationError(RuntimeError):
    """Base class for every error surfaced by the Orama integration."""


class ConfigurationError(OramaIntegrationError):
    """Raised when the configured index list is invalid. Blocks registration."""


class IndexNotFoundError(OramaIntegrationError):
    """Raised when a request names an index that is not registered."""

    def __init__(self, index_name: str):
        self.index_name = index_name
        super().__init__(f"Orama index '{index_name}' is not configured")


class FacetParseError(OramaIntegrationError):
    """Raised when a facet configuration string is not valid JSON."""


class InvalidSearchInputError(OramaIntegrationError):
    """Raised when action input is outside the accepted values."""


class SearchError(OramaIntegrationError):
    """
    Raised when the remote search call fails.

    The message is already composed for the caller and includes whatever
    HTTP detail could be read from the failed response.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
