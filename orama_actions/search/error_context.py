"""
Uniform error enrichment for every remote search path.

Failures coming out of the Orama client are turned into a single
`SearchError` whose message carries whatever HTTP detail could be read
from the failed response.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

from opentelemetry import trace

from telemetry import set_span_error

from ..errors import OramaIntegrationError, SearchError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def describe_search_failure(action: str, error: BaseException) -> Tuple[str, Optional[int], Optional[str]]:
    """
    Compose the caller-facing message for a failed search.

    Returns:
        (message, status_code, response_text). The status code and body
        are None when the error carries no HTTP response or they could not
        be read.
    """

    message = f"Error {action}: {str(error) or 'Unknown error'}"
    response = getattr(error, "http_response", None)
    if response is None:
        return message, None, None

    status_code = getattr(response, "status_code", None)
    try:
        response_text = response.text
    except Exception:
        reason = getattr(response, "reason", None) or ""
        message += f" - Status: {status_code} {reason}".rstrip()
        return message, status_code, None

    message += f" - API Response: {response_text}"
    return message, status_code, response_text


def with_search_error_context(action: str) -> Callable[[F], F]:
    """
    Decorator that re-raises any failure of the wrapped call as `SearchError`.

    Errors that are already part of the integration taxonomy (missing
    index, bad facets, a SearchError from a nested call) pass through
    unchanged.

    Usage:
        @with_search_error_context("performing search")
        def _run(self, index, params):
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except OramaIntegrationError:
                raise
            except Exception as exc:
                message, status_code, response_text = describe_search_failure(action, exc)
                logger.error(f"[ORAMA SEARCH] {message}")
                set_span_error(
                    trace.get_current_span(),
                    exc,
                    {"orama.action": action, "http.status_code": status_code},
                )
                raise SearchError(
                    message,
                    status_code=status_code,
                    response_text=response_text,
                ) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
