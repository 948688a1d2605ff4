"""
Orama Cloud API client utilities.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import requests

logger = logging.getLogger(__name__)

SearchResponse = Union[Dict[str, Any], List[Dict[str, Any]]]


class OramaAPIError(RuntimeError):
    """Raised when Orama API responses are unsuccessful."""

    def __init__(self, message: str, http_response: Optional[requests.Response] = None):
        super().__init__(message)
        self.http_response = http_response


class OramaClient:
    """
    Lightweight wrapper around the Orama Cloud search endpoint.

    Built either for one index (`endpoint` + `api_key`) or for several
    (`indexes=[{"endpoint": ..., "api_key": ...}, ...]`). A multi-index
    client queries each index in order and returns one result per index,
    or a single combined result when `merge_results` is set.
    """

    USER_AGENT = "OramaActions/OramaIntegration"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        indexes: Optional[Sequence[Dict[str, str]]] = None,
        merge_results: bool = False,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if indexes:
            self.indexes = [dict(index) for index in indexes]
            self.multi_index = True
        elif endpoint and api_key:
            self.indexes = [{"endpoint": endpoint, "api_key": api_key}]
            self.multi_index = False
        else:
            raise OramaAPIError("Orama client needs an endpoint and api_key, or a list of indexes.")

        self.merge_results = merge_results
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.USER_AGENT})

    # ------------------------------------------------------------------
    # Public API helpers
    # ------------------------------------------------------------------
    def search(self, params: Dict[str, Any]) -> SearchResponse:
        """Run a search against every configured index."""
        results = [self._search_index(index, params) for index in self.indexes]

        if not self.multi_index:
            return results[0]
        if self.merge_results:
            return _merge(results)
        return results

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _search_index(self, index: Dict[str, str], params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{index['endpoint'].rstrip('/')}/search"
        response = self.session.post(
            url,
            params={"api-key": index["api_key"]},
            data={"q": json.dumps(params)},
            timeout=self.timeout,
        )
        self._raise_for_status(response, f"POST {url}")
        return response.json()

    @staticmethod
    def _raise_for_status(response: requests.Response, action: str) -> None:
        if response.status_code >= 400:
            logger.error("Orama API error during %s: %s", action, response.status_code)
            raise OramaAPIError(
                f"Orama API error ({response.status_code}) during {action}",
                http_response=response,
            )


def _merge(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Combine per-index results into one list ranked by descending score."""
    hits: List[Any] = []
    count = 0
    elapsed = 0.0
    for result in results:
        hits.extend(result.get("hits") or [])
        count += _as_number(result.get("count"))
        elapsed = max(elapsed, _as_number(_raw_elapsed(result.get("elapsed"))))

    hits.sort(key=lambda hit: _as_number(hit.get("score")) if isinstance(hit, dict) else 0, reverse=True)
    return {"hits": hits, "count": count, "elapsed": elapsed}


def _raw_elapsed(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("raw")
    return value


def _as_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0
