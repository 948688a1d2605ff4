"""
Multi-index search dispatch.

One invocation resolves every requested index, hands all credentials to a
single Orama client together with the merge flag, issues one search call,
and reshapes the response into a merged view or a per-index breakdown.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config.models import IndexConfig
from ..errors import InvalidSearchInputError
from .error_context import with_search_error_context
from .params import build_query_params
from .registry import IndexRegistry
from .schema import MERGED_INDEX_NAME, IndexSearchResult, MultiIndexSearchResult

logger = logging.getLogger(__name__)

MultiClientFactory = Callable[[List[Dict[str, str]], bool], Any]


class MultiIndexDispatcher:
    """Dispatch one search across several registered indexes."""

    def __init__(self, registry: IndexRegistry, client_factory: MultiClientFactory):
        self.registry = registry
        self.client_factory = client_factory

    def dispatch(
        self,
        index_names: Sequence[str],
        term: Optional[str] = "",
        *,
        mode: Optional[str] = None,
        merge_results: bool = False,
        where_conditions: Optional[str] = None,
    ) -> MultiIndexSearchResult:
        """
        Search several indexes with one remote call.

        Resolution is all-or-nothing: an unknown name raises
        IndexNotFoundError before any client is built.
        """

        names = _unique(index_names)
        if not names:
            raise InvalidSearchInputError("indexNames must name at least one index")

        indexes = [self.registry.resolve(name) for name in names]
        params = build_query_params(term, mode=mode, where_conditions=where_conditions)
        merge_results = merge_results is True

        logger.debug(
            f"[ORAMA SEARCH] Multi-index search across {len(indexes)} indexes "
            f"(merge_results={merge_results})"
        )
        return self._execute(names, indexes, params, merge_results)

    @with_search_error_context("performing multi-index search")
    def _execute(
        self,
        names: List[str],
        indexes: List[IndexConfig],
        params: Dict[str, Any],
        merge_results: bool,
    ) -> MultiIndexSearchResult:
        client = self.client_factory([index.to_connection() for index in indexes], merge_results)
        response = client.search(params)

        if merge_results:
            return _merged_view(response)
        return _per_index_view(names, response)


def _merged_view(response: Any) -> MultiIndexSearchResult:
    if isinstance(response, list):
        response = response[0] if response else {}
    entry = IndexSearchResult.from_response(MERGED_INDEX_NAME, response)
    return MultiIndexSearchResult(
        results=[entry],
        total_count=entry.count,
        merged_hits=entry.hits,
    )


def _per_index_view(names: List[str], response: Any) -> MultiIndexSearchResult:
    if not isinstance(response, list):
        response = [response]

    results = []
    for position, item in enumerate(response):
        name = names[position] if position < len(names) else f"index_{position}"
        results.append(IndexSearchResult.from_response(name, item))

    return MultiIndexSearchResult(
        results=results,
        total_count=sum(entry.count for entry in results),
    )


def _unique(names: Sequence[str]) -> List[str]:
    seen = set()
    ordered = []
    for name in names or []:
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered
