"""
Search service backing the Orama agent tools.

Holds the immutable index registry and builds one Orama client per call.
Every remote path goes through `with_search_error_context`, so callers
only ever see the integration's own error types.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config.models import IndexConfig, OramaSettings
from ..integrations.orama_client import OramaClient
from .dispatcher import MultiIndexDispatcher
from .error_context import with_search_error_context
from .params import build_query_params, parse_facets_config
from .registry import IndexRegistry
from .schema import MultiIndexSearchResult, SearchResult

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]


class OramaSearchService:
    """
    Entry point for every search action.

    Usage:
        service = OramaSearchService.from_settings(load_orama_settings(config))
        result = service.search("docs", "install guide", limit=5)
    """

    def __init__(
        self,
        registry: IndexRegistry,
        *,
        client_factory: ClientFactory = OramaClient,
        timeout_seconds: float = 30.0,
    ):
        self.registry = registry
        self.client_factory = client_factory
        self.timeout_seconds = timeout_seconds
        self.dispatcher = MultiIndexDispatcher(registry, self._build_multi_client)

    @classmethod
    def from_settings(
        cls,
        settings: OramaSettings,
        *,
        client_factory: ClientFactory = OramaClient,
    ) -> "OramaSearchService":
        registry = IndexRegistry.validate(settings.indexes)
        return cls(
            registry,
            client_factory=client_factory,
            timeout_seconds=settings.timeout_seconds,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def list_indexes(self) -> List[Dict[str, str]]:
        return self.registry.list_indexes()

    def search(
        self,
        index_name: str,
        term: Optional[str] = "",
        *,
        mode: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        where_conditions: Optional[str] = None,
        sort_by_property: Optional[str] = None,
        sort_by_order: Optional[str] = None,
    ) -> SearchResult:
        """Full-text, vector or hybrid search on one index."""
        index = self.registry.resolve(index_name)
        params = build_query_params(
            term,
            mode=mode,
            properties=properties,
            limit=limit,
            where_conditions=where_conditions,
            sort_by_property=sort_by_property,
            sort_by_order=sort_by_order,
        )
        return self._run_search(index, params)

    def vector_search(
        self,
        index_name: str,
        term: Optional[str] = "",
        *,
        limit: Optional[int] = None,
        where_conditions: Optional[str] = None,
    ) -> SearchResult:
        """Search one index in vector mode."""
        index = self.registry.resolve(index_name)
        params = build_query_params(
            term,
            mode="vector",
            limit=limit,
            where_conditions=where_conditions,
        )
        logger.debug(f"[ORAMA SEARCH] Vector search on '{index.name}'")
        return self._run_vector_search(index, params)

    def search_with_facets(
        self,
        index_name: str,
        term: Optional[str] = "",
        facets_config: Optional[str] = None,
        *,
        mode: Optional[str] = None,
        limit: Optional[int] = None,
        where_conditions: Optional[str] = None,
    ) -> SearchResult:
        """
        Search one index and return facet aggregations alongside hits.

        Raises:
            FacetParseError: If facets_config is not valid JSON. No remote
                call is made in that case.
        """
        index = self.registry.resolve(index_name)
        facets = parse_facets_config(facets_config)
        params = build_query_params(
            term,
            mode=mode,
            limit=limit,
            where_conditions=where_conditions,
        )
        params["facets"] = facets
        logger.debug(f"[ORAMA SEARCH] Facets search on '{index.name}'")
        return self._run_facets_search(index, params)

    def multi_index_search(
        self,
        index_names: Sequence[str],
        term: Optional[str] = "",
        *,
        mode: Optional[str] = None,
        merge_results: bool = False,
        where_conditions: Optional[str] = None,
    ) -> MultiIndexSearchResult:
        return self.dispatcher.dispatch(
            index_names,
            term,
            mode=mode,
            merge_results=merge_results,
            where_conditions=where_conditions,
        )

    # ------------------------------------------------------------------
    # Remote calls
    # ------------------------------------------------------------------
    @with_search_error_context("performing search")
    def _run_search(self, index: IndexConfig, params: Dict[str, Any]) -> SearchResult:
        return SearchResult.from_response(self._single_client(index).search(params))

    @with_search_error_context("performing vector search")
    def _run_vector_search(self, index: IndexConfig, params: Dict[str, Any]) -> SearchResult:
        return SearchResult.from_response(self._single_client(index).search(params))

    @with_search_error_context("performing search with facets")
    def _run_facets_search(self, index: IndexConfig, params: Dict[str, Any]) -> SearchResult:
        response = self._single_client(index).search(params)
        return SearchResult.from_response(response, with_facets=True)

    def _single_client(self, index: IndexConfig):
        return self.client_factory(
            endpoint=index.endpoint,
            api_key=index.api_key,
            timeout=self.timeout_seconds,
        )

    def _build_multi_client(self, indexes: List[Dict[str, str]], merge_results: bool):
        return self.client_factory(
            indexes=indexes,
            merge_results=merge_results,
            timeout=self.timeout_seconds,
        )
