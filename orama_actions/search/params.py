"""
Translate action inputs into the query descriptor sent to Orama.

Keys are only present when the caller supplied a usable value. Filters
that fail to parse are dropped; facet configurations that fail to parse
are an error.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..errors import FacetParseError, InvalidSearchInputError
from ..utils.json_parser import safe_json_parse
from .schema import SEARCH_MODES, SORT_ORDERS

logger = logging.getLogger(__name__)


def build_query_params(
    term: Optional[str],
    *,
    mode: Optional[str] = None,
    properties: Optional[Sequence[str]] = None,
    limit: Optional[int] = None,
    where_conditions: Optional[str] = None,
    sort_by_property: Optional[str] = None,
    sort_by_order: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the search descriptor for a single remote call.

    Args:
        term: Search term; None becomes ""
        mode: fulltext, vector or hybrid
        properties: Properties to search in (ignored when empty)
        limit: Maximum hits; 0 is passed through as-is
        where_conditions: JSON-encoded filter; dropped with a warning if malformed
        sort_by_property: Property to sort by (ignored when blank)
        sort_by_order: asc or desc (default asc)

    Raises:
        InvalidSearchInputError: If mode or sort order is not a known value.
    """

    params: Dict[str, Any] = {"term": term or ""}

    if mode:
        if mode not in SEARCH_MODES:
            raise InvalidSearchInputError(
                f"Invalid search mode '{mode}'. Expected one of: {', '.join(SEARCH_MODES)}"
            )
        params["mode"] = mode

    if properties:
        params["properties"] = list(properties)

    if isinstance(limit, int) and not isinstance(limit, bool):
        params["limit"] = limit

    where = parse_where_conditions(where_conditions)
    if where is not None:
        params["where"] = where

    if sort_by_property and sort_by_property.strip():
        order = sort_by_order or "asc"
        if order not in SORT_ORDERS:
            raise InvalidSearchInputError(
                f"Invalid sort order '{order}'. Expected one of: {', '.join(SORT_ORDERS)}"
            )
        params["sortBy"] = {"property": sort_by_property, "order": order}

    return params


def parse_where_conditions(where_conditions: Optional[str]) -> Optional[Any]:
    """Parse a JSON filter, returning None (no filter) when absent or malformed."""
    where = safe_json_parse(where_conditions)
    if where is None and where_conditions:
        logger.warning("[ORAMA SEARCH] Ignoring malformed whereConditions; searching without a filter")
    return where


def parse_facets_config(facets_config: Optional[str]) -> Any:
    """
    Parse a JSON facet configuration.

    Raises:
        FacetParseError: If the value is missing, malformed, or JSON null.
    """
    facets = safe_json_parse(facets_config)
    if facets is None:
        raise FacetParseError(
            "Invalid facets configuration format. Please provide a valid JSON object."
        )
    return facets
