"""
Orama Agent - Search Orama Cloud indexes from agent workflows.

This agent is responsible for:
- Listing the configured Orama indexes
- Full-text, vector, and hybrid search on a single index
- Faceted search (counts per category alongside hits)
- Searching several indexes at once, merged or broken down per index

Tools never raise: failures come back in the standard error dict so the
planner can surface them to the user.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from langchain_core.tools import tool

from telemetry import log_tool_step, sanitize_value

from ..errors import OramaIntegrationError
from .lifecycle import get_search_service, register

logger = logging.getLogger(__name__)


def _error_response(error: Exception) -> Dict[str, Any]:
    return {
        "error": True,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "retry_possible": False,
    }


def _execute_tool(tool_name: str, inputs: Dict[str, Any], operation: Callable[[], Any]) -> Dict[str, Any]:
    """Run one tool operation with telemetry and error-dict conversion."""
    metadata = log_tool_step(tool_name, "start", {"inputs": sanitize_value(inputs)})

    try:
        result = operation()
    except OramaIntegrationError as e:
        logger.error(f"[ORAMA AGENT] {tool_name} failed: {e}")
        response = _error_response(e)
    except Exception as e:
        logger.exception(f"[ORAMA AGENT] Unexpected error in {tool_name}")
        response = _error_response(e)
        response["error_type"] = "OramaClientError"
    else:
        log_tool_step(tool_name, "success", metadata)
        return result

    metadata.update({
        "error_type": response["error_type"],
        "error_message": response["error_message"],
    })
    log_tool_step(tool_name, "error", metadata)
    return response


@tool
def list_orama_indexes() -> Dict[str, Any]:
    """
    List the Orama indexes this assistant can search.

    Use this before searching when you do not know which index name to use.

    Returns:
        Dictionary with "indexes" (list of {"name", "endpoint"}) and "count".
    """
    logger.info("[ORAMA AGENT] list_orama_indexes()")

    def _run():
        indexes = get_search_service().list_indexes()
        return {"indexes": indexes, "count": len(indexes)}

    return _execute_tool("list_orama_indexes", {}, _run)


@tool
def search_orama_index(
    index_name: str,
    term: str = "",
    mode: Optional[str] = None,
    properties: Optional[List[str]] = None,
    limit: Optional[int] = None,
    where_conditions: Optional[str] = None,
    sort_by_property: Optional[str] = None,
    sort_by_order: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Search one Orama index with full-text, vector, or hybrid matching.

    Args:
        index_name: Name of the configured index to search
        term: The search term (may be empty)
        mode: "fulltext" (default), "vector", or "hybrid"
        properties: Only search these document properties
        limit: Maximum number of results to return
        where_conditions: Filter in JSON format, e.g. '{"price": {"lt": 100}}'.
            A malformed filter is ignored and the search runs unfiltered.
        sort_by_property: Property to sort by, e.g. "price" or "date"
        sort_by_order: "asc" (default) or "desc"

    Returns:
        Dictionary with "hits", "count", and "elapsed" (milliseconds).
    """
    logger.info(f"[ORAMA AGENT] search_orama_index(index_name={index_name}, term={term!r}, mode={mode})")

    inputs = {
        "index_name": index_name,
        "term": term,
        "mode": mode,
        "properties": properties,
        "limit": limit,
        "where_conditions": where_conditions,
        "sort_by_property": sort_by_property,
        "sort_by_order": sort_by_order,
    }

    def _run():
        result = get_search_service().search(
            index_name,
            term,
            mode=mode,
            properties=properties,
            limit=limit,
            where_conditions=where_conditions,
            sort_by_property=sort_by_property,
            sort_by_order=sort_by_order,
        )
        return result.to_dict()

    return _execute_tool("search_orama_index", inputs, _run)


@tool
def vector_search_orama_index(
    index_name: str,
    term: str = "",
    limit: Optional[int] = None,
    where_conditions: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Semantic (vector) search on one Orama index.

    Orama embeds the term and returns the nearest documents. Use this for
    natural-language questions where exact keywords may not appear.

    Args:
        index_name: Name of the configured index to search
        term: Text to embed for the vector search
        limit: Maximum number of results to return
        where_conditions: Filter in JSON format, e.g. '{"price": {"lt": 100}}'

    Returns:
        Dictionary with "hits", "count", and "elapsed" (milliseconds).
    """
    logger.info(f"[ORAMA AGENT] vector_search_orama_index(index_name={index_name}, term={term!r})")

    inputs = {"index_name": index_name, "term": term, "limit": limit, "where_conditions": where_conditions}

    def _run():
        result = get_search_service().vector_search(
            index_name,
            term,
            limit=limit,
            where_conditions=where_conditions,
        )
        return result.to_dict()

    return _execute_tool("vector_search_orama_index", inputs, _run)


@tool
def search_orama_with_facets(
    index_name: str,
    facets_config: str,
    term: str = "",
    mode: Optional[str] = None,
    where_conditions: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Search one Orama index and return facet counts alongside the hits.

    Args:
        index_name: Name of the configured index to search
        facets_config: Facet configuration in JSON format,
            e.g. '{"category": {"limit": 5}}'. Must be valid JSON.
        term: The search term (may be empty)
        mode: "fulltext" (default), "vector", or "hybrid"
        where_conditions: Filter in JSON format
        limit: Maximum number of results to return

    Returns:
        Dictionary with "hits", "count", "facets", and "elapsed".
    """
    logger.info(f"[ORAMA AGENT] search_orama_with_facets(index_name={index_name}, term={term!r})")

    inputs = {
        "index_name": index_name,
        "facets_config": facets_config,
        "term": term,
        "mode": mode,
        "where_conditions": where_conditions,
        "limit": limit,
    }

    def _run():
        result = get_search_service().search_with_facets(
            index_name,
            term,
            facets_config,
            mode=mode,
            limit=limit,
            where_conditions=where_conditions,
        )
        return result.to_dict()

    return _execute_tool("search_orama_with_facets", inputs, _run)


@tool
def multi_index_search_orama(
    index_names: List[str],
    term: str = "",
    mode: Optional[str] = None,
    merge_results: bool = False,
    where_conditions: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Search several Orama indexes with one query.

    Args:
        index_names: Names of the configured indexes to search. Every name
            must exist, otherwise nothing is searched.
        term: The search term (may be empty)
        mode: "fulltext" (default), "vector", or "hybrid"
        merge_results: True to get one combined ranked list instead of
            per-index results
        where_conditions: Filter in JSON format

    Returns:
        Dictionary with "results" (list of {"indexName", "hits", "count",
        "elapsed"}), "totalCount", and "mergedHits" when merge_results is True.
    """
    logger.info(
        f"[ORAMA AGENT] multi_index_search_orama(index_names={index_names}, "
        f"term={term!r}, merge_results={merge_results})"
    )

    inputs = {
        "index_names": index_names,
        "term": term,
        "mode": mode,
        "merge_results": merge_results,
        "where_conditions": where_conditions,
    }

    def _run():
        result = get_search_service().multi_index_search(
            index_names,
            term,
            mode=mode,
            merge_results=merge_results,
            where_conditions=where_conditions,
        )
        return result.to_dict()

    return _execute_tool("multi_index_search_orama", inputs, _run)


# Orama Agent Tool Registry
ORAMA_AGENT_TOOLS = [
    list_orama_indexes,
    search_orama_index,
    vector_search_orama_index,
    search_orama_with_facets,
    multi_index_search_orama,
]


# Tool hierarchy documentation
ORAMA_AGENT_HIERARCHY = """
ORAMA AGENT TOOL HIERARCHY
==========================

LEVEL 0: Discovery
└─ list_orama_indexes → Names and endpoints of the configured indexes

LEVEL 1: Single-index search
├─ search_orama_index → fulltext / vector / hybrid, filters, sorting, limits
├─ vector_search_orama_index → semantic search (mode forced to vector)
└─ search_orama_with_facets → hits plus facet counts (facets_config must be valid JSON)

LEVEL 2: Multi-index search
└─ multi_index_search_orama → one query over several indexes
   ├─ merge_results=False: one entry per index, in request order, plus totalCount
   └─ merge_results=True: one "merged" entry, mergedHits, totalCount

FILTERS:
- where_conditions is a JSON string, e.g. '{"price": {"lt": 100}}'
- A malformed where_conditions is ignored (search runs unfiltered)
- A malformed facets_config is an error (search does not run)
"""


class OramaAgent:
    """
    Exposes Orama search tools to the agent runtime.

    Construction registers the integration, so an invalid index
    configuration raises ConfigurationError here and the agent never
    becomes available.
    """

    def __init__(self, config: Dict[str, Any], client_factory: Optional[Callable[..., Any]] = None):
        self.config = config
        self.service = register(config, client_factory=client_factory)
        self.tools = {tool.name: tool for tool in ORAMA_AGENT_TOOLS}
        logger.info(f"[ORAMA AGENT] Initialized with {len(self.tools)} tools")

    def get_tools(self) -> List:
        return ORAMA_AGENT_TOOLS

    def get_hierarchy(self) -> str:
        return ORAMA_AGENT_HIERARCHY

    def execute(self, tool_name: str, inputs: Dict[str, Any]) -> Dict[str, Any]:
        if tool_name not in self.tools:
            return {
                "error": True,
                "error_type": "ToolNotFound",
                "error_message": f"Orama agent tool '{tool_name}' not found",
                "available_tools": list(self.tools.keys()),
            }

        tool = self.tools[tool_name]
        try:
            return tool.invoke(inputs)
        except Exception as exc:
            logger.exception("Orama agent execution error")
            return {
                "error": True,
                "error_type": "ExecutionError",
                "error_message": str(exc),
                "retry_possible": False,
            }
