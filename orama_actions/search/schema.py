"""
search.schema
=============

Result shapes returned by the search actions, plus the coercion rules
applied to whatever the remote service reports.

Every path reports `count` as a non-negative integer, `elapsed` as a number
(missing or non-numeric values become 0) and `hits` as a list (anything
that is not a list of records becomes []).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

SEARCH_MODES = ("fulltext", "vector", "hybrid")
SORT_ORDERS = ("asc", "desc")
MERGED_INDEX_NAME = "merged"

Number = Union[int, float]


def coerce_number(value: Any) -> Number:
    """
    Coerce a reported count/elapsed value to a number.

    Booleans, None, NaN and anything that does not parse as a number become 0.
    Integral values are returned as int.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, dict):
        # Orama Cloud reports elapsed as {"raw": 12, "formatted": "12ms"}
        return coerce_number(value.get("raw"))
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def coerce_count(value: Any) -> int:
    """Coerce a reported hit count to a non-negative integer (fractions truncate)."""
    return max(int(coerce_number(value)), 0)


def coerce_hits(value: Any) -> List[Any]:
    """Hits must be a list or tuple of records; anything else reads as no hits."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


@dataclass
class SearchResult:
    """Single-index search outcome."""

    hits: List[Any] = field(default_factory=list)
    count: int = 0
    elapsed: Number = 0
    facets: Optional[Dict[str, Any]] = None

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]], *, with_facets: bool = False) -> "SearchResult":
        response = response or {}
        facets = None
        if with_facets:
            facets = response.get("facets") or {}
        return cls(
            hits=coerce_hits(response.get("hits")),
            count=coerce_count(response.get("count")),
            elapsed=coerce_number(response.get("elapsed")),
            facets=facets,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "hits": self.hits,
            "count": self.count,
            "elapsed": self.elapsed,
        }
        if self.facets is not None:
            data["facets"] = self.facets
        return data


@dataclass
class IndexSearchResult:
    """One entry of a multi-index breakdown."""

    index_name: str
    hits: List[Any] = field(default_factory=list)
    count: int = 0
    elapsed: Number = 0

    @classmethod
    def from_response(cls, index_name: str, response: Optional[Dict[str, Any]]) -> "IndexSearchResult":
        result = SearchResult.from_response(response)
        return cls(
            index_name=index_name,
            hits=result.hits,
            count=result.count,
            elapsed=result.elapsed,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indexName": self.index_name,
            "hits": self.hits,
            "count": self.count,
            "elapsed": self.elapsed,
        }


@dataclass
class MultiIndexSearchResult:
    """
    Multi-index outcome.

    Merged searches carry exactly one `results` entry named "merged" and
    mirror it in `merged_hits`/`total_count`. Unmerged searches carry one
    entry per index and `total_count` is the sum of their counts.
    """

    results: List[IndexSearchResult]
    total_count: int
    merged_hits: Optional[List[Any]] = None

    @property
    def is_merged(self) -> bool:
        return self.merged_hits is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "results": [entry.to_dict() for entry in self.results],
            "totalCount": self.total_count,
        }
        if self.merged_hits is not None:
            data["mergedHits"] = self.merged_hits
        return data
