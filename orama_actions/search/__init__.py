"""
Search package - index registry, query building, and dispatch to Orama.
"""

from .config import load_orama_settings
from .registry import IndexRegistry
from .schema import IndexSearchResult, MultiIndexSearchResult, SearchResult
from .dispatcher import MultiIndexDispatcher
from .service import OramaSearchService

__all__ = [
    "load_orama_settings",
    "IndexRegistry",
    "SearchResult",
    "IndexSearchResult",
    "MultiIndexSearchResult",
    "MultiIndexDispatcher",
    "OramaSearchService",
]
