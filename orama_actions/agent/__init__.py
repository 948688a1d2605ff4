"""Agent module - Orama search tools and integration lifecycle."""

from .lifecycle import register, unregister, get_search_service, is_registered
from .orama_agent import OramaAgent, ORAMA_AGENT_TOOLS, ORAMA_AGENT_HIERARCHY

__all__ = [
    "OramaAgent",
    "ORAMA_AGENT_TOOLS",
    "ORAMA_AGENT_HIERARCHY",
    "register",
    "unregister",
    "get_search_service",
    "is_registered",
]
