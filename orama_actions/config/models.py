"""
Typed configuration models for the Orama integration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class IndexConfig:
    """Connection credentials for one named Orama index."""

    name: str
    endpoint: str
    api_key: str = field(repr=False)

    def to_public_dict(self) -> Dict[str, str]:
        return {"name": self.name, "endpoint": self.endpoint}

    def to_connection(self) -> Dict[str, str]:
        return {"endpoint": self.endpoint, "api_key": self.api_key}


@dataclass(frozen=True)
class OramaSettings:
    indexes: List[IndexConfig]
    timeout_seconds: float = 30.0
