"""
Registry of configured Orama indexes.

The registry is built once at registration time and is read-only
afterwards. Lookups are plain dict access keyed by index name.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from telemetry import log_structured

from ..config.models import IndexConfig
from ..errors import ConfigurationError, IndexNotFoundError


class IndexRegistry:
    """
    Name -> credentials mapping for the configured indexes.

    Usage:
        registry = IndexRegistry.validate(settings.indexes)
        index = registry.resolve("docs")
    """

    def __init__(self, indexes: Dict[str, IndexConfig]):
        self._indexes = dict(indexes)

    @classmethod
    def validate(cls, configs: Iterable[IndexConfig]) -> "IndexRegistry":
        """
        Check the configured index list and build a registry from it.

        Raises:
            ConfigurationError: On the first violated constraint (empty list,
                missing name/endpoint/api_key, or duplicate name).
        """

        configs = list(configs)
        if not configs:
            raise ConfigurationError("At least one Orama index must be configured")

        indexes: Dict[str, IndexConfig] = {}
        for position, config in enumerate(configs):
            label = f"orama.indexes[{position}]"
            if not config.name:
                raise ConfigurationError(f"{label} is missing 'name'")
            if not config.endpoint:
                raise ConfigurationError(f"{label} ('{config.name}') is missing 'endpoint'")
            if not config.api_key:
                raise ConfigurationError(f"{label} ('{config.name}') is missing 'api_key'")
            if config.name in indexes:
                raise ConfigurationError(f"Duplicate Orama index name '{config.name}' at {label}")
            indexes[config.name] = config

        log_structured(
            "info",
            "orama_index_registry_loaded",
            index_count=len(indexes),
            index_names=list(indexes),
        )
        return cls(indexes)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def resolve(self, name: str) -> IndexConfig:
        try:
            return self._indexes[name]
        except KeyError:
            raise IndexNotFoundError(name) from None

    def list_indexes(self) -> List[Dict[str, str]]:
        return [config.to_public_dict() for config in self._indexes.values()]

    def names(self) -> List[str]:
        return list(self._indexes)

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)

    def __iter__(self) -> Iterator[IndexConfig]:
        return iter(self._indexes.values())
