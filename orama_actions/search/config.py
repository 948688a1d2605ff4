"""
search.config
=============

Helpers for loading the Orama section of the global configuration.

The section is defined under `config.yaml -> orama` and lists one or more
named indexes:

    orama:
      timeout_seconds: 30
      indexes:
        - name: docs
          endpoint: https://cloud.orama.run/v1/indexes/docs-xyz
          api_key: ${ORAMA_DOCS_API_KEY}

The older single-index shape (`orama: {endpoint, api_key}`) is still
accepted and registered under the name `default`.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..config.models import IndexConfig, OramaSettings
from ..errors import ConfigurationError

DEFAULT_INDEX_NAME = "default"
DEFAULT_TIMEOUT_SECONDS = 30.0


def load_orama_settings(app_config: Dict[str, Any]) -> OramaSettings:
    """
    Build `OramaSettings` from the global config snapshot.

    Field presence is checked later by `IndexRegistry.validate`; this
    function only normalizes shapes.

    Args:
        app_config: Result of load_config()

    Raises:
        ConfigurationError: If the section has the wrong shape.
    """

    orama_cfg = (app_config or {}).get("orama") or {}
    if not isinstance(orama_cfg, dict):
        raise ConfigurationError("Config section 'orama' must be a mapping")

    raw_indexes = orama_cfg.get("indexes")
    if raw_indexes is None and ("endpoint" in orama_cfg or "api_key" in orama_cfg):
        raw_indexes = [
            {
                "name": DEFAULT_INDEX_NAME,
                "endpoint": orama_cfg.get("endpoint"),
                "api_key": orama_cfg.get("api_key"),
            }
        ]

    if raw_indexes is None:
        raw_indexes = []
    if not isinstance(raw_indexes, list):
        raise ConfigurationError("Config key 'orama.indexes' must be a list")

    indexes: List[IndexConfig] = []
    for position, entry in enumerate(raw_indexes):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"orama.indexes[{position}] must be a mapping")
        indexes.append(
            IndexConfig(
                name=_clean(entry.get("name")),
                endpoint=_clean(entry.get("endpoint")),
                api_key=_clean(entry.get("api_key")),
            )
        )

    return OramaSettings(
        indexes=indexes,
        timeout_seconds=_parse_timeout(orama_cfg.get("timeout_seconds")),
    )


def _clean(value: Any) -> str:
    """Strip strings; unset values and unexpanded `${VAR}` placeholders become ''."""
    if value is None:
        return ""
    text = str(value).strip()
    if text.startswith("${") and text.endswith("}"):
        return ""
    return text


def _parse_timeout(value: Any) -> float:
    if value is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError("orama.timeout_seconds must be a number")
    if timeout <= 0:
        raise ConfigurationError("orama.timeout_seconds must be greater than zero")
    return timeout
