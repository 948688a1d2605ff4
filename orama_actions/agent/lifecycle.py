"""
Registration lifecycle for the Orama integration.

`register` validates the configured indexes and activates the search
service the tools use. A ConfigurationError raised here is fatal: the
integration stays inactive until the configuration is fixed.

Tools register lazily from config.yaml on first use. Once `unregister`
has been called the integration stays inactive, and tools report a
ConfigurationError until `register` is called again.
"""

import logging
from typing import Any, Callable, Dict, Optional

from telemetry import log_structured

from ..errors import ConfigurationError
from ..integrations.orama_client import OramaClient
from ..search.config import load_orama_settings
from ..search.service import OramaSearchService
from ..utils import load_config

logger = logging.getLogger(__name__)

_active_service: Optional[OramaSearchService] = None
_unregistered = False


def _load_app_config() -> Dict[str, Any]:
    try:
        return load_config()
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e


def register(
    config: Optional[Dict[str, Any]] = None,
    *,
    client_factory: Optional[Callable[..., Any]] = None,
) -> OramaSearchService:
    """
    Validate configuration and activate the Orama search service.

    Args:
        config: Configuration dictionary (defaults to load_config())
        client_factory: Builds Orama clients (defaults to OramaClient)

    Raises:
        ConfigurationError: If the index configuration is invalid or the
            config file is missing.
    """
    global _active_service, _unregistered

    try:
        if config is None:
            config = _load_app_config()
        settings = load_orama_settings(config)
        service = OramaSearchService.from_settings(settings, client_factory=client_factory or OramaClient)
    except ConfigurationError as e:
        logger.error(f"[ORAMA AGENT] Failed to register Orama integration: {e}")
        raise

    _active_service = service
    _unregistered = False
    log_structured(
        "info",
        "Orama integration registered successfully",
        index_count=len(service.registry),
    )
    return service


def unregister() -> None:
    """Deactivate the search service. There is no remote state to clean up."""
    global _active_service, _unregistered
    _active_service = None
    _unregistered = True
    log_structured("info", "Orama integration unregistered")


def get_search_service() -> OramaSearchService:
    """
    Return the active service, registering from config.yaml on first use.

    Raises:
        ConfigurationError: If the integration was unregistered, or lazy
            registration fails.
    """
    if _active_service is not None:
        return _active_service
    if _unregistered:
        raise ConfigurationError("Orama integration is not registered; call register() to activate it")
    return register()


def is_registered() -> bool:
    return _active_service is not None
