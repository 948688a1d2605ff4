"""
Telemetry package for the Orama actions runtime.
Provides OpenTelemetry integration and structured logging helpers.
"""

from .config import (
    init_telemetry,
    shutdown_telemetry,
    get_tracer,
    log_structured,
    sanitize_value,
    set_span_error,
    record_event,
    TELEMETRY_CONFIG,
)

from .tool_helpers import (
    log_tool_step,
)

__all__ = [
    # Config
    "init_telemetry",
    "shutdown_telemetry",
    "get_tracer",
    "log_structured",
    "sanitize_value",
    "set_span_error",
    "record_event",
    "TELEMETRY_CONFIG",

    # Tool helpers
    "log_tool_step",
]
