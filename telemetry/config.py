"""
OpenTelemetry configuration for the Orama actions runtime.
Provides tracer setup, redaction rules, and structured logging helpers.
"""

import os
import json
from typing import Dict, Any, Optional
import logging

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.trace import Status, StatusCode
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION

logger = logging.getLogger(__name__)

# Telemetry configuration
TELEMETRY_CONFIG = {
    "service_name": "orama_actions",
    "service_version": "0.1.0",
    "environment": os.getenv("ENVIRONMENT", "development"),
    "otlp_endpoint": os.getenv("OTLP_ENDPOINT", "http://localhost:4317"),
    "redact_sensitive_fields": [
        "password", "token", "key", "secret", "auth", "credential",
        "api_key", "access_token", "refresh_token", "bearer"
    ],
    "max_attribute_length": 2048,  # Limit attribute values to prevent huge spans
    "max_log_message_length": 4096,
}


def create_resource() -> Resource:
    """Create OpenTelemetry resource with service metadata."""
    return Resource.create({
        SERVICE_NAME: TELEMETRY_CONFIG["service_name"],
        SERVICE_VERSION: TELEMETRY_CONFIG["service_version"],
    })


def create_tracer_provider() -> TracerProvider:
    """
    Create and configure the OpenTelemetry tracer provider.

    Spans are exported over OTLP to TELEMETRY_CONFIG["otlp_endpoint"].
    Set TELEMETRY_DISABLED=true to get a provider with no exporter attached.
    """
    resource = create_resource()
    tracer_provider = TracerProvider(resource=resource)

    if os.getenv("TELEMETRY_DISABLED", "").lower() == "true":
        logger.info("[TELEMETRY] Span export disabled via TELEMETRY_DISABLED environment variable")
        return tracer_provider

    otlp_exporter = OTLPSpanExporter(
        endpoint=TELEMETRY_CONFIG["otlp_endpoint"],
        insecure=True,
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(tracer_provider)

    logger.info(f"[TELEMETRY] Initialized OpenTelemetry tracer provider with OTLP endpoint: {TELEMETRY_CONFIG['otlp_endpoint']}")
    return tracer_provider


def get_tracer(name: str = "orama_actions"):
    """Get a tracer instance for the given name."""
    return trace.get_tracer(name)


def sanitize_value(value: Any, field_name: str = "") -> Any:
    """
    Sanitize sensitive data for telemetry.

    OpenTelemetry attributes must be primitives, so dicts and lists are
    serialized to (truncated) JSON strings.
    """
    max_length = TELEMETRY_CONFIG["max_attribute_length"]
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, default=str)[:max_length]
        except (TypeError, ValueError):
            return str(value)[:max_length]
    elif isinstance(value, str):
        field_lower = field_name.lower()
        for sensitive in TELEMETRY_CONFIG["redact_sensitive_fields"]:
            if sensitive in field_lower:
                return "[REDACTED]"

        if len(value) > max_length:
            return value[:max_length] + "..."

        return value
    else:
        return value


def record_event(span, name: str, attributes: Optional[Dict[str, Any]] = None):
    """Record an event on a span with sanitized attributes."""
    if span is None:
        return
    if attributes:
        sanitized = {k: sanitize_value(v, k) for k, v in attributes.items() if v is not None}
        span.add_event(name, attributes=sanitized)
    else:
        span.add_event(name)


def set_span_error(span, error: Exception, attributes: Optional[Dict[str, Any]] = None):
    """Set span status to error with exception details."""
    if span is None:
        return
    span.set_status(Status(StatusCode.ERROR, str(error)))
    span.record_exception(error)

    if attributes:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, sanitize_value(value, key))


def log_structured(level: str, message: str, **kwargs):
    """Log structured data for telemetry analysis."""
    sanitized_kwargs = {k: sanitize_value(v, k) for k, v in kwargs.items()}

    if len(message) > TELEMETRY_CONFIG["max_log_message_length"]:
        message = message[:TELEMETRY_CONFIG["max_log_message_length"]] + "..."

    # 'message' is a reserved LogRecord attribute, so the text goes under 'log_message'
    log_entry = {
        "level": level,
        "log_message": message,
        **sanitized_kwargs
    }

    if level == "error":
        logger.error(f"[TELEMETRY] {message}", extra=log_entry)
    elif level == "warning":
        logger.warning(f"[TELEMETRY] {message}", extra=log_entry)
    elif level == "info":
        logger.info(f"[TELEMETRY] {message}", extra=log_entry)
    else:
        logger.debug(f"[TELEMETRY] {message}", extra=log_entry)


_tracer_provider = None


def init_telemetry():
    """Initialize telemetry infrastructure once per process."""
    global _tracer_provider
    if _tracer_provider is None:
        _tracer_provider = create_tracer_provider()
        logger.info("[TELEMETRY] Telemetry initialization complete")
    return _tracer_provider


def shutdown_telemetry():
    """Shutdown telemetry infrastructure."""
    global _tracer_provider
    if _tracer_provider:
        _tracer_provider.shutdown()
        _tracer_provider = None
        logger.info("[TELEMETRY] Telemetry shutdown complete")
