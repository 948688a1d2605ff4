"""
Helper functions for instrumenting tools with OpenTelemetry.
Provides one-line instrumentation for agent tools.
"""

from typing import Dict, Any, Optional

from opentelemetry import trace

from .config import get_tracer, record_event, set_span_error, log_structured

_tracer = get_tracer("orama_actions.tools")


def log_tool_step(tool_name: str, status: str, metadata: Optional[Dict[str, Any]] = None,
                  correlation_id: Optional[str] = None):
    """
    One-line tool instrumentation for telemetry.

    Args:
        tool_name: Name of the tool being executed
        status: 'start', 'success' or 'error'
        metadata: Additional context (inputs, outputs, duration, etc.).
            On 'start' the opened span is stored under '_span' and must be
            passed back with the completion call.
        correlation_id: Correlation ID for tracing

    Returns:
        The metadata dict (with '_span' populated on 'start').
    """
    metadata = metadata if metadata is not None else {}
    loggable = {k: v for k, v in metadata.items() if k != "_span"}

    if status == "start":
        span = _tracer.start_span(f"tool.{tool_name}")
        if correlation_id:
            span.set_attribute("correlation_id", correlation_id)
        span.set_attribute("tool_name", tool_name)
        record_event(span, "tool_execution_start", {"tool_name": tool_name, **loggable})
        metadata["_span"] = span

        log_structured("info", f"Tool {tool_name} started",
                       tool_name=tool_name, correlation_id=correlation_id, **loggable)

    elif status in ("success", "error"):
        span = metadata.get("_span")
        if span is not None:
            span.set_attribute("final_status", status)
            if status == "success":
                span.set_status(trace.Status(trace.StatusCode.OK))
                record_event(span, "tool_execution_success", {"tool_name": tool_name, **loggable})
            else:
                error_msg = metadata.get("error_message", "Unknown error")
                set_span_error(span, Exception(error_msg), {"tool_name": tool_name})
            span.end()

        log_structured("info" if status == "success" else "error",
                       f"Tool {tool_name} {status}",
                       tool_name=tool_name, correlation_id=correlation_id, **loggable)

    return metadata
