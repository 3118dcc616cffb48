"""
OpenTelemetry Integration Module

Provides tracing and metrics for RPC calls:
- tracer: spans around calls, trace context propagation into HTTP headers
- metrics: request/error counters and latency histograms
"""

from .tracer import (
    setup_tracer,
    inject_trace_headers,
    create_span
)
from .metrics import (
    setup_metrics,
    increment_counter,
    record_latency
)

__all__ = [
    "setup_tracer",
    "inject_trace_headers",
    "create_span",
    "setup_metrics",
    "increment_counter",
    "record_latency"
]
