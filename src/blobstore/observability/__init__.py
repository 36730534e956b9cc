"""
Observability Module

Tracing, metrics and structured logging for blobstore calls.
"""

from .tracing import (
    init_tracing,
    get_tracer,
    get_current_span,
    get_trace_id,
    create_span,
)
from .metrics import (
    init_metrics,
    get_meter,
    record_counter,
    record_histogram,
)
from .logging import configure_logging

__all__ = [
    # Tracing
    "init_tracing",
    "get_tracer",
    "get_current_span",
    "get_trace_id",
    "create_span",
    # Metrics
    "init_metrics",
    "get_meter",
    "record_counter",
    "record_histogram",
    # Logging
    "configure_logging",
]
