"""
OpenTelemetry Tracing

Spans around blobstore lookups, correlated with the caller's trace.
"""

import logging
from typing import Optional, Dict, Any
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.trace import Status, StatusCode, Span

logger = logging.getLogger(__name__)

TRACER_NAME = "blobstore"

# Global tracer
_tracer: Optional[trace.Tracer] = None


def init_tracing(
    service_name: str = "blobstore",
    service_version: str = "1.0.0",
    otlp_endpoint: Optional[str] = None,
    console_export: bool = False
) -> trace.Tracer:
    """
    Initialize OpenTelemetry tracing.

    Only needed when the embedding process has not configured a tracer
    provider itself.

    Args:
        service_name: Name of the service
        service_version: Version of the service
        otlp_endpoint: OTLP exporter endpoint (e.g., "http://localhost:4317")
        console_export: Enable console export for debugging

    Returns:
        Configured tracer
    """
    global _tracer

    resource = Resource.create({
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
    })

    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
        logger.info(f"OTel tracing: OTLP exporter configured -> {otlp_endpoint}")

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("OTel tracing: Console exporter enabled")

    trace.set_tracer_provider(provider)

    # The global provider can only be set once per process
    _tracer = provider.get_tracer(TRACER_NAME, service_version)

    logger.info(f"OTel tracing initialized: {service_name} v{service_version}")

    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def get_current_span() -> Optional[Span]:
    """Get the current active span."""
    return trace.get_current_span()


def get_trace_id() -> Optional[str]:
    """Get the current trace ID as hex string."""
    span = get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().trace_id, '032x')
    return None


@contextmanager
def create_span(
    name: str,
    attributes: Dict[str, Any] = None,
    kind: trace.SpanKind = trace.SpanKind.CLIENT
):
    """
    Create a new span as context manager.

    Usage:
        with create_span("blobstore.blob", {"blobstore.key": key}) as span:
            blob = driver.blob(key)
            span.set_attribute("blobstore.found", blob is not None)
    """
    tracer = get_tracer()

    with tracer.start_as_current_span(
        name,
        kind=kind,
        attributes=attributes or {}
    ) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
