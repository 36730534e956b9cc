"""
OpenTelemetry Metrics

Blobstore lookup counters and latency histograms.

Instruments come from ``init_metrics`` when this package owns the meter
provider. Otherwise they are created on first use from whatever
provider the embedding process installed.
"""

import logging
from typing import Optional, Dict, Any, Sequence

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME

logger = logging.getLogger(__name__)

METER_NAME = "blobstore"

LOOKUPS_TOTAL = "blobstore_lookups_total"
LOOKUP_DURATION_SECONDS = "blobstore_lookup_duration_seconds"
URLS_GENERATED_TOTAL = "blobstore_urls_generated_total"

# Global meter
_meter: Optional[metrics.Meter] = None

# Metric instruments
_counters: Dict[str, metrics.Counter] = {}
_histograms: Dict[str, metrics.Histogram] = {}


def init_metrics(
    service_name: str = "blobstore",
    otlp_endpoint: Optional[str] = None,
    console_export: bool = False,
    export_interval_ms: int = 60000,
    metric_readers: Sequence[MetricReader] = (),
) -> metrics.Meter:
    """
    Initialize OpenTelemetry metrics.

    Args:
        service_name: Name of the service
        otlp_endpoint: OTLP exporter endpoint
        console_export: Enable console export for debugging
        export_interval_ms: Export interval in milliseconds
        metric_readers: Additional readers, e.g. a pull-based exporter

    Returns:
        Configured meter
    """
    global _meter

    readers = list(metric_readers)

    if otlp_endpoint:
        otlp_exporter = OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True)
        readers.append(PeriodicExportingMetricReader(
            otlp_exporter,
            export_interval_millis=export_interval_ms
        ))
        logger.info(f"OTel metrics: OTLP exporter configured -> {otlp_endpoint}")

    if console_export:
        readers.append(PeriodicExportingMetricReader(
            ConsoleMetricExporter(),
            export_interval_millis=export_interval_ms
        ))
        logger.info("OTel metrics: Console exporter enabled")

    resource = Resource.create({SERVICE_NAME: service_name})

    provider = MeterProvider(resource=resource, metric_readers=readers)
    metrics.set_meter_provider(provider)

    # The global provider can only be set once per process
    _meter = provider.get_meter(METER_NAME)

    _init_standard_metrics()

    logger.info(f"OTel metrics initialized: {service_name}")

    return _meter


def _init_standard_metrics():
    """Initialize blobstore metrics."""
    meter = get_meter()

    _counters[LOOKUPS_TOTAL] = meter.create_counter(
        LOOKUPS_TOTAL,
        description="Blob lookups by directory, backend and result",
        unit="1"
    )

    _counters[URLS_GENERATED_TOTAL] = meter.create_counter(
        URLS_GENERATED_TOTAL,
        description="Download URLs handed out by the URL generators",
        unit="1"
    )

    _histograms[LOOKUP_DURATION_SECONDS] = meter.create_histogram(
        LOOKUP_DURATION_SECONDS,
        description="Blob lookup duration",
        unit="s"
    )


def get_meter() -> metrics.Meter:
    """Get the global meter."""
    global _meter
    if _meter is None:
        _meter = metrics.get_meter(METER_NAME)
    return _meter


def record_counter(
    name: str,
    value: int = 1,
    attributes: Dict[str, Any] = None
):
    """Record a counter metric."""
    if not _counters:
        _init_standard_metrics()
    if name in _counters:
        _counters[name].add(value, attributes or {})


def record_histogram(
    name: str,
    value: float,
    attributes: Dict[str, Any] = None
):
    """Record a histogram metric."""
    if not _histograms:
        _init_standard_metrics()
    if name in _histograms:
        _histograms[name].record(value, attributes or {})
