"""
Structured Logging with Trace Correlation

JSON log lines carrying the active trace and span ids, so blobstore
warnings line up with the request that triggered them.
"""

import logging
import json
import sys
from datetime import datetime, timezone

from .tracing import get_trace_id, get_current_span

_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName", "trace_id",
))

NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore", "opentelemetry")


class StructuredFormatter(logging.Formatter):
    """
    JSON structured log formatter with trace context.
    """

    def format(self, record: logging.LogRecord) -> str:
        span = get_current_span()
        span_id = None
        if span and span.get_span_context().is_valid:
            span_id = format(span.get_span_context().span_id, '016x')

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "trace_id": get_trace_id(),
            "span_id": span_id,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Extra fields
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        return json.dumps(log_entry)


class TraceContextFilter(logging.Filter):
    """
    Filter that adds trace context to log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id() or "no-trace"
        return True


def configure_logging(
    level: str = "INFO",
    structured: bool = True,
    service_name: str = "blobstore"
):
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        structured: Use JSON structured format
        service_name: Service name for logs
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(trace_id)s] %(message)s"
        ))

    handler.addFilter(TraceContextFilter())

    root_logger.addHandler(handler)

    # Backend client libraries log every request at DEBUG/INFO
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging configured: {service_name}, level={level}, structured={structured}")
