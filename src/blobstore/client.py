"""
Instrumented Blobstore Client

Wraps the driver chosen by the client provider. Every lookup gets a
span, a lookup counter and a latency sample; backend failures are
logged once here and re-raised unchanged.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from .base import Blob, BlobstoreClient
from .config import BackendType
from .errors import StorageUnavailable
from .observability import create_span, record_counter, record_histogram
from .observability.metrics import LOOKUP_DURATION_SECONDS, LOOKUPS_TOTAL

logger = logging.getLogger(__name__)


class InstrumentedClient(BlobstoreClient):
    """Client contract delegating to a backend driver."""

    def __init__(self, wrapped_client: BlobstoreClient):
        super().__init__(wrapped_client.directory_key)
        self._wrapped_client = wrapped_client

    @property
    def wrapped_client(self) -> BlobstoreClient:
        """The backend driver."""
        return self._wrapped_client

    @property
    def backend_type(self) -> BackendType:
        return self._wrapped_client.backend_type

    @property
    def local(self) -> bool:
        return self._wrapped_client.local

    def blob(self, key: str) -> Optional[Blob]:
        attributes = {
            "blobstore.directory_key": self.directory_key,
            "blobstore.backend": self.backend_type.value,
        }
        started = time.monotonic()
        result = "error"

        try:
            with create_span("blobstore.blob", {**attributes, "blobstore.key": str(key)}) as span:
                blob = self._wrapped_client.blob(key)
                result = "hit" if blob is not None else "miss"
                span.set_attribute("blobstore.result", result)
                return blob
        except StorageUnavailable as e:
            logger.warning(
                f"Blobstore unavailable: {e.message}",
                extra={
                    "directory_key": self.directory_key,
                    "backend": self.backend_type.value,
                    "blob_key": str(key),
                },
            )
            raise
        finally:
            record_counter(LOOKUPS_TOTAL, 1, {**attributes, "result": result})
            record_histogram(LOOKUP_DURATION_SECONDS, time.monotonic() - started, attributes)

    def __repr__(self) -> str:
        return f"InstrumentedClient({self._wrapped_client!r})"
