"""
Tests for InstrumentedClient.
"""

import logging

import pytest

from blobstore import client as client_module
from blobstore.client import InstrumentedClient
from blobstore.config import BackendType
from blobstore.errors import StorageUnavailable
from blobstore.observability.metrics import LOOKUPS_TOTAL
from fakes import FakeClient


@pytest.fixture
def counters(monkeypatch):
    recorded = []
    monkeypatch.setattr(
        client_module,
        "record_counter",
        lambda name, value=1, attributes=None: recorded.append((name, attributes)),
    )
    return recorded


class TestInstrumentedClient:
    """Tests for InstrumentedClient."""

    def test_delegates_contract(self):
        """Test that the wrapper exposes the driver's contract."""
        driver = FakeClient("packages", keys=["abc"], local=True)
        client = InstrumentedClient(driver)

        assert client.wrapped_client is driver
        assert client.directory_key == "packages"
        assert client.backend_type == BackendType.LOCAL
        assert client.local is True
        assert client.blob("abc").key == "abc"
        assert client.blob("missing") is None
        assert driver.lookups == ["abc", "missing"]

    def test_records_lookup_results(self, counters):
        """Test that hits and misses are counted."""
        client = InstrumentedClient(FakeClient("packages", keys=["abc"]))

        client.blob("abc")
        client.blob("missing")

        results = [attrs["result"] for name, attrs in counters if name == LOOKUPS_TOTAL]
        assert results == ["hit", "miss"]
        assert counters[0][1]["blobstore.directory_key"] == "packages"

    def test_storage_unavailable_logged_and_reraised(self, counters, caplog, monkeypatch):
        """Test that backend failures are logged, counted and re-raised."""
        driver = FakeClient("droplets")

        def unavailable(key):
            raise StorageUnavailable("connection refused", backend="remote-object-store")

        monkeypatch.setattr(driver, "blob", unavailable)
        client = InstrumentedClient(driver)

        with caplog.at_level(logging.WARNING, logger="blobstore.client"):
            with pytest.raises(StorageUnavailable, match="connection refused"):
                client.blob("abc")

        assert "Blobstore unavailable: connection refused" in caplog.text
        assert counters[-1][1]["result"] == "error"
