"""
Blobstore Client Provider

Factory turning a storage configuration and a directory key into a
ready-to-use client.

CRITICAL RULES:
1. Configuration errors surface here and nowhere else
2. Exactly one driver per client; the backend never changes afterwards
3. A CDN only ever decorates the remote object store
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Union

from .base import BlobstoreClient
from .cdn import Cdn
from .client import InstrumentedClient
from .config import BackendType, StorageConfig, resolve_backend_type, validate_storage_config
from .drivers.local import LocalBlobstoreClient
from .drivers.s3 import S3BlobstoreClient
from .drivers.webdav import WebDavBlobstoreClient
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def provide(
    config: Union[StorageConfig, Dict[str, Any]],
    directory_key: str,
) -> InstrumentedClient:
    """
    Build the client for one artifact directory.

    Args:
        config: Storage configuration (validated here)
        directory_key: Bucket, collection or subdirectory of the artifact class

    Returns:
        Client bound to the configured backend

    Raises:
        ConfigurationError: If the configuration is invalid for its backend

    Examples:
        # Remote object store, the default
        client = provide({"remote_connection_params": {}}, "cc-packages")

        # WebDAV
        client = provide(
            {"backend_type": "webdav", "webdav_connection_params": {...}},
            "cc-droplets",
        )
    """
    if not directory_key:
        raise ConfigurationError("A directory key is required to provide a blobstore client")

    config = validate_storage_config(config)
    backend = resolve_backend_type(config)

    driver = _DRIVER_BUILDERS[backend](config, directory_key)

    logger.info(f"Provided {type(driver).__name__} for directory '{directory_key}'")
    return InstrumentedClient(driver)


def _create_s3_client(config: StorageConfig, directory_key: str) -> S3BlobstoreClient:
    """Create an S3BlobstoreClient, CDN-decorated when configured."""
    cdn = None
    if config.cdn is not None:
        cdn = Cdn.from_config(config.cdn, expires_in=config.url_expiry_seconds)

    return S3BlobstoreClient(
        directory_key,
        config.remote_connection_params,
        cdn=cdn,
        url_expiry_seconds=config.url_expiry_seconds,
    )


def _create_webdav_client(config: StorageConfig, directory_key: str) -> WebDavBlobstoreClient:
    """Create a WebDavBlobstoreClient."""
    return WebDavBlobstoreClient(
        directory_key,
        config.webdav_connection_params,
        url_expiry_seconds=config.url_expiry_seconds,
    )


def _create_local_client(config: StorageConfig, directory_key: str) -> LocalBlobstoreClient:
    """Create a LocalBlobstoreClient."""
    return LocalBlobstoreClient(
        directory_key,
        config.remote_connection_params["local_root"],
    )


_DRIVER_BUILDERS: Dict[BackendType, Callable[[StorageConfig, str], BlobstoreClient]] = {
    BackendType.REMOTE_OBJECT_STORE: _create_s3_client,
    BackendType.WEBDAV: _create_webdav_client,
    BackendType.LOCAL: _create_local_client,
}

_missing = set(BackendType) - set(_DRIVER_BUILDERS)
if _missing:
    raise RuntimeError(f"No blobstore driver registered for: {sorted(b.value for b in _missing)}")
