"""
Artifact Blobstores

The four process-wide blobstore clients, one per artifact class.

Built once at process start with ``ArtifactBlobstores.from_settings`` and
passed explicitly to the URL generators and download actions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .base import BlobstoreClient
from .config import BlobstoreSettings, StorageConfig, resolve_backend_type, validate_storage_config
from .errors import ConfigurationError
from .provider import provide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactBlobstores:
    """Blobstore clients for packages, droplets, buildpack caches and admin buildpacks."""

    package_blobstore: BlobstoreClient
    droplet_blobstore: BlobstoreClient
    buildpack_cache_blobstore: BlobstoreClient
    buildpack_blobstore: BlobstoreClient

    @classmethod
    def from_settings(
        cls,
        config: Union[StorageConfig, Dict[str, Any]],
        settings: Optional[BlobstoreSettings] = None,
    ) -> "ArtifactBlobstores":
        """
        Provision the four artifact blobstores.

        Args:
            config: Storage configuration shared by all four clients
            settings: Directory keys (defaults when omitted)

        Returns:
            ArtifactBlobstores

        Raises:
            ConfigurationError: If the configuration is invalid or two
                artifact classes share a directory key
        """
        settings = settings or BlobstoreSettings()
        config = validate_storage_config(config)

        keys = settings.directory_keys()
        if len(set(keys.values())) != len(keys):
            raise ConfigurationError(f"Artifact directory keys must be distinct: {keys}")

        blobstores = cls(
            package_blobstore=provide(config, settings.package_directory_key),
            droplet_blobstore=provide(config, settings.droplet_directory_key),
            buildpack_cache_blobstore=provide(config, settings.buildpack_cache_directory_key),
            buildpack_blobstore=provide(config, settings.buildpack_directory_key),
        )

        logger.info(
            f"Artifact blobstores ready: backend={resolve_backend_type(config).value}, "
            f"directories={sorted(keys.values())}"
        )
        return blobstores
