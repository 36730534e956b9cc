# Blobstore
#
# Storage backend abstraction and download URL generation for platform
# artifacts (packages, droplets, buildpacks, buildpack caches):
# - provide(): one client per artifact directory, backend chosen by config
# - S3 (default), WebDAV and local filesystem drivers
# - Internal / external URL generators over the four artifact blobstores

from .artifacts import ArtifactBlobstores
from .base import Blob, BlobstoreClient, partitioned_key
from .cdn import Cdn
from .config import (
    BackendType,
    BlobstoreSettings,
    CdnConfig,
    StorageConfig,
    load_storage_config,
    resolve_backend_type,
    validate_storage_config,
)
from .downloads import PackageDownload
from .errors import (
    BlobOperationNotApplicable,
    BlobstoreError,
    ConfigurationError,
    ErrorCode,
    StorageUnavailable,
)
from .provider import provide
from .url_generator import ExternalUrlGenerator, InternalUrlGenerator

__all__ = [
    "ArtifactBlobstores",
    "BackendType",
    "Blob",
    "BlobOperationNotApplicable",
    "BlobstoreClient",
    "BlobstoreError",
    "BlobstoreSettings",
    "Cdn",
    "CdnConfig",
    "ConfigurationError",
    "ErrorCode",
    "ExternalUrlGenerator",
    "InternalUrlGenerator",
    "PackageDownload",
    "StorageConfig",
    "StorageUnavailable",
    "load_storage_config",
    "partitioned_key",
    "provide",
    "resolve_backend_type",
    "validate_storage_config",
]
