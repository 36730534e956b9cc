# Blobstore Backend Drivers
#
# One driver per BackendType:
# - S3BlobstoreClient (remote object store)
# - WebDavBlobstoreClient (WebDAV blobstore)
# - LocalBlobstoreClient (local filesystem, development and tests)

from .local import LocalBlob, LocalBlobstoreClient
from .s3 import S3Blob, S3BlobstoreClient
from .webdav import WebDavBlob, WebDavBlobstoreClient

__all__ = [
    "LocalBlob",
    "LocalBlobstoreClient",
    "S3Blob",
    "S3BlobstoreClient",
    "WebDavBlob",
    "WebDavBlobstoreClient",
]
