"""
Blobstore Exception Classes

Error taxonomy shared by the configuration resolver, the backend drivers
and the URL generators.

A missing blob is not an error: drivers return None for it.
"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Blobstore error codes."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    OPERATION_NOT_APPLICABLE = "OPERATION_NOT_APPLICABLE"


class BlobstoreError(Exception):
    """
    Base exception for blobstore errors.

    All blobstore exceptions inherit from this class and carry a stable
    error code so callers can map them to their own error responses.
    """

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class ConfigurationError(BlobstoreError):
    """
    Invalid or incomplete blobstore configuration.

    Raised only while resolving configuration or constructing clients.
    Never retried.
    """

    def __init__(self, message: str):
        super().__init__(code=ErrorCode.CONFIGURATION_ERROR, message=message)


class StorageUnavailable(BlobstoreError):
    """
    The storage backend could not be reached or answered with an error.

    Propagated unchanged to callers; retry policy belongs to them.
    """

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        directory_key: Optional[str] = None,
    ):
        super().__init__(code=ErrorCode.STORAGE_UNAVAILABLE, message=message)
        self.backend = backend
        self.directory_key = directory_key


class BlobOperationNotApplicable(BlobstoreError):
    """
    A blob operation was called that its backend does not support.

    This is a programming error: callers must branch on ``client.local``
    before choosing between ``local_path()`` and a download URL.
    """

    def __init__(self, operation: str, backend: str):
        super().__init__(
            code=ErrorCode.OPERATION_NOT_APPLICABLE,
            message=f"{operation} is not applicable to {backend} blobs",
        )
        self.operation = operation
        self.backend = backend
