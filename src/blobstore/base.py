"""
Blobstore Client and Blob Abstract Base Classes

Defines the contract every storage backend driver implements.

    client = provide(config, "packages")
    blob = client.blob(package_guid)
    if blob is None:
        ...                          # not found is a normal outcome
    elif client.local:
        path = blob.local_path()
    else:
        url = blob.public_download_url()

Blobs are short-lived handles holding only their key and a reference
to the client that produced them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .config import BackendType
from .errors import BlobOperationNotApplicable


def partitioned_key(key: str) -> str:
    """
    Spread keys over two levels of two-character directories.

    "abcdef" -> "ab/cd/abcdef"
    """
    key = str(key)
    return "/".join((key[0:2], key[2:4], key))


class Blob(ABC):
    """
    Handle to one stored object.

    Operations a backend does not support raise BlobOperationNotApplicable.
    """

    def __init__(self, key: str):
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        ...

    def internal_download_url(self) -> str:
        """
        URL reachable only from the internal network.

        Never routed through a CDN.
        """
        raise BlobOperationNotApplicable("internal_download_url", self.backend_type.value)

    def public_download_url(self) -> str:
        """
        URL reachable from outside the internal network.

        Signed and time-limited per backend convention, CDN-routed when a
        CDN is configured.
        """
        raise BlobOperationNotApplicable("public_download_url", self.backend_type.value)

    def local_path(self) -> str:
        """Filesystem path of the object. Only for local clients."""
        raise BlobOperationNotApplicable("local_path", self.backend_type.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r})"


class BlobstoreClient(ABC):
    """
    Abstract base class for blobstore backend drivers.

    A client is bound to exactly one backend and one directory key for its
    lifetime. Clients hold no mutable state after construction and are safe
    to share between request-handling threads.
    """

    def __init__(self, directory_key: str):
        self._directory_key = directory_key

    @property
    def directory_key(self) -> str:
        return self._directory_key

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """Return the storage backend type."""
        ...

    @property
    def local(self) -> bool:
        """True when blobs are served straight from the local filesystem."""
        return False

    @abstractmethod
    def blob(self, key: str) -> Optional[Blob]:
        """
        Look up a blob.

        Args:
            key: Blob key within this client's directory

        Returns:
            Blob handle, or None if nothing is stored at the key

        Raises:
            StorageUnavailable: If the backend cannot be reached
        """
        ...

    def exists(self, key: str) -> bool:
        """Check if a blob is stored at the key."""
        return self.blob(key) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(directory_key={self._directory_key!r})"
