"""
Local Filesystem Blobstore Driver

Serves blobs straight from a directory tree, for development and tests.
Selected with ``remote_connection_params = {"provider": "local",
"local_root": "/var/vcap/store"}``.

    {local_root}/
    └── {directory_key}/
        └── ab/cd/abcdef...

Blobs from this driver have no download URLs; callers hand out
``local_path()`` instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..base import Blob, BlobstoreClient, partitioned_key
from ..config import BackendType
from ..errors import StorageUnavailable

logger = logging.getLogger(__name__)


class LocalBlob(Blob):
    """File in the local blobstore directory."""

    def __init__(self, key: str, path: Path):
        super().__init__(key)
        self._path = path

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL

    def local_path(self) -> str:
        return str(self._path)


class LocalBlobstoreClient(BlobstoreClient):
    """Local filesystem implementation of BlobstoreClient."""

    def __init__(
        self,
        directory_key: str,
        local_root: Union[str, Path],
        *,
        create_dirs: bool = True,
    ):
        """
        Initialize local filesystem driver.

        Args:
            directory_key: Subdirectory holding this artifact class
            local_root: Base directory shared by all artifact classes
            create_dirs: If True, create the directory if it doesn't exist
        """
        super().__init__(directory_key)
        self._base_path = (Path(local_root) / directory_key).resolve()

        if create_dirs:
            self._base_path.mkdir(parents=True, exist_ok=True)

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL

    @property
    def local(self) -> bool:
        return True

    @property
    def base_path(self) -> Path:
        """Get the directory holding this client's blobs."""
        return self._base_path

    def blob(self, key: str) -> Optional[LocalBlob]:
        """
        Look up a blob on disk.

        Keys that resolve outside this client's directory are never found.
        """
        try:
            path = self._resolve_path(key)
            if path is None or not path.is_file():
                return None
        except OSError as e:
            raise StorageUnavailable(
                f"Cannot stat blob '{key}' under {self._base_path}: {e}",
                backend=self.backend_type.value,
                directory_key=self.directory_key,
            ) from e

        return LocalBlob(key, path)

    def _resolve_path(self, key: str) -> Optional[Path]:
        """Resolve a blob key to an absolute path inside base_path, or None."""
        path = (self._base_path / partitioned_key(key)).resolve()
        if not path.is_relative_to(self._base_path):
            logger.debug(f"Blob key {key!r} escapes {self._base_path}")
            return None
        return path
