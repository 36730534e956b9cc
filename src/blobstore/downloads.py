"""
Package Download

Resolves where a package's bits can be fetched from: a local file the
caller serves itself, or a URL the caller redirects to. Never both.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .artifacts import ArtifactBlobstores
from .models import PackageRef

logger = logging.getLogger(__name__)


class PackageDownload:
    """Download location of package bits."""

    def __init__(self, blobstores: ArtifactBlobstores):
        self._blobstores = blobstores

    def download(self, package: PackageRef) -> Tuple[Optional[str], Optional[str]]:
        """
        Resolve a package download.

        Returns:
            (local_path, None) for a local blobstore,
            (None, public_url) for a remote one,
            (None, None) when the package has no bits
        """
        blobstore = self._blobstores.package_blobstore
        blob = blobstore.blob(package.guid)
        if blob is None:
            logger.info(f"Package {package.guid} has no bits in '{blobstore.directory_key}'")
            return None, None

        if blobstore.local:
            return blob.local_path(), None
        return None, blob.public_download_url()
