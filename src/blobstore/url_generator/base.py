"""
URL Generator Base

Maps apps, packages, droplets and buildpacks to blob keys, looks the
keys up in the artifact blobstores and turns the blobs into URLs.

Every method returns None when there is nothing to download: the app has
no current droplet, or no blob is stored at the derived key. Callers need
a single None check. StorageUnavailable propagates unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..artifacts import ArtifactBlobstores
from ..base import Blob, BlobstoreClient
from ..models import AppRef, BuildpackRef, DropletRef, PackageRef
from ..observability import record_counter
from ..observability.metrics import URLS_GENERATED_TOTAL


def buildpack_cache_key(app_guid: str, stack: str) -> str:
    return f"{app_guid}/{stack}"


class UrlGenerator(ABC):
    """
    Download URLs for every artifact class.

    Blobs on a local backend have no URLs: when the blob exists, the
    download methods raise BlobOperationNotApplicable. Callers serving
    local blobstores check ``client.local`` first and use
    ``blob.local_path()``, as PackageDownload does.
    """

    #: Label for metrics, "internal" or "external"
    audience: str = ""

    def __init__(self, blobstores: ArtifactBlobstores):
        self._blobstores = blobstores

    @abstractmethod
    def _blob_download_url(self, blob: Blob) -> str:
        """Turn an existing blob into the URL this generator hands out."""
        ...

    def _url_for(self, blobstore: BlobstoreClient, key: Optional[str], artifact: str) -> Optional[str]:
        if key is None:
            return None

        blob = blobstore.blob(key)
        if blob is None:
            return None

        url = self._blob_download_url(blob)
        record_counter(URLS_GENERATED_TOTAL, 1, {"artifact": artifact, "audience": self.audience})
        return url

    # Downloads

    def app_package_download_url(self, app: AppRef) -> Optional[str]:
        return self._url_for(self._blobstores.package_blobstore, app.guid, "package")

    def package_download_url(self, package: PackageRef) -> Optional[str]:
        return self._url_for(self._blobstores.package_blobstore, package.guid, "package")

    def buildpack_cache_download_url(self, app: AppRef) -> Optional[str]:
        return self._url_for(
            self._blobstores.buildpack_cache_blobstore, app.buildpack_cache_key, "buildpack_cache"
        )

    def v3_app_buildpack_cache_download_url(self, app_guid: str, stack: str) -> Optional[str]:
        return self._url_for(
            self._blobstores.buildpack_cache_blobstore,
            buildpack_cache_key(app_guid, stack),
            "buildpack_cache",
        )

    def admin_buildpack_download_url(self, buildpack: BuildpackRef) -> Optional[str]:
        return self._url_for(self._blobstores.buildpack_blobstore, buildpack.key, "buildpack")

    def droplet_download_url(self, app: AppRef) -> Optional[str]:
        """
        URL of the app's current droplet.

        None without a blob lookup when the app has no current droplet.
        """
        droplet = app.current_droplet
        if droplet is None:
            return None
        return self.v3_droplet_download_url(droplet)

    def v3_droplet_download_url(self, droplet: DropletRef) -> Optional[str]:
        return self._url_for(self._blobstores.droplet_blobstore, droplet.blobstore_key, "droplet")
