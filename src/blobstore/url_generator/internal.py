"""
Internal URL Generator

URLs for components on the trusted internal network (stagers, cell
agents). Downloads point at the backend directly and never go through
the CDN; uploads point at the internal staging endpoint.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..artifacts import ArtifactBlobstores
from ..base import Blob
from ..config import BlobstoreSettings
from .base import UrlGenerator


class InternalUrlGenerator(UrlGenerator):
    """Internal download and upload URLs."""

    audience = "internal"

    def __init__(
        self,
        blobstores: ArtifactBlobstores,
        settings: Optional[BlobstoreSettings] = None,
    ):
        super().__init__(blobstores)
        self._settings = settings or BlobstoreSettings()

    def _blob_download_url(self, blob: Blob) -> str:
        return blob.internal_download_url()

    # Uploads

    def droplet_upload_url(self, droplet_guid: str) -> str:
        """Where a stager uploads the droplet it built."""
        return self._staging_uri(f"/internal/v4/droplets/{quote(droplet_guid, safe='')}/upload")

    def buildpack_cache_upload_url(self, app_guid: str, stack: str) -> str:
        """Where a stager uploads the app's buildpack cache for a stack."""
        return self._staging_uri(
            f"/internal/v4/buildpack_cache/{quote(stack, safe='')}/{quote(app_guid, safe='')}/upload"
        )

    def _staging_uri(self, path: str) -> str:
        s = self._settings
        scheme = "https" if s.tls else "http"
        credentials = ""
        if s.staging_user:
            credentials = f"{quote(s.staging_user, safe='')}:{quote(s.staging_password, safe='')}@"
        return f"{scheme}://{credentials}{s.internal_service_hostname}:{s.internal_service_port}{path}"
