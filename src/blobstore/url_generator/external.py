"""
External URL Generator

URLs handed to clients outside the internal network: presigned or
secure-link signed by the backend, CDN-routed when a CDN is configured.
"""

from ..base import Blob
from .base import UrlGenerator


class ExternalUrlGenerator(UrlGenerator):
    """Public download URLs."""

    audience = "external"

    def _blob_download_url(self, blob: Blob) -> str:
        return blob.public_download_url()
