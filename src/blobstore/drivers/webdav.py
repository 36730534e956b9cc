"""
WebDAV Blobstore Driver

Backend for a WebDAV blobstore served by nginx. The client's directory
key is a top-level collection on the server.

Server layout:
    {private_endpoint}/admin/{directory_key}/{partitioned_key}   authenticated access
    {private_endpoint}/read/{directory_key}/{partitioned_key}    internal downloads
    {public_endpoint}/read/{directory_key}/{partitioned_key}     signed public downloads

Public URLs are signed for nginx's secure_link module:
    md5 = base64url(md5("{expires}{path} {secret}")), unpadded
"""

from __future__ import annotations

import base64
import hashlib
import logging
import ssl
import time
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

import httpx

from ..base import Blob, BlobstoreClient, partitioned_key
from ..config import BackendType
from ..errors import StorageUnavailable

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost"
DEFAULT_TIMEOUT = 30.0


class WebDavBlob(Blob):
    """Object stored on the WebDAV blobstore."""

    def __init__(self, key: str, client: "WebDavBlobstoreClient"):
        super().__init__(key)
        self._client = client

    @property
    def backend_type(self) -> BackendType:
        return BackendType.WEBDAV

    def internal_download_url(self) -> str:
        return self._client.internal_url(self.key)

    def public_download_url(self) -> str:
        return self._client.signed_public_url(self.key)


class WebDavBlobstoreClient(BlobstoreClient):
    """
    WebDAV implementation of BlobstoreClient.

    Connection parameters (webdav_connection_params):
        private_endpoint: Endpoint on the internal network
        public_endpoint: Endpoint reachable from outside (default: private)
        username / password: Basic auth for the admin collection
        secret: nginx secure_link secret for public URLs
        timeout: Seconds before a call is reported as StorageUnavailable
        ca_cert_path: CA bundle for a TLS private endpoint
    """

    def __init__(
        self,
        directory_key: str,
        connection_params: Optional[Dict[str, Any]] = None,
        *,
        url_expiry_seconds: int = 3600,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__(directory_key)
        params = dict(connection_params or {})

        self._private_endpoint = (params.get("private_endpoint") or DEFAULT_ENDPOINT).rstrip("/")
        self._public_endpoint = (params.get("public_endpoint") or self._private_endpoint).rstrip("/")
        self._secret = params.get("secret") or ""
        self._url_expiry_seconds = url_expiry_seconds

        if http_client is not None:
            self._http = http_client
        else:
            auth = None
            if params.get("username"):
                auth = httpx.BasicAuth(params["username"], params.get("password") or "")
            self._http = httpx.Client(
                auth=auth,
                timeout=float(params.get("timeout") or DEFAULT_TIMEOUT),
                verify=_ssl_context(params.get("ca_cert_path")),
            )

    @property
    def backend_type(self) -> BackendType:
        return BackendType.WEBDAV

    def blob(self, key: str) -> Optional[WebDavBlob]:
        """Look up a blob with a HEAD request on the admin collection."""
        url = f"{self._private_endpoint}{self._path('admin', key)}"

        try:
            response = self._http.head(url)
        except httpx.TimeoutException as e:
            raise self._unavailable(f"HEAD {url} timed out", e) from e
        except httpx.HTTPError as e:
            raise self._unavailable(f"HEAD {url} failed: {e}", e) from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise StorageUnavailable(
                f"HEAD {url} returned {response.status_code}",
                backend=self.backend_type.value,
                directory_key=self.directory_key,
            )

        return WebDavBlob(key, self)

    def internal_url(self, key: str) -> str:
        return f"{self._private_endpoint}{self._path('read', key)}"

    def signed_public_url(self, key: str, *, now: Optional[float] = None) -> str:
        """
        Public download URL signed for nginx secure_link.

        Unsigned when no secret is configured.
        """
        path = self._path("read", key)
        url = f"{self._public_endpoint}{path}"
        if not self._secret:
            return url

        expires = int(now if now is not None else time.time()) + self._url_expiry_seconds
        digest = hashlib.md5(f"{expires}{path} {self._secret}".encode("utf-8")).digest()
        signature = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
        return f"{url}?{urlencode({'md5': signature, 'expires': expires})}"

    def _path(self, collection: str, key: str) -> str:
        return "/" + "/".join(
            quote(part, safe="/")
            for part in (collection, self.directory_key, partitioned_key(key))
        )

    def _unavailable(self, message: str, error: Exception) -> StorageUnavailable:
        logger.debug(f"WebDAV {self._private_endpoint}: {type(error).__name__}: {error}")
        return StorageUnavailable(
            message,
            backend=self.backend_type.value,
            directory_key=self.directory_key,
        )


def _ssl_context(ca_cert_path: Optional[str]) -> ssl.SSLContext:
    """TLS context trusting the given CA bundle, or the system store without one."""
    return ssl.create_default_context(cafile=ca_cert_path)
