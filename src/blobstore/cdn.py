"""
CDN URL Decorator

Routes public download URLs of the remote object store through a
content-delivery endpoint. Internal URLs are never rewritten.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from .config import CdnConfig


class Cdn:
    """
    Rewrites backend URLs onto a CDN endpoint.

    The backend URL's path and query string are kept, so the object-store
    signature and expiry travel with the request for the CDN to forward.
    With a signing key the CDN URL additionally carries ``cdn_expires`` and
    ``cdn_signature`` (HMAC-SHA256, URL-safe base64 without padding).
    """

    def __init__(
        self,
        endpoint_uri: str,
        signing_key: Optional[str] = None,
        *,
        expires_in: int = 3600,
    ):
        parts = urlsplit(endpoint_uri)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"CDN endpoint must be an absolute URI: {endpoint_uri}")

        self._scheme = parts.scheme
        self._netloc = parts.netloc
        self._path_prefix = parts.path.rstrip("/")
        self._signing_key = signing_key
        self._expires_in = expires_in

    @classmethod
    def from_config(cls, config: CdnConfig, *, expires_in: int = 3600) -> "Cdn":
        return cls(config.endpoint_uri, config.signing_key, expires_in=expires_in)

    @property
    def host(self) -> str:
        return self._netloc

    def rewrite(self, url: str, *, now: Optional[float] = None) -> str:
        """
        Route a backend URL through the CDN.

        Args:
            url: Backend-native (possibly presigned) URL
            now: Current epoch time, for signing

        Returns:
            URL on the CDN endpoint
        """
        backend = urlsplit(url)
        path = f"{self._path_prefix}{backend.path}"
        query = backend.query

        if self._signing_key:
            expires = int(now if now is not None else time.time()) + self._expires_in
            signature = self.sign(path, query, expires)
            signed = f"cdn_expires={expires}&cdn_signature={signature}"
            query = f"{query}&{signed}" if query else signed

        return urlunsplit((self._scheme, self._netloc, path, query, ""))

    def sign(self, path: str, query: str, expires: int) -> str:
        payload = f"{path}?{query}{expires}".encode("utf-8")
        digest = hmac.new(self._signing_key.encode("utf-8"), payload, hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")

    def __repr__(self) -> str:
        return f"Cdn(endpoint={self._scheme}://{self._netloc}{self._path_prefix})"
