"""
S3 Blobstore Driver

Remote object-store backend. Supports AWS S3, MinIO and other
S3-compatible services. The client's directory key is the bucket name.

Connection parameters (remote_connection_params):
    endpoint_url: Custom endpoint for MinIO/localstack
    region: AWS region (default: us-east-1)
    aws_access_key_id / aws_secret_access_key: Static credentials;
        when absent the default boto3 credential chain is used
    connect_timeout / read_timeout: Seconds before a call is reported
        as StorageUnavailable
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..base import Blob, BlobstoreClient, partitioned_key
from ..cdn import Cdn
from ..config import BackendType
from ..errors import StorageUnavailable

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}

DEFAULT_REGION = "us-east-1"
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 60


class S3Blob(Blob):
    """Object stored in an S3 bucket."""

    def __init__(self, key: str, client: "S3BlobstoreClient"):
        super().__init__(key)
        self._client = client

    @property
    def backend_type(self) -> BackendType:
        return BackendType.REMOTE_OBJECT_STORE

    def internal_download_url(self) -> str:
        return self._client.presigned_download_url(self.key)

    def public_download_url(self) -> str:
        url = self._client.presigned_download_url(self.key)
        cdn = self._client.cdn
        if cdn is not None:
            return cdn.rewrite(url)
        return url


class S3BlobstoreClient(BlobstoreClient):
    """
    S3-compatible implementation of BlobstoreClient.

    ``blob()`` checks existence with a HEAD request. Download URLs are
    presigned GET URLs valid for ``url_expiry_seconds``.
    """

    def __init__(
        self,
        directory_key: str,
        connection_params: Optional[Dict[str, Any]] = None,
        *,
        cdn: Optional[Cdn] = None,
        url_expiry_seconds: int = 3600,
        client: Optional[Any] = None,
    ):
        """
        Initialize the S3 driver.

        Args:
            directory_key: Bucket holding this artifact class
            connection_params: Backend connection parameters
            cdn: CDN fronting public download URLs
            url_expiry_seconds: Lifetime of presigned URLs
            client: Pre-configured boto3 S3 client (for testing)
        """
        super().__init__(directory_key)
        self._params = dict(connection_params or {})
        self._cdn = cdn
        self._url_expiry_seconds = url_expiry_seconds

        if client:
            self._client = client
        else:
            self._client = self._create_client()

    def _create_client(self) -> Any:
        """Create a boto3 S3 client."""
        client_kwargs = {
            "region_name": self._params.get("region") or DEFAULT_REGION,
            "config": Config(
                connect_timeout=float(self._params.get("connect_timeout") or DEFAULT_CONNECT_TIMEOUT),
                read_timeout=float(self._params.get("read_timeout") or DEFAULT_READ_TIMEOUT),
                retries={"total_max_attempts": 1, "mode": "standard"},
            ),
        }

        if self._params.get("endpoint_url"):
            client_kwargs["endpoint_url"] = self._params["endpoint_url"]

        if self._params.get("aws_access_key_id"):
            client_kwargs["aws_access_key_id"] = self._params["aws_access_key_id"]
            client_kwargs["aws_secret_access_key"] = self._params.get("aws_secret_access_key")

        return boto3.client("s3", **client_kwargs)

    @property
    def backend_type(self) -> BackendType:
        return BackendType.REMOTE_OBJECT_STORE

    @property
    def bucket(self) -> str:
        """Get the S3 bucket name."""
        return self.directory_key

    @property
    def cdn(self) -> Optional[Cdn]:
        return self._cdn

    def blob(self, key: str) -> Optional[S3Blob]:
        """Look up a blob with a HEAD request."""
        s3_key = partitioned_key(key)

        try:
            self._client.head_object(Bucket=self.bucket, Key=s3_key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                return None
            raise self._unavailable(f"HEAD {s3_key} failed: {code}", e) from e
        except BotoCoreError as e:
            raise self._unavailable(f"HEAD {s3_key} failed: {e}", e) from e

        return S3Blob(key, self)

    def presigned_download_url(self, key: str) -> str:
        """Presign a GET for the blob at key."""
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": partitioned_key(key)},
                ExpiresIn=self._url_expiry_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            raise self._unavailable(f"Could not presign {key}: {e}", e) from e

    def _unavailable(self, message: str, error: Exception) -> StorageUnavailable:
        logger.debug(f"S3 bucket {self.bucket}: {type(error).__name__}: {error}")
        return StorageUnavailable(
            message,
            backend=self.backend_type.value,
            directory_key=self.directory_key,
        )
