"""
Blobstore Configuration

Resolves and validates the deployment's blobstore configuration.

Rules:
1. An unset backend type means the remote object store
2. The connection parameters of the resolved backend must be present
3. A CDN may only front the remote object store

Validation runs once, when clients are provisioned. Clients never
re-validate configuration afterwards.
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

LOCAL_PROVIDER = "local"

# Seconds; null means the driver default
REMOTE_TIMEOUT_PARAMS = ("connect_timeout", "read_timeout")
WEBDAV_TIMEOUT_PARAMS = ("timeout",)


class BackendType(str, Enum):
    """Closed set of storage backends a client can be bound to."""

    REMOTE_OBJECT_STORE = "remote-object-store"
    WEBDAV = "webdav"
    # Selected through remote_connection_params.provider, never named directly
    LOCAL = "local"


CONFIGURABLE_BACKEND_TYPES = (BackendType.REMOTE_OBJECT_STORE, BackendType.WEBDAV)


class CdnConfig(BaseModel):
    """Content-delivery endpoint fronting public download URLs."""

    endpoint_uri: str = Field(min_length=1)
    signing_key: Optional[str] = None

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("endpoint_uri")
    @classmethod
    def require_absolute_uri(cls, v: str) -> str:
        if "://" not in v:
            raise ValueError("endpoint_uri must be an absolute URI")
        return v.rstrip("/")


class StorageConfig(BaseModel):
    """
    Blobstore configuration for one deployment.

    Only the connection parameters of the selected backend are used;
    the others are ignored.
    """

    backend_type: Optional[str] = None
    remote_connection_params: Optional[Dict[str, Any]] = None
    webdav_connection_params: Optional[Dict[str, Any]] = None
    cdn: Optional[CdnConfig] = None
    url_expiry_seconds: int = Field(default=3600, ge=1)

    model_config = {"extra": "forbid", "frozen": True}


class BlobstoreSettings(BaseModel):
    """
    Directory keys of the four artifact blobstores plus the internal
    endpoint that staging tasks upload their output to.
    """

    package_directory_key: str = Field(default="packages", min_length=1)
    droplet_directory_key: str = Field(default="droplets", min_length=1)
    buildpack_cache_directory_key: str = Field(default="buildpack_cache", min_length=1)
    buildpack_directory_key: str = Field(default="buildpacks", min_length=1)

    internal_service_hostname: str = "localhost"
    internal_service_port: int = Field(default=9022, ge=1, le=65535)
    staging_user: str = ""
    staging_password: str = ""
    tls: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    def directory_keys(self) -> Dict[str, str]:
        return {
            "package": self.package_directory_key,
            "droplet": self.droplet_directory_key,
            "buildpack_cache": self.buildpack_cache_directory_key,
            "buildpack": self.buildpack_directory_key,
        }


def resolve_backend_type(config: StorageConfig) -> BackendType:
    """
    Resolve the effective backend type of a configuration.

    Args:
        config: Storage configuration

    Returns:
        BackendType the clients will be bound to

    Raises:
        ConfigurationError: If the backend type is unknown
    """
    requested = config.backend_type
    if requested is None:
        backend = BackendType.REMOTE_OBJECT_STORE
    else:
        try:
            backend = BackendType(requested.lower())
        except ValueError:
            backend = None
        if backend not in CONFIGURABLE_BACKEND_TYPES:
            raise ConfigurationError(
                f"Unknown blobstore backend type '{requested}'. "
                f"Expected one of: {', '.join(b.value for b in CONFIGURABLE_BACKEND_TYPES)}"
            )

    if backend == BackendType.REMOTE_OBJECT_STORE:
        params = config.remote_connection_params or {}
        if str(params.get("provider", "")).lower() == LOCAL_PROVIDER:
            return BackendType.LOCAL

    return backend


def validate_storage_config(
    config: Union[StorageConfig, Dict[str, Any]],
) -> StorageConfig:
    """
    Validate a configuration structure for provisioning.

    Args:
        config: StorageConfig or a plain mapping with the same options

    Returns:
        The validated, immutable StorageConfig

    Raises:
        ConfigurationError: If required connection parameters are missing,
            the backend type is unknown, or a CDN fronts a backend other
            than the remote object store
    """
    if not isinstance(config, StorageConfig):
        try:
            config = StorageConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid blobstore configuration: {e}") from e

    backend = resolve_backend_type(config)

    if backend in (BackendType.REMOTE_OBJECT_STORE, BackendType.LOCAL):
        if config.remote_connection_params is None:
            raise ConfigurationError(
                "remote_connection_params are required for the "
                f"'{BackendType.REMOTE_OBJECT_STORE.value}' blobstore backend"
            )
    elif backend == BackendType.WEBDAV:
        if config.webdav_connection_params is None:
            raise ConfigurationError(
                "webdav_connection_params are required for the "
                f"'{BackendType.WEBDAV.value}' blobstore backend"
            )

    if backend == BackendType.REMOTE_OBJECT_STORE:
        _check_timeouts(config.remote_connection_params, REMOTE_TIMEOUT_PARAMS, "remote_connection_params")
    elif backend == BackendType.WEBDAV:
        _check_timeouts(config.webdav_connection_params, WEBDAV_TIMEOUT_PARAMS, "webdav_connection_params")

    if backend == BackendType.LOCAL and not config.remote_connection_params.get("local_root"):
        raise ConfigurationError("local_root is required when the object store provider is 'local'")

    if config.cdn is not None and backend != BackendType.REMOTE_OBJECT_STORE:
        raise ConfigurationError(
            f"A CDN can only front the '{BackendType.REMOTE_OBJECT_STORE.value}' "
            f"backend, not '{backend.value}'"
        )

    return config


def load_storage_config(prefix: str = "BLOBSTORE_") -> StorageConfig:
    """
    Build a StorageConfig from environment variables.

    Environment Variables:
        {prefix}BACKEND_TYPE: "remote-object-store" or "webdav" (optional)
        {prefix}REMOTE_CONNECTION: JSON object of object-store parameters
        {prefix}WEBDAV_CONNECTION: JSON object of WebDAV parameters
        {prefix}CDN_URI: CDN endpoint fronting public downloads
        {prefix}CDN_SIGNING_KEY: Key used to sign CDN URLs
        {prefix}URL_EXPIRY_SECONDS: Lifetime of signed URLs (default: 3600)

    Returns:
        Validated StorageConfig

    Raises:
        ConfigurationError: On malformed values or missing parameters
    """
    load_dotenv()

    cdn = None
    cdn_uri = os.getenv(f"{prefix}CDN_URI")
    if cdn_uri:
        cdn = {
            "endpoint_uri": cdn_uri,
            "signing_key": os.getenv(f"{prefix}CDN_SIGNING_KEY") or None,
        }

    raw = {
        "backend_type": os.getenv(f"{prefix}BACKEND_TYPE") or None,
        "remote_connection_params": _json_env(f"{prefix}REMOTE_CONNECTION"),
        "webdav_connection_params": _json_env(f"{prefix}WEBDAV_CONNECTION"),
        "cdn": cdn,
    }

    expiry = os.getenv(f"{prefix}URL_EXPIRY_SECONDS")
    if expiry:
        raw["url_expiry_seconds"] = expiry

    config = validate_storage_config(raw)
    logger.info(f"Loaded blobstore configuration: backend={resolve_backend_type(config).value}")
    return config


def _check_timeouts(params: Dict[str, Any], names: tuple, section: str):
    """Timeouts must be positive numbers; numeric strings are accepted."""
    for name in names:
        value = params.get(name)
        if value is None:
            continue
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            seconds = None
        if isinstance(value, bool) or seconds is None or not seconds > 0:
            raise ConfigurationError(
                f"{section}.{name} must be a positive number of seconds, got {value!r}"
            )


def _json_env(name: str) -> Optional[Dict[str, Any]]:
    """Parse an environment variable holding a JSON object."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{name} is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ConfigurationError(f"{name} must be a JSON object")
    return parsed
