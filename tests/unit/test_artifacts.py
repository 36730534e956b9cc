"""
Tests for ArtifactBlobstores provisioning.
"""

import pytest

from blobstore.artifacts import ArtifactBlobstores
from blobstore.config import BackendType, BlobstoreSettings
from blobstore.drivers import S3BlobstoreClient, WebDavBlobstoreClient
from blobstore.errors import ConfigurationError


class TestArtifactBlobstores:
    """Tests for ArtifactBlobstores.from_settings."""

    def test_default_directory_keys(self):
        """Test that the four blobstores use the default directory keys."""
        blobstores = ArtifactBlobstores.from_settings({"remote_connection_params": {}})

        assert blobstores.package_blobstore.directory_key == "packages"
        assert blobstores.droplet_blobstore.directory_key == "droplets"
        assert blobstores.buildpack_cache_blobstore.directory_key == "buildpack_cache"
        assert blobstores.buildpack_blobstore.directory_key == "buildpacks"

    def test_all_clients_share_backend(self):
        """Test that every artifact blobstore is bound to the same backend."""
        blobstores = ArtifactBlobstores.from_settings(
            {"backend_type": "webdav", "webdav_connection_params": {}}
        )

        for client in (
            blobstores.package_blobstore,
            blobstores.droplet_blobstore,
            blobstores.buildpack_cache_blobstore,
            blobstores.buildpack_blobstore,
        ):
            assert client.backend_type == BackendType.WEBDAV
            assert isinstance(client.wrapped_client, WebDavBlobstoreClient)

    def test_custom_directory_keys(self):
        """Test that directory keys come from the settings."""
        settings = BlobstoreSettings(
            package_directory_key="cc-packages",
            droplet_directory_key="cc-droplets",
            buildpack_cache_directory_key="cc-buildpack-cache",
            buildpack_directory_key="cc-buildpacks",
        )

        blobstores = ArtifactBlobstores.from_settings({"remote_connection_params": {}}, settings)

        assert isinstance(blobstores.droplet_blobstore.wrapped_client, S3BlobstoreClient)
        assert blobstores.droplet_blobstore.wrapped_client.bucket == "cc-droplets"

    def test_shared_directory_key_rejected(self):
        """Test that two artifact classes cannot share a directory key."""
        settings = BlobstoreSettings(package_directory_key="shared", droplet_directory_key="shared")

        with pytest.raises(ConfigurationError, match="distinct"):
            ArtifactBlobstores.from_settings({"remote_connection_params": {}}, settings)

    def test_invalid_config_rejected(self):
        """Test that an invalid configuration fails before any client is built."""
        with pytest.raises(ConfigurationError):
            ArtifactBlobstores.from_settings({"backend_type": "remote-object-store"})

    def test_is_immutable(self):
        """Test that the blobstore context cannot be reassigned."""
        blobstores = ArtifactBlobstores.from_settings({"remote_connection_params": {}})

        with pytest.raises(AttributeError):
            blobstores.package_blobstore = blobstores.droplet_blobstore
