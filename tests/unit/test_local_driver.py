"""
Tests for the local filesystem blobstore driver.
"""

import pytest

from blobstore.base import partitioned_key
from blobstore.config import BackendType
from blobstore.drivers.local import LocalBlob, LocalBlobstoreClient
from blobstore.errors import BlobOperationNotApplicable, ErrorCode


@pytest.fixture
def driver(tmp_path):
    return LocalBlobstoreClient("cc-packages", tmp_path)


def write_blob(driver, key, content=b"bits"):
    path = driver.base_path / partitioned_key(key)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


class TestPartitionedKey:
    """Tests for partitioned_key."""

    def test_guid(self):
        """Test partitioning a guid."""
        assert partitioned_key("abcdef") == "ab/cd/abcdef"

    def test_nested_key(self):
        """Test partitioning a key containing a slash."""
        assert partitioned_key("guid/stack") == "gu/id/guid/stack"

    def test_short_key(self):
        """Test partitioning a key shorter than four characters."""
        assert partitioned_key("abc") == "ab/c/abc"


class TestLocalBlobstoreClient:
    """Tests for LocalBlobstoreClient."""

    def test_backend_type(self, driver):
        """Test that the driver reports the local backend."""
        assert driver.backend_type == BackendType.LOCAL
        assert driver.local is True

    def test_creates_directory(self, tmp_path):
        """Test that the artifact directory is created under local_root."""
        driver = LocalBlobstoreClient("cc-droplets", tmp_path / "store")
        assert driver.base_path == (tmp_path / "store" / "cc-droplets").resolve()
        assert driver.base_path.is_dir()

    def test_blob_not_found(self, driver):
        """Test that a missing file is not a blob."""
        assert driver.blob("abcdef") is None
        assert driver.exists("abcdef") is False

    def test_blob_found(self, driver):
        """Test that an existing file is a blob with its path."""
        path = write_blob(driver, "abcdef")

        blob = driver.blob("abcdef")

        assert isinstance(blob, LocalBlob)
        assert blob.local_path() == str(path)
        assert driver.exists("abcdef") is True

    def test_directory_is_not_a_blob(self, driver):
        """Test that a directory at the key is not a blob."""
        (driver.base_path / partitioned_key("abcdef")).mkdir(parents=True)
        assert driver.blob("abcdef") is None

    def test_blob_is_idempotent(self, driver):
        """Test that repeated lookups return the same path."""
        write_blob(driver, "abcdef")

        first = driver.blob("abcdef")
        second = driver.blob("abcdef")

        assert first.local_path() == second.local_path()

    def test_download_urls_not_applicable(self, driver):
        """Test that local blobs have no download URLs."""
        write_blob(driver, "abcdef")
        blob = driver.blob("abcdef")

        with pytest.raises(BlobOperationNotApplicable) as exc_info:
            blob.internal_download_url()
        assert exc_info.value.code == ErrorCode.OPERATION_NOT_APPLICABLE

        with pytest.raises(BlobOperationNotApplicable):
            blob.public_download_url()


class TestLocalKeyContainment:
    """Tests that keys stay inside the client's directory."""

    def test_parent_traversal_not_found(self, tmp_path):
        """Test that a key climbing out of local_root does not find the file."""
        outside = tmp_path / "outside" / "dr" / "op" / "droplet-guid"
        outside.parent.mkdir(parents=True)
        outside.write_bytes(b"bits")
        driver = LocalBlobstoreClient("cc-packages", tmp_path / "root")

        assert driver.blob(".././outside/dr/op/droplet-guid") is None
        assert driver.exists(".././outside/dr/op/droplet-guid") is False

    def test_sibling_directory_not_found(self, tmp_path):
        """Test that a key cannot reach another artifact class's directory."""
        droplets = LocalBlobstoreClient("cc-droplets", tmp_path)
        write_blob(droplets, "abcdef")
        packages = LocalBlobstoreClient("cc-packages", tmp_path)

        assert droplets.blob("abcdef") is not None
        assert packages.blob("../cc-droplets/ab/cd/abcdef") is None

    def test_absolute_key_not_found(self, tmp_path):
        """Test that a key starting with a slash is not joined as an absolute path."""
        target = tmp_path / "etc" / "passwd"
        target.parent.mkdir()
        target.write_bytes(b"root")
        driver = LocalBlobstoreClient("cc-packages", tmp_path / "root")

        assert driver.blob(str(target)) is None

    def test_dotted_key_inside_directory_found(self, driver):
        """Test that dots inside a key that stays in the directory are fine."""
        write_blob(driver, "ab.cd.tgz")

        assert driver.blob("ab.cd.tgz").key == "ab.cd.tgz"
