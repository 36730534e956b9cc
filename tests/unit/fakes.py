"""
In-memory blobstore clients and domain records for generator and
download tests.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from blobstore.artifacts import ArtifactBlobstores
from blobstore.base import Blob, BlobstoreClient
from blobstore.config import BackendType


class FakeBlob(Blob):
    """Blob with canned URLs."""

    def __init__(self, key: str, directory_key: str, local: bool = False):
        super().__init__(key)
        self._directory_key = directory_key
        self._local = local

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL if self._local else BackendType.REMOTE_OBJECT_STORE

    def internal_download_url(self) -> str:
        if self._local:
            return super().internal_download_url()
        return f"http://internal.blobstore/{self._directory_key}/{self.key}"

    def public_download_url(self) -> str:
        if self._local:
            return super().public_download_url()
        return f"https://public.blobstore/{self._directory_key}/{self.key}?signature=sig"

    def local_path(self) -> str:
        if not self._local:
            return super().local_path()
        return f"/var/blobstore/{self._directory_key}/{self.key}"


class FakeClient(BlobstoreClient):
    """In-memory client recording every lookup."""

    def __init__(self, directory_key: str, keys=(), local: bool = False):
        super().__init__(directory_key)
        self._keys = set(keys)
        self._local = local
        self.lookups: List[str] = []

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL if self._local else BackendType.REMOTE_OBJECT_STORE

    @property
    def local(self) -> bool:
        return self._local

    def add(self, key: str) -> None:
        self._keys.add(key)

    def blob(self, key: str) -> Optional[FakeBlob]:
        self.lookups.append(key)
        if key not in self._keys:
            return None
        return FakeBlob(key, self.directory_key, local=self._local)


@dataclass
class Droplet:
    guid: str
    blobstore_key: Optional[str]


@dataclass
class App:
    guid: str
    buildpack_cache_key: str = ""
    current_droplet: Optional[Droplet] = None


@dataclass
class Package:
    guid: str


@dataclass
class Buildpack:
    key: str


@dataclass
class FakeBlobstores:
    """Named fake clients plus the ArtifactBlobstores built from them."""

    package: FakeClient
    droplet: FakeClient
    buildpack_cache: FakeClient
    buildpack: FakeClient
    blobstores: ArtifactBlobstores = field(init=False)

    def __post_init__(self):
        self.blobstores = ArtifactBlobstores(
            package_blobstore=self.package,
            droplet_blobstore=self.droplet,
            buildpack_cache_blobstore=self.buildpack_cache,
            buildpack_blobstore=self.buildpack,
        )

    def all_lookups(self) -> Dict[str, List[str]]:
        return {
            "package": self.package.lookups,
            "droplet": self.droplet.lookups,
            "buildpack_cache": self.buildpack_cache.lookups,
            "buildpack": self.buildpack.lookups,
        }
