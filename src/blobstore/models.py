"""Domain references consumed by the URL generators.

Records owned by the persistence layer; only the attributes used to
derive blob keys are read.
"""

from typing import Optional, Protocol


class DropletRef(Protocol):
    guid: str
    blobstore_key: str


class AppRef(Protocol):
    guid: str
    buildpack_cache_key: str

    @property
    def current_droplet(self) -> Optional[DropletRef]:
        ...


class PackageRef(Protocol):
    guid: str


class BuildpackRef(Protocol):
    key: str
