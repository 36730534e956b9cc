"""
Shared Test Fixtures
"""

import pytest

from fakes import FakeBlobstores, FakeClient


@pytest.fixture
def fake_blobstores():
    """Empty remote fake blobstores."""
    return FakeBlobstores(
        package=FakeClient("packages"),
        droplet=FakeClient("droplets"),
        buildpack_cache=FakeClient("buildpack_cache"),
        buildpack=FakeClient("buildpacks"),
    )


@pytest.fixture
def local_fake_blobstores():
    """Empty local fake blobstores."""
    return FakeBlobstores(
        package=FakeClient("packages", local=True),
        droplet=FakeClient("droplets", local=True),
        buildpack_cache=FakeClient("buildpack_cache", local=True),
        buildpack=FakeClient("buildpacks", local=True),
    )


@pytest.fixture
def s3_params():
    """Remote connection parameters with static test credentials."""
    return {
        "region": "us-east-1",
        "aws_access_key_id": "AKIDEXAMPLE",
        "aws_secret_access_key": "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    }
