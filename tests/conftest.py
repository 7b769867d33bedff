"""
Shared fixtures for the OCI Storage SDK tests
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from oci_storage_sdk.config import ConnectionConfig, ConnectionIdentity
from oci_storage_sdk.crypto import InlineKeyProvider, compute_fingerprint, generate_rsa_key_pair, load_public_key
from oci_storage_sdk.storage import ObjectStorageClient

from .fakes import FakeObjectStorageSession

TENANCY_ID = "ocid1.tenancy.oc1..aaaatest"
USER_ID = "ocid1.user.oc1..aaaatest"
FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def rsa_key_pair():
    """(private PEM, public PEM); generated once, RSA generation is slow."""
    return generate_rsa_key_pair()


@pytest.fixture(scope="session")
def private_pem(rsa_key_pair):
    return rsa_key_pair[0]


@pytest.fixture(scope="session")
def public_key(rsa_key_pair):
    return load_public_key(rsa_key_pair[1])


@pytest.fixture(scope="session")
def fingerprint(rsa_key_pair):
    return compute_fingerprint(rsa_key_pair[1])


@pytest.fixture
def key_file(tmp_path, private_pem):
    path = tmp_path / "oci_api_key.pem"
    path.write_bytes(private_pem)
    return path


@pytest.fixture
def identity(private_pem, fingerprint):
    return ConnectionIdentity(
        tenancy_id=TENANCY_ID,
        user_id=USER_ID,
        fingerprint=fingerprint,
        key_provider=InlineKeyProvider(private_pem),
    )


@pytest.fixture
def config():
    return ConnectionConfig(
        namespace="testns",
        region="test-region",
        bucket="test-bucket",
        retry_attempts=3,
        retry_delay=0.0,
        retry_max_delay=0.0,
    )


@pytest.fixture
def prefixed_config(config):
    return dataclasses.replace(config, prefix="app/uploads")


@pytest.fixture
def fake_session(public_key):
    return FakeObjectStorageSession(public_key)


@pytest.fixture
def client(config, identity, fake_session):
    return ObjectStorageClient(config, identity, session=fake_session, clock=lambda: FIXED_NOW)


@pytest.fixture
def prefixed_client(prefixed_config, identity, fake_session):
    return ObjectStorageClient(prefixed_config, identity, session=fake_session, clock=lambda: FIXED_NOW)
