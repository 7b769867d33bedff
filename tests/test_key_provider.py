"""
Unit tests for private key providers and RSA key helpers
"""

import base64
import re
from unittest.mock import patch

import pytest

from oci_storage_sdk.crypto import (
    CallableKeyProvider,
    EnvironmentKeyProvider,
    FileKeyProvider,
    InlineKeyProvider,
    KeyProvider,
    compute_fingerprint,
    generate_rsa_key_pair,
    load_private_key,
)
from oci_storage_sdk.exceptions import KeyInvalid, KeyMaterialError, KeyNotFound, KeyUnreadable

NOT_PEM = b"this is not a key"


class TestFileKeyProvider:
    """Test loading keys from disk"""

    def test_resolves_existing_file(self, key_file, private_pem):
        """The file content becomes the key material"""
        material = FileKeyProvider(key_file).resolve()
        assert material.pem == private_pem
        assert material.source == f"file:{key_file}"

    def test_validate_parses_key(self, key_file):
        """Validation parses the key eagerly"""
        assert FileKeyProvider(str(key_file)).validate() is True

    def test_missing_file(self, tmp_path):
        """A missing file raises KeyNotFound"""
        with pytest.raises(KeyNotFound, match="not found"):
            FileKeyProvider(tmp_path / "nope.pem").resolve()

    def test_unreadable_file(self, key_file):
        """A file without read permission raises KeyUnreadable"""
        with patch("oci_storage_sdk.crypto.key_provider.os.access", return_value=False):
            with pytest.raises(KeyUnreadable, match="not readable"):
                FileKeyProvider(key_file).resolve()

    def test_non_pem_file(self, tmp_path):
        """A file without PEM markers raises KeyInvalid"""
        path = tmp_path / "key.pem"
        path.write_bytes(NOT_PEM)
        with pytest.raises(KeyInvalid, match="PEM format"):
            FileKeyProvider(path).resolve()

    def test_errors_share_base_class(self, tmp_path):
        """All key failures are KeyMaterialError"""
        with pytest.raises(KeyMaterialError):
            FileKeyProvider(tmp_path / "nope.pem").resolve()

    def test_satisfies_protocol(self, key_file):
        """Providers are structural KeyProviders"""
        assert isinstance(FileKeyProvider(key_file), KeyProvider)


class TestInlineKeyProvider:
    """Test inline and base64 key content"""

    def test_resolves_str_content(self, private_pem):
        """String content is encoded as UTF-8"""
        material = InlineKeyProvider(private_pem.decode("ascii")).resolve()
        assert material.pem == private_pem

    def test_empty_content(self):
        """Empty content raises KeyInvalid"""
        with pytest.raises(KeyInvalid, match="empty"):
            InlineKeyProvider("").resolve()

    def test_from_base64(self, private_pem):
        """Base64-encoded PEM is decoded"""
        provider = InlineKeyProvider.from_base64(base64.b64encode(private_pem).decode("ascii"))
        assert provider.resolve().pem == private_pem

    def test_from_invalid_base64(self):
        """Invalid base64 raises KeyInvalid"""
        with pytest.raises(KeyInvalid, match="base64"):
            InlineKeyProvider.from_base64("@@@not base64@@@")

    def test_repr_hides_content(self, private_pem):
        """The key never appears in repr"""
        assert "PRIVATE" not in repr(InlineKeyProvider(private_pem))


class TestEnvironmentKeyProvider:
    """Test keys read from environment variables"""

    def test_reads_variable(self, private_pem):
        """The variable is read at resolve time"""
        environ = {"OCI_PRIVATE_KEY": private_pem.decode("ascii")}
        material = EnvironmentKeyProvider(environ=environ).resolve()
        assert material.pem == private_pem
        assert material.source == "env:OCI_PRIVATE_KEY"

    def test_base64_variable(self, private_pem):
        """Base64 variables are decoded"""
        environ = {"KEY_B64": base64.b64encode(private_pem).decode("ascii")}
        provider = EnvironmentKeyProvider("KEY_B64", base64_encoded=True, environ=environ)
        assert provider.validate() is True

    def test_missing_variable(self):
        """An unset variable raises KeyNotFound"""
        with pytest.raises(KeyNotFound, match="OCI_PRIVATE_KEY"):
            EnvironmentKeyProvider(environ={}).resolve()


class TestCallableKeyProvider:
    """Test custom key loaders"""

    def test_loader_called(self, private_pem):
        """The loader supplies the PEM"""
        provider = CallableKeyProvider(lambda: private_pem, name="vault")
        material = provider.resolve()
        assert material.pem == private_pem
        assert material.source == "vault"

    def test_loader_returning_none(self):
        """A loader with no key raises KeyNotFound"""
        with pytest.raises(KeyNotFound):
            CallableKeyProvider(lambda: None).resolve()


class TestRsaKeys:
    """Test key generation and fingerprints"""

    def test_fingerprint_format(self, rsa_key_pair):
        """Fingerprints are 16 colon-separated lowercase hex pairs"""
        fingerprint = compute_fingerprint(rsa_key_pair[1])
        assert re.match(r'^[0-9a-f]{2}(:[0-9a-f]{2}){15}$', fingerprint)

    def test_fingerprint_from_private_key_matches(self, rsa_key_pair):
        """Public key derived from the private key has the same fingerprint"""
        private_key = load_private_key(rsa_key_pair[0])
        assert compute_fingerprint(private_key.public_key()) == compute_fingerprint(rsa_key_pair[1])

    def test_encrypted_key_roundtrip(self):
        """Encrypted keys need their passphrase"""
        private_pem, _ = generate_rsa_key_pair(passphrase=b"secret")

        assert load_private_key(private_pem, b"secret") is not None
        with pytest.raises(KeyInvalid):
            load_private_key(private_pem)
