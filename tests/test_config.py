"""
Unit tests for connection configuration and logging setup
"""

import base64
import json
import logging

import pytest

from oci_storage_sdk.config import (
    ConnectionConfig,
    StorageTier,
    load_connection_from_dict,
    load_connection_from_env,
    load_connection_from_file,
    validate_fingerprint,
)
from oci_storage_sdk.crypto import EnvironmentKeyProvider, FileKeyProvider, InlineKeyProvider
from oci_storage_sdk.exceptions import ConfigurationError, SignerConfigurationInvalid
from oci_storage_sdk.logging_config import SDK_LOGGER_NAME, LoggingSettings, configure_logging
from oci_storage_sdk.storage import ObjectStorageClient, create_client

from .conftest import TENANCY_ID, USER_ID


@pytest.fixture
def connection_dict(key_file, fingerprint):
    return {
        "tenancy_id": TENANCY_ID,
        "user_id": USER_ID,
        "key_fingerprint": fingerprint,
        "key_path": str(key_file),
        "namespace": "testns",
        "region": "us-phoenix-1",
        "bucket": "uploads",
    }


class TestStorageTier:
    """Test storage tier parsing"""

    @pytest.mark.parametrize("value,expected", [
        ("Standard", StorageTier.STANDARD),
        ("standard", StorageTier.STANDARD),
        ("InfrequentAccess", StorageTier.INFREQUENT_ACCESS),
        ("infrequent-access", StorageTier.INFREQUENT_ACCESS),
        ("ARCHIVE", StorageTier.ARCHIVE),
        (None, StorageTier.STANDARD),
        ("", StorageTier.STANDARD),
    ])
    def test_from_string(self, value, expected):
        """Tier names are matched case-insensitively"""
        assert StorageTier.from_string(value) is expected

    def test_unknown_tier(self):
        """Unknown names are an error, not a silent default"""
        with pytest.raises(ConfigurationError, match="Invalid storage tier"):
            StorageTier.from_string("Cold")


class TestConnectionConfig:
    """Test connection config validation"""

    def test_defaults(self):
        """Defaults follow the documented values"""
        config = ConnectionConfig(namespace="ns", region="us-ashburn-1", bucket="b")

        assert config.timeout == 30.0
        assert config.connect_timeout == 10.0
        assert config.retry_attempts == 3
        assert config.temporary_url_default_expiry == 3600
        assert config.temporary_url_max_expiry == 86400
        assert config.storage_tier is StorageTier.STANDARD
        assert config.bucket_uri == "https://objectstorage.us-ashburn-1.oraclecloud.com/n/ns/b/b"

    def test_custom_endpoint(self):
        """A custom endpoint replaces the regional host"""
        config = ConnectionConfig(namespace="ns", region="r1", bucket="b", endpoint="http://localhost:8080/")
        assert config.bucket_uri == "http://localhost:8080/n/ns/b/b"

    @pytest.mark.parametrize("field", ["namespace", "region", "bucket"])
    def test_required_fields(self, field):
        """Namespace, region and bucket are required"""
        values = {"namespace": "ns", "region": "r1", "bucket": "b", field: ""}
        with pytest.raises(ConfigurationError, match=field):
            ConnectionConfig(**values)

    def test_invalid_region(self):
        """Regions are lowercase identifiers"""
        with pytest.raises(ConfigurationError, match="Invalid region format"):
            ConnectionConfig(namespace="ns", region="US East", bucket="b")

    def test_default_expiry_above_max(self):
        """The default temporary URL expiry cannot exceed the maximum"""
        with pytest.raises(ConfigurationError, match="default expiry"):
            ConnectionConfig(
                namespace="ns", region="r1", bucket="b",
                temporary_url_default_expiry=7200, temporary_url_max_expiry=3600,
            )

    def test_fingerprint_validation(self, fingerprint):
        """Fingerprints are 16 hex pairs"""
        assert validate_fingerprint(fingerprint)
        assert validate_fingerprint(fingerprint.upper())
        assert not validate_fingerprint("aa:bb")
        assert not validate_fingerprint(None)


class TestLoadFromDict:
    """Test loading connections from dictionaries"""

    def test_minimal(self, connection_dict):
        """A minimal document loads with defaults"""
        settings = load_connection_from_dict(connection_dict)

        assert settings.config.bucket == "uploads"
        assert settings.config.region == "us-phoenix-1"
        assert isinstance(settings.identity.key_provider, FileKeyProvider)
        assert settings.logging == LoggingSettings()

    def test_full_document(self, connection_dict):
        """Nested sections and units are applied"""
        connection_dict.update({
            "storage_tier": "Archive",
            "timeout": "60",
            "connect_timeout": 5,
            "retry_attempts": "5",
            "retry_delay": 250,
            "temporary_url": {"default_expiry": 600, "max_expiry": 7200},
            "logging": {"enabled": "true", "level": "debug"},
            "url_path_prefix": "/tenant-1/",
        })

        settings = load_connection_from_dict(connection_dict)
        config = settings.config

        assert config.storage_tier is StorageTier.ARCHIVE
        assert config.timeout == 60.0
        assert config.connect_timeout == 5.0
        assert config.retry_attempts == 5
        assert config.retry_delay == 0.25
        assert config.temporary_url_default_expiry == 600
        assert config.temporary_url_max_expiry == 7200
        assert config.prefix == "/tenant-1/"
        assert settings.logging == LoggingSettings(enabled=True, level="debug")

    def test_inline_and_base64_keys(self, connection_dict, private_pem):
        """Inline key sources are supported"""
        del connection_dict["key_path"]

        inline = dict(connection_dict, private_key=private_pem.decode("ascii"))
        assert isinstance(load_connection_from_dict(inline).identity.key_provider, InlineKeyProvider)

        encoded = dict(connection_dict, private_key_base64=base64.b64encode(private_pem).decode("ascii"))
        assert load_connection_from_dict(encoded).identity.key_provider.validate()

    def test_missing_key_source(self, connection_dict):
        """A connection needs some key source"""
        del connection_dict["key_path"]
        with pytest.raises(ConfigurationError, match="No private key configured"):
            load_connection_from_dict(connection_dict)

    def test_invalid_fingerprint(self, connection_dict):
        """Malformed fingerprints fail at load time"""
        connection_dict["key_fingerprint"] = "12:34"
        with pytest.raises(SignerConfigurationInvalid):
            load_connection_from_dict(connection_dict)

    def test_invalid_number(self, connection_dict):
        """Non-numeric values are configuration errors"""
        connection_dict["timeout"] = "soon"
        with pytest.raises(ConfigurationError, match="timeout"):
            load_connection_from_dict(connection_dict)

    def test_invalid_log_level(self, connection_dict):
        """Unknown log levels are rejected"""
        connection_dict["logging"] = {"level": "chatty"}
        with pytest.raises(ConfigurationError, match="Invalid log level"):
            load_connection_from_dict(connection_dict)


class TestLoadFromEnv:
    """Test loading connections from environment variables"""

    def test_env_variables(self, key_file, fingerprint):
        """OCI_* variables map onto the connection"""
        environ = {
            "OCI_TENANCY_ID": TENANCY_ID,
            "OCI_USER_ID": USER_ID,
            "OCI_KEY_FINGERPRINT": fingerprint,
            "OCI_KEY_PATH": str(key_file),
            "OCI_NAMESPACE": "testns",
            "OCI_REGION": "eu-frankfurt-1",
            "OCI_BUCKET": "media",
            "OCI_STORAGE_TIER": "InfrequentAccess",
            "OCI_RETRY_DELAY": "1500",
            "OCI_TEMP_URL_EXPIRY": "900",
            "OCI_URL_PATH_PREFIX": "app/uploads",
            "OCI_LOGGING_ENABLED": "1",
            "OCI_LOG_LEVEL": "warning",
        }

        settings = load_connection_from_env(environ)

        assert settings.config.region == "eu-frankfurt-1"
        assert settings.config.storage_tier is StorageTier.INFREQUENT_ACCESS
        assert settings.config.retry_delay == 1.5
        assert settings.config.temporary_url_default_expiry == 900
        assert settings.config.prefix == "app/uploads"
        assert settings.logging.enabled is True
        assert settings.logging.level == "warning"

    def test_private_key_variable(self, private_pem, fingerprint):
        """Without a key path the key is read from OCI_PRIVATE_KEY"""
        environ = {
            "OCI_TENANCY_ID": TENANCY_ID,
            "OCI_USER_ID": USER_ID,
            "OCI_KEY_FINGERPRINT": fingerprint,
            "OCI_PRIVATE_KEY": private_pem.decode("ascii"),
            "OCI_NAMESPACE": "testns",
            "OCI_REGION": "r1",
            "OCI_BUCKET": "b",
        }

        provider = load_connection_from_env(environ).identity.key_provider
        assert isinstance(provider, EnvironmentKeyProvider)
        assert provider.resolve().pem == private_pem

    def test_custom_prefix(self, key_file, fingerprint):
        """A different variable prefix selects another connection"""
        environ = {
            "OCI_PROD_TENANCY_ID": TENANCY_ID,
            "OCI_PROD_USER_ID": USER_ID,
            "OCI_PROD_KEY_FINGERPRINT": fingerprint,
            "OCI_PROD_KEY_PATH": str(key_file),
            "OCI_PROD_NAMESPACE": "prodns",
            "OCI_PROD_REGION": "r1",
            "OCI_PROD_BUCKET": "prod",
        }
        assert load_connection_from_env(environ, prefix="OCI_PROD_").config.namespace == "prodns"

    def test_missing_variables(self):
        """An empty environment is a configuration error"""
        with pytest.raises(ConfigurationError):
            load_connection_from_env({})


class TestLoadFromFile:
    """Test loading connections from JSON files"""

    def test_single_connection(self, tmp_path, connection_dict):
        """A file may hold one connection document"""
        path = tmp_path / "oci.json"
        path.write_text(json.dumps(connection_dict))

        assert load_connection_from_file(path).config.bucket == "uploads"

    def test_named_connections(self, tmp_path, connection_dict):
        """Named connections fall back to the file's default"""
        production = dict(connection_dict, bucket="prod-bucket")
        path = tmp_path / "oci.json"
        path.write_text(json.dumps({
            "default": "main",
            "connections": {"main": connection_dict, "production": production},
        }))

        assert load_connection_from_file(path).config.bucket == "uploads"
        assert load_connection_from_file(path, "production").config.bucket == "prod-bucket"

    def test_unknown_connection(self, tmp_path, connection_dict):
        """Unknown connection names are reported"""
        path = tmp_path / "oci.json"
        path.write_text(json.dumps({"connections": {"default": connection_dict}}))

        with pytest.raises(ConfigurationError, match="Connection 'staging' not found") as exc_info:
            load_connection_from_file(path, "staging")
        assert exc_info.value.details["available"] == ["default"]

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error"""
        with pytest.raises(ConfigurationError, match="Failed to read configuration file"):
            load_connection_from_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Malformed JSON is a configuration error"""
        path = tmp_path / "oci.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Failed to parse configuration JSON"):
            load_connection_from_file(path)


class TestCreateClient:
    """Test building clients from settings"""

    def test_create_client(self, connection_dict, fake_session):
        """create_client wires config and identity"""
        settings = load_connection_from_dict(connection_dict)

        client = create_client(settings, session=fake_session)

        assert isinstance(client, ObjectStorageClient)
        assert client.config is settings.config
        assert client.session is fake_session


class TestLoggingConfig:
    """Test SDK logging setup"""

    def teardown_method(self):
        configure_logging(LoggingSettings())

    def test_disabled_uses_null_handler(self):
        """Disabled logging only installs a NullHandler"""
        logger = configure_logging(LoggingSettings(enabled=False))

        sdk_handlers = [h for h in logger.handlers if getattr(h, "_oci_storage_sdk", False)]
        assert len(sdk_handlers) == 1
        assert isinstance(sdk_handlers[0], logging.NullHandler)

    def test_enabled_sets_level(self):
        """Enabled logging attaches a stream handler at the configured level"""
        logger = configure_logging(LoggingSettings(enabled=True, level="debug"))

        assert logger.name == SDK_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    def test_reconfigure_replaces_handler(self):
        """Configuring twice does not stack handlers"""
        configure_logging(LoggingSettings(enabled=True))
        logger = configure_logging(LoggingSettings(enabled=True))

        sdk_handlers = [h for h in logger.handlers if getattr(h, "_oci_storage_sdk", False)]
        assert len(sdk_handlers) == 1
