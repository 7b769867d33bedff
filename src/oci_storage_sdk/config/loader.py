"""
Connection configuration loading

Builds validated ``ConnectionSettings`` from a dictionary, from environment
variables or from a JSON file. A connection document looks like::

    {
        "tenancy_id": "ocid1.tenancy...",
        "user_id": "ocid1.user...",
        "key_fingerprint": "aa:bb:...",
        "key_path": "~/.oci/oci_api_key.pem",
        "namespace": "mynamespace",
        "region": "us-phoenix-1",
        "bucket": "uploads",
        "storage_tier": "Standard",
        "timeout": 30,
        "connect_timeout": 10,
        "retry_attempts": 3,
        "retry_delay": 1000,
        "temporary_url": {"default_expiry": 3600, "max_expiry": 86400},
        "logging": {"enabled": false, "level": "info"},
        "url_path_prefix": "app/uploads"
    }

``retry_delay`` is in milliseconds; every other duration is in seconds.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union

from ..crypto.key_provider import (
    EnvironmentKeyProvider,
    FileKeyProvider,
    InlineKeyProvider,
    KeyProvider,
)
from ..exceptions import ConfigurationError
from ..logging_config import LoggingSettings
from .settings import ConnectionConfig, ConnectionIdentity, StorageTier

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "OCI_"
DEFAULT_CONNECTION = "default"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConnectionSettings(NamedTuple):
    """Everything needed to build a client"""
    config: ConnectionConfig
    identity: ConnectionIdentity
    logging: LoggingSettings


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for '{name}': {value}")


def _parse_number(value: Any, name: str, cast=float):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid numeric value for '{name}': {value}",
            details={"field": name, "value": value}
        )


def _key_provider_from_dict(data: Mapping[str, Any]) -> KeyProvider:
    """Pick the key source: a file path, inline PEM, or base64 PEM."""
    passphrase = data.get("passphrase")

    if data.get("key_path"):
        return FileKeyProvider(os.path.expanduser(str(data["key_path"])), passphrase)
    if data.get("private_key"):
        return InlineKeyProvider(data["private_key"], passphrase)
    if data.get("private_key_base64"):
        return InlineKeyProvider.from_base64(data["private_key_base64"], passphrase)

    raise ConfigurationError(
        "No private key configured: set key_path, private_key or private_key_base64",
        error_code="MISSING_KEY_SOURCE"
    )


def load_connection_from_dict(data: Mapping[str, Any],
                              key_provider: Optional[KeyProvider] = None) -> ConnectionSettings:
    """
    Build connection settings from a connection dictionary.

    Args:
        data: Connection document (see module docstring)
        key_provider: Overrides the key source named in ``data``

    Returns:
        ConnectionSettings: Validated configuration, identity and logging settings

    Raises:
        ConfigurationError: If a value is missing or invalid
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError("Connection configuration must be a mapping")

    temporary_url = data.get("temporary_url") or {}
    logging_data = data.get("logging") or {}

    config_kwargs: Dict[str, Any] = {
        "namespace": data.get("namespace") or "",
        "region": data.get("region") or "",
        "bucket": data.get("bucket") or "",
        "prefix": data.get("url_path_prefix") or data.get("prefix") or None,
        "storage_tier": StorageTier.from_string(data.get("storage_tier")),
        "endpoint": data.get("endpoint") or None,
    }

    if "timeout" in data:
        config_kwargs["timeout"] = _parse_number(data["timeout"], "timeout")
    if "connect_timeout" in data:
        config_kwargs["connect_timeout"] = _parse_number(data["connect_timeout"], "connect_timeout")
    if "retry_attempts" in data:
        config_kwargs["retry_attempts"] = _parse_number(data["retry_attempts"], "retry_attempts", int)
    if "retry_delay" in data:
        config_kwargs["retry_delay"] = _parse_number(data["retry_delay"], "retry_delay") / 1000.0
    if "retry_max_delay" in data:
        config_kwargs["retry_max_delay"] = _parse_number(data["retry_max_delay"], "retry_max_delay")
    if "default_expiry" in temporary_url:
        config_kwargs["temporary_url_default_expiry"] = _parse_number(
            temporary_url["default_expiry"], "temporary_url.default_expiry", int
        )
    if "max_expiry" in temporary_url:
        config_kwargs["temporary_url_max_expiry"] = _parse_number(
            temporary_url["max_expiry"], "temporary_url.max_expiry", int
        )
    if "verify_ssl" in data:
        config_kwargs["verify_ssl"] = _parse_bool(data["verify_ssl"], "verify_ssl")

    config = ConnectionConfig(**config_kwargs)

    identity = ConnectionIdentity(
        tenancy_id=data.get("tenancy_id") or "",
        user_id=data.get("user_id") or "",
        fingerprint=data.get("key_fingerprint") or data.get("fingerprint") or "",
        key_provider=key_provider or _key_provider_from_dict(data),
    )
    identity.validate()

    logging_settings = LoggingSettings(
        enabled=_parse_bool(logging_data.get("enabled", False), "logging.enabled"),
        level=str(logging_data.get("level") or "info"),
    )

    logger.debug(f"Loaded connection configuration for bucket {config.bucket} in {config.region}")
    return ConnectionSettings(config, identity, logging_settings)


def load_connection_from_env(environ: Optional[Mapping[str, str]] = None,
                             prefix: str = DEFAULT_ENV_PREFIX) -> ConnectionSettings:
    """
    Build connection settings from environment variables.

    Reads ``{prefix}TENANCY_ID``, ``{prefix}USER_ID``, ``{prefix}KEY_FINGERPRINT``,
    ``{prefix}KEY_PATH`` (or ``{prefix}PRIVATE_KEY`` / ``{prefix}PRIVATE_KEY_BASE64``),
    ``{prefix}NAMESPACE``, ``{prefix}REGION``, ``{prefix}BUCKET`` and the optional
    tuning variables.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(prefix + name)
        return value if value not in (None, "") else None

    data: Dict[str, Any] = {
        "tenancy_id": get("TENANCY_ID"),
        "user_id": get("USER_ID"),
        "key_fingerprint": get("KEY_FINGERPRINT"),
        "key_path": get("KEY_PATH"),
        "namespace": get("NAMESPACE"),
        "region": get("REGION"),
        "bucket": get("BUCKET"),
        "storage_tier": get("STORAGE_TIER"),
        "url_path_prefix": get("URL_PATH_PREFIX"),
        "endpoint": get("ENDPOINT"),
        "passphrase": get("KEY_PASSPHRASE"),
    }

    optional = {
        "timeout": "TIMEOUT",
        "connect_timeout": "CONNECT_TIMEOUT",
        "retry_attempts": "RETRY_ATTEMPTS",
        "retry_delay": "RETRY_DELAY",
        "verify_ssl": "VERIFY_SSL",
    }
    for key, name in optional.items():
        value = get(name)
        if value is not None:
            data[key] = value

    temporary_url = {}
    if get("TEMP_URL_EXPIRY") is not None:
        temporary_url["default_expiry"] = get("TEMP_URL_EXPIRY")
    if get("TEMP_URL_MAX_EXPIRY") is not None:
        temporary_url["max_expiry"] = get("TEMP_URL_MAX_EXPIRY")
    data["temporary_url"] = temporary_url

    data["logging"] = {
        "enabled": get("LOGGING_ENABLED") or False,
        "level": get("LOG_LEVEL") or "info",
    }

    key_provider = None
    if not data["key_path"]:
        if get("PRIVATE_KEY") is not None:
            key_provider = EnvironmentKeyProvider(prefix + "PRIVATE_KEY", passphrase=data["passphrase"], environ=env)
        elif get("PRIVATE_KEY_BASE64") is not None:
            key_provider = EnvironmentKeyProvider(
                prefix + "PRIVATE_KEY_BASE64", base64_encoded=True, passphrase=data["passphrase"], environ=env
            )

    return load_connection_from_dict(data, key_provider=key_provider)


def load_connection_from_file(path: Union[str, Path], connection: Optional[str] = None) -> ConnectionSettings:
    """
    Load connection settings from a JSON file.

    The file holds either a single connection document or
    ``{"default": "<name>", "connections": {"<name>": {...}, ...}}``.

    Args:
        path: JSON file path
        connection: Connection name; the file's default when omitted
    """
    file_path = Path(path).expanduser()
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}", error_code="FILE_ERROR",
            details={"path": str(file_path)}
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Failed to parse configuration JSON: {e}", error_code="PARSE_ERROR",
            details={"path": str(file_path)}
        ) from e

    if isinstance(data, dict) and "connections" in data:
        connections = data["connections"] or {}
        name = connection or data.get("default") or DEFAULT_CONNECTION
        if name not in connections:
            raise ConfigurationError(
                f"Connection '{name}' not found",
                error_code="CONNECTION_NOT_FOUND",
                details={"available": sorted(connections)}
            )
        data = connections[name]
    elif connection is not None:
        raise ConfigurationError(
            f"Connection '{connection}' requested but the file defines a single connection",
            error_code="CONNECTION_NOT_FOUND"
        )

    return load_connection_from_dict(data)
