"""
Configuration management for the OCI Storage SDK

Immutable connection settings plus loaders for dictionaries, environment
variables and JSON files.
"""

from .settings import (
    ConnectionConfig,
    ConnectionIdentity,
    StorageTier,
    validate_fingerprint,
    FINGERPRINT_PATTERN,
    REGION_PATTERN,
    DEFAULT_ENDPOINT_TEMPLATE,
)
from .loader import (
    ConnectionSettings,
    load_connection_from_dict,
    load_connection_from_env,
    load_connection_from_file,
)

__all__ = [
    'ConnectionConfig',
    'ConnectionIdentity',
    'StorageTier',
    'validate_fingerprint',
    'FINGERPRINT_PATTERN',
    'REGION_PATTERN',
    'DEFAULT_ENDPOINT_TEMPLATE',
    'ConnectionSettings',
    'load_connection_from_dict',
    'load_connection_from_env',
    'load_connection_from_file',
]
