"""
OCI Storage Python SDK
Signed requests and object operations for Oracle Cloud Infrastructure Object Storage
"""

from .version import __version__
from .exceptions import (
    OciStorageSDKError,
    ValidationError,
    ConfigurationError,
    SignerConfigurationInvalid,
    KeyMaterialError,
    KeyNotFound,
    KeyUnreadable,
    KeyInvalid,
    SigningError,
    SignatureGenerationFailed,
    ExpiryPolicyError,
    ExpiryTooLong,
    ExpiryInvalid,
    ServerCommunicationError,
    ObjectNotFound,
    OperationCancelled,
)
from .crypto import (
    KeyMaterial,
    KeyProvider,
    FileKeyProvider,
    InlineKeyProvider,
    EnvironmentKeyProvider,
    CallableKeyProvider,
    generate_rsa_key_pair,
    compute_fingerprint,
)
from .config import (
    ConnectionConfig,
    ConnectionIdentity,
    ConnectionSettings,
    StorageTier,
    load_connection_from_dict,
    load_connection_from_env,
    load_connection_from_file,
)
from .logging_config import LoggingSettings, configure_logging
from .signing import (
    HttpMethod,
    SignatureAlgorithm,
    BodyDigest,
    SigningContext,
    CanonicalRequest,
    Signature,
    RequestSigner,
    build_canonical_string,
    calculate_body_digest,
)
from .storage import (
    ObjectStorageClient,
    create_client,
    PathPrefixer,
    RetryPolicy,
    RetryDecision,
    FailureClass,
    CancellationToken,
    ObjectMetadata,
    ObjectSummary,
    ObjectListing,
    TemporaryUrl,
    TemporaryUrlOptions,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'OciStorageSDKError',
    'ValidationError',
    'ConfigurationError',
    'SignerConfigurationInvalid',
    'KeyMaterialError',
    'KeyNotFound',
    'KeyUnreadable',
    'KeyInvalid',
    'SigningError',
    'SignatureGenerationFailed',
    'ExpiryPolicyError',
    'ExpiryTooLong',
    'ExpiryInvalid',
    'ServerCommunicationError',
    'ObjectNotFound',
    'OperationCancelled',
    # Key material
    'KeyMaterial',
    'KeyProvider',
    'FileKeyProvider',
    'InlineKeyProvider',
    'EnvironmentKeyProvider',
    'CallableKeyProvider',
    'generate_rsa_key_pair',
    'compute_fingerprint',
    # Configuration
    'ConnectionConfig',
    'ConnectionIdentity',
    'ConnectionSettings',
    'StorageTier',
    'load_connection_from_dict',
    'load_connection_from_env',
    'load_connection_from_file',
    'LoggingSettings',
    'configure_logging',
    # Request signing
    'HttpMethod',
    'SignatureAlgorithm',
    'BodyDigest',
    'SigningContext',
    'CanonicalRequest',
    'Signature',
    'RequestSigner',
    'build_canonical_string',
    'calculate_body_digest',
    # Object storage
    'ObjectStorageClient',
    'create_client',
    'PathPrefixer',
    'RetryPolicy',
    'RetryDecision',
    'FailureClass',
    'CancellationToken',
    'ObjectMetadata',
    'ObjectSummary',
    'ObjectListing',
    'TemporaryUrl',
    'TemporaryUrlOptions',
]
