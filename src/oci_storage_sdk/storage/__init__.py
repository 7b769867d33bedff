"""
Object storage client, path prefixing, retry policy and response types
"""

from .client import (
    ObjectStorageClient,
    create_client,
    USER_AGENT,
)
from .prefixer import PathPrefixer
from .retry import (
    FailureClass,
    RetryDecision,
    RetryPolicy,
    classify,
    classify_exception,
    classify_status,
)
from .cancellation import CancellationToken
from .types import (
    ObjectMetadata,
    ObjectSummary,
    ObjectListing,
    TemporaryUrl,
    TemporaryUrlOptions,
)

__all__ = [
    'ObjectStorageClient',
    'create_client',
    'USER_AGENT',
    'PathPrefixer',
    'FailureClass',
    'RetryDecision',
    'RetryPolicy',
    'classify',
    'classify_exception',
    'classify_status',
    'CancellationToken',
    'ObjectMetadata',
    'ObjectSummary',
    'ObjectListing',
    'TemporaryUrl',
    'TemporaryUrlOptions',
]
