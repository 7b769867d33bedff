"""
OCI Storage SDK - Request Signing Module

HTTP signature implementation with RSA-SHA256. This module builds canonical
request strings, body digests and ``authorization`` headers for OCI's
signature-protected API.
"""

from .types import (
    HttpMethod,
    SignatureAlgorithm,
    BodyDigest,
    SigningContext,
    CanonicalRequest,
    Signature,
    SIGNATURE_VERSION,
)

from .canonical_request import (
    CanonicalRequestBuilder,
    build_canonical_string,
    build_canonical_request,
    signed_header_names,
    format_request_target,
    BODYLESS_HEADERS,
    BODY_HEADERS,
    PRESIGNED_HEADERS,
)

from .digest import (
    calculate_body_digest,
    body_bytes,
)

from .signer import (
    RequestSigner,
    default_content_type,
)

from .utils import (
    format_http_date,
    normalize_header_name,
    parse_url,
)

# Public API exports
__all__ = [
    # Types
    'HttpMethod',
    'SignatureAlgorithm',
    'BodyDigest',
    'SigningContext',
    'CanonicalRequest',
    'Signature',
    'SIGNATURE_VERSION',
    # Canonical request
    'CanonicalRequestBuilder',
    'build_canonical_string',
    'build_canonical_request',
    'signed_header_names',
    'format_request_target',
    'BODYLESS_HEADERS',
    'BODY_HEADERS',
    'PRESIGNED_HEADERS',
    # Digest
    'calculate_body_digest',
    'body_bytes',
    # Signer
    'RequestSigner',
    'default_content_type',
    # Utilities
    'format_http_date',
    'normalize_header_name',
    'parse_url',
]
