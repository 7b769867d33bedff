"""
Key material and RSA primitives for OCI request signing
"""

from .key_provider import (
    KeyMaterial,
    KeyProvider,
    FileKeyProvider,
    InlineKeyProvider,
    EnvironmentKeyProvider,
    CallableKeyProvider,
)
from .rsa_keys import (
    load_private_key,
    load_public_key,
    generate_rsa_key_pair,
    compute_fingerprint,
    sign_rsa_sha256,
    verify_rsa_sha256,
)

__all__ = [
    'KeyMaterial',
    'KeyProvider',
    'FileKeyProvider',
    'InlineKeyProvider',
    'EnvironmentKeyProvider',
    'CallableKeyProvider',
    'load_private_key',
    'load_public_key',
    'generate_rsa_key_pair',
    'compute_fingerprint',
    'sign_rsa_sha256',
    'verify_rsa_sha256',
]
