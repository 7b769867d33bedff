"""
RSA key handling for OCI request signing

This module wraps the cryptography package for the operations the signer
and the setup tooling need: PEM parsing, key generation, API key
fingerprints and RSA-SHA256 signatures.
"""

import hashlib
from typing import Optional, Tuple, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..exceptions import KeyInvalid, SignatureGenerationFailed

# OCI API keys must be RSA, at least 2048 bits
DEFAULT_KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537

PEM_BEGIN_MARKER = b"-----BEGIN"
PEM_END_MARKER = b"-----END"


def has_pem_markers(content: bytes) -> bool:
    """Check that content carries both PEM armor lines."""
    return PEM_BEGIN_MARKER in content and PEM_END_MARKER in content


def load_private_key(pem: bytes, passphrase: Optional[bytes] = None):
    """
    Parse a PEM encoded private key.

    Args:
        pem: PEM bytes
        passphrase: Optional passphrase for encrypted keys

    Returns:
        The parsed private key object

    Raises:
        KeyInvalid: If content is not PEM or cannot be parsed as a private key
    """
    if not pem:
        raise KeyInvalid("Private key content is empty")

    if not has_pem_markers(pem):
        raise KeyInvalid("Private key does not appear to be in PEM format")

    try:
        return serialization.load_pem_private_key(pem, password=passphrase)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyInvalid(
            f"Private key is not valid or cannot be parsed: {e}",
            details={"original_error": str(e)}
        ) from e


def generate_rsa_key_pair(key_size: int = DEFAULT_KEY_SIZE,
                          passphrase: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    """
    Generate an RSA key pair suitable for an OCI API key.

    Args:
        key_size: Modulus size in bits
        passphrase: Optional passphrase used to encrypt the private key

    Returns:
        tuple: (private key PEM, public key PEM)
    """
    private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)

    if passphrase:
        encryption = serialization.BestAvailableEncryption(passphrase)
    else:
        encryption = serialization.NoEncryption()

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def public_key_from_private(private_key):
    """Return the public half of a parsed private key."""
    return private_key.public_key()


def load_public_key(pem: bytes):
    """Parse a PEM encoded public key."""
    try:
        return serialization.load_pem_public_key(pem)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyInvalid(f"Public key is not valid: {e}") from e


def compute_fingerprint(public_key) -> str:
    """
    Compute the OCI API key fingerprint of a public key.

    The fingerprint is the MD5 digest of the DER encoded SubjectPublicKeyInfo,
    rendered as 16 colon-separated lowercase hex pairs.

    Args:
        public_key: Parsed public key, or PEM bytes

    Returns:
        str: Fingerprint such as ``12:34:...:ef``
    """
    if isinstance(public_key, (bytes, bytearray)):
        public_key = load_public_key(bytes(public_key))

    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    digest = hashlib.md5(der).hexdigest()
    return ":".join(digest[i:i + 2] for i in range(0, len(digest), 2))


def sign_rsa_sha256(private_key, data: Union[str, bytes]) -> bytes:
    """
    Sign data with RSA PKCS#1 v1.5 and SHA-256.

    Args:
        private_key: Parsed RSA private key
        data: Data to sign (str is UTF-8 encoded)

    Returns:
        bytes: Raw signature

    Raises:
        SignatureGenerationFailed: If the key is not RSA or signing fails
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SignatureGenerationFailed(
            f"Unsupported key type for rsa-sha256: {type(private_key).__name__}",
            details={"key_type": type(private_key).__name__}
        )

    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SignatureGenerationFailed(
            f"RSA signing failed: {e}",
            details={"original_error": str(e)}
        ) from e


def verify_rsa_sha256(public_key, signature: bytes, data: Union[str, bytes]) -> bool:
    """
    Verify an RSA-SHA256 signature.

    Returns:
        bool: True if the signature matches the data
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        return False
