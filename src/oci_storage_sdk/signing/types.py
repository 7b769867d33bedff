"""
Type definitions for request signing

This module provides the value objects that flow through the signing
pipeline: the per-request signing context, the body digest, the canonical
request and the resulting signature.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

SIGNATURE_VERSION = "1"


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    HEAD = "HEAD"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    PUT = "PUT"
    POST = "POST"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: Union[str, "HttpMethod"]) -> "HttpMethod":
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value}")

    @property
    def has_body(self) -> bool:
        """Whether the method carries a body and therefore signs it."""
        return self in BODY_METHODS


BODY_METHODS = frozenset({HttpMethod.PUT, HttpMethod.POST, HttpMethod.PATCH})


class SignatureAlgorithm(str, Enum):
    """Signature algorithm types"""
    RSA_SHA256 = "rsa-sha256"


@dataclass(frozen=True)
class BodyDigest:
    """
    Digest of a request body

    Attributes:
        sha256: Base64-encoded SHA-256 of the raw body bytes
        content_length: Body length in bytes
    """
    sha256: str
    content_length: int


@dataclass(frozen=True)
class SigningContext:
    """
    Everything about one request that takes part in its signature

    Attributes:
        method: HTTP method
        target: Absolute request path, including the query string
        host: Host header value
        date: RFC 1123 date header value
        content_type: Content type of the body (body-bearing methods only)
        body_digest: Body digest (body-bearing methods only)
    """
    method: HttpMethod
    target: str
    host: str
    date: str
    content_type: Optional[str] = None
    body_digest: Optional[BodyDigest] = None

    def __post_init__(self):
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        if not self.target.startswith("/"):
            raise ValueError(f"Request target must be an absolute path: {self.target}")

    def header_values(self) -> Dict[str, str]:
        """Header values keyed by lowercase header name."""
        values = {"host": self.host, "date": self.date}
        if self.body_digest is not None:
            values["x-content-sha256"] = self.body_digest.sha256
            values["content-length"] = str(self.body_digest.content_length)
        if self.content_type is not None:
            values["content-type"] = self.content_type
        return values


@dataclass(frozen=True)
class CanonicalRequest:
    """The exact string that gets signed and the header names it covers."""
    string: str
    header_names: Tuple[str, ...]


@dataclass(frozen=True)
class Signature:
    """
    A generated request signature

    Attributes:
        value: Base64-encoded RSA-SHA256 signature
        key_id: ``tenancy/user/fingerprint`` key identifier
        header_names: Signed header names in canonical order
        algorithm: Signature algorithm
        version: Signature scheme version
    """
    value: str
    key_id: str
    header_names: Tuple[str, ...]
    algorithm: SignatureAlgorithm = SignatureAlgorithm.RSA_SHA256
    version: str = SIGNATURE_VERSION

    @property
    def authorization_header(self) -> str:
        """Value for the ``authorization`` request header."""
        return (
            f'Signature version="{self.version}",'
            f'keyId="{self.key_id}",'
            f'algorithm="{self.algorithm.value}",'
            f'headers="{" ".join(self.header_names)}",'
            f'signature="{self.value}"'
        )


HeaderDict = Dict[str, str]
RequestBody = Union[str, bytes, bytearray, None]
