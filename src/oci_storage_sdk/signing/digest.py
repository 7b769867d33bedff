"""
Body digest calculation for body-bearing requests
"""

import base64
import hashlib

from .types import BodyDigest, RequestBody


def body_bytes(body: RequestBody) -> bytes:
    """Return the raw bytes of a request body; str is UTF-8 encoded."""
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise TypeError(f"Unsupported body type: {type(body).__name__}")


def calculate_body_digest(body: RequestBody) -> BodyDigest:
    """
    Calculate the SHA-256 digest and byte length of a request body.

    Args:
        body: Request body; None digests the empty body

    Returns:
        BodyDigest: Base64 digest and content length in bytes
    """
    raw = body_bytes(body)
    digest = base64.b64encode(hashlib.sha256(raw).digest()).decode("ascii")
    return BodyDigest(sha256=digest, content_length=len(raw))
