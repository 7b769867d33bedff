"""
HTTP signature generation with RSA-SHA256

This module provides the signer that turns a signing context, a connection
identity and private key material into the ``authorization`` header value
expected by OCI.
"""

import base64
import logging
import time
from typing import TYPE_CHECKING, Callable, Optional, Union

from ..crypto.key_provider import KeyMaterial
from ..crypto.rsa_keys import sign_rsa_sha256
from ..exceptions import KeyInvalid, OciStorageSDKError, SignatureGenerationFailed
from .canonical_request import build_canonical_request
from .digest import calculate_body_digest
from .types import (
    CanonicalRequest,
    HeaderDict,
    HttpMethod,
    RequestBody,
    Signature,
    SigningContext,
)
from .utils import format_http_date, parse_url

if TYPE_CHECKING:
    from ..config.settings import ConnectionIdentity

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
JSON_CONTENT_TYPE = "application/json"


def default_content_type(body: RequestBody) -> str:
    """Guess a content type for a body that came without one."""
    if isinstance(body, str):
        stripped = body.strip()
        if (stripped.startswith('{') and stripped.endswith('}')) or \
           (stripped.startswith('[') and stripped.endswith(']')):
            return JSON_CONTENT_TYPE
    return DEFAULT_CONTENT_TYPE


class RequestSigner:
    """
    Stateless request signer.

    A single instance can be shared between threads; it holds nothing but
    the clock used to stamp the ``date`` header.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Initialize the signer.

        Args:
            clock: Returns the current Unix time; defaults to ``time.time``
        """
        self.clock = clock or time.time

    def sign(self, context: SigningContext, identity: "ConnectionIdentity", key: KeyMaterial) -> Signature:
        """
        Sign a request context.

        Identity fields are checked before any cryptographic work.

        Raises:
            SignerConfigurationInvalid: If identity or headers are incomplete
            SignatureGenerationFailed: If the key cannot be parsed or the signing call fails
        """
        identity.validate()
        canonical = build_canonical_request(context)
        return self._sign(canonical, identity, key)

    def sign_canonical(self, canonical: CanonicalRequest, identity: "ConnectionIdentity",
                       key: KeyMaterial) -> Signature:
        """Sign an already built canonical request."""
        identity.validate()
        return self._sign(canonical, identity, key)

    def _sign(self, canonical: CanonicalRequest, identity: "ConnectionIdentity",
              key: KeyMaterial) -> Signature:
        try:
            private_key = key.load_private_key()
        except KeyInvalid as e:
            raise SignatureGenerationFailed(
                f"Request signing failed: {e.message}",
                details={"original_error": str(e), "key_error_code": e.error_code}
            ) from e

        try:
            raw = sign_rsa_sha256(private_key, canonical.string)
        except OciStorageSDKError:
            raise
        except Exception as e:
            raise SignatureGenerationFailed(
                f"Request signing failed: {e}",
                details={"original_error": str(e)}
            ) from e

        return Signature(
            value=base64.b64encode(raw).decode("ascii"),
            key_id=identity.key_id,
            header_names=canonical.header_names,
        )

    def build_context(
        self,
        method: Union[str, HttpMethod],
        url: str,
        body: RequestBody = None,
        content_type: Optional[str] = None,
        timestamp: Optional[float] = None,
    ) -> SigningContext:
        """
        Create the signing context for a request.

        Body headers are only produced for body-bearing methods; a PUT or
        POST without a body signs the digest of the empty body.
        """
        method = HttpMethod.parse(method)
        url_parts = parse_url(url)
        date = format_http_date(self.clock() if timestamp is None else timestamp)

        if not method.has_body:
            return SigningContext(method=method, target=url_parts["target"], host=url_parts["host"], date=date)

        return SigningContext(
            method=method,
            target=url_parts["target"],
            host=url_parts["host"],
            date=date,
            content_type=content_type or default_content_type(body),
            body_digest=calculate_body_digest(body),
        )

    def sign_request(
        self,
        method: Union[str, HttpMethod],
        url: str,
        identity: "ConnectionIdentity",
        key: KeyMaterial,
        body: RequestBody = None,
        content_type: Optional[str] = None,
        timestamp: Optional[float] = None,
    ) -> HeaderDict:
        """
        Sign a request and return every header that must be sent with it.

        Returns:
            dict: Lowercase header names to values, including ``authorization``
        """
        context = self.build_context(method, url, body, content_type, timestamp)
        signature = self.sign(context, identity, key)

        headers = context.header_values()
        headers["authorization"] = signature.authorization_header
        logger.debug(f"Signed {context.method.value} {context.target} with headers: {' '.join(signature.header_names)}")
        return headers
