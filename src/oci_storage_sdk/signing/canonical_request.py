"""
Canonical request construction for HTTP signatures

The canonical string is the newline-joined list of ``name: value`` lines
for the signed headers. The remote service rebuilds the same string from
the request it receives, so ordering, casing and spacing are all part of
the wire contract.
"""

from typing import List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import SignerConfigurationInvalid
from .types import CanonicalRequest, HttpMethod, SigningContext
from .utils import normalize_header_name

REQUEST_TARGET = "(request-target)"

BODYLESS_HEADERS: Tuple[str, ...] = (REQUEST_TARGET, "host", "date")
BODY_HEADERS: Tuple[str, ...] = BODYLESS_HEADERS + ("x-content-sha256", "content-type", "content-length")
# Pre-signed URLs carry no date header; the expiry travels in the request target
PRESIGNED_HEADERS: Tuple[str, ...] = (REQUEST_TARGET, "host")


def signed_header_names(method: Union[str, HttpMethod]) -> Tuple[str, ...]:
    """
    Header names covered by the signature for a method, in signing order.
    """
    if HttpMethod.parse(method).has_body:
        return BODY_HEADERS
    return BODYLESS_HEADERS


def format_request_target(method: Union[str, HttpMethod], target: str) -> str:
    """Lowercase verb, one space, absolute path with query."""
    return f"{HttpMethod.parse(method).value.lower()} {target}"


class CanonicalRequestBuilder:
    """
    Canonical request builder
    """

    def __init__(self, method: Union[str, HttpMethod], target: str, headers: Mapping[str, str],
                 header_names: Optional[Sequence[str]] = None):
        """
        Initialize canonical request builder.

        Args:
            method: HTTP method
            target: Absolute request path, including the query string
            headers: Header values; names are matched case-insensitively
            header_names: Override of the signed header list for this method
        """
        self.method = HttpMethod.parse(method)
        self.target = target
        self.headers = {normalize_header_name(k): v for k, v in headers.items()}
        self.header_names = tuple(header_names) if header_names else signed_header_names(self.method)

    def build(self) -> CanonicalRequest:
        """
        Build the canonical request.

        Returns:
            CanonicalRequest: String to sign and the ordered header names

        Raises:
            SignerConfigurationInvalid: If a required header is missing
        """
        names = self.header_names
        lines: List[str] = []

        for name in names:
            if name == REQUEST_TARGET:
                value = format_request_target(self.method, self.target)
            else:
                value = self.headers.get(name)
                if value is None or value == "":
                    raise SignerConfigurationInvalid(
                        f"Required header not found: {name}",
                        details={"header": name, "available_headers": sorted(self.headers)}
                    )
            lines.append(f"{name}: {value}")

        return CanonicalRequest(string="\n".join(lines), header_names=names)


def build_canonical_string(method: Union[str, HttpMethod], target: str, headers: Mapping[str, str]) -> str:
    """
    Build the canonical string for signing.

    Example:
        >>> build_canonical_string("GET", "/bucket/o/file.txt", {"host": "h", "date": "d"})
        '(request-target): get /bucket/o/file.txt\\nhost: h\\ndate: d'
    """
    return CanonicalRequestBuilder(method, target, headers).build().string


def build_canonical_request(context: SigningContext) -> CanonicalRequest:
    """Build the canonical request for a signing context."""
    return CanonicalRequestBuilder(context.method, context.target, context.header_values()).build()
