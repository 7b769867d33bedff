"""
Utility functions for request signing
"""

import time
from email.utils import formatdate
from typing import Dict, Optional
from urllib.parse import urlsplit

from ..exceptions import SigningError


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an RFC 1123 date in GMT.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Date such as ``Sun, 18 Oct 2026 17:50:00 GMT``
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def normalize_header_name(name: str) -> str:
    """Normalize header name to lowercase for consistent processing."""
    return name.strip().lower()


def parse_url(url: str) -> Dict[str, str]:
    """
    Parse URL to extract components needed for signing.

    Returns:
        dict: ``origin``, ``host``, ``pathname``, ``search`` and ``target``
            (pathname + search, exactly as it goes on the wire)

    Raises:
        SigningError: If URL format is invalid
    """
    parsed = urlsplit(url)

    if not parsed.scheme or not parsed.netloc:
        raise SigningError(f"Invalid URL format: {url}", "INVALID_URL", details={"url": url})

    if parsed.scheme not in ('http', 'https'):
        raise SigningError(
            f"Unsupported URL scheme: {parsed.scheme}",
            "INVALID_URL",
            details={"url": url, "scheme": parsed.scheme}
        )

    pathname = parsed.path or "/"
    search = f"?{parsed.query}" if parsed.query else ""

    return {
        "origin": f"{parsed.scheme}://{parsed.netloc}",
        "host": parsed.netloc,
        "pathname": pathname,
        "search": search,
        "target": pathname + search,
    }
