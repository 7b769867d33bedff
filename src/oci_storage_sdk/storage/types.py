"""
Decoded object storage responses
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Mapping, Optional

USER_METADATA_PREFIX = "opc-meta-"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 1123 or ISO 8601 timestamp as returned by the API."""
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ObjectMetadata:
    """Object metadata from a HEAD request"""
    path: str
    size: int
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None
    storage_tier: Optional[str] = None
    archival_state: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_headers(cls, path: str, headers: Mapping[str, str]) -> "ObjectMetadata":
        lowered = {k.lower(): v for k, v in headers.items()}
        return cls(
            path=path,
            size=int(lowered.get("content-length") or 0),
            last_modified=parse_timestamp(lowered.get("last-modified")),
            content_type=lowered.get("content-type"),
            etag=lowered.get("etag"),
            storage_tier=lowered.get("storage-tier"),
            archival_state=lowered.get("archival-state"),
            metadata={
                k[len(USER_METADATA_PREFIX):]: v
                for k, v in lowered.items()
                if k.startswith(USER_METADATA_PREFIX)
            },
        )


@dataclass(frozen=True)
class ObjectSummary:
    """One entry of a list response"""
    path: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    storage_tier: Optional[str] = None

    @classmethod
    def from_api(cls, path: str, data: Mapping[str, Any]) -> "ObjectSummary":
        size = data.get("size")
        return cls(
            path=path,
            size=int(size) if size is not None else None,
            last_modified=parse_timestamp(data.get("timeModified") or data.get("timeCreated")),
            etag=data.get("etag"),
            storage_tier=data.get("storageTier"),
        )


@dataclass
class ObjectListing:
    """Objects and common prefixes under a path"""
    objects: List[ObjectSummary] = field(default_factory=list)
    prefixes: List[str] = field(default_factory=list)

    @property
    def paths(self) -> List[str]:
        return [obj.path for obj in self.objects]


@dataclass(frozen=True)
class TemporaryUrl:
    """A pre-signed, time-bounded object URL"""
    path: str
    url: str
    expires_at: datetime

    @property
    def expires_timestamp(self) -> int:
        return int(self.expires_at.timestamp())

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class TemporaryUrlOptions:
    """
    Extra parameters for a temporary URL

    Attributes:
        response_content_type: Content type the service should answer with
        response_content_disposition: Content disposition, e.g. ``attachment``
    """
    response_content_type: Optional[str] = None
    response_content_disposition: Optional[str] = None

    def query_params(self) -> Dict[str, str]:
        params = {}
        if self.response_content_type:
            params["httpResponseContentType"] = self.response_content_type
        if self.response_content_disposition:
            params["httpResponseContentDisposition"] = self.response_content_disposition
        return params
