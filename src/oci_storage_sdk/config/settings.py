"""
Connection settings for OCI Object Storage

Immutable configuration objects handed to the client at construction time.
Everything here is validated once, when the objects are built, so that
requests never re-check configuration.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..crypto.key_provider import KeyProvider
from ..exceptions import ConfigurationError, SignerConfigurationInvalid

FINGERPRINT_PATTERN = re.compile(r'^[0-9a-f]{2}(:[0-9a-f]{2}){15}$', re.IGNORECASE)
REGION_PATTERN = re.compile(r'^[a-z0-9-]+$')

DEFAULT_ENDPOINT_TEMPLATE = "https://objectstorage.{region}.oraclecloud.com"


class StorageTier(str, Enum):
    """Object storage tiers"""
    STANDARD = "Standard"
    INFREQUENT_ACCESS = "InfrequentAccess"
    ARCHIVE = "Archive"

    @classmethod
    def default(cls) -> "StorageTier":
        return cls.STANDARD

    @classmethod
    def from_string(cls, value: Optional[str]) -> "StorageTier":
        """
        Parse a tier name case-insensitively.

        Raises:
            ConfigurationError: If the value names no known tier
        """
        if value is None or value == "":
            return cls.default()
        if isinstance(value, StorageTier):
            return value

        normalized = str(value).replace("_", "").replace("-", "").lower()
        for tier in cls:
            if tier.value.lower() == normalized:
                return tier

        raise ConfigurationError(
            f"Invalid storage tier: {value}",
            details={"storage_tier": value, "allowed": [t.value for t in cls]}
        )


def validate_fingerprint(fingerprint: Optional[str]) -> bool:
    """Check a key fingerprint is 16 colon-separated hex byte pairs."""
    if not isinstance(fingerprint, str):
        return False
    return bool(FINGERPRINT_PATTERN.match(fingerprint))


@dataclass(frozen=True)
class ConnectionIdentity:
    """
    Who is signing requests.

    Attributes:
        tenancy_id: Tenancy OCID
        user_id: User OCID
        fingerprint: Fingerprint of the API key registered for the user
        key_provider: Source of the matching private key
    """
    tenancy_id: str
    user_id: str
    fingerprint: str
    key_provider: KeyProvider

    @property
    def key_id(self) -> str:
        """Composite key identifier used in every signature."""
        return f"{self.tenancy_id}/{self.user_id}/{self.fingerprint}"

    def validate(self) -> None:
        """
        Check identity fields without touching key material.

        Raises:
            SignerConfigurationInvalid: If a field is missing or malformed
        """
        missing = [
            name for name in ("tenancy_id", "user_id", "fingerprint")
            if not getattr(self, name)
        ]
        if self.key_provider is None:
            missing.append("key_provider")

        if missing:
            raise SignerConfigurationInvalid(
                f"Missing required signing configuration: {', '.join(missing)}",
                details={"missing": missing}
            )

        if not validate_fingerprint(self.fingerprint):
            raise SignerConfigurationInvalid(
                f"Invalid key fingerprint format: {self.fingerprint}",
                details={"fingerprint": self.fingerprint}
            )

    def __repr__(self) -> str:
        return (
            f"ConnectionIdentity(tenancy_id='{self.tenancy_id}', user_id='{self.user_id}', "
            f"fingerprint='{self.fingerprint}', key_provider={self.key_provider!r})"
        )


@dataclass(frozen=True)
class ConnectionConfig:
    """Where and how the client talks to object storage."""
    namespace: str
    region: str
    bucket: str
    prefix: Optional[str] = None
    storage_tier: StorageTier = StorageTier.STANDARD
    timeout: float = 30.0
    connect_timeout: float = 10.0
    retry_attempts: int = 3
    retry_delay: float = 1.0
    retry_max_delay: float = 30.0
    temporary_url_default_expiry: int = 3600
    temporary_url_max_expiry: int = 86400
    endpoint: Optional[str] = None
    verify_ssl: bool = True

    def __post_init__(self):
        """Validate connection configuration."""
        for name in ("namespace", "region", "bucket"):
            if not getattr(self, name):
                raise ConfigurationError(f"Required OCI configuration '{name}' is missing or empty")

        if not REGION_PATTERN.match(self.region):
            raise ConfigurationError(f"Invalid region format: {self.region}")

        if not isinstance(self.storage_tier, StorageTier):
            object.__setattr__(self, "storage_tier", StorageTier.from_string(self.storage_tier))

        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ConfigurationError("Timeout must be positive")

        if self.retry_attempts < 0:
            raise ConfigurationError("Retry attempts must be non-negative")

        if self.retry_delay < 0 or self.retry_max_delay < 0:
            raise ConfigurationError("Retry delays must be non-negative")

        if self.temporary_url_max_expiry <= 0:
            raise ConfigurationError("Temporary URL maximum expiry must be positive")

        if not 0 < self.temporary_url_default_expiry <= self.temporary_url_max_expiry:
            raise ConfigurationError(
                "Temporary URL default expiry must be positive and not exceed the maximum expiry",
                details={
                    "default_expiry": self.temporary_url_default_expiry,
                    "max_expiry": self.temporary_url_max_expiry,
                }
            )

        if self.endpoint is not None:
            object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))

    @property
    def host_url(self) -> str:
        """Scheme and host of the object storage endpoint."""
        return self.endpoint or DEFAULT_ENDPOINT_TEMPLATE.format(region=self.region)

    @property
    def bucket_path(self) -> str:
        """Absolute API path of the bucket, without host."""
        return f"/n/{self.namespace}/b/{self.bucket}"

    @property
    def bucket_uri(self) -> str:
        return f"{self.host_url}{self.bucket_path}"

    def summary(self) -> Dict[str, Any]:
        """Non-secret overview of the connection."""
        return {
            "region": self.region,
            "namespace": self.namespace,
            "bucket": self.bucket,
            "storage_tier": self.storage_tier.value,
            "prefix": self.prefix or "",
            "endpoint": self.host_url,
            "retry_attempts": self.retry_attempts,
        }
