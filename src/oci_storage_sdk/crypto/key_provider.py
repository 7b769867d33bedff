"""
Private key sources for request signing

A key provider produces ``KeyMaterial`` on demand. The signer never cares
where the PEM came from: a file on disk, an inline string, an environment
variable or any custom callable such as a secrets-manager lookup.
"""

import base64
import binascii
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Protocol, Union, runtime_checkable

from ..exceptions import KeyInvalid, KeyNotFound, KeyUnreadable
from .rsa_keys import has_pem_markers, load_private_key

logger = logging.getLogger(__name__)

PemSource = Union[str, bytes]


def _to_bytes(value: Optional[PemSource]) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


@dataclass(frozen=True)
class KeyMaterial:
    """
    Resolved private key material.

    Attributes:
        pem: PEM encoded private key bytes
        passphrase: Optional passphrase protecting the key
        source: Human readable description of where the key came from
    """
    pem: bytes
    passphrase: Optional[bytes] = None
    source: str = "inline"
    _parsed: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.pem, bytes):
            object.__setattr__(self, "pem", _to_bytes(self.pem))
        if self.passphrase is not None and not isinstance(self.passphrase, bytes):
            object.__setattr__(self, "passphrase", _to_bytes(self.passphrase))

    def load_private_key(self):
        """
        Parse the PEM into a private key object, caching the result.

        Raises:
            KeyInvalid: If the PEM cannot be parsed
        """
        if self._parsed is None:
            object.__setattr__(self, "_parsed", load_private_key(self.pem, self.passphrase))
        return self._parsed


@runtime_checkable
class KeyProvider(Protocol):
    """Capability to produce usable private key material."""

    def resolve(self) -> KeyMaterial:
        """Return key material or raise a KeyMaterialError."""
        ...

    def validate(self) -> bool:
        """Eagerly check that the key can be resolved and parsed."""
        ...


def _validate_material(material: KeyMaterial) -> bool:
    material.load_private_key()
    return True


class FileKeyProvider:
    """Reads the private key from a file on every resolve."""

    def __init__(self, path: Union[str, Path], passphrase: Optional[PemSource] = None):
        self.path = Path(path).expanduser()
        self.passphrase = _to_bytes(passphrase)

    def resolve(self) -> KeyMaterial:
        if not self.path.exists():
            raise KeyNotFound(
                f"Private key file not found at path: {self.path}. "
                "Please ensure the file exists and is readable.",
                details={"key_path": str(self.path)}
            )

        if not os.access(self.path, os.R_OK):
            raise KeyUnreadable(
                f"Private key file exists but is not readable at path: {self.path}. "
                "Please check file permissions.",
                details={"key_path": str(self.path)}
            )

        try:
            content = self.path.read_bytes()
        except OSError as e:
            raise KeyUnreadable(
                f"Private key file could not be read at path: {self.path}: {e}",
                details={"key_path": str(self.path), "original_error": str(e)}
            ) from e

        if not has_pem_markers(content):
            raise KeyInvalid(
                f"Private key file does not appear to be in PEM format: {self.path}",
                details={"key_path": str(self.path)}
            )

        logger.debug(f"Loaded private key from {self.path}")
        return KeyMaterial(pem=content, passphrase=self.passphrase, source=f"file:{self.path}")

    def validate(self) -> bool:
        return _validate_material(self.resolve())

    def __repr__(self) -> str:
        return f"FileKeyProvider(path='{self.path}')"


class InlineKeyProvider:
    """Holds the key content directly, e.g. injected by a deployment system."""

    def __init__(self, content: PemSource, passphrase: Optional[PemSource] = None):
        self._content = _to_bytes(content) or b""
        self.passphrase = _to_bytes(passphrase)

    @classmethod
    def from_base64(cls, encoded: PemSource, passphrase: Optional[PemSource] = None) -> "InlineKeyProvider":
        """
        Create a provider from base64-encoded PEM content.

        Useful when the key is stored in an environment that mangles newlines.

        Raises:
            KeyInvalid: If the value is not valid base64
        """
        raw = _to_bytes(encoded) or b""
        if not raw.strip():
            raise KeyInvalid("Base64-encoded private key is empty")
        try:
            decoded = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as e:
            raise KeyInvalid(f"Invalid base64-encoded private key: {e}") from e
        return cls(decoded, passphrase)

    def resolve(self) -> KeyMaterial:
        if not self._content.strip():
            raise KeyInvalid("Private key content is empty")

        if not has_pem_markers(self._content):
            raise KeyInvalid("Private key does not appear to be in PEM format")

        return KeyMaterial(pem=self._content, passphrase=self.passphrase, source="inline")

    def validate(self) -> bool:
        return _validate_material(self.resolve())

    def __repr__(self) -> str:
        return "InlineKeyProvider(content=<redacted>)"


class EnvironmentKeyProvider:
    """Reads the key from an environment variable at resolve time."""

    def __init__(
        self,
        variable: str = "OCI_PRIVATE_KEY",
        base64_encoded: bool = False,
        passphrase: Optional[PemSource] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.variable = variable
        self.base64_encoded = base64_encoded
        self.passphrase = _to_bytes(passphrase)
        self._environ = environ

    def _inline(self) -> InlineKeyProvider:
        environ = self._environ if self._environ is not None else os.environ
        value = environ.get(self.variable)
        if value is None:
            raise KeyNotFound(
                f"Environment variable {self.variable} is not set",
                details={"variable": self.variable}
            )
        if self.base64_encoded:
            return InlineKeyProvider.from_base64(value, self.passphrase)
        return InlineKeyProvider(value, self.passphrase)

    def resolve(self) -> KeyMaterial:
        material = self._inline().resolve()
        return KeyMaterial(pem=material.pem, passphrase=material.passphrase, source=f"env:{self.variable}")

    def validate(self) -> bool:
        return _validate_material(self.resolve())

    def __repr__(self) -> str:
        return f"EnvironmentKeyProvider(variable='{self.variable}', base64_encoded={self.base64_encoded})"


class CallableKeyProvider:
    """Delegates to a user supplied loader, e.g. a secrets-manager lookup."""

    def __init__(self, loader: Callable[[], PemSource], passphrase: Optional[PemSource] = None,
                 name: str = "custom"):
        self.loader = loader
        self.passphrase = _to_bytes(passphrase)
        self.name = name

    def resolve(self) -> KeyMaterial:
        content = self.loader()
        if content is None:
            raise KeyNotFound(f"Key loader '{self.name}' returned no key")
        material = InlineKeyProvider(content, self.passphrase).resolve()
        return KeyMaterial(pem=material.pem, passphrase=material.passphrase, source=self.name)

    def validate(self) -> bool:
        return _validate_material(self.resolve())

    def __repr__(self) -> str:
        return f"CallableKeyProvider(name='{self.name}')"
