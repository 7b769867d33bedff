"""
Path prefixing for namespaced buckets

Maps logical object paths, as callers see them, onto physical object names
under a configured prefix, and back.
"""

from typing import Optional

SEPARATOR = "/"


class PathPrefixer:
    """
    Joins and strips a fixed path prefix.

    ``strip(apply(p)) == p`` holds for every relative logical path ``p``.
    With no prefix configured both directions are the identity.
    """

    def __init__(self, prefix: Optional[str] = None):
        self._prefix = (prefix or "").strip(SEPARATOR)

    @property
    def prefix(self) -> str:
        return self._prefix

    def is_enabled(self) -> bool:
        return self._prefix != ""

    def apply(self, path: str) -> str:
        """Logical path to physical object name."""
        if not self.is_enabled():
            return path
        return f"{self._prefix}{SEPARATOR}{path.lstrip(SEPARATOR)}"

    def strip(self, path: str) -> str:
        """Physical object name to logical path; unrelated names pass through."""
        if not self.is_enabled():
            return path
        head = self._prefix + SEPARATOR
        if path.startswith(head):
            return path[len(head):]
        return path

    def __repr__(self) -> str:
        return f"PathPrefixer(prefix='{self._prefix}')"
