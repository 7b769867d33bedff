"""
Caller-driven cancellation for client operations
"""

import threading
import time
from typing import Optional

from ..exceptions import OperationCancelled


class CancellationToken:
    """
    Cancellation signal with an optional deadline.

    ``cancel()`` may be called from any thread. The client checks the token
    before every attempt and waits on it between retries, so a cancelled
    operation stops at the next attempt boundary.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds from now after which the token counts as cancelled
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """
        Sleep for up to ``seconds``, waking early on cancellation.

        Returns:
            bool: True if the token was cancelled while waiting
        """
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
            return True
        self._event.wait(seconds)
        return self.cancelled

    def raise_if_cancelled(self, operation: Optional[str] = None, path: Optional[str] = None) -> None:
        if self.cancelled:
            reason = "cancelled" if self._event.is_set() else "deadline exceeded"
            raise OperationCancelled(f"Operation {reason}", operation=operation, path=path)
