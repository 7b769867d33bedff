"""
Retry policy for object storage requests

The policy is a pure function of the attempt number and the class of the
last failure. It keeps no state between calls, so one instance is shared by
every request a client makes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests

TRANSIENT_STATUS_CODES = frozenset({408, 429})


class FailureClass(str, Enum):
    """Whether a failed attempt can succeed when repeated"""
    TRANSIENT = "transient"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of a retry decision"""
    retry: bool
    delay: float = 0.0

    @classmethod
    def give_up(cls) -> "RetryDecision":
        return cls(retry=False)

    @classmethod
    def retry_after(cls, delay: float) -> "RetryDecision":
        return cls(retry=True, delay=delay)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff retry policy

    Attributes:
        max_attempts: Number of retries allowed after the first attempt
        base_delay: Delay in seconds before the first retry
        max_delay: Upper bound for any single delay
        multiplier: Growth factor between consecutive delays
    """
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    multiplier: float = 2.0

    def __post_init__(self):
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1")

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given failed attempt (1-based)."""
        return min(self.base_delay * (self.multiplier ** (attempt - 1)), self.max_delay)

    def decide(self, attempt: int, failure: FailureClass) -> RetryDecision:
        """
        Decide whether to retry after a failed attempt.

        Args:
            attempt: Number of the attempt that just failed, starting at 1
            failure: Classification of the failure

        Returns:
            RetryDecision: Retry with a delay, or give up
        """
        if attempt < 1:
            raise ValueError("attempt numbers start at 1")

        if failure is FailureClass.PERMANENT:
            return RetryDecision.give_up()

        if attempt > self.max_attempts:
            return RetryDecision.give_up()

        return RetryDecision.retry_after(self.delay_for(attempt))


def classify_status(status_code: int) -> FailureClass:
    """Classify an HTTP error status: throttling, timeouts and 5xx are transient."""
    if status_code in TRANSIENT_STATUS_CODES or 500 <= status_code <= 599:
        return FailureClass.TRANSIENT
    return FailureClass.PERMANENT


def classify_exception(error: BaseException) -> FailureClass:
    """Classify a transport error raised by requests."""
    if isinstance(error, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return FailureClass.TRANSIENT
    if isinstance(error, requests.exceptions.ChunkedEncodingError):
        return FailureClass.TRANSIENT
    return FailureClass.PERMANENT


def classify(status_code: Optional[int] = None, error: Optional[BaseException] = None) -> FailureClass:
    """Classify a failed attempt from either its status code or its exception."""
    if error is not None:
        return classify_exception(error)
    if status_code is not None:
        return classify_status(status_code)
    return FailureClass.PERMANENT
