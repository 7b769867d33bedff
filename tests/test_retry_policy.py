"""
Unit tests for the retry policy and failure classification
"""

import pytest
import requests

from oci_storage_sdk.storage import (
    FailureClass,
    RetryDecision,
    RetryPolicy,
    classify,
    classify_exception,
    classify_status,
)


class TestRetryPolicy:
    """Test retry decisions"""

    def test_exponential_backoff(self):
        """Delays grow by the multiplier"""
        policy = RetryPolicy(max_attempts=5, base_delay=1.0, max_delay=60.0)
        assert [policy.delay_for(n) for n in range(1, 5)] == [1.0, 2.0, 4.0, 8.0]

    def test_delay_capped(self):
        """No delay exceeds max_delay"""
        policy = RetryPolicy(max_attempts=10, base_delay=1.0, max_delay=5.0)
        assert policy.delay_for(8) == 5.0

    def test_transient_retried_until_limit(self):
        """Transient failures retry while attempts remain"""
        policy = RetryPolicy(max_attempts=3, base_delay=0.5)

        assert policy.decide(1, FailureClass.TRANSIENT) == RetryDecision(retry=True, delay=0.5)
        assert policy.decide(3, FailureClass.TRANSIENT).retry is True
        assert policy.decide(4, FailureClass.TRANSIENT) == RetryDecision.give_up()

    def test_permanent_never_retried(self):
        """Permanent failures give up immediately"""
        policy = RetryPolicy(max_attempts=3)
        assert policy.decide(1, FailureClass.PERMANENT).retry is False

    def test_zero_attempts(self):
        """max_attempts=0 disables retries"""
        assert RetryPolicy(max_attempts=0).decide(1, FailureClass.TRANSIENT).retry is False

    def test_attempt_numbers_start_at_one(self):
        """Attempt 0 is a programming error"""
        with pytest.raises(ValueError):
            RetryPolicy().decide(0, FailureClass.TRANSIENT)

    def test_policy_is_pure(self):
        """The same question always gets the same answer"""
        policy = RetryPolicy()
        assert policy.decide(2, FailureClass.TRANSIENT) == policy.decide(2, FailureClass.TRANSIENT)

    def test_invalid_parameters(self):
        """Negative settings are rejected"""
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=-1)
        with pytest.raises(ValueError):
            RetryPolicy(base_delay=-1.0)
        with pytest.raises(ValueError):
            RetryPolicy(multiplier=0.5)


class TestFailureClassification:
    """Test mapping of responses and errors to failure classes"""

    @pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
    def test_transient_statuses(self, status):
        """Throttling, timeouts and server errors are transient"""
        assert classify_status(status) is FailureClass.TRANSIENT

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 412])
    def test_permanent_statuses(self, status):
        """Other client errors are permanent"""
        assert classify_status(status) is FailureClass.PERMANENT

    @pytest.mark.parametrize("error", [
        requests.exceptions.ConnectTimeout(),
        requests.exceptions.ReadTimeout(),
        requests.exceptions.ConnectionError(),
        requests.exceptions.ChunkedEncodingError(),
    ])
    def test_transient_exceptions(self, error):
        """Transport failures are transient"""
        assert classify_exception(error) is FailureClass.TRANSIENT

    def test_permanent_exceptions(self):
        """Malformed requests are permanent"""
        assert classify_exception(requests.exceptions.InvalidURL()) is FailureClass.PERMANENT

    def test_classify_prefers_exception(self):
        """An exception decides over a status"""
        assert classify(500, requests.exceptions.InvalidURL()) is FailureClass.PERMANENT
        assert classify(503) is FailureClass.TRANSIENT
        assert classify() is FailureClass.PERMANENT
