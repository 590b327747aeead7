import pytest

from rategenius.core.retry import RetryPolicy


class Flaky:
    def __init__(self, failures, exc_type=ConnectionError):
        self.failures = failures
        self.exc_type = exc_type
        self.calls = 0

    def __call__(self, value):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc_type(f"boom {self.calls}")
        return value


def test_succeeds_after_transient_failures_with_backoff():
    sleeps = []
    policy = RetryPolicy(retries=2, initial_delay=1.0, multiplier=1.5, sleep=sleeps.append)
    fn = Flaky(failures=2)

    assert policy.call(fn, "ok") == "ok"
    assert fn.calls == 3
    assert sleeps == [1.0, 1.5]


def test_reraises_after_exhausting_retries():
    sleeps = []
    policy = RetryPolicy(retries=2, sleep=sleeps.append)
    fn = Flaky(failures=10)

    with pytest.raises(ConnectionError, match="boom 3"):
        policy.call(fn, "ok")
    assert fn.calls == 3
    assert len(sleeps) == 2


def test_non_retryable_errors_propagate_immediately():
    sleeps = []
    policy = RetryPolicy(retries=2, retry_on=(ConnectionError,), sleep=sleeps.append)
    fn = Flaky(failures=1, exc_type=KeyError)

    with pytest.raises(KeyError):
        policy.call(fn, "ok")
    assert fn.calls == 1
    assert sleeps == []


def test_delay_for_grows_multiplicatively():
    policy = RetryPolicy(initial_delay=2.0, multiplier=1.5)
    assert policy.delay_for(1) == 2.0
    assert policy.delay_for(2) == 3.0
    assert policy.delay_for(3) == 4.5
