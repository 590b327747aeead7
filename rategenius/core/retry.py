"""Bounded retry with multiplicative backoff for external calls."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry ``retry_on`` failures up to ``retries`` extra times.

    The first retry waits ``initial_delay`` seconds and each following one
    waits ``multiplier`` times longer. Anything outside ``retry_on`` is
    raised straight away.
    """

    retries: int = 2
    initial_delay: float = 1.0
    multiplier: float = 1.5
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    sleep: Callable[[float], None] = time.sleep

    def delay_for(self, attempt: int) -> float:
        return self.initial_delay * (self.multiplier ** (attempt - 1))

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return fn(*args, **kwargs)
            except self.retry_on as exc:
                if attempt > self.retries:
                    logger.error("%s exhausted %s attempts: %s", _describe(fn), attempt, exc)
                    raise
                delay = self.delay_for(attempt)
                logger.warning(
                    "%s failed (attempt %s/%s), retrying in %.2fs: %s",
                    _describe(fn),
                    attempt,
                    self.retries + 1,
                    delay,
                    exc,
                )
                self.sleep(delay)


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
