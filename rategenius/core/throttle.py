"""Per-host request spacing for automated page fetches."""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator

logger = logging.getLogger(__name__)

MIN_INTERVAL_SECONDS = 2.0


class PolitenessThrottle:
    """Keep at least ``min_interval`` seconds between requests to one host.

    Each host gets its own lock so that concurrent workers hitting the same
    site run one at a time, while other hosts proceed untouched.
    """

    def __init__(
        self,
        min_interval: float = MIN_INTERVAL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Dict[str, float] = {}
        self._host_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, host: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._host_locks.get(host)
            if lock is None:
                lock = threading.Lock()
                self._host_locks[host] = lock
            return lock

    @contextmanager
    def hold(self, host: str) -> Iterator[None]:
        """Serialise a whole request to ``host``, retries included.

        The host lock is held from the wait until the body finishes, and the
        timestamp is recorded on exit, so the next caller for the same host
        starts at least ``min_interval`` after this one ends.
        """
        host = host.lower()
        with self._lock_for(host):
            last = self._last_request.get(host)
            if last is not None:
                elapsed = self._clock() - last
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug("Throttling %s for %.2fs", host, delay)
                    self._sleep(delay)
            try:
                yield
            finally:
                self._last_request[host] = self._clock()

    def wait_for_host(self, host: str) -> None:
        with self.hold(host):
            pass
