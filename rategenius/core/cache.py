"""In-memory key/value store with per-entry expiry."""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


class TTLCache:
    """Process-wide cache shared by the Places clients and the page scraper.

    Entries expire at an absolute deadline and are dropped the first time a
    read finds them stale. Nothing else evicts, so the store only suits
    processes with a bounded lifetime.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl: float) -> None:
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = (value, expires_at)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            return default
        return value

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            value, expires_at = entry
            if self._clock() > expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return _MISSING
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
