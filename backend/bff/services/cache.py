"""In-memory result cache with absolute TTL expiry.

Entries are purged lazily: an expired entry is dropped the next time it is
looked up, there is no background sweep and no size bound. The cache lives
as long as the process and is never persisted.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour
KEY_DELIMITER = ":"


@dataclass
class CacheEntry:
    value: Any
    inserted_at: float


def cache_key(operation: str, *fields: str) -> str:
    """Build a deterministic, case-insensitive key, e.g. ``words:fruits:spanish``."""
    return KEY_DELIMITER.join([operation, *(f.lower() for f in fields)])


class ResultCache:
    """Process-wide key → value store shared by every handler.

    *clock* must be monotonic-ish and return seconds; tests pass a fake one.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
