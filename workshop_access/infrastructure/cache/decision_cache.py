"""In-process TTL cache for permission decisions.

Entries expire lazily on read; there is no background sweep. Stale
entries are overwritten by the next write for the same key. No locking:
every operation is a single dict access between awaits, and concurrent
writers for one key computed the same inputs, so last write wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from workshop_access.core.constants import CACHE_KEY_SEP, DEFAULT_PERMISSION_CACHE_TTL
from workshop_access.domain.value_objects import PermissionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Cached decision and the monotonic time it was written."""

    result: PermissionResult
    written_at: float


class DecisionCache:
    """Key → PermissionResult memo with a fixed TTL (seconds).

    clock is injectable for tests; it must be monotonic.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_PERMISSION_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds!r}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> PermissionResult | None:
        """Return cached result if written less than ttl_seconds ago, else None."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Decision cache MISS: %s", key)
            return None
        if self._clock() - entry.written_at >= self.ttl_seconds:
            logger.debug("Decision cache STALE: %s", key)
            return None
        logger.debug("Decision cache HIT: %s", key)
        return entry.result

    def set(self, key: str, result: PermissionResult) -> None:
        """Store result unconditionally, stamped with the current clock."""
        self._entries[key] = CacheEntry(result=result, written_at=self._clock())

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with prefix. Returns count dropped."""
        doomed = [key for key in self._entries if key.startswith(prefix)]
        return self._drop(doomed)

    def delete_segment(self, segment: str) -> int:
        """Drop every key having segment as one of its components."""
        fragment = f"{CACHE_KEY_SEP}{segment}{CACHE_KEY_SEP}"
        doomed = [
            key
            for key in self._entries
            if fragment in f"{CACHE_KEY_SEP}{key}{CACHE_KEY_SEP}"
        ]
        return self._drop(doomed)

    def clear(self) -> int:
        """Drop every entry. Returns count dropped."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def _drop(self, keys: list[str]) -> int:
        for key in keys:
            self._entries.pop(key, None)
        return len(keys)
