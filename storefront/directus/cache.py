"""
Short-lived cache for raw catalog API responses.
Responses are revalidated (refetched) once their window expires.
"""

from datetime import datetime, timedelta
from typing import Any, Hashable, Optional

from config.logging_config import LoggerMixin


class ResponseCache(LoggerMixin):
    """
    In-memory response cache with a fixed revalidation window.

    Expired entries are purged on every write and the number of entries is
    bounded; when full, the oldest entry is evicted. A TTL of zero disables
    caching entirely.
    """

    def __init__(self, ttl_seconds: int = 300, max_entries: int = 128):
        """
        Args:
            ttl_seconds: Revalidation window in seconds
            max_entries: Upper bound on cached responses
        """
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_entries = max_entries
        self._entries: dict[Hashable, tuple[datetime, Any]] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def enabled(self) -> bool:
        return self.ttl > timedelta(0)

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Returns a cached payload still inside its window.

        Args:
            key: Request key (path + params)

        Returns:
            Payload or None when absent or stale
        """
        if not self.enabled:
            return None

        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        stored_at, payload = entry
        if self._is_expired(stored_at, datetime.now()):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return payload

    def set(self, key: Hashable, payload: Any) -> None:
        if not self.enabled:
            return

        now = datetime.now()
        self._purge_expired(now)

        # Re-inserting moves the key to the newest position
        self._entries.pop(key, None)
        while len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self._evictions += 1

        self._entries[key] = (now, payload)

    def _is_expired(self, stored_at: datetime, now: datetime) -> bool:
        return now - stored_at >= self.ttl

    def _purge_expired(self, now: datetime) -> None:
        expired = [
            key for key, (stored_at, _) in self._entries.items()
            if self._is_expired(stored_at, now)
        ]
        for key in expired:
            del self._entries[key]

    def get_stats(self) -> dict:
        """Hit/miss counters for diagnostics."""
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "ttl_seconds": int(self.ttl.total_seconds()),
        }

    def reset(self) -> None:
        """Drops every cached response."""
        self._entries.clear()
        self.logger.debug("Response cache cleared")
