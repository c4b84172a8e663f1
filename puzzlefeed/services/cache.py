"""In-memory TTL cache for documents fetched from the user/puzzle store."""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """
    Keyed store with get-or-fetch semantics and explicit invalidation.

    Usage:
        cache = TTLCache(ttl_seconds=300)
        blocked = cache.get_or_fetch(f"blocked:{user_id}", lambda: fetch_blocked(user_id))

        # After the user blocks someone
        cache.invalidate(f"blocked:{user_id}")
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl_seconds: Default time-to-live for entries
            clock: Monotonic clock in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.expires_at > self._clock()

    def get_or_fetch(
        self,
        key: Hashable,
        fetcher: Callable[[], T],
        ttl: Optional[float] = None,
    ) -> T:
        """Return the cached value, calling ``fetcher`` if missing or expired.

        Exceptions from ``fetcher`` propagate and nothing is cached.
        """
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at > now:
            return entry.value

        value = fetcher()
        ttl = self.ttl_seconds if ttl is None else ttl
        self._entries[key] = _Entry(value=value, expires_at=now + ttl)
        return value

    def invalidate(self, key: Hashable) -> bool:
        """Drop one entry. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key, as a string, starts with ``prefix``."""
        stale = [key for key in self._entries if str(key).startswith(prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
