"""In-memory caching of analyzed tracks for the web layer."""

import time
from collections import OrderedDict
from threading import Lock
from typing import Any


class TrackCache:
    """Thread-safe LRU cache with optional TTL.

    Keys are arbitrary strings (typically the track URL plus any analysis
    options); values are whatever the caller stores.
    """

    def __init__(self, max_size: int = 50, ttl_seconds: float | None = None):
        self.max_size = max_size
        self.ttl = ttl_seconds
        self._cache: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Any | None:
        """Get cached value if available and not expired."""
        with self._lock:
            if key in self._cache:
                value, timestamp = self._cache[key]
                if self.ttl is None or (time.time() - timestamp < self.ttl):
                    self._cache.move_to_end(key)
                    self.hits += 1
                    return value
                # Expired
                del self._cache[key]
            self.misses += 1
            return None

    def set(self, key: str, value: Any) -> None:
        """Store value in cache with LRU eviction."""
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            self._cache[key] = (value, time.time())
            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)

    def clear(self) -> int:
        """Clear all cached entries. Returns number of entries cleared."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self.hits = 0
            self.misses = 0
            return count

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            total = self.hits + self.misses
            hit_rate = (self.hits / total * 100) if total > 0 else 0
            return {
                "hit_rate": f"{hit_rate:.1f}%",
                "hits": self.hits,
                "max_size": self.max_size,
                "misses": self.misses,
                "size": len(self._cache),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
