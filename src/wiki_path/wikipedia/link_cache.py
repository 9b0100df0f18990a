"""
Process-wide cache of article link lists.

Entries are keyed by the exact title that was queried (case preserved) and expire a
fixed number of seconds after they were written. An LRU cap keeps memory bounded.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Counters describing how well the cache is doing."""
    hits: int = 0
    misses: int = 0
    expirations: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage."""
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests * 100


class LinkCache:
    """
    TTL cache mapping an article title to its outbound link titles.

    Safe to share between concurrent searches and threads: every operation holds
    a reentrant lock, and lists are copied in and out so a stored entry is never
    mutated after it is written. Re-setting a key replaces the entry and restarts
    its TTL.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        max_entries: Optional[int] = 10000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Seconds an entry stays fresh after it is written
            max_entries: LRU cap on the number of entries, None for no cap
            clock: Monotonic time source, injectable for tests
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        # title -> (expires_at, links)
        self._entries: "OrderedDict[str, Tuple[float, Tuple[str, ...]]]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats()

    def get(self, article: str) -> Optional[List[str]]:
        """Return the cached links for `article`, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(article)
            if entry is None:
                self._stats.misses += 1
                return None

            expires_at, links = entry
            if self._clock() >= expires_at:
                del self._entries[article]
                self._stats.expirations += 1
                self._stats.misses += 1
                logger.debug(f"Cache entry expired for '{article}'")
                return None

            self._entries.move_to_end(article)
            self._stats.hits += 1
            return list(links)

    def set(self, article: str, links: List[str]) -> None:
        """Store the links for `article`, replacing any previous entry."""
        with self._lock:
            self._entries[article] = (self._clock() + self.ttl_seconds, tuple(links))
            self._entries.move_to_end(article)

            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    self._stats.evictions += 1
                    logger.debug(f"Evicted '{evicted}' from link cache")

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [article for article, (expires_at, _) in self._entries.items()
                       if now >= expires_at]
            for article in expired:
                del self._entries[article]
            self._stats.expirations += len(expired)
        if expired:
            logger.debug(f"Purged {len(expired)} expired link cache entries")
        return len(expired)

    def clear(self) -> None:
        """Remove all entries. Statistics are kept."""
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> CacheStats:
        """Snapshot of the cache counters."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                expirations=self._stats.expirations,
                evictions=self._stats.evictions,
                size=len(self._entries),
            )

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = CacheStats()

    def __contains__(self, article: str) -> bool:
        with self._lock:
            entry = self._entries.get(article)
            return entry is not None and self._clock() < entry[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self):
        stats = self.get_stats()
        return (f"LinkCache(size={stats.size}, ttl={self.ttl_seconds}s, "
                f"hits={stats.hits}, misses={stats.misses})")
