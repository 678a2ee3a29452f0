"""In-memory TTL cache for sanitized render sources"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Hashable

from mdprep.config import Settings


CacheKey = tuple[Hashable, str]     # (document id, render key derived from content_hash)


@dataclass
class RenderCache:
    """Sanitized markup keyed by document identity and content fingerprint.

    A new content_hash never matches an old entry, so content changes are
    cache misses without explicit invalidation. ttl_seconds <= 0 caches forever.
    Safe to share between threads.
    """
    ttl_seconds: int = 300
    clock: Callable[[], float] = time.monotonic
    _entries: dict[CacheKey, tuple[float, str]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> "RenderCache":
        """Cache whose TTL comes from settings.cache_ttl_seconds."""
        settings = settings or Settings()
        return cls(ttl_seconds=settings.cache_ttl_seconds, **kwargs)

    def _fresh(self, stored_at: float) -> bool:
        return self.ttl_seconds <= 0 or self.clock() - stored_at <= self.ttl_seconds

    def get(self, doc_id: Hashable, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get((doc_id, key))
            if entry is None:
                return None
            stored_at, value = entry
            if not self._fresh(stored_at):
                del self._entries[(doc_id, key)]
                return None
            return value

    def put(self, doc_id: Hashable, key: str, value: str) -> None:
        with self._lock:
            # Older fingerprints of the same document can never be hit again.
            self._drop(doc_id)
            self._entries[(doc_id, key)] = (self.clock(), value)

    def invalidate(self, doc_id: Hashable) -> int:
        """Drop every entry for doc_id. Returns the number removed."""
        with self._lock:
            return self._drop(doc_id)

    def _drop(self, doc_id: Hashable) -> int:
        stale = [k for k in self._entries if k[0] == doc_id]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
