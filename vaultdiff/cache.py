"""Thread-safe in-memory cache of secret maps keyed by Vault path."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable

Clock = Callable[[], float]


@dataclass
class CacheEntry:
    """A cached secret map together with the time it was fetched and its TTL in seconds."""

    secrets: dict[str, str]
    fetched_at: float
    ttl: float = 0.0
    clock: Clock = field(default=time.monotonic, repr=False, compare=False)

    def is_expired(self) -> bool:
        """Return True once the entry has outlived its TTL; a TTL of zero never expires."""
        if self.ttl == 0:
            return False
        return self.clock() - self.fetched_at > self.ttl


class SecretCache:
    """Cache of secret maps by path; a TTL of zero means entries never expire."""

    def __init__(self, ttl: float = 0.0, clock: Clock = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    def get(self, path: str) -> dict[str, str] | None:
        """Return the secrets cached for ``path``, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(path)
            if entry is None or entry.is_expired():
                return None
            return entry.secrets

    def set(self, path: str, secrets: dict[str, str]) -> None:
        """Store ``secrets`` for ``path``, stamped with the current time."""
        with self._lock:
            self._entries[path] = CacheEntry(
                secrets=secrets,
                fetched_at=self._clock(),
                ttl=self._ttl,
                clock=self._clock,
            )

    def invalidate(self, path: str) -> None:
        """Remove ``path`` from the cache if present."""
        with self._lock:
            self._entries.pop(path, None)

    def purge(self) -> int:
        """Remove all expired entries and return how many were removed."""
        with self._lock:
            expired = [path for path, entry in self._entries.items() if entry.is_expired()]
            for path in expired:
                del self._entries[path]
            return len(expired)

    def paths(self) -> list[str]:
        """Return every cached path, including expired entries not yet purged."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)