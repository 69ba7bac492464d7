"""
In-memory TTL cache for normalized day payloads.

Process-wide state owned by the day service: initialized empty, entries
added or replaced on miss, never cleared explicitly.  An entry is served
while ``now < expires_at``; after that it is treated as absent and the
next lookup overwrites it.  There is no background sweep and no size
bound, the key space (venue x day) is small.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class TTLCache(Generic[T]):
    """
    Dict-backed store with lazy expiry.

    Concurrent writers for one key resolve as last-writer-wins.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry.value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self._ttl)

    def __len__(self) -> int:
        return len(self._entries)
