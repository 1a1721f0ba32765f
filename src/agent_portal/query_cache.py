from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, TypeVar

QueryKey = tuple[Hashable, ...]
T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float | None


class QueryCache:
    """In-memory cache of fetched collections keyed by request signature.

    Keys are tuples such as ``("/api/notifications", user_id, "unread")``.
    ``invalidate`` drops every key that starts with the given prefix, which is
    how mutations force the owning list to refetch.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        now: Callable[[], float] | None = None,
        max_entries: int | None = 256,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._now = now or time.monotonic
        self._entries: dict[QueryKey, CacheEntry] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return self._live_entry(key) is not None

    def __len__(self) -> int:
        self._prune_expired()
        return len(self._entries)

    def _live_entry(self, key: QueryKey) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._now():
            self._entries.pop(key, None)
            return None
        return entry

    def get(self, key: QueryKey) -> Any | None:
        entry = self._live_entry(key)
        return None if entry is None else entry.value

    def set(self, key: QueryKey, value: Any) -> None:
        self._prune_expired()
        expires_at = None if self.ttl_seconds is None else self._now() + self.ttl_seconds
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        if self.max_entries is not None:
            # oldest writes go first
            while len(self._entries) > self.max_entries:
                self._entries.pop(next(iter(self._entries)))

    def _prune_expired(self) -> None:
        now = self._now()
        expired = [
            key for key, entry in self._entries.items() if entry.expires_at is not None and entry.expires_at <= now
        ]
        for key in expired:
            self._entries.pop(key, None)

    def fetch(self, key: QueryKey, loader: Callable[[], T], *, force_refresh: bool = False) -> T:
        if not force_refresh:
            entry = self._live_entry(key)
            if entry is not None:
                return entry.value
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        stale_keys = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale_keys:
            self._entries.pop(key, None)
        return len(stale_keys)

    def clear(self) -> None:
        self._entries.clear()
