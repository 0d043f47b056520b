"""Staleness-aware cache of gallery query results."""

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from vidto.config import Settings, settings as default_settings
from vidto.logger import cache_logger
from vidto.redis_client import RedisClient

KEY_PREFIX = "vidto:query:"


@dataclass
class CacheEntry:
    data: Any
    stored_at: float


class CacheBackend(Protocol):
    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, entry: CacheEntry, expire: int) -> None: ...

    def clear(self) -> None: ...


class MemoryCacheBackend:
    """Per-process storage. Expired entries are dropped on read and swept on every write."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: dict[str, tuple[CacheEntry, float]] = {}
        self._clock = clock

    def get(self, key: str) -> CacheEntry | None:
        item = self._entries.get(key)
        if item is None:
            return None
        entry, expires_at = item
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, entry: CacheEntry, expire: int) -> None:
        now = self._clock()
        self._sweep(now)
        self._entries[key] = (entry, now + expire)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            cache_logger.debug(f"Swept {len(expired)} expired cache entries")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisCacheBackend:
    """Shares results between processes; Redis expires the keys."""

    def __init__(self, redis_client: RedisClient):
        self.redis = redis_client

    def get(self, key: str) -> CacheEntry | None:
        raw = self.redis.get(KEY_PREFIX + key)
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            return CacheEntry(data=payload["data"], stored_at=payload["stored_at"])
        except (ValueError, KeyError, TypeError) as e:
            cache_logger.warning(f"Dropping unreadable cache entry {key}: {e}")
            self.redis.delete(KEY_PREFIX + key)
            return None

    def set(self, key: str, entry: CacheEntry, expire: int) -> None:
        payload = json.dumps({"data": entry.data, "stored_at": entry.stored_at})
        self.redis.set(KEY_PREFIX + key, payload, expire=expire)

    def clear(self) -> None:
        self.redis.delete_prefix(KEY_PREFIX)


class QueryCache:
    """
    Results keyed by the full query.

    An entry is fresh for ``stale_seconds`` and served without a request;
    after that it is still returned (for display while refetching) until it
    is evicted at ``gc_seconds``.
    """

    def __init__(
        self,
        stale_seconds: int = 300,
        gc_seconds: int = 600,
        backend: CacheBackend | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.stale_seconds = stale_seconds
        self.gc_seconds = max(gc_seconds, stale_seconds)
        self.clock = clock
        self.backend = backend if backend is not None else MemoryCacheBackend(clock)

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "QueryCache":
        config = config or default_settings
        backend = None
        if config.redis_url:
            redis_client = RedisClient(config.redis_url)
            if redis_client.client is not None:
                backend = RedisCacheBackend(redis_client)
        return cls(
            stale_seconds=config.query_stale_seconds,
            gc_seconds=config.query_gc_seconds,
            backend=backend,
        )

    def get(self, key: str) -> CacheEntry | None:
        entry = self.backend.get(key)
        cache_logger.debug(f"Cache {'hit' if entry else 'miss'} for {key}")
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry.stored_at < self.stale_seconds

    def set(self, key: str, data: Any) -> None:
        self.backend.set(key, CacheEntry(data=data, stored_at=self.clock()), self.gc_seconds)

    def invalidate(self) -> None:
        """Forget every cached result (after a write)."""
        self.backend.clear()
        cache_logger.debug("Query cache invalidated")
