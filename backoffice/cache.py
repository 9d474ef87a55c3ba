"""
Request cache

Query results keyed by ``(resource, *params)``. Each query carries a
freshness window (``stale_time``: data younger than this is served without a
request) and a retention window (``gc_time``: entries unused for longer are
dropped). Invalidation marks entries so the next read refetches.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR

QueryKey = Tuple[Hashable, ...]


@dataclass(frozen=True)
class QueryOptions:
    stale_time: float = 0
    gc_time: float = 5 * MINUTE
    refetch_on_mount: bool = True
    refetch_on_window_focus: bool = False
    refetch_on_reconnect: bool = True
    retry: int = 0


DEFAULT_OPTIONS = QueryOptions()


@dataclass
class CacheEntry:
    data: Any
    updated_at: float
    last_used: float
    options: QueryOptions
    invalidated: bool = False
    fetch_count: int = 0

    def is_stale(self, now):
        return self.invalidated or now - self.updated_at >= self.options.stale_time


def as_key(key) -> QueryKey:
    return tuple(key) if isinstance(key, (list, tuple)) else (key,)


class QueryCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[QueryKey, CacheEntry] = {}

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return as_key(key) in self._entries

    def fetch(self, key, fn: Callable[[], Any], options: QueryOptions = DEFAULT_OPTIONS):
        """Return cached data when it may be used, otherwise run ``fn`` and store its result."""
        key = as_key(key)
        self.collect_garbage()
        now = self._clock()
        entry = self._entries.get(key)

        if entry is not None:
            entry.last_used = now
            if not entry.is_stale(now):
                logger.debug("Cache HIT for %s", key)
                return entry.data
            if not entry.invalidated and not options.refetch_on_mount:
                logger.debug("Cache STALE (kept) for %s", key)
                return entry.data

        logger.debug("Cache MISS for %s", key)
        data = self._run(key, fn, options)
        # A None result means the fetcher already reported a failure.
        if data is not None:
            self._store(key, data, options, entry)
        return data

    def prefetch(self, key, fn: Callable[[], Any], options: QueryOptions = DEFAULT_OPTIONS):
        """Fill an empty entry; a present entry is left untouched."""
        key = as_key(key)
        if self.get_query_data(key) is not None:
            return
        data = self._run(key, fn, options)
        if data is not None:
            self._store(key, data, options, self._entries.get(key))

    def _run(self, key, fn, options):
        attempts = options.retry + 1
        for attempt in range(1, attempts + 1):
            try:
                return fn()
            except Exception:
                if attempt == attempts:
                    raise
                logger.debug("Retrying %s (%s/%s)", key, attempt, options.retry)

    def _store(self, key, data, options, previous: Optional[CacheEntry]):
        now = self._clock()
        self._entries[key] = CacheEntry(
            data=data,
            updated_at=now,
            last_used=now,
            options=options,
            fetch_count=(previous.fetch_count if previous else 0) + 1,
        )

    def get_query_data(self, key):
        entry = self._entries.get(as_key(key))
        return entry.data if entry else None

    def set_query_data(self, key, data, options: QueryOptions = DEFAULT_OPTIONS):
        key = as_key(key)
        self._store(key, data, options, self._entries.get(key))

    def get_entry(self, key) -> Optional[CacheEntry]:
        return self._entries.get(as_key(key))

    def find_all(self, prefix) -> Iterator[Tuple[QueryKey, Any]]:
        prefix = as_key(prefix)
        for key, entry in list(self._entries.items()):
            if key[: len(prefix)] == prefix:
                yield key, entry.data

    def invalidate(self, prefix) -> int:
        """Mark every entry under ``prefix`` for refetch; returns how many were hit."""
        count = 0
        for key, _ in self.find_all(prefix):
            self._entries[key].invalidated = True
            count += 1
        logger.debug("Invalidated %s entries under %s", count, as_key(prefix))
        return count

    def remove(self, prefix):
        for key, _ in self.find_all(prefix):
            del self._entries[key]

    def on_window_focus(self):
        self._invalidate_where(lambda o: o.refetch_on_window_focus)

    def on_reconnect(self):
        self._invalidate_where(lambda o: o.refetch_on_reconnect)

    def _invalidate_where(self, predicate):
        for entry in self._entries.values():
            if predicate(entry.options):
                entry.invalidated = True

    def collect_garbage(self):
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items()
            if now - entry.last_used > entry.options.gc_time
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Collected %s cache entries", len(expired))

    def clear(self):
        self._entries.clear()
