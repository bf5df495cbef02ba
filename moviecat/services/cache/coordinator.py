# moviecat/services/cache/coordinator.py
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional, Set

from moviecat.common.logging import get_logger
from moviecat.domain.dataclasses.catalog import MoviePage, QuerySpecification

log = get_logger(__name__)

DEFAULT_TAG = "movies"


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    stores: int = 0
    invalidations: int = 0
    evictions: int = 0


@dataclass
class _Entry:
    page: MoviePage
    expires_at: float
    tag: str


class CacheCoordinator:
    """
    In-process, tag-aware TTL cache for listing pages. Satisfies
    ListingCachePort via structural typing.

    Rules
    -----
    - Key is QuerySpecification.cache_key(): the caller id is NOT part of it,
      so stored pages must only carry shared (aggregate) data. Pages with a
      caller rating are stripped before they are stored.
    - Every entry carries one tag; invalidate_all(tag) drops them all.
    - Entries expire after `ttl` seconds even if an invalidation is missed.
    - All access goes through one lock; this table is the only mutable state
      shared between requests.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        *,
        default_tag: str = DEFAULT_TAG,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl = float(ttl_seconds)
        self._default_tag = default_tag
        self._max_entries = max(1, int(max_entries))
        self._clock = clock

        self._lock = threading.RLock()
        self._entries: Dict[Hashable, _Entry] = {}
        self._by_tag: Dict[str, Set[Hashable]] = {}
        self._generations: Dict[str, int] = {}
        self._stats = CacheStats()

    # ---------------- public ----------------

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def generation(self, tag: Optional[str] = None) -> int:
        """
        Counter bumped by every invalidation of `tag`. Read it before querying
        the store and hand it back to store() so a page computed from
        pre-mutation data is not cached after the invalidation.
        """
        with self._lock:
            return self._generations.get(tag or self._default_tag, 0)

    def lookup(self, spec: QuerySpecification) -> Optional[MoviePage]:
        key = spec.cache_key()
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                return None
            if entry.expires_at <= now:
                self._drop(key)
                self._stats.misses += 1
                self._stats.evictions += 1
                return None
            self._stats.hits += 1
            return entry.page

    def store(
        self,
        spec: QuerySpecification,
        page: MoviePage,
        ttl: Optional[float] = None,
        tag: Optional[str] = None,
        generation: Optional[int] = None,
    ) -> bool:
        key = spec.cache_key()
        tag = tag or self._default_tag
        expires_at = self._clock() + (self._ttl if ttl is None else float(ttl))
        with self._lock:
            if generation is not None and generation != self._generations.get(tag, 0):
                log.debug("Skipping cache store for %s: tag %s invalidated meanwhile", key, tag)
                return False
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._make_room()
            self._drop(key)
            self._entries[key] = _Entry(page=page.shared(), expires_at=expires_at, tag=tag)
            self._by_tag.setdefault(tag, set()).add(key)
            self._stats.stores += 1
        return True

    def invalidate_all(self, tag: Optional[str] = None) -> int:
        """Drop every entry under `tag`; returns how many were removed."""
        tag = tag or self._default_tag
        with self._lock:
            keys = self._by_tag.pop(tag, set())
            self._generations[tag] = self._generations.get(tag, 0) + 1
            for key in keys:
                self._entries.pop(key, None)
            self._stats.invalidations += 1
        log.info("Cache invalidated tag=%s entries=%d", tag, len(keys))
        return len(keys)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [k for k, e in self._entries.items() if e.expires_at <= now]
            for k in stale:
                self._drop(k)
            self._stats.evictions += len(stale)
        return len(stale)

    def stats(self) -> CacheStats:
        with self._lock:
            s = self._stats
            return CacheStats(s.hits, s.misses, s.stores, s.invalidations, s.evictions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ---------------- internals (lock held) ----------------

    def _drop(self, key: Hashable) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        keys = self._by_tag.get(entry.tag)
        if keys is not None:
            keys.discard(key)
            if not keys:
                del self._by_tag[entry.tag]

    def _make_room(self) -> None:
        if self.purge_expired():
            return
        # dicts keep insertion order: oldest stored entry goes first
        oldest = next(iter(self._entries))
        self._drop(oldest)
        self._stats.evictions += 1
