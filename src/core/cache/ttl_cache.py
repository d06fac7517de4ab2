"""
In-process cache with per-entry expiry and read-through population.

Entries are held in a `cachetools.TLRUCache` whose time-to-use function reads
the TTL stored next to each value, so every `set` carries its own absolute
expiry. The cache never stores "absent" results: only values returned by a
factory are cached.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Any, Generic, NamedTuple, TypeVar

from aws_lambda_powertools import Logger
from cachetools import TLRUCache

from core.utils.constants import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_SECONDS

V = TypeVar("V")

logger = Logger(UTC=True)


class _CacheEntry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(_key: Hashable, entry: _CacheEntry, now: float) -> float:
    return now + entry.ttl


class TTLCache(Generic[V]):
    """Thread-safe key/value cache with per-entry TTL.

    Values must not be `None`; `None` is how lookups and factories report that
    there is no value.

    `get_or_create` collapses concurrent misses for the same key into a single
    factory call: the first caller runs the factory, later callers wait for
    its outcome instead of running their own. The shared cache lock is never
    held while a factory runs.
    """

    def __init__(
        self,
        *,
        default_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        maxsize: int = DEFAULT_CACHE_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")

        self._default_ttl = default_ttl
        self._entries: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)
        self._lock = threading.RLock()
        self._in_flight: dict[Hashable, Future] = {}

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def _effective_ttl(self, ttl: float | None) -> float:
        effective_ttl = self._default_ttl if ttl is None else ttl
        if effective_ttl <= 0:
            raise ValueError("ttl must be positive")
        return effective_ttl

    def set(self, key: Hashable, value: V, ttl: float | None = None) -> V:
        """Store `value` under `key`, replacing any existing entry and its expiry.

        A population of `key` still in flight will not overwrite this value.
        """
        effective_ttl = self._effective_ttl(ttl)

        with self._lock:
            self._in_flight.pop(key, None)
            self._entries[key] = _CacheEntry(value, effective_ttl)

        return value

    def get(self, key: Hashable) -> V | None:
        """Return the live value for `key`, or None if missing or expired."""
        with self._lock:
            entry: _CacheEntry | None = self._entries.get(key)

        if entry is None:
            return None

        value: V = entry.value
        return value

    def remove(self, key: Hashable) -> None:
        """Drop the entry for `key` if there is one.

        A population of `key` still in flight is detached: its result is
        handed to the callers already waiting on it but is not stored, and
        later callers start a new lookup.
        """
        with self._lock:
            self._in_flight.pop(key, None)
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._in_flight.clear()
            self._entries.clear()

    def get_or_create(
        self,
        key: Hashable,
        factory: Callable[[], V | None],
        ttl: float | None = None,
    ) -> V | None:
        """Return the cached value for `key`, populating it from `factory` on a miss.

        A factory returning None is not cached, so the next call runs the
        factory again. Exceptions raised by the factory propagate to every
        caller waiting on that execution and nothing is cached.
        """
        effective_ttl = self._effective_ttl(ttl)

        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": str(key)})
            return cached

        with self._lock:
            cached = self.get(key)
            if cached is not None:
                return cached

            pending = self._in_flight.get(key)
            if pending is None:
                in_flight: Future = Future()
                self._in_flight[key] = in_flight

        if pending is not None:
            logger.debug("Waiting for in-flight cache population", extra={"cache_key": str(key)})
            waited: V | None = pending.result()
            return waited

        logger.debug("Cache miss", extra={"cache_key": str(key)})

        try:
            value = factory()
        except BaseException as exc:
            with self._lock:
                if self._in_flight.get(key) is in_flight:
                    del self._in_flight[key]
            in_flight.set_exception(exc)
            raise

        with self._lock:
            # Not stored if set(), remove() or clear() detached this population.
            if self._in_flight.get(key) is in_flight:
                del self._in_flight[key]
                if value is not None:
                    self._entries[key] = _CacheEntry(value, effective_ttl)
            else:
                logger.debug(
                    "Discarding value invalidated during population",
                    extra={"cache_key": str(key)},
                )

        in_flight.set_result(value)
        return value
