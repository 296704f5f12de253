from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: float


class ResultCache(Generic[T]):
    """Single-slot, TTL-bound memo around an expensive loader.

    A loader that raises leaves the previous entry in place and the error
    propagates to the caller. There is no locking: concurrent misses each run
    the loader and the last one to finish wins.
    """

    def __init__(
        self,
        loader: Callable[[], T],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry[T]] = None

    @property
    def entry(self) -> Optional[CacheEntry[T]]:
        return self._entry

    def is_fresh(self) -> bool:
        if self._entry is None:
            return False
        return self._clock() - self._entry.fetched_at < self.ttl_seconds

    def get(self) -> T:
        if self._entry is not None and self.is_fresh():
            return self._entry.value
        return self.refresh()

    def refresh(self) -> T:
        value = self._loader()
        self._entry = CacheEntry(value=value, fetched_at=self._clock())
        return value

    def clear(self) -> None:
        self._entry = None
