"""
Query cache for the web client.

Holds the result of each query under a key, tracks where the query is in its
lifecycle and re-runs it only when nothing usable is cached: never fetched,
failed last time, or invalidated after a mutation.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")
QueryKey = Tuple[Hashable, ...]

IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"


@dataclass
class QueryState:
    """
    Snapshot of one cached query.

    status: one of idle, loading, success, error
    data: last successfully fetched value; kept while a refetch is in flight
    error: exception raised by the last failed fetch
    is_stale: set by invalidate(), cleared by a successful fetch that started
        after the last invalidation
    fetch_count: number of times the query function has been started
    generation: bumped by every invalidate()
    """

    status: str = IDLE
    data: Any = None
    error: Optional[BaseException] = None
    is_stale: bool = False
    fetch_count: int = 0
    generation: int = 0

    @property
    def is_fetching(self) -> bool:
        return self.status == LOADING

    @property
    def has_data(self) -> bool:
        return self.data is not None


class QueryCache:
    """
    Keyed cache of query states.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)
        self._lock = RLock()
        self._entries: Dict[QueryKey, QueryState] = {}

    def _entry(self, key: QueryKey) -> QueryState:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = QueryState()
        return entry

    def state(self, key: QueryKey) -> QueryState:
        """Return a copy of the state cached under key (idle if never fetched)."""
        with self._lock:
            return dataclasses.replace(self._entry(key))

    def fetch(self, key: QueryKey, fn: Callable[[], T]) -> T:
        """
        Return the cached value for key, running fn first when needed.

        While fn runs the entry is in the loading state and keeps any data it
        already had. Exceptions from fn are recorded on the entry and re-raised.
        """
        with self._lock:
            entry = self._entry(key)
            if entry.status == SUCCESS and not entry.is_stale:
                self.logger.debug(f"Cache hit: {key}")
                return entry.data
            entry.status = LOADING
            entry.fetch_count += 1
            started_at = entry.generation
            self.logger.debug(f"Fetching {key} (fetch #{entry.fetch_count})")

        try:
            data = fn()
        except Exception as exc:
            with self._lock:
                entry.status = ERROR
                entry.error = exc
                entry.data = None
            self.logger.warning(f"Query {key} failed: {exc}")
            raise

        with self._lock:
            entry.status = SUCCESS
            entry.data = data
            entry.error = None
            # An invalidation that landed mid-fetch keeps the entry stale
            entry.is_stale = entry.generation != started_at
        return data

    def invalidate(self, key: QueryKey) -> None:
        """Mark the entry stale so the next fetch re-runs the query."""
        with self._lock:
            entry = self._entry(key)
            entry.is_stale = True
            entry.generation += 1
        self.logger.debug(f"Invalidated {key}")
