"""Query keys, fetcher types and the cache of fetched query values."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

DataFetcher = Callable[[], Any]
AsyncDataFetcher = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class QueryKey:
    """Identifies a query; subclasses may derive the numeric key differently."""

    value: int

    def key(self) -> int:
        """Return the numeric key the query is cached under."""
        return self.value


@dataclass
class QueryCache:
    """Fetched values by numeric query key."""

    cache: dict[int, Any] = field(default_factory=dict)

    def put_in_cache(self, query_key: QueryKey, value: Any) -> None:
        """Store ``value`` under the key of ``query_key``."""
        self.put(query_key.key(), value)

    def put(self, key: int, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        self.cache[key] = value

    def get_from_cache(self, query_key: QueryKey) -> Any:
        """Return the value cached for ``query_key``, or None."""
        return self.get(query_key.key())

    def get(self, key: int) -> Any:
        """Return the value cached under ``key``, or None."""
        return self.cache.get(key)

    def contains(self, key: int) -> bool:
        """Whether a value is cached under ``key``."""
        return key in self.cache

    def __contains__(self, key: object) -> bool:
        return key in self.cache

    def __len__(self) -> int:
        return len(self.cache)