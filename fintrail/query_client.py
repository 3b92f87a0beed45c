"""Client that fetches query values once and serves them from cache."""

from __future__ import annotations

from typing import Any

from fintrail.mutation_observer import MutationObserver
from fintrail.query_cache import AsyncDataFetcher, DataFetcher, QueryCache, QueryKey


class NoFetcherError(LookupError):
    """No fetcher is registered for a query key."""


class QueryClient:
    """Owns the query cache and the registered fetchers."""

    def __init__(self) -> None:
        self.query_cache = QueryCache()
        self.mutation_observer = MutationObserver()

    def register_data_fetcher(self, query_key: QueryKey, fetcher: DataFetcher) -> Any:
        """Register ``fetcher`` and return the cached value, fetching it if absent."""
        key = query_key.key()
        self.mutation_observer.register_mutation(query_key, fetcher)
        if not self.query_cache.contains(key):
            self._fetch_first_value(key)
        return self.query_cache.get(key)

    async def register_data_fetcher_async(
        self, query_key: QueryKey, fetcher: AsyncDataFetcher
    ) -> Any:
        """Register an async ``fetcher`` and return the cached value, fetching it if absent."""
        key = query_key.key()
        self.mutation_observer.register_mutation_async(query_key, fetcher)
        if not self.query_cache.contains(key):
            await self._fetch_first_value_async(key)
        return self.query_cache.get(key)

    def _fetch_first_value(self, key: int) -> None:
        if self.query_cache.contains(key):
            return
        self.query_cache.put(key, self._sync_fetcher(key)())

    async def _fetch_first_value_async(self, key: int) -> None:
        if self.query_cache.contains(key):
            return
        fetcher = self.mutation_observer.get_data_fetcher_async(key)
        if fetcher is None:
            raise NoFetcherError(f"no async fetcher registered for key {key}")
        value = await fetcher()
        self.query_cache.put(key, value)

    def invalidate_cache(self, query_key: QueryKey) -> None:
        """Fetch the value for ``query_key`` again and replace the cached one."""
        key = query_key.key()
        self.query_cache.put(key, self._sync_fetcher(key)())

    def _sync_fetcher(self, key: int) -> DataFetcher:
        fetcher = self.mutation_observer.get_data_fetcher(key)
        if fetcher is None:
            raise NoFetcherError(f"no fetcher registered for key {key}")
        return fetcher