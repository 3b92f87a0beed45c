"""Registry of the fetchers that produce each query's value."""

from __future__ import annotations

from fintrail.query_cache import AsyncDataFetcher, DataFetcher, QueryKey


class MutationObserver:
    """Keeps the synchronous and asynchronous fetcher of each query key."""

    def __init__(self) -> None:
        self._observers: dict[int, DataFetcher] = {}
        self._async_observers: dict[int, AsyncDataFetcher] = {}

    def register_mutation(self, query_key: QueryKey, data_fetcher: DataFetcher) -> DataFetcher | None:
        """Register ``data_fetcher`` for ``query_key`` and return the fetcher now held."""
        key = query_key.key()
        self._observers[key] = data_fetcher
        return self.get_data_fetcher(key)

    def register_mutation_async(
        self, query_key: QueryKey, data_fetcher: AsyncDataFetcher
    ) -> AsyncDataFetcher | None:
        """Register an async ``data_fetcher`` for ``query_key`` and return the one now held."""
        key = query_key.key()
        self._async_observers[key] = data_fetcher
        return self.get_data_fetcher_async(key)

    def get_data_fetcher(self, key: int) -> DataFetcher | None:
        """Return the synchronous fetcher for ``key``, or None."""
        return self._observers.get(key)

    def get_data_fetcher_async(self, key: int) -> AsyncDataFetcher | None:
        """Return the asynchronous fetcher for ``key``, or None."""
        return self._async_observers.get(key)