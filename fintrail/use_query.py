"""Hooks that run a query through a client and report its state."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fintrail.query_cache import AsyncDataFetcher, DataFetcher, QueryKey
from fintrail.query_client import QueryClient


class QueryState(Enum):
    """Progress of a query."""

    LOADING = "loading"
    INVALID = "invalid"
    COMPLETED = "completed"


@dataclass
class QueryResult:
    """The data of a query and its state; ``task`` runs a pending async fetch."""

    data: Any = None
    state: QueryState = QueryState.LOADING
    task: asyncio.Task | None = None


def use_query(query_fn: DataFetcher, query_key: QueryKey, client: QueryClient) -> QueryResult:
    """Fetch (or read from cache) the value of ``query_key``."""
    data = client.register_data_fetcher(query_key, query_fn)
    return QueryResult(data=data, state=QueryState.COMPLETED)


def use_query_async(
    query_fn: AsyncDataFetcher, query_key: QueryKey, client: QueryClient
) -> QueryResult:
    """Start fetching ``query_key`` on the running loop; the result fills in when done."""
    result = QueryResult()

    async def run() -> Any:
        try:
            data = await client.register_data_fetcher_async(query_key, query_fn)
        except Exception:
            result.state = QueryState.INVALID
            raise
        result.data = data
        result.state = QueryState.COMPLETED
        return data

    result.task = asyncio.get_running_loop().create_task(run())
    return result