import pytest

from fintrail.query_cache import QueryKey
from fintrail.query_client import NoFetcherError, QueryClient


def counting_fetcher(values):
    calls = []

    def fetch():
        calls.append(None)
        return values[len(calls) - 1]

    return fetch, calls


def test_register_fetches_once():
    client = QueryClient()
    fetch, calls = counting_fetcher(["first", "second"])
    assert client.register_data_fetcher(QueryKey(1), fetch) == "first"
    assert client.register_data_fetcher(QueryKey(1), fetch) == "first"
    assert len(calls) == 1


def test_value_is_cached():
    client = QueryClient()
    client.register_data_fetcher(QueryKey(4), lambda: [1, 2, 3])
    assert client.query_cache.get(4) == [1, 2, 3]


def test_invalidate_refetches():
    client = QueryClient()
    fetch, calls = counting_fetcher(["first", "second"])
    client.register_data_fetcher(QueryKey(1), fetch)
    client.invalidate_cache(QueryKey(1))
    assert client.query_cache.get_from_cache(QueryKey(1)) == "second"
    assert len(calls) == 2


def test_invalidate_uses_latest_fetcher():
    client = QueryClient()
    client.register_data_fetcher(QueryKey(1), lambda: "old")
    assert client.register_data_fetcher(QueryKey(1), lambda: "new") == "old"
    client.invalidate_cache(QueryKey(1))
    assert client.query_cache.get(1) == "new"


def test_invalidate_without_fetcher():
    client = QueryClient()
    with pytest.raises(NoFetcherError):
        client.invalidate_cache(QueryKey(8))


def test_fetcher_error_leaves_cache_empty():
    client = QueryClient()

    def broken():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        client.register_data_fetcher(QueryKey(2), broken)
    assert not client.query_cache.contains(2)


@pytest.mark.asyncio
async def test_register_async():
    client = QueryClient()
    calls = []

    async def fetch():
        calls.append(None)
        return "async value"

    assert await client.register_data_fetcher_async(QueryKey(3), fetch) == "async value"
    assert await client.register_data_fetcher_async(QueryKey(3), fetch) == "async value"
    assert len(calls) == 1
    assert client.query_cache.get(3) == "async value"