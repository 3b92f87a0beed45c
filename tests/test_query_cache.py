from dataclasses import dataclass

import pytest

from fintrail.query_cache import QueryCache, QueryKey


@dataclass(frozen=True)
class NamedKey(QueryKey):
    name: str = ""

    def key(self) -> int:
        return len(self.name)


def test_query_key_returns_its_value():
    assert QueryKey(7).key() == 7


def test_put_then_get():
    cache = QueryCache()
    cache.put(1, "one")
    assert cache.get(1) == "one"
    assert cache.contains(1)


def test_missing_key():
    cache = QueryCache()
    assert cache.get(5) is None
    assert not cache.contains(5)
    assert cache.get_from_cache(QueryKey(5)) is None


def test_put_in_cache_uses_key():
    cache = QueryCache()
    key = QueryKey(3)
    payload = {"a": [1, 2]}
    cache.put_in_cache(key, payload)
    assert cache.get(key.key()) is payload
    assert cache.get_from_cache(key) is payload


def test_put_overwrites():
    cache = QueryCache()
    cache.put(2, "old")
    cache.put(2, "new")
    assert cache.get(2) == "new"
    assert len(cache) == 1


def test_subclassed_key():
    cache = QueryCache()
    cache.put_in_cache(NamedKey(0, "abc"), 10)
    assert cache.get_from_cache(NamedKey(99, "xyz")) == 10
    assert 3 in cache


@pytest.mark.parametrize("value", [0, "", [], False])
def test_falsy_values_are_cached(value):
    cache = QueryCache()
    cache.put(4, value)
    assert cache.contains(4)
    assert cache.get(4) == value