import pytest

from backoffice.cache import MINUTE, QueryCache, QueryOptions


class Counter:
    def __init__(self, value="data"):
        self.calls = 0
        self.value = value

    def __call__(self):
        self.calls += 1
        return self.value


@pytest.fixture
def cache(clock):
    return QueryCache(clock=clock)


def test_fresh_data_is_served_without_refetch(cache, clock):
    fetch = Counter()
    options = QueryOptions(stale_time=MINUTE)
    assert cache.fetch(("products", 1), fetch, options) == "data"
    clock.advance(30)
    assert cache.fetch(("products", 1), fetch, options) == "data"
    assert fetch.calls == 1


def test_stale_data_is_refetched(cache, clock):
    fetch = Counter()
    options = QueryOptions(stale_time=MINUTE)
    cache.fetch("products", fetch, options)
    clock.advance(MINUTE)
    cache.fetch("products", fetch, options)
    assert fetch.calls == 2
    assert cache.get_entry("products").fetch_count == 2


def test_stale_data_is_kept_when_mount_refetch_is_off(cache, clock):
    fetch = Counter()
    options = QueryOptions(stale_time=MINUTE, refetch_on_mount=False)
    cache.fetch("users", fetch, options)
    clock.advance(2 * MINUTE)
    cache.fetch("users", fetch, options)
    assert fetch.calls == 1


def test_invalidation_forces_refetch_even_without_mount_refetch(cache):
    fetch = Counter()
    options = QueryOptions(stale_time=MINUTE, refetch_on_mount=False)
    cache.fetch("users", fetch, options)
    cache.invalidate("users")
    cache.fetch("users", fetch, options)
    assert fetch.calls == 2


def test_invalidate_matches_by_prefix(cache):
    options = QueryOptions(stale_time=MINUTE)
    cache.fetch(("productList", 1, 20), Counter(), options)
    cache.fetch(("productList", 2, 20), Counter(), options)
    cache.fetch(("product", "p1"), Counter(), options)
    assert cache.invalidate("productList") == 2
    assert not cache.get_entry(("product", "p1")).invalidated


def test_unused_entries_are_collected(cache, clock):
    cache.fetch("history", Counter(), QueryOptions(stale_time=0, gc_time=MINUTE))
    clock.advance(MINUTE + 1)
    cache.collect_garbage()
    assert "history" not in cache


def test_none_results_are_not_cached(cache):
    fetch = Counter(value=None)
    assert cache.fetch("role", fetch, QueryOptions(stale_time=MINUTE)) is None
    assert "role" not in cache
    cache.fetch("role", fetch, QueryOptions(stale_time=MINUTE))
    assert fetch.calls == 2


def test_retry_then_succeed(cache):
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("down")
        return "ok"

    assert cache.fetch("role", flaky, QueryOptions(retry=3)) == "ok"
    assert len(attempts) == 3


def test_retries_exhausted_raise(cache):
    def broken():
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        cache.fetch("role", broken, QueryOptions(retry=1))


def test_prefetch_leaves_existing_data_alone(cache):
    cache.set_query_data("role", {"role": "admin"})
    fetch = Counter({"role": "guest"})
    cache.prefetch("role", fetch)
    assert fetch.calls == 0
    assert cache.get_query_data("role") == {"role": "admin"}


def test_window_focus_only_touches_opted_in_entries(cache):
    cache.fetch("a", Counter(), QueryOptions(stale_time=MINUTE, refetch_on_window_focus=True))
    cache.fetch("b", Counter(), QueryOptions(stale_time=MINUTE))
    cache.on_window_focus()
    assert cache.get_entry("a").invalidated
    assert not cache.get_entry("b").invalidated
