from rategenius.core.cache import TTLCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_get_returns_value_before_expiry():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl=1)

    assert cache.get("k") == "v"
    assert "k" in cache
    assert len(cache) == 1


def test_expired_entry_is_absent_and_evicted():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl=1)

    clock.now += 1.5

    assert cache.get("k") is None
    assert len(cache) == 0


def test_get_default_for_missing_key():
    cache = TTLCache()
    sentinel = object()
    assert cache.get("nope", sentinel) is sentinel


def test_set_overwrites_and_refreshes_expiry():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", 1, ttl=1)
    clock.now += 0.9
    cache.set("k", 2, ttl=1)
    clock.now += 0.9

    assert cache.get("k") == 2


def test_heterogeneous_values_share_one_store():
    cache = TTLCache()
    cache.set("places:1.0:2.0:16093.4", ("a", "b"), ttl=60)
    cache.set("placedetail:abc", {"website": None}, ttl=60)
    cache.set("scrape:https://example.com", 42.0, ttl=60)

    assert cache.get("places:1.0:2.0:16093.4") == ("a", "b")
    assert cache.get("placedetail:abc") == {"website": None}
    assert cache.get("scrape:https://example.com") == 42.0

    cache.clear()
    assert len(cache) == 0
