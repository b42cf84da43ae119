from utils.memory_cache import MemoryCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire():
    clock = FakeClock()
    cache = MemoryCache(default_ttl=10, clock=clock)
    cache.set("video:a", {"title": "A"})
    cache.set("video:b", {"title": "B"}, ttl=60)

    assert cache.get("video:a") == {"title": "A"}
    assert cache.has("video:a")

    clock.now += 10
    assert cache.get("video:a") is None
    assert not cache.has("video:a")
    assert cache.get("video:b") == {"title": "B"}


def test_cleanup_removes_only_expired():
    clock = FakeClock()
    cache = MemoryCache(default_ttl=5, clock=clock)
    cache.set("short", 1)
    cache.set("long", 2, ttl=100)

    clock.now += 6

    assert cache.cleanup() == 1
    assert cache.stats()["size"] == 1


def test_invalidate_pattern():
    cache = MemoryCache()
    cache.set("video:a", 1)
    cache.set("video:b", 2)
    cache.set("format:a", 3)

    assert cache.invalidate_pattern("video:*") == 2
    assert cache.has("format:a")
    assert cache.delete("format:a") is True
    assert cache.delete("format:a") is False


def test_stats_track_hit_rate():
    cache = MemoryCache()
    cache.set("k", "v")

    cache.get("k")
    cache.get("k")
    cache.get("k")
    cache.get("missing")

    assert cache.stats() == {"size": 1, "hits": 3, "misses": 1, "hitRate": 0.75}

    cache.clear()
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0, "hitRate": 0.0}


def test_size_is_bounded():
    cache = MemoryCache(maxsize=2)
    cache.set("video:a", 1)
    cache.set("video:b", 2)

    cache.set("video:c", 3)

    assert cache.stats()["size"] == 2
    assert cache.has("video:c")


def test_none_values_are_cached():
    cache = MemoryCache()
    cache.set("video:empty", None)

    assert cache.has("video:empty")
    assert cache.delete("video:empty") is True
