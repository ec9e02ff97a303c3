import threading

from app.core.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_get_returns_value_until_expiry():
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("all_products", ["a"])

    clock.now = 10
    assert cache.get("all_products") == ["a"]

    clock.now = 10.5
    assert cache.get("all_products") is None
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default():
    clock = FakeClock()
    cache = TTLCache(default_ttl=300, clock=clock)
    cache.set("short", 1, ttl_seconds=1)
    cache.set("long", 2)

    clock.now = 5
    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_delete_and_clear():
    cache = TTLCache()
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert cache.get("b") is None


def test_cleanup_drops_only_expired_entries():
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("old", 1)
    clock.now = 8
    cache.set("new", 2)

    clock.now = 12
    assert cache.cleanup() == 1
    assert cache.get("new") == 2
    assert len(cache) == 1


def test_falsy_values_are_cached():
    cache = TTLCache()
    cache.set("empty", [])

    assert cache.get("empty") == []


def test_len_waits_for_a_pending_write():
    cache = TTLCache()
    cache.set("a", 1)
    sizes = []

    cache._lock.acquire()
    reader = threading.Thread(target=lambda: sizes.append(len(cache)))
    reader.start()
    reader.join(timeout=0.1)
    assert reader.is_alive()

    cache._store["b"] = (2, float("inf"))
    cache._lock.release()
    reader.join(timeout=1)

    assert sizes == [2]
