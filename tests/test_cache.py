import pytest

from vaultdiff.cache import CacheEntry, SecretCache


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return _FakeClock()


def test_set_and_get():
    cache = SecretCache(0)
    cache.set("secret/path", {"username": "admin"})
    got = cache.get("secret/path")
    assert got is not None
    assert got["username"] == "admin"


def test_miss_on_unknown_path():
    cache = SecretCache(0)
    assert cache.get("nonexistent/path") is None


def test_expired_entry(clock):
    cache = SecretCache(0.010, clock=clock)
    cache.set("secret/path", {"k": "v"})
    clock.advance(0.020)
    assert cache.get("secret/path") is None


def test_not_yet_expired(clock):
    cache = SecretCache(10, clock=clock)
    cache.set("secret/path", {"k": "v"})
    clock.advance(5)
    assert cache.get("secret/path") == {"k": "v"}


def test_no_expiry(clock):
    cache = SecretCache(0, clock=clock)
    cache.set("secret/path", {"k": "v"})
    clock.advance(10_000)
    assert cache.get("secret/path") == {"k": "v"}


def test_invalidate():
    cache = SecretCache(0)
    cache.set("secret/path", {"k": "v"})
    cache.invalidate("secret/path")
    assert cache.get("secret/path") is None


def test_invalidate_unknown_path_is_harmless():
    cache = SecretCache(0)
    cache.set("a", {})
    cache.invalidate("b")
    assert len(cache) == 1


def test_len():
    cache = SecretCache(0)
    assert len(cache) == 0
    cache.set("path/a", {})
    cache.set("path/b", {})
    assert len(cache) == 2
    cache.invalidate("path/a")
    assert len(cache) == 1


def test_purge_removes_only_expired(clock):
    cache = SecretCache(10, clock=clock)
    cache.set("old", {"k": "v"})
    clock.advance(8)
    cache.set("fresh", {"k": "v"})
    clock.advance(5)
    assert cache.purge() == 1
    assert cache.paths() == ["fresh"]


def test_paths_include_expired_until_purged(clock):
    cache = SecretCache(1, clock=clock)
    cache.set("a", {})
    cache.set("b", {})
    clock.advance(2)
    assert sorted(cache.paths()) == ["a", "b"]
    assert cache.purge() == 2
    assert cache.paths() == []


def test_cache_entry_zero_ttl_never_expires(clock):
    entry = CacheEntry(secrets={}, fetched_at=0.0, ttl=0, clock=clock)
    assert entry.is_expired() is False


def test_cache_entry_expires_after_ttl(clock):
    entry = CacheEntry(secrets={}, fetched_at=clock.now, ttl=1, clock=clock)
    assert entry.is_expired() is False
    clock.advance(1.5)
    assert entry.is_expired() is True