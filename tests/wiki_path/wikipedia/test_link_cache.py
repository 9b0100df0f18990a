import threading

import pytest

from wiki_path.wikipedia import LinkCache


class TestLinkCache:
    """Expiry, LRU and statistics behaviour of the link cache."""

    def test_get_returns_stored_links(self, link_cache: LinkCache):
        link_cache.set("Banana", ["Fruit", "Plant"])

        assert link_cache.get("Banana") == ["Fruit", "Plant"]
        assert "Banana" in link_cache
        assert len(link_cache) == 1

    def test_missing_entry_is_absent(self, link_cache: LinkCache):
        assert link_cache.get("Banana") is None
        assert "Banana" not in link_cache

    def test_empty_list_is_a_cached_value(self, link_cache: LinkCache):
        link_cache.set("Dead end", [])

        assert link_cache.get("Dead end") == []

    def test_keys_are_case_sensitive(self, link_cache: LinkCache):
        link_cache.set("Banana", ["Fruit"])

        assert link_cache.get("banana") is None

    def test_entry_expires_after_ttl(self, link_cache: LinkCache, fake_clock):
        link_cache.set("Banana", ["Fruit"])

        fake_clock.advance(3599)
        assert link_cache.get("Banana") == ["Fruit"]

        fake_clock.advance(1)
        assert link_cache.get("Banana") is None
        assert "Banana" not in link_cache
        assert link_cache.get_stats().expirations == 1

    def test_reset_restarts_ttl(self, link_cache: LinkCache, fake_clock):
        link_cache.set("Banana", ["Fruit"])
        fake_clock.advance(3000)
        link_cache.set("Banana", ["Fruit", "Plant"])
        fake_clock.advance(3000)

        assert link_cache.get("Banana") == ["Fruit", "Plant"]

    def test_returned_lists_cannot_mutate_entry(self, link_cache: LinkCache):
        links = ["Fruit"]
        link_cache.set("Banana", links)
        links.append("Mutated")
        link_cache.get("Banana").append("Mutated too")

        assert link_cache.get("Banana") == ["Fruit"]

    def test_least_recently_used_entry_is_evicted(self, fake_clock):
        cache = LinkCache(ttl_seconds=60, max_entries=2, clock=fake_clock)
        cache.set("A", ["x"])
        cache.set("B", ["y"])
        cache.get("A")  # B is now least recently used
        cache.set("C", ["z"])

        assert cache.get("B") is None
        assert cache.get("A") == ["x"]
        assert cache.get("C") == ["z"]
        assert cache.get_stats().evictions == 1

    def test_purge_expired(self, link_cache: LinkCache, fake_clock):
        link_cache.set("Old", ["x"])
        fake_clock.advance(2000)
        link_cache.set("New", ["y"])
        fake_clock.advance(2000)

        assert link_cache.purge_expired() == 1
        assert len(link_cache) == 1
        assert link_cache.get("New") == ["y"]

    def test_stats(self, link_cache: LinkCache):
        link_cache.set("Banana", ["Fruit"])
        link_cache.get("Banana")
        link_cache.get("Banana")
        link_cache.get("Apple")

        stats = link_cache.get_stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.total_requests == 3
        assert stats.hit_rate == pytest.approx(66.666, rel=1e-3)
        assert stats.size == 1

        link_cache.reset_stats()
        assert link_cache.get_stats().total_requests == 0

    def test_clear(self, link_cache: LinkCache):
        link_cache.set("Banana", ["Fruit"])
        link_cache.clear()

        assert len(link_cache) == 0
        assert link_cache.get("Banana") is None

    def test_invalid_settings_rejected(self):
        with pytest.raises(ValueError):
            LinkCache(ttl_seconds=0)
        with pytest.raises(ValueError):
            LinkCache(max_entries=0)

    def test_concurrent_writers_and_readers(self):
        cache = LinkCache(ttl_seconds=60, max_entries=50)
        errors = []

        def worker(worker_id: int):
            try:
                for i in range(500):
                    key = f"Article {i % 80}"
                    cache.set(key, [key, str(worker_id)])
                    links = cache.get(key)
                    # Either absent (evicted) or a complete entry for this key
                    assert links is None or (len(links) == 2 and links[0] == key)
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(cache) <= 50
