"""
Tests for the TTL result cache.
"""

from hypepulse.constants import CacheConstants
from hypepulse.services.result_cache import ResultCache


class TestResultCache:

    def test_hit_within_ttl(self, cache, clock):
        cache.set("player", "abc", {"displayname": "Notch"})
        clock.advance(299)
        assert cache.get("player", "abc") == {"displayname": "Notch"}

    def test_entry_expires_and_is_evicted(self, cache, clock):
        cache.set("player", "abc", "value")
        clock.advance(300)
        assert cache.get("player", "abc") is None
        assert len(cache) == 0

    def test_recent_games_use_shorter_ttl(self, cache, clock):
        cache.set(CacheConstants.RECENT_GAMES, "abc", ("game",))
        cache.set(CacheConstants.PLAYER, "abc", "player")
        clock.advance(61)
        assert cache.get(CacheConstants.RECENT_GAMES, "abc") is None
        assert cache.get(CacheConstants.PLAYER, "abc") == "player"

    def test_ttl_override(self, cache, clock):
        cache.set("player", "abc", "value", ttl=5)
        clock.advance(5)
        assert cache.get("player", "abc") is None

    def test_usernames_are_case_folded(self, cache):
        cache.set(CacheConstants.UUID, "Notch", "id")
        assert cache.get(CacheConstants.UUID, "NOTCH") == "id"
        assert cache.get(CacheConstants.UUID, " notch ") == "id"

    def test_identifiers_are_verbatim(self, cache):
        cache.set(CacheConstants.PLAYER, "ABC", "value")
        assert cache.get(CacheConstants.PLAYER, "abc") is None

    def test_categories_do_not_collide(self, cache):
        cache.set(CacheConstants.PLAYER, "abc", "player")
        cache.set(CacheConstants.GUILD, "abc", "guild")
        assert cache.get(CacheConstants.PLAYER, "abc") == "player"
        assert cache.get(CacheConstants.GUILD, "abc") == "guild"

    def test_last_writer_wins(self, cache):
        cache.set("player", "abc", "first")
        cache.set("player", "abc", "second")
        assert cache.get("player", "abc") == "second"

    def test_sweep_removes_only_expired(self, cache, clock):
        cache.set(CacheConstants.RECENT_GAMES, "a", 1)
        cache.set(CacheConstants.PLAYER, "b", 2)
        clock.advance(120)
        assert cache.sweep() == 1
        assert len(cache) == 1

    def test_max_size_trims_oldest_entries(self, clock):
        cache = ResultCache(max_size=2, clock=clock)
        cache.set("player", "a", 1)
        clock.advance(1)
        cache.set("player", "b", 2)
        clock.advance(1)
        cache.set("player", "c", 3)
        assert len(cache) == 2
        assert cache.get("player", "a") is None
        assert cache.get("player", "c") == 3

    def test_trimming_ignores_ttl_differences(self, clock):
        cache = ResultCache(max_size=2, clock=clock)
        cache.set("player", "old", 1)
        clock.advance(200)
        cache.set("player", "newer", 2)
        cache.set("recentgames", "newest", 3)
        assert cache.get("player", "old") is None
        assert cache.get("player", "newer") == 2
        assert cache.get("recentgames", "newest") == 3

    def test_rewriting_a_key_makes_it_newest(self, clock):
        cache = ResultCache(max_size=2, clock=clock)
        cache.set("player", "a", 1)
        cache.set("player", "b", 2)
        cache.set("player", "a", 10)
        cache.set("player", "c", 3)
        assert cache.get("player", "b") is None
        assert cache.get("player", "a") == 10

    def test_unknown_category_uses_default_ttl(self, cache):
        assert cache.ttl_for("something-else") == CacheConstants.DEFAULT_CACHE_TTL

    def test_clear(self, cache):
        cache.set("player", "a", 1)
        cache.clear()
        assert cache.get("player", "a") is None
