"""
TTL cache for upstream lookups.

Sits in front of the Mojang and Hypixel APIs so repeated commands for the same
player inside the TTL window do not hit the network again.
"""

import time
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple

from hypepulse.constants import CacheConstants
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)

CacheKey = Tuple[str, Hashable]


class ResultCache:
    """In-memory key-value store with a default TTL per category.

    Expiry is checked lazily on read; ``sweep`` can be called periodically to
    drop expired entries nobody asks for anymore. Concurrent misses for the same
    key may both store a value, the last write wins.
    """

    def __init__(
        self,
        default_ttls: Optional[Mapping[str, float]] = None,
        default_ttl: float = CacheConstants.DEFAULT_CACHE_TTL,
        max_size: int = CacheConstants.DEFAULT_MAX_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttls = dict(default_ttls or {
            CacheConstants.UUID: CacheConstants.DEFAULT_CACHE_TTL,
            CacheConstants.PLAYER: CacheConstants.DEFAULT_CACHE_TTL,
            CacheConstants.GUILD: CacheConstants.DEFAULT_CACHE_TTL,
            CacheConstants.RECENT_GAMES: CacheConstants.RECENT_GAMES_CACHE_TTL,
        })
        self._default_ttl = default_ttl
        self._max_size = max_size
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, Any]] = {}  # key -> (expires_at, value)

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def normalize_key(category: str, key: str) -> Hashable:
        """Usernames are case-insensitive; identifiers are used verbatim."""
        if category == CacheConstants.UUID:
            return key.strip().lower()
        return key

    def ttl_for(self, category: str) -> float:
        return self._ttls.get(category, self._default_ttl)

    def get(self, category: str, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss or an expired entry."""
        cache_key = (category, self.normalize_key(category, key))
        entry = self._entries.get(cache_key)
        if entry is None:
            logger.debug(f"Cache miss for {category}:{key}")
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            logger.debug(f"Cache entry expired for {category}:{key}")
            self._entries.pop(cache_key, None)
            return None

        logger.debug(f"Cache hit for {category}:{key}")
        return value

    def set(self, category: str, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store ``value`` under ``(category, key)`` for ``ttl`` or the category default."""
        ttl = self.ttl_for(category) if ttl is None else ttl
        cache_key = (category, self.normalize_key(category, key))
        # Re-inserting moves the key to the end, so dict order stays oldest-first
        self._entries.pop(cache_key, None)
        self._entries[cache_key] = (self._clock() + ttl, value)

        if len(self._entries) > self._max_size:
            self._cleanup_cache()

    def clear(self) -> None:
        logger.info("Clearing entire result cache")
        self._entries.clear()

    def sweep(self) -> int:
        """Remove every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _cleanup_cache(self):
        """Drop expired entries, then the oldest stored ones, to stay within size limit."""
        self.sweep()
        excess = len(self._entries) - self._max_size
        if excess <= 0:
            return
        for cache_key in list(self._entries)[:excess]:
            del self._entries[cache_key]
        logger.debug(f"Trimmed result cache, kept {len(self._entries)} entries")
