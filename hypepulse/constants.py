"""
Bot-wide constants for the HypePulse Discord bot.

This module contains the magic numbers shared by the upstream client, the
stat formatters and the pagination views.
"""

class CacheConstants:
    """Constants for caching behavior."""

    # Default TTL for identity, player and guild lookups (seconds)
    DEFAULT_CACHE_TTL = 300  # 5 minutes

    # Recent games reflect live session state
    RECENT_GAMES_CACHE_TTL = 60

    # Maximum cache size (number of entries)
    DEFAULT_MAX_CACHE_SIZE = 1000

    # Category names used as the first half of every cache key
    UUID = 'uuid'
    PLAYER = 'player'
    RECENT_GAMES = 'recentgames'
    GUILD = 'guild'

class UpstreamConstants:
    """Constants for the Mojang and Hypixel HTTP APIs."""

    MOJANG_PROFILE_URL = 'https://api.mojang.com/users/profiles/minecraft/{username}'
    HYPIXEL_BASE_URL = 'https://api.hypixel.net/v2'

    # Total attempts per request, including the first one
    MAX_ATTEMPTS = 3
    RETRY_BASE_DELAY = 0.1  # seconds, doubled after every failed attempt
    REQUEST_TIMEOUT = 10  # seconds

    # Longest upstream error body quoted in an exception message
    ERROR_BODY_LIMIT = 200


class PaginationConstants:
    """Constants for paginated displays."""

    # Text replies longer than this are split into embed pages
    TEXT_PAGE_LENGTH = 3500

    # Per-game-mode pages of /detailedstats
    DETAILED_PAGE_LENGTH = 4000

    # Discord rejects plain message content above this
    MESSAGE_CONTENT_LIMIT = 2000

    # Seconds before the Previous/Next buttons stop responding
    DETAILED_TIMEOUT = 180
    DEFAULT_TIMEOUT = 120

class UIConstants:
    """Constants for Discord UI elements."""

    ICON_URL = 'https://packshq.com/assets/img/hsbr.jpg'

    # Embed colors
    PROFILE_COLOR = 0x00AE86     # Teal for profile and general info
    MODE_COLOR = 0x0099FF        # Blue for per-mode detail pages
    GUILD_COLOR = 0xFFD700       # Gold for guild info
    ERROR_COLOR = 0xE74C3C       # Red for errors

    NOT_AVAILABLE = 'N/A'
