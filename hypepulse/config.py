import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support

    # Upstream API settings
    HYPIXEL_API_KEY = os.getenv('HYPIXEL_API_KEY')
    HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', 10))
    HTTP_MAX_ATTEMPTS = int(os.getenv('HTTP_MAX_ATTEMPTS', 3))
    HTTP_RETRY_BASE_DELAY = float(os.getenv('HTTP_RETRY_BASE_DELAY', 0.1))

    # Cache settings (seconds)
    CACHE_TTL_DEFAULT = int(os.getenv('CACHE_TTL_DEFAULT', 300))
    CACHE_TTL_RECENT_GAMES = int(os.getenv('CACHE_TTL_RECENT_GAMES', 60))
    CACHE_SWEEP_INTERVAL = int(os.getenv('CACHE_SWEEP_INTERVAL', 60))

    # Bot settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            # Multi-guild support: comma-separated IDs
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        elif cls.DISCORD_GUILD_ID:
            return [cls.DISCORD_GUILD_ID]
        else:
            # Global sync
            return []

    @classmethod
    def cache_ttls(cls):
        """Default TTL per cache category"""
        return {
            'uuid': cls.CACHE_TTL_DEFAULT,
            'player': cls.CACHE_TTL_DEFAULT,
            'guild': cls.CACHE_TTL_DEFAULT,
            'recentgames': cls.CACHE_TTL_RECENT_GAMES,
        }

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.HYPIXEL_API_KEY:
            raise ValueError("HYPIXEL_API_KEY is required")
        if cls.HTTP_MAX_ATTEMPTS < 1:
            raise ValueError("HTTP_MAX_ATTEMPTS must be at least 1")
