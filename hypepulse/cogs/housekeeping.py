"""
Housekeeping Cog - Background Tasks

Periodically sweeps expired entries out of the result cache so players nobody
asks about again do not keep memory alive.
"""

from discord.ext import commands, tasks

from hypepulse.config import Config
from hypepulse.services.result_cache import ResultCache
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)


class HousekeepingCog(commands.Cog):
    """Background maintenance tasks"""

    def __init__(self, bot):
        self.bot = bot
        self.cache: ResultCache = bot.cache
        self.sweep_cache.change_interval(seconds=Config.CACHE_SWEEP_INTERVAL)

    async def cog_load(self):
        self.sweep_cache.start()
        logger.info("HousekeepingCog: Background tasks started")

    async def cog_unload(self):
        """Stop background tasks when cog is unloaded"""
        self.sweep_cache.cancel()
        logger.info("HousekeepingCog: Background tasks stopped")

    @tasks.loop(seconds=60)
    async def sweep_cache(self):
        """Drop expired cache entries"""
        try:
            removed = self.cache.sweep()
            if removed > 0:
                logger.debug(f"Swept {removed} expired cache entries, {len(self.cache)} remaining")
        except Exception as e:
            logger.error(f"Error in cache sweep task: {e}", exc_info=True)

    @sweep_cache.before_loop
    async def before_sweep_task(self):
        """Wait for bot to be ready before starting the sweep task"""
        await self.bot.wait_until_ready()


async def setup(bot):
    await bot.add_cog(HousekeepingCog(bot))
