import asyncio
import traceback
from typing import Optional

import discord
from discord.ext import commands
from discord import app_commands

from hypepulse.config import Config
from hypepulse.services.command_router import CommandRouter
from hypepulse.services.result_cache import ResultCache
from hypepulse.services.stat_formatter import StatFormatter
from hypepulse.services.upstream import UpstreamClient
from hypepulse.utils.error_embeds import ErrorEmbeds
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)

class HypePulseBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None
        )

        # Attach app command error handler
        self.tree.on_error = self.on_app_command_error

        self.cache: Optional[ResultCache] = None
        self.upstream: Optional[UpstreamClient] = None
        self.router: Optional[CommandRouter] = None
        self.logger = logger

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up HypePulse...")

        # Services live for the whole process and are shared by every cog
        self.cache = ResultCache(default_ttls=Config.cache_ttls())
        self.upstream = UpstreamClient(
            api_key=Config.HYPIXEL_API_KEY,
            cache=self.cache,
            timeout=Config.HTTP_TIMEOUT_SECONDS,
            max_attempts=Config.HTTP_MAX_ATTEMPTS,
            base_delay=Config.HTTP_RETRY_BASE_DELAY,
        )
        await self.upstream.start()
        self.router = CommandRouter(self.upstream, StatFormatter())

        await self.load_cogs()
        await self._sync_commands()

        self.logger.info("HypePulse setup complete!")

    async def load_cogs(self):
        """Load all cogs"""
        cogs_to_load = [
            'hypepulse.cogs.stats',
            'hypepulse.cogs.housekeeping',
        ]

        for cog in cogs_to_load:
            try:
                await self.load_extension(cog)
                self.logger.info(f"Loaded cog: {cog}")
            except Exception as e:
                self.logger.error(f"Failed to load cog {cog}: {e}", exc_info=True)

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild_ids = Config.get_guild_ids()

            if guild_ids:
                # Guild-specific sync (instant updates)
                self.logger.info(f"Attempting to sync commands to {len(guild_ids)} guild(s): {guild_ids}...")

                total_synced = 0
                for guild_id in guild_ids:
                    try:
                        guild = discord.Object(id=guild_id)
                        self.tree.copy_global_to(guild=guild)
                        synced = await self.tree.sync(guild=guild)
                        self.logger.info(f"Successfully synced {len(synced)} command(s) to guild {guild_id}")
                        total_synced += len(synced)
                    except discord.errors.Forbidden:
                        self.logger.error(f"Permission error syncing to guild {guild_id}. Ensure the bot has the 'application.commands' scope and is in the guild.", exc_info=True)
                    except discord.errors.HTTPException as e:
                        self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)

                self.logger.info(f"Multi-guild sync complete: {total_synced} total command instances deployed")
            else:
                # Global sync (can take up to 1 hour to propagate)
                self.logger.info("Attempting to sync commands globally... (Note: This can take up to an hour to propagate)")
                synced = await self.tree.sync()
                self.logger.info(f"Successfully synced {len(synced)} command(s) globally")
                for cmd in synced:
                    self.logger.info(f"  - {cmd.name}: {cmd.description}")
        except Exception as e:
            # Don't raise - already registered commands keep working
            self.logger.error(f"Failed to sync commands: {e}", exc_info=True)

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'HypePulse is online as {self.user}')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name="Hypixel stats | /stats")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'

        if isinstance(error, app_commands.CommandOnCooldown):
            self.logger.info(f"Command '{command_name}' on cooldown for user {interaction.user}")
            error_embed = ErrorEmbeds.on_cooldown(error.retry_after)
        else:
            self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)
            error_embed = ErrorEmbeds.unexpected_error()

        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=error_embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=error_embed, ephemeral=True)
        except Exception as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down HypePulse...")

        if self.upstream:
            await self.upstream.close()

        await super().close()

async def main():
    """Main entry point"""
    Config.validate()

    bot = HypePulseBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except KeyboardInterrupt:
        await bot.close()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
