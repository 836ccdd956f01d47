"""
Stats commands - Mojang/Hypixel lookups as slash commands.

Each command takes a single Minecraft username, runs it through the command
router and delivers the reply as plain text, a single embed, or a paginated
set of embeds.
"""

import discord
from discord.ext import commands
from discord import app_commands

from hypepulse.services.command_router import COMMANDS, CommandRouter, Reply, ReplyKind
from hypepulse.ui.paginator import PaginatorView
from hypepulse.utils.embeds import build_page_embed
from hypepulse.utils.error_embeds import ErrorEmbeds
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)

USERNAME_DESCRIPTION = "Minecraft username"
COOLDOWN_SECONDS = 5.0


async def deliver_reply(interaction: discord.Interaction, reply: Reply):
    """Send a router reply as a follow-up to an already deferred interaction."""
    if reply.kind is ReplyKind.TEXT:
        await interaction.followup.send(reply.content)
    elif reply.kind is ReplyKind.EMBED:
        await interaction.followup.send(embed=build_page_embed(reply.pages[0]))
    else:
        view = PaginatorView(reply.pages, timeout=reply.timeout)
        view.message = await interaction.followup.send(embed=view.current_embed, view=view, wait=True)


class StatsCog(commands.Cog):
    """Hypixel statistics commands."""

    def __init__(self, bot, router: CommandRouter = None):
        self.bot = bot
        self.router = router or bot.router

    async def _run(self, interaction: discord.Interaction, command: str, username: str):
        # Defer immediately, upstream lookups can take longer than 3 seconds
        await interaction.response.defer()

        reply = await self.router.route(command, username)
        try:
            await deliver_reply(interaction, reply)
        except discord.HTTPException as e:
            logger.error(f"Failed to deliver /{command} reply for {username}: {e}", exc_info=True)
            try:
                await interaction.followup.send(embed=ErrorEmbeds.unexpected_error(), ephemeral=True)
            except discord.HTTPException:
                logger.error(f"Failed to report the delivery failure for /{command}")

    @app_commands.command(name="uuid", description=COMMANDS['uuid'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def uuid(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'uuid', username)

    @app_commands.command(name="player", description=COMMANDS['player'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def player(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'player', username)

    @app_commands.command(name="recentgames", description=COMMANDS['recentgames'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def recentgames(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'recentgames', username)

    @app_commands.command(name="guild", description=COMMANDS['guild'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def guild(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'guild', username)

    @app_commands.command(name="stats", description=COMMANDS['stats'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def stats(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'stats', username)

    @app_commands.command(name="skywars", description=COMMANDS['skywars'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def skywars(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'skywars', username)

    @app_commands.command(name="bedwars", description=COMMANDS['bedwars'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def bedwars(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'bedwars', username)

    @app_commands.command(name="duels", description=COMMANDS['duels'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def duels(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'duels', username)

    @app_commands.command(name="bridgeduels", description=COMMANDS['bridgeduels'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def bridgeduels(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'bridgeduels', username)

    @app_commands.command(name="skyblock", description=COMMANDS['skyblock'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def skyblock(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'skyblock', username)

    @app_commands.command(name="pit", description=COMMANDS['pit'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def pit(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'pit', username)

    @app_commands.command(name="detailedstats", description=COMMANDS['detailedstats'].description)
    @app_commands.describe(username=USERNAME_DESCRIPTION)
    @app_commands.checks.cooldown(rate=1, per=COOLDOWN_SECONDS, key=lambda i: i.user.id)
    async def detailedstats(self, interaction: discord.Interaction, username: str):
        await self._run(interaction, 'detailedstats', username)


async def setup(bot):
    await bot.add_cog(StatsCog(bot))
