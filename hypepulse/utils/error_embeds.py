"""
Centralized error embeds for consistent error handling across the HypePulse bot.
"""

import discord

from hypepulse.constants import UIConstants


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def on_cooldown(retry_after: float) -> discord.Embed:
        """Create embed for commands used again too quickly."""
        return discord.Embed(
            title="Slow Down",
            description=f"This command is on cooldown. Try again in {retry_after:.1f} seconds.",
            color=discord.Color.orange()
        )

    @staticmethod
    def unexpected_error() -> discord.Embed:
        """Create embed for errors nothing else handled."""
        return discord.Embed(
            title="Unexpected Error",
            description="An unexpected error occurred while processing your command.",
            color=UIConstants.ERROR_COLOR
        )
