"""
Shared embed utilities for the HypePulse bot.

Converts Pages into Discord embeds so every reply shares the same look.
"""

import discord
from typing import Optional

from hypepulse.constants import UIConstants
from hypepulse.data_models.page import Page


def build_page_embed(page: Page, page_number: Optional[int] = None, total_pages: Optional[int] = None) -> discord.Embed:
    """
    Build an embed for a single page.

    Args:
        page: Page to render (title, body, inline fields, color)
        page_number: 1-based position of the page, shown in the footer when paginating
        total_pages: Total pages in the reply

    Returns:
        Formatted Discord embed ready for display
    """
    embed = discord.Embed(
        title=page.title,
        description=page.body or None,
        color=page.color if page.color is not None else UIConstants.PROFILE_COLOR,
        timestamp=discord.utils.utcnow()
    )
    embed.set_thumbnail(url=UIConstants.ICON_URL)

    for page_field in page.fields:
        embed.add_field(name=page_field.name, value=page_field.value, inline=page_field.inline)

    if page_number is not None and total_pages and total_pages > 1:
        embed.set_footer(text=f"Page {page_number} / {total_pages}")

    return embed
