"""
Paginator View

Discord UI component for paging through a PageSet with Previous/Next buttons.
The navigation state lives in PageCursor so it can be reasoned about without
a Discord connection.
"""

import discord
from typing import List, Optional, Sequence

from hypepulse.constants import PaginationConstants
from hypepulse.data_models.page import Page
from hypepulse.utils.embeds import build_page_embed
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)


class PageCursor:
    """Index into a fixed number of pages. Moves clamp at both ends; expiry is final."""

    def __init__(self, total_pages: int):
        if total_pages < 1:
            raise ValueError("PageCursor needs at least one page")
        self.total_pages = total_pages
        self.index = 0
        self.expired = False

    @property
    def at_start(self) -> bool:
        return self.index == 0

    @property
    def at_end(self) -> bool:
        return self.index >= self.total_pages - 1

    def next(self) -> bool:
        """Advance one page. Returns True if the index changed."""
        if self.expired or self.at_end:
            return False
        self.index += 1
        return True

    def previous(self) -> bool:
        """Go back one page. Returns True if the index changed."""
        if self.expired or self.at_start:
            return False
        self.index -= 1
        return True

    def expire(self):
        self.expired = True


class PaginatorView(discord.ui.View):
    """
    Pagination view for navigating through the pages of one command reply.

    Each reply gets its own view and cursor, so concurrent paginated replies
    never share state.
    """

    def __init__(self, pages: Sequence[Page], timeout: float = PaginationConstants.DEFAULT_TIMEOUT):
        """
        Initialize pagination view with the pages to show.

        Args:
            pages: Pages to paginate through (at least one)
            timeout: Seconds of inactivity before the buttons are disabled
        """
        super().__init__(timeout=timeout)
        self.pages = tuple(pages)
        self.cursor = PageCursor(len(self.pages))
        self.embeds: List[discord.Embed] = [
            build_page_embed(page, index + 1, len(self.pages))
            for index, page in enumerate(self.pages)
        ]
        self.message: Optional[discord.Message] = None

        self._update_button_states()

    @property
    def current_embed(self) -> discord.Embed:
        return self.embeds[self.cursor.index]

    def _update_button_states(self):
        """Update enabled/disabled state of navigation buttons"""
        self.previous_button.disabled = self.cursor.expired or self.cursor.at_start
        self.next_button.disabled = self.cursor.expired or self.cursor.at_end

    @discord.ui.button(label="Previous", style=discord.ButtonStyle.danger)
    async def previous_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        """Navigate to previous page"""
        if self.cursor.previous():
            self._update_button_states()
            await interaction.response.edit_message(embed=self.current_embed, view=self)
        else:
            await interaction.response.defer()

    @discord.ui.button(label="Next", style=discord.ButtonStyle.success)
    async def next_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        """Navigate to next page"""
        if self.cursor.next():
            self._update_button_states()
            await interaction.response.edit_message(embed=self.current_embed, view=self)
        else:
            await interaction.response.defer()

    async def on_timeout(self):
        """Disable all buttons when the view expires"""
        self.cursor.expire()
        for item in self.children:
            item.disabled = True

        if self.message is not None:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException as e:
                logger.warning(f"Could not disable pagination buttons: {e}")

        logger.debug(f"PaginatorView timed out on page {self.cursor.index + 1}/{self.cursor.total_pages}")
