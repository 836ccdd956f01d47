"""
Command router - maps a slash command and its username to the fetch/format pipeline.

The router never raises: every failure becomes an ``Error: <message>`` reply and
a log entry carrying the command name and the username.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from hypepulse.constants import PaginationConstants
from hypepulse.data_models.page import Page, PageSet
from hypepulse.services.stat_formatter import StatFormatter, ViewSelector
from hypepulse.services.upstream import UpstreamClient
from hypepulse.utils.exceptions import HypePulseError
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)


class ReplyKind(Enum):
    TEXT = 'text'
    EMBED = 'embed'
    PAGINATED = 'paginated'


@dataclass(frozen=True)
class Reply:
    """What to send back: plain text, one embed page, or several pages with a timeout."""
    content: Optional[str] = None
    pages: PageSet = ()
    timeout: Optional[float] = None

    @property
    def kind(self) -> ReplyKind:
        if len(self.pages) > 1:
            return ReplyKind.PAGINATED
        if self.pages:
            return ReplyKind.EMBED
        return ReplyKind.TEXT

    @property
    def timeout_ms(self) -> Optional[int]:
        return int(self.timeout * 1000) if self.timeout is not None else None

    @classmethod
    def text(cls, content: str) -> 'Reply':
        return cls(content=content)

    @classmethod
    def single(cls, page: Page) -> 'Reply':
        return cls(pages=(page,))

    @classmethod
    def paginated(cls, pages: PageSet, timeout: float) -> 'Reply':
        return cls(pages=tuple(pages), timeout=timeout)


@dataclass(frozen=True)
class CommandSpec:
    """A slash command: its description, the router method answering it and its view."""
    name: str
    description: str
    handler: str
    view: Optional[ViewSelector] = None


COMMANDS: Dict[str, CommandSpec] = {spec.name: spec for spec in (
    CommandSpec('uuid', 'Get the Mojang UUID for a Minecraft username.', '_handle_uuid'),
    CommandSpec('player', 'Get basic Hypixel player info.', '_handle_player'),
    CommandSpec('recentgames', 'Get the recent games played by a player.', '_handle_recent_games'),
    CommandSpec('guild', 'Get the guild info for a player.', '_handle_guild'),
    CommandSpec('stats', 'Get ALL Hypixel stats for a player (all game modes).', '_handle_stats',
                ViewSelector.all_stats()),
    CommandSpec('skywars', 'Get detailed SkyWars stats.', '_handle_stats', ViewSelector.for_mode('skywars')),
    CommandSpec('bedwars', 'Get detailed BedWars stats.', '_handle_stats', ViewSelector.for_mode('bedwars')),
    CommandSpec('duels', 'Get detailed Duels stats.', '_handle_stats', ViewSelector.for_mode('duels')),
    CommandSpec('bridgeduels', 'Get detailed Bridge Duels stats.', '_handle_stats',
                ViewSelector.for_mode('bridgeduels')),
    CommandSpec('skyblock', 'Get detailed SkyBlock stats.', '_handle_stats', ViewSelector.for_mode('skyblock')),
    CommandSpec('pit', 'Get detailed Pit stats.', '_handle_stats', ViewSelector.for_mode('pit')),
    CommandSpec('detailedstats', 'Get detailed stats paginated by game mode for a player.',
                '_handle_detailed', ViewSelector.detailed()),
)}


class CommandRouter:
    """Runs one command invocation: resolve, fetch, format, and package the reply."""

    def __init__(self, client: UpstreamClient, formatter: Optional[StatFormatter] = None):
        self.client = client
        self.formatter = formatter or StatFormatter()

    async def route(self, command: str, username: str) -> Reply:
        spec = COMMANDS.get(command)
        if spec is None:
            return Reply.text("Unknown command.")

        username = (username or '').strip()
        try:
            handler = getattr(self, spec.handler)
            return await handler(username, spec)
        except HypePulseError as e:
            logger.error(f"Error handling command {command} for {username}: {e}")
            return self._error_reply(e)
        except Exception as e:
            logger.error(f"Unexpected error handling command {command} for {username}: {e}", exc_info=True)
            return self._error_reply(e)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _handle_uuid(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        return Reply.text(self.formatter.identity_text(identity, username))

    async def _handle_player(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        record = await self.client.fetch_player(identity.uuid)
        return Reply.single(self.formatter.profile_page(record))

    async def _handle_recent_games(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        games = await self.client.fetch_recent_games(identity.uuid)
        return self._text_reply(
            self.formatter.recent_games_text(username, games),
            f"Recent Games for {username}"
        )

    async def _handle_guild(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        guild = await self.client.fetch_guild(identity.uuid)
        return Reply.single(self.formatter.guild_page(guild, username))

    async def _handle_stats(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        record = await self.client.fetch_player(identity.uuid)
        return self._text_reply(
            self.formatter.format_text(record, spec.view),
            f"Stats for {record.display_name}"
        )

    async def _handle_detailed(self, username: str, spec: CommandSpec) -> Reply:
        identity = await self.client.resolve_identity(username)
        record = await self.client.fetch_player(identity.uuid)
        pages = self.formatter.format(record, spec.view)
        if len(pages) > 1:
            return Reply.paginated(pages, PaginationConstants.DETAILED_TIMEOUT)
        return Reply.single(pages[0])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _text_reply(self, text: str, title: str) -> Reply:
        """Plain text when it fits one message; embed pages when it doesn't."""
        pages = self.formatter.paginate_text(text, title)
        if len(pages) > 1:
            return Reply.paginated(pages, PaginationConstants.DEFAULT_TIMEOUT)
        if len(text) <= PaginationConstants.MESSAGE_CONTENT_LIMIT:
            return Reply.text(text)
        return Reply.single(pages[0])

    @staticmethod
    def _error_reply(error: Exception) -> Reply:
        """``Error: <message>``, cut to fit a single message."""
        content = f"Error: {error}"
        limit = PaginationConstants.MESSAGE_CONTENT_LIMIT
        if len(content) > limit:
            content = content[:limit - 3] + '...'
        return Reply.text(content)
