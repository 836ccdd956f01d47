"""
Stat formatter - turns Hypixel records into pages of Discord markdown.

Pure and deterministic: nothing here performs I/O or mutates the record. Every
output is a non-empty PageSet whose page bodies fit the configured length.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from hypepulse.constants import PaginationConstants, UIConstants
from hypepulse.data_models.page import Page, PageField, PageSet
from hypepulse.data_models.player import GameModeStats, GuildRecord, PlayerIdentity, PlayerRecord, RecentGameEntry
from hypepulse.utils.exceptions import FormatterFault
from hypepulse.utils.text import format_date, format_section, ratio, render_value, split_text

NO_DATA = "No data available."


class ViewKind(Enum):
    ALL = 'all'
    MODE = 'mode'
    DETAILED = 'detailed'


@dataclass(frozen=True)
class ViewSelector:
    """Which slice of a player record to render."""
    kind: ViewKind
    mode: Optional[str] = None

    @classmethod
    def all_stats(cls) -> 'ViewSelector':
        return cls(ViewKind.ALL)

    @classmethod
    def for_mode(cls, mode: str) -> 'ViewSelector':
        return cls(ViewKind.MODE, mode)

    @classmethod
    def detailed(cls) -> 'ViewSelector':
        return cls(ViewKind.DETAILED)


# ----------------------------------------------------------------------
# Per-mode extractors
# ----------------------------------------------------------------------

def skywars_stats(record: PlayerRecord) -> Dict[str, Any]:
    sw = record.mode('SkyWars')
    return {
        'stars': sw.value('skywars_level') or UIConstants.NOT_AVAILABLE,
        'kills': sw.number('skywars_kills'),
        'deaths': sw.number('skywars_deaths'),
        'kdr': ratio(sw.number('skywars_kills', None), sw.number('skywars_deaths', None)),
        'wins': sw.number('skywars_wins'),
        'losses': sw.number('skywars_losses'),
        'wlr': ratio(sw.number('skywars_wins', None), sw.number('skywars_losses', None)),
        'finalKills': sw.number('skywars_final_kills'),
        'finalDeaths': sw.number('skywars_final_deaths'),
        'fkdr': ratio(sw.number('skywars_final_kills', None), sw.number('skywars_final_deaths', None)),
    }


def bedwars_stats(record: PlayerRecord) -> Dict[str, Any]:
    bw = record.mode('Bedwars')
    return {
        'kills': bw.number('kills_bedwars'),
        'deaths': bw.number('deaths_bedwars'),
        'kdr': ratio(bw.number('kills_bedwars', None), bw.number('deaths_bedwars', None)),
        'finalKills': bw.number('final_kills_bedwars'),
        'finalDeaths': bw.number('final_deaths_bedwars'),
        'fkdr': ratio(bw.number('final_kills_bedwars', None), bw.number('final_deaths_bedwars', None)),
        'wins': bw.number('wins_bedwars'),
        'losses': bw.number('losses_bedwars'),
        'wlr': ratio(bw.number('wins_bedwars', None), bw.number('losses_bedwars', None)),
        'bedsBroken': bw.number('beds_broken_bedwars'),
        'gamesPlayed': bw.number('games_played_bedwars'),
    }


def duels_stats(record: PlayerRecord) -> Dict[str, Any]:
    duels = record.mode('Duels')
    return {
        'wins': duels.number('wins'),
        'losses': duels.number('losses'),
        'kills': duels.number('kills'),
        'deaths': duels.number('deaths'),
        'kdr': ratio(duels.number('kills', None), duels.number('deaths', None)),
        'wlr': ratio(duels.number('wins', None), duels.number('losses', None)),
        'games': duels.number('games'),
        'comboKills': duels.number('combo_kills'),
        'comboDeaths': duels.number('combo_deaths'),
    }


def bridge_duels_stats(record: PlayerRecord) -> Dict[str, Any]:
    duels = record.mode('Duels')
    return {
        'wins': duels.number('bridge_duels_wins'),
        'losses': duels.number('bridge_duels_losses'),
        'kills': duels.number('bridge_duels_kills'),
        'deaths': duels.number('bridge_duels_deaths'),
        'kdr': ratio(duels.number('bridge_duels_kills', None), duels.number('bridge_duels_deaths', None)),
        'wlr': ratio(duels.number('bridge_duels_wins', None), duels.number('bridge_duels_losses', None)),
    }


def pit_stats(record: PlayerRecord) -> Dict[str, Any]:
    pit = record.mode('Pit')
    return {
        'coins': pit.number('coins'),
        'kills': pit.number('kills'),
        'deaths': pit.number('deaths'),
        'kdr': ratio(pit.number('kills', None), pit.number('deaths', None)),
        'level': pit.value('level') or UIConstants.NOT_AVAILABLE,
    }


@dataclass(frozen=True)
class GameModeView:
    """A named game mode command: its section title and how to extract its stats."""
    key: str
    title: str
    extractor: Callable[[PlayerRecord], Dict[str, Any]]


GAME_MODES: Dict[str, GameModeView] = {
    'skywars': GameModeView('skywars', 'SkyWars', skywars_stats),
    'bedwars': GameModeView('bedwars', 'BedWars', bedwars_stats),
    'duels': GameModeView('duels', 'Duels', duels_stats),
    'bridgeduels': GameModeView('bridgeduels', 'Bridge Duels', bridge_duels_stats),
    'pit': GameModeView('pit', 'Pit', pit_stats),
}

SKYBLOCK_SECTIONS = (('profiles', 'Profiles'), ('collections', 'Collections'), ('slayers', 'Slayers'))


class StatFormatter:
    """Maps a PlayerRecord and a ViewSelector to a PageSet."""

    def __init__(
        self,
        text_page_length: int = PaginationConstants.TEXT_PAGE_LENGTH,
        detailed_page_length: int = PaginationConstants.DETAILED_PAGE_LENGTH,
    ):
        self.text_page_length = text_page_length
        self.detailed_page_length = detailed_page_length

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def format(self, record: PlayerRecord, view: ViewSelector) -> PageSet:
        """Render ``record`` as the pages for ``view``."""
        if record is None:
            raise FormatterFault("No player record to format.")

        if view.kind is ViewKind.DETAILED:
            return self.detailed_pages(record)
        return self.paginate_text(self.format_text(record, view), f"Stats for {record.display_name}")

    def format_text(self, record: PlayerRecord, view: ViewSelector) -> str:
        """Long-form text for the ALL and MODE views."""
        if record is None:
            raise FormatterFault("No player record to format.")

        if view.kind is ViewKind.ALL:
            return self.all_stats_text(record)
        if view.kind is ViewKind.MODE:
            if view.mode == 'skyblock':
                return self.skyblock_text(record)
            mode = GAME_MODES.get(view.mode)
            if mode is None:
                raise FormatterFault(f"Unknown game mode: {view.mode}")
            return format_section(f"{mode.title} Stats for {record.display_name}", mode.extractor(record))
        raise FormatterFault(f"View {view.kind.value} has no text form.")

    def paginate_text(self, text: str, title: str, color: Optional[int] = UIConstants.PROFILE_COLOR) -> PageSet:
        """Split ``text`` into pages of at most ``text_page_length`` characters.

        A single chunk keeps ``title`` as-is; several chunks get a ``(Part n)`` suffix.
        """
        return self._section_pages(title, text, self.text_page_length, color)

    # ------------------------------------------------------------------
    # Text views
    # ------------------------------------------------------------------

    def all_stats_text(self, record: PlayerRecord) -> str:
        output = f"**All Stats for {record.display_name}:**\n"
        if not record.stats:
            return output + "No stats available."

        for mode_name, mode_stats in record.stats.items():
            output += f"\n**{mode_name} Stats:**\n"
            output += self._generic_lines(mode_stats)
        return output

    def skyblock_text(self, record: PlayerRecord) -> str:
        sb = record.mode('SkyBlock')
        output = f"**SkyBlock Stats for {record.display_name}:**\n"
        if not len(sb):
            return output + "No SkyBlock stats available."

        known = set()
        for key, title in SKYBLOCK_SECTIONS:
            known.add(key)
            section = sb.value(key)
            if isinstance(section, list):
                section = {str(index): item for index, item in enumerate(section)}
            if section:
                output += format_section(title, section if isinstance(section, dict) else {key: section})

        extras = {key: value for key, value in sb.items() if key not in known}
        if extras:
            output += format_section("Other SkyBlock Stats", extras)
        return output

    # ------------------------------------------------------------------
    # Detailed view
    # ------------------------------------------------------------------

    def detailed_pages(self, record: PlayerRecord) -> PageSet:
        """General info page followed by one or more pages per game mode."""
        pages = [Page(
            title=f"General Info for {record.display_name}",
            fields=self._login_fields(record),
            color=UIConstants.PROFILE_COLOR,
        )]
        for mode_name, mode_stats in record.stats.items():
            pages.extend(self._section_pages(
                f"{mode_name} Stats",
                self._generic_lines(mode_stats),
                self.detailed_page_length,
                UIConstants.MODE_COLOR,
            ))
        return tuple(pages)

    # ------------------------------------------------------------------
    # Non-stat replies
    # ------------------------------------------------------------------

    def profile_page(self, record: PlayerRecord) -> Page:
        return Page(
            title=f"Hypixel Profile: {record.display_name}",
            body=f"UUID: `{record.uuid}`",
            fields=self._login_fields(record),
            color=UIConstants.PROFILE_COLOR,
        )

    def guild_page(self, guild: GuildRecord, username: str) -> Page:
        body = (
            f"**Guild Name:** {guild.name or UIConstants.NOT_AVAILABLE}\n"
            f"**Tag:** {guild.tag or UIConstants.NOT_AVAILABLE}"
        )
        if guild.member_count:
            body += f"\n**Members:** {guild.member_count}"
        if guild.created:
            body += f"\n**Created:** {format_date(guild.created)}"
        return Page(title=f"Guild Info for {username}", body=body, color=UIConstants.GUILD_COLOR)

    @staticmethod
    def identity_text(identity: PlayerIdentity, username: str) -> str:
        return f"UUID for **{username}** is: `{identity.uuid}`"

    @staticmethod
    def recent_games_text(username: str, games: Sequence[RecentGameEntry]) -> str:
        if not games:
            return f"No recent games found for **{username}**."
        message = f"**Recent Games for {username}:**\n"
        for index, game in enumerate(games, 1):
            message += f"**Game {index}:** {game.game_type or 'Unknown'} on {game.map or UIConstants.NOT_AVAILABLE}\n"
        return message

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _generic_lines(mode_stats: GameModeStats) -> str:
        return ''.join(f"**{key}:** {render_value(value)}\n" for key, value in mode_stats.items())

    @staticmethod
    def _login_fields(record: PlayerRecord):
        return (
            PageField('Rank', record.display_rank or UIConstants.NOT_AVAILABLE),
            PageField('First Login', format_date(record.first_login)),
            PageField('Last Login', format_date(record.last_login)),
        )

    @staticmethod
    def _section_pages(title: str, text: str, max_length: int, color: Optional[int]) -> PageSet:
        parts = split_text(text, max_length) or [NO_DATA]
        if len(parts) == 1:
            return (Page(title=title, body=parts[0], color=color),)
        return tuple(
            Page(title=f"{title} (Part {index})", body=part, color=color)
            for index, part in enumerate(parts, 1)
        )
