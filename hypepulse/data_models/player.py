"""
Player data models for the Mojang and Hypixel lookups.

Provides immutable data transfer objects built from raw upstream JSON. Hypixel
publishes no fixed schema for per-mode stats, so every accessor tolerates absent
fields and returns a caller-supplied default instead.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class PlayerIdentity:
    """A username resolved to its Mojang UUID."""
    username: str
    uuid: str


@dataclass(frozen=True)
class GameModeStats:
    """Stats for a single game mode, e.g. ``SkyWars`` or ``Bedwars``.

    Values are either scalars (numbers, strings, booleans) or nested
    mappings/lists. Use ``number`` for arithmetic and ``value`` for display.
    """
    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'fields', MappingProxyType(dict(self.fields)))

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def items(self):
        return self.fields.items()

    def value(self, key: str, default: Any = None) -> Any:
        """Raw value for ``key``, or ``default`` when absent or null."""
        value = self.fields.get(key)
        return default if value is None else value

    def number(self, key: str, default: Optional[Union[int, float]] = 0) -> Optional[Union[int, float]]:
        """Numeric value for ``key``, or ``default`` when absent or not numeric."""
        value = self.fields.get(key)
        return value if _is_number(value) else default


@dataclass(frozen=True)
class PlayerRecord:
    """A Hypixel player record. Read-only once fetched."""
    uuid: str
    display_name: str
    rank: Optional[str]
    new_package_rank: Optional[str]
    first_login: Optional[int]  # epoch milliseconds
    last_login: Optional[int]   # epoch milliseconds
    stats: Mapping[str, GameModeStats]

    @property
    def display_rank(self) -> Optional[str]:
        return self.rank or self.new_package_rank

    def mode(self, name: str) -> GameModeStats:
        """Stats for game mode ``name``; an empty mode when the player never played it."""
        return self.stats.get(name) or GameModeStats(name)

    @classmethod
    def from_api(cls, uuid: str, payload: Mapping[str, Any]) -> 'PlayerRecord':
        """Build a record from the ``player`` object of the Hypixel response."""
        raw_stats = payload.get('stats')
        stats: Dict[str, GameModeStats] = {}
        if isinstance(raw_stats, dict):
            for mode_name, mode_stats in raw_stats.items():
                # Hypixel occasionally stores scalars at the mode level; they carry no stats
                if isinstance(mode_stats, dict):
                    stats[mode_name] = GameModeStats(mode_name, mode_stats)

        first_login = payload.get('firstLogin')
        last_login = payload.get('lastLogin')
        return cls(
            uuid=uuid,
            display_name=payload.get('displayname') or payload.get('playername') or uuid,
            rank=payload.get('rank'),
            new_package_rank=payload.get('newPackageRank'),
            first_login=first_login if _is_number(first_login) else None,
            last_login=last_login if _is_number(last_login) else None,
            stats=MappingProxyType(stats),
        )


@dataclass(frozen=True)
class RecentGameEntry:
    """A single entry from the recent games endpoint."""
    game_type: Optional[str]
    map: Optional[str]

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'RecentGameEntry':
        return cls(
            game_type=payload.get('gameType'),
            map=payload.get('map'),
        )


@dataclass(frozen=True)
class GuildRecord:
    """Guild summary for a player."""
    name: Optional[str]
    tag: Optional[str]
    member_count: int = 0
    created: Optional[int] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'GuildRecord':
        members = payload.get('members')
        created = payload.get('created')
        return cls(
            name=payload.get('name'),
            tag=payload.get('tag'),
            member_count=len(members) if isinstance(members, list) else 0,
            created=created if _is_number(created) else None,
        )


RecentGames = Tuple[RecentGameEntry, ...]
