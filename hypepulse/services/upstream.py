"""
Upstream client for the Mojang and Hypixel APIs.

Resolves usernames to UUIDs through Mojang and fetches player, recent games and
guild data from Hypixel. Every successful result is stored in the ResultCache
before being returned; transient failures are retried with exponential backoff.
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple
from urllib.parse import quote

import aiohttp

from hypepulse.constants import CacheConstants, UpstreamConstants
from hypepulse.data_models.player import (
    GuildRecord,
    PlayerIdentity,
    PlayerRecord,
    RecentGameEntry,
    RecentGames,
)
from hypepulse.services.base import BaseService
from hypepulse.services.result_cache import ResultCache
from hypepulse.utils.exceptions import MalformedResponse, NotFound, TransientUpstreamError
from hypepulse.utils.logger import setup_logger

logger = setup_logger(__name__)

UUID_CONTEXT = "Error fetching UUID"
PLAYER_CONTEXT = "Error fetching Hypixel player data"
RECENT_GAMES_CONTEXT = "Error fetching recent games"
GUILD_CONTEXT = "Error fetching guild info"


def _describe(status: int, body: Any) -> str:
    """Render an upstream error body for an exception message, cutting long ones short."""
    if body is None or body == '':
        return f"HTTP {status}"
    text = body if isinstance(body, str) else json.dumps(body)
    limit = UpstreamConstants.ERROR_BODY_LIMIT
    if len(text) > limit:
        return f"HTTP {status}: {text[:limit]}..."
    return text


class UpstreamClient(BaseService):
    """Read-only client for the identity (Mojang) and stats (Hypixel) services."""

    def __init__(
        self,
        api_key: Optional[str],
        cache: ResultCache,
        session: Optional[aiohttp.ClientSession] = None,
        *,
        timeout: float = UpstreamConstants.REQUEST_TIMEOUT,
        max_attempts: int = UpstreamConstants.MAX_ATTEMPTS,
        base_delay: float = UpstreamConstants.RETRY_BASE_DELAY,
        mojang_profile_url: str = UpstreamConstants.MOJANG_PROFILE_URL,
        hypixel_base_url: str = UpstreamConstants.HYPIXEL_BASE_URL,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        super().__init__(max_attempts=max_attempts, base_delay=base_delay, sleep=sleep)
        self.api_key = api_key
        self.cache = cache
        self.timeout = timeout
        self.mojang_profile_url = mojang_profile_url
        self.hypixel_base_url = hypixel_base_url.rstrip('/')
        self._session = session
        self._owns_session = session is None

    async def start(self):
        """Open the HTTP session if one was not injected."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True

    async def close(self):
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    # ------------------------------------------------------------------
    # Public lookups
    # ------------------------------------------------------------------

    async def resolve_identity(self, username: str) -> PlayerIdentity:
        """Resolve a Minecraft username to its UUID via Mojang."""
        username = username.strip()
        cached = self.cache.get(CacheConstants.UUID, username)
        if cached is not None:
            return cached

        url = self.mojang_profile_url.format(username=quote(username, safe=''))
        status, body = await self._get_json(url, UUID_CONTEXT)

        if status == 204 or body is None:
            raise NotFound(f"{UUID_CONTEXT}: Username not found in Mojang API.")
        if not isinstance(body, dict) or not isinstance(body.get('id'), str):
            raise MalformedResponse(f"{UUID_CONTEXT}: response is missing the 'id' field")

        identity = PlayerIdentity(username=body.get('name') or username, uuid=body['id'])
        self.cache.set(CacheConstants.UUID, username, identity)
        logger.debug(f"Resolved {username} to {identity.uuid}")
        return identity

    async def fetch_player(self, uuid: str) -> PlayerRecord:
        """Fetch the Hypixel player record for ``uuid``."""
        cached = self.cache.get(CacheConstants.PLAYER, uuid)
        if cached is not None:
            return cached

        body = await self._get_hypixel(
            'player', {'uuid': uuid}, PLAYER_CONTEXT,
            failure_message="Failed to fetch data from Hypixel API."
        )
        payload = body.get('player')
        if not payload:
            raise NotFound(f"{PLAYER_CONTEXT}: Player not found on Hypixel.")
        if not isinstance(payload, dict):
            raise MalformedResponse(f"{PLAYER_CONTEXT}: 'player' is not an object")

        record = PlayerRecord.from_api(uuid, payload)
        self.cache.set(CacheConstants.PLAYER, uuid, record)
        return record

    async def fetch_recent_games(self, uuid: str) -> RecentGames:
        """Fetch the recent games for ``uuid``; cached briefly since it reflects live state."""
        cached = self.cache.get(CacheConstants.RECENT_GAMES, uuid)
        if cached is not None:
            return cached

        body = await self._get_hypixel(
            'recentgames', {'uuid': uuid}, RECENT_GAMES_CONTEXT,
            failure_message="Failed to fetch recent games."
        )
        raw_games = body.get('games') or []
        if not isinstance(raw_games, list):
            raise MalformedResponse(f"{RECENT_GAMES_CONTEXT}: 'games' is not a list")

        games = tuple(RecentGameEntry.from_api(game) for game in raw_games if isinstance(game, dict))
        self.cache.set(CacheConstants.RECENT_GAMES, uuid, games)
        return games

    async def fetch_guild(self, uuid: str) -> GuildRecord:
        """Fetch the guild the player ``uuid`` belongs to."""
        cached = self.cache.get(CacheConstants.GUILD, uuid)
        if cached is not None:
            return cached

        body = await self._get_hypixel(
            'guild', {'player': uuid}, GUILD_CONTEXT,
            failure_message="Failed to fetch guild data from Hypixel API."
        )
        payload = body.get('guild')
        if not payload:
            raise NotFound(f"{GUILD_CONTEXT}: Guild not found for this player.")
        if not isinstance(payload, dict):
            raise MalformedResponse(f"{GUILD_CONTEXT}: 'guild' is not an object")

        guild = GuildRecord.from_api(payload)
        self.cache.set(CacheConstants.GUILD, uuid, guild)
        return guild

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    async def _get_hypixel(self, endpoint: str, params: Mapping[str, str], context: str,
                           failure_message: str) -> dict:
        url = f"{self.hypixel_base_url}/{endpoint}"
        headers = {'API-Key': self.api_key} if self.api_key else None
        _, body = await self._get_json(url, context, params=params, headers=headers)

        if not isinstance(body, dict) or 'success' not in body:
            raise MalformedResponse(f"{context}: response is missing the 'success' field")
        if not body['success']:
            raise NotFound(f"{context}: {body.get('cause') or failure_message}")
        return body

    async def _get_json(self, url: str, context: str, params: Optional[Mapping[str, str]] = None,
                        headers: Optional[Mapping[str, str]] = None) -> Tuple[int, Any]:
        """GET ``url`` with retries. Returns (status, parsed body) for any 2xx response.

        Raises NotFound for 4xx responses, which retrying cannot change, and
        UpstreamUnavailable once transient failures exhaust the attempt budget.
        """
        async def attempt():
            try:
                status, body = await self._request(url, params, headers)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise TransientUpstreamError(f"{context}: {str(e) or type(e).__name__}")
            if status >= 500:
                raise TransientUpstreamError(f"{context}: {_describe(status, body)}")
            return status, body

        status, body = await self.execute_with_retry(attempt, context)

        if status >= 400:
            raise NotFound(f"{context}: {_describe(status, body)}")
        if 200 <= status < 300 and isinstance(body, str) and body:
            raise MalformedResponse(f"{context}: response is not valid JSON")
        return status, body

    async def _request(self, url: str, params: Optional[Mapping[str, str]],
                       headers: Optional[Mapping[str, str]]) -> Tuple[int, Any]:
        """Perform one GET. Returns (status, body) with the body parsed as JSON when possible.

        A body that is not valid UTF-8 comes back as lossily decoded text, never as JSON.
        """
        if self._session is None or self._session.closed:
            await self.start()

        async with self._session.get(url, params=params, headers=headers) as resp:
            data = await resp.read()
            if not data:
                return resp.status, None
            try:
                text = data.decode('utf-8')
            except UnicodeDecodeError:
                return resp.status, data.decode('utf-8', errors='replace')
            try:
                return resp.status, json.loads(text)
            except ValueError:
                return resp.status, text
