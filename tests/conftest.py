"""
Shared fixtures for the HypePulse test suite.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from hypepulse.data_models.player import PlayerRecord
from hypepulse.services.result_cache import ResultCache
from hypepulse.services.upstream import UpstreamClient

TEST_UUID = "069a79f444e94726a5befca90e38aaf5"


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(clock=clock)


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def client(cache, sleep):
    """Upstream client whose single-attempt request method is replaced per test."""
    upstream = UpstreamClient(api_key="test-key", cache=cache, session=MagicMock(closed=False), sleep=sleep)
    upstream._request = AsyncMock()
    return upstream


@pytest.fixture
def player_payload():
    return {
        "uuid": TEST_UUID,
        "displayname": "Notch",
        "newPackageRank": "MVP_PLUS",
        "firstLogin": 1359331200000,
        "lastLogin": 1704067200000,
        "stats": {
            "SkyWars": {
                "skywars_level": 12,
                "skywars_kills": 10,
                "skywars_wins": 7,
                "skywars_losses": 2,
            },
            "Bedwars": {
                "kills_bedwars": 30,
                "deaths_bedwars": 12,
                "final_kills_bedwars": 5,
                "wins_bedwars": 4,
                "losses_bedwars": 0,
                "beds_broken_bedwars": 9,
                "games_played_bedwars": 15,
                "favourites_2": "wool,stone",
                "shop": {"slot_1": "wool", "slot_2": None},
            },
            "Duels": {
                "wins": 20,
                "losses": 10,
                "kills": 25,
                "deaths": 8,
                "bridge_duels_wins": 3,
                "bridge_duels_kills": 6,
                "bridge_duels_deaths": 4,
            },
            "Pit": {"kills": 3, "coins": 125.0},
            "Legacy": "not-a-mapping",
        },
    }


@pytest.fixture
def player_record(player_payload):
    return PlayerRecord.from_api(TEST_UUID, player_payload)
