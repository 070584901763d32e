"""
Collaborators at the edge of the engine: the Sleeper feed, caching and
league persistence.
"""

from .cache import TTLCache
from .league_store import InMemoryLeagueStore, LeagueStore, LeagueStoreError, RedisLeagueStore
from .player_feed import PlayerFeed, build_player_catalog, normalize_player
from .sleeper_client import SleeperAPIError, SleeperClient, SleeperRateLimitError

__all__ = [
    "TTLCache",
    "InMemoryLeagueStore",
    "LeagueStore",
    "LeagueStoreError",
    "RedisLeagueStore",
    "PlayerFeed",
    "build_player_catalog",
    "normalize_player",
    "SleeperAPIError",
    "SleeperClient",
    "SleeperRateLimitError"
]
