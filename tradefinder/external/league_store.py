"""
League persistence.

A league (settings plus every roster) is stored as one JSON document. Redis
is the production back end; the in-memory store serves tests and
single-process development.
"""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from pydantic import ValidationError

from ..datamodels.team import LeagueData


logger = logging.getLogger(__name__)


class LeagueStoreError(Exception):
    """Raised when the league back end cannot be read or written."""
    pass


class LeagueStore:
    """Interface for league persistence."""

    async def get(self) -> Optional[LeagueData]:
        raise NotImplementedError

    async def save(self, data: LeagueData) -> None:
        raise NotImplementedError

    async def clear(self) -> None:
        raise NotImplementedError

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class InMemoryLeagueStore(LeagueStore):

    def __init__(self, data: Optional[LeagueData] = None):
        self._document: Optional[str] = data.model_dump_json(by_alias=True) if data else None

    async def get(self) -> Optional[LeagueData]:
        # Round-trip through JSON so callers never share mutable state
        if self._document is None:
            return None
        return LeagueData.model_validate_json(self._document)

    async def save(self, data: LeagueData) -> None:
        self._document = data.model_dump_json(by_alias=True)

    async def clear(self) -> None:
        self._document = None


class RedisLeagueStore(LeagueStore):
    """
    Stores the league JSON under a single Redis key.

    Args:
        client: redis.asyncio client
        key: Key holding the league document
    """

    def __init__(self, client: redis.Redis, key: str = "nfl_trade_league_data"):
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = "nfl_trade_league_data") -> 'RedisLeagueStore':
        return cls(redis.from_url(url, decode_responses=True), key=key)

    async def get(self) -> Optional[LeagueData]:
        try:
            raw = await self.client.get(self.key)
        except RedisError as e:
            logger.error(f"Error reading league {self.key}: {e}")
            raise LeagueStoreError(f"Could not read league data: {e}") from e

        if raw is None:
            return None

        try:
            return LeagueData.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Stored league {self.key} is malformed: {e}")
            raise LeagueStoreError("Stored league data is malformed") from e

    async def save(self, data: LeagueData) -> None:
        try:
            await self.client.set(self.key, data.model_dump_json(by_alias=True))
            logger.info(f"Saved league {self.key} ({len(data.teams)} teams)")
        except RedisError as e:
            logger.error(f"Error saving league {self.key}: {e}")
            raise LeagueStoreError(f"Could not save league data: {e}") from e

    async def clear(self) -> None:
        try:
            await self.client.delete(self.key)
        except RedisError as e:
            logger.error(f"Error clearing league {self.key}: {e}")
            raise LeagueStoreError(f"Could not clear league data: {e}") from e

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self.client.aclose()
