"""
Sleeper API client for NFL player data.

Handles all communication with Sleeper's REST API including
rate limiting, retries and error handling.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx


logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Custom exception for Sleeper API errors."""
    pass


class SleeperRateLimitError(SleeperAPIError):
    """Raised when hitting Sleeper API rate limits."""
    pass


class SleeperClient:
    """
    Async client for Sleeper API with rate limiting and error handling.

    Sleeper's API is generally reliable but has rate limits.
    This client handles retries and backoff.
    """

    BASE_URL = "https://api.sleeper.app/v1"

    def __init__(self,
                 timeout: float = 10.0,
                 max_retries: int = 3,
                 rate_limit_delay: float = 1.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize Sleeper API client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries for failed requests
            rate_limit_delay: Delay between requests to respect rate limits
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limit_delay = rate_limit_delay
        self._last_request_time = 0.0

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "FantasyTradeFinder/1.0.0",
                "Accept": "application/json",
            },
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _make_request(self, endpoint: str, **kwargs) -> Optional[Any]:
        """
        Make a request to Sleeper API with rate limiting and retries.

        Args:
            endpoint: API endpoint (e.g., "/players/nfl")
            **kwargs: Additional arguments for httpx.get()

        Returns:
            Decoded JSON body, or None for a 404

        Raises:
            SleeperAPIError: For API errors
            SleeperRateLimitError: For rate limit errors
        """
        now = time.time()
        time_since_last = now - self._last_request_time
        if time_since_last < self.rate_limit_delay:
            await asyncio.sleep(self.rate_limit_delay - time_since_last)

        url = f"{self.BASE_URL}{endpoint}"

        for attempt in range(self.max_retries + 1):
            try:
                self._last_request_time = time.time()

                response = await self.client.get(url, **kwargs)

                if response.status_code == 429:
                    if attempt < self.max_retries:
                        wait_time = 2 ** attempt
                        logger.warning(f"Rate limited, waiting {wait_time}s before retry")
                        await asyncio.sleep(wait_time)
                        continue
                    else:
                        raise SleeperRateLimitError("Rate limit exceeded")

                if response.status_code == 404:
                    return None

                response.raise_for_status()

                return response.json()

            except httpx.HTTPStatusError as e:
                if attempt < self.max_retries and e.response.status_code >= 500:
                    wait_time = 2 ** attempt
                    logger.warning(f"Server error {e.response.status_code}, retrying in {wait_time}s")
                    await asyncio.sleep(wait_time)
                    continue
                else:
                    raise SleeperAPIError(f"HTTP {e.response.status_code}: {e.response.text}")

            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    wait_time = 2 ** attempt
                    logger.warning(f"Request error {e}, retrying in {wait_time}s")
                    await asyncio.sleep(wait_time)
                    continue
                else:
                    raise SleeperAPIError(f"Request failed: {e}")

        raise SleeperAPIError("Max retries exceeded")

    async def get_players(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all NFL players from Sleeper.

        This is a large response (~5MB) so callers should cache it.

        Returns:
            Dictionary mapping player IDs to player data
        """
        logger.info("Fetching all NFL players from Sleeper")

        try:
            players_data = await self._make_request("/players/nfl")

            if not players_data:
                players_data = {}

            logger.info(f"Found {len(players_data)} players")
            return players_data

        except SleeperAPIError as e:
            logger.error(f"Error fetching players: {e}")
            raise

    async def get_nfl_state(self) -> Dict[str, Any]:
        """
        Get the current NFL week and season.

        Returns:
            State dictionary ({"week": 5, "season": "2025", ...})
        """
        try:
            state = await self._make_request("/state/nfl")
            return state or {}

        except SleeperAPIError as e:
            logger.error(f"Error fetching NFL state: {e}")
            raise

    async def get_season_stats(self, season: str) -> Dict[str, Dict[str, float]]:
        """
        Get season-to-date stat lines for every player.

        Args:
            season: Season year

        Returns:
            Dictionary mapping player IDs to stat lines
        """
        logger.info(f"Fetching {season} regular season stats")

        try:
            stats = await self._make_request(f"/stats/nfl/regular/{season}")

            if not stats:
                stats = {}

            logger.info(f"Found stat lines for {len(stats)} players")
            return stats

        except SleeperAPIError as e:
            logger.error(f"Error fetching {season} stats: {e}")
            raise
