"""
Time-based cache for upstream fetches.

The cache is an ordinary object owned by whoever needs it (the player feed),
not module state. Its clock is injectable so expiry can be tested without
waiting.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple


logger = logging.getLogger(__name__)


class TTLCache:
    """
    Key/value cache whose entries expire ``ttl_seconds`` after being stored.

    Args:
        ttl_seconds: Lifetime of an entry
        clock: Returns the current time in seconds; defaults to time.monotonic
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds cannot be negative")

        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value, or await ``fetch()`` and cache its result."""
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        value = await fetch()
        self.set(key, value)
        return value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
