import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from src.config.settings import settings
from src.modules.cache.contracts import CacheBackend

logger = logging.getLogger(__name__)

Compute = Callable[[], Awaitable[Any]]


class MemoryCacheBackend(CacheBackend):
    """Process-local store; entries expire on read once their TTL has passed."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = (self._clock() + ttl, value)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class CacheService:
    """Read-through cache with per-key coalescing of concurrent misses.

    Callers that miss on a key already being computed await the same task
    instead of starting their own. Results are stored only once the compute
    coroutine has returned; failures propagate to every waiter and leave the
    key empty.
    """

    def __init__(self, backend: CacheBackend | None = None) -> None:
        self._backend = backend if backend is not None else MemoryCacheBackend()
        self._inflight: dict[str, asyncio.Task] = {}

    async def _compute_and_store(self, key: str, compute: Compute, ttl: float) -> Any:
        try:
            value = await compute()
            await self._backend.set(key, value, ttl)
            return value
        finally:
            self._inflight.pop(key, None)

    async def try_get(self, key: str, compute: Compute, ttl: float | None = None) -> Any:
        cached = await self._backend.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        task = self._inflight.get(key)
        if task is None:
            logger.debug("Cache miss: %s", key)
            ttl = settings.cache_ttl if ttl is None else ttl
            task = asyncio.create_task(self._compute_and_store(key, compute, ttl))
            self._inflight[key] = task
        else:
            logger.debug("Joining in-flight computation: %s", key)
        # shield so one cancelled caller does not cancel the shared computation
        return await asyncio.shield(task)

    async def invalidate(self, key: str) -> None:
        await self._backend.delete(key)


cache_service = CacheService()
