"""
Redis-backed cache of optimised route responses.

The optimiser itself never caches; this layer sits in front of it for the
``GET /routes/{id}/optimized`` endpoint.  Each route owns one Redis hash
whose fields are keyed by *variant* (the time model the response was
computed with), so a change of ``MINUTES_PER_KM`` / ``DWELL_MINUTES``
never serves durations from the previous settings.  Entries expire after
a TTL and the whole hash is dropped whenever the route's clients change.

A Redis outage degrades to a cache miss (logged), never to a failed
request.
"""

from __future__ import annotations

import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RouteResultCache:
    def __init__(
        self,
        client: aioredis.Redis,
        ttl_seconds: int = 300,
        variant: str = "default",
    ):
        self.redis = client
        self.ttl = ttl_seconds
        self.variant = variant

    @staticmethod
    def key(route_id: int) -> str:
        return f"route-result:{route_id}"

    async def get(self, route_id: int) -> Optional[str]:
        try:
            return await self.redis.hget(self.key(route_id), self.variant)
        except RedisError:
            logger.warning("Cache read failed for route %s", route_id, exc_info=True)
            return None

    async def set(self, route_id: int, payload: str) -> None:
        key = self.key(route_id)
        try:
            await self.redis.hset(key, self.variant, payload)
            await self.redis.expire(key, self.ttl)
        except RedisError:
            logger.warning("Cache write failed for route %s", route_id, exc_info=True)

    async def invalidate(self, route_id: int) -> None:
        """Drop every cached variant of *route_id*."""
        try:
            await self.redis.delete(self.key(route_id))
        except RedisError:
            logger.warning(
                "Cache invalidation failed for route %s", route_id, exc_info=True
            )
