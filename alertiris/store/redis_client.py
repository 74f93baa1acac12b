"""Async Redis connection for the fingerprint index."""

from __future__ import annotations

import redis.asyncio as aioredis

from alertiris.config import StoreSettings


def create_redis(cfg: StoreSettings) -> aioredis.Redis:
    return aioredis.from_url(
        cfg.redis_url,
        decode_responses=True,
        max_connections=10,
    )


async def close_redis(client: aioredis.Redis) -> None:
    await client.aclose()
