"""Durable fingerprint index — maps an Alertmanager fingerprint to the IRIS case tracking it."""

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger("alertiris.store")

DEFAULT_KEY_PREFIX = "fp:"


class FingerprintStoreError(Exception):
    """The index could not be read or written."""


class FingerprintIndex:
    """One Redis string per open alert episode: ``<prefix><fingerprint>`` -> case ID.

    Each operation is a single Redis command, so readers never see a partial write.
    """

    def __init__(self, client: aioredis.Redis, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._redis = client
        self._prefix = key_prefix

    def key(self, fingerprint: str) -> str:
        return f"{self._prefix}{fingerprint}"

    async def lookup(self, fingerprint: str) -> int | None:
        """Return the tracked case ID, or None when the fingerprint is untracked."""
        try:
            raw = await self._redis.get(self.key(fingerprint))
        except RedisError as exc:
            raise FingerprintStoreError(f"lookup {fingerprint}: {exc}") from exc

        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError as exc:
            raise FingerprintStoreError(f"lookup {fingerprint}: corrupt value {raw!r}") from exc

    async def store(self, fingerprint: str, case_id: int) -> None:
        try:
            await self._redis.set(self.key(fingerprint), str(case_id))
        except RedisError as exc:
            raise FingerprintStoreError(f"store {fingerprint}: {exc}") from exc
        logger.debug("Stored mapping: fingerprint=%s case_id=%d", fingerprint, case_id)

    async def delete(self, fingerprint: str) -> None:
        try:
            await self._redis.delete(self.key(fingerprint))
        except RedisError as exc:
            raise FingerprintStoreError(f"delete {fingerprint}: {exc}") from exc
        logger.debug("Deleted mapping: fingerprint=%s", fingerprint)

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError:
            logger.exception("Redis ping failed")
            return False
