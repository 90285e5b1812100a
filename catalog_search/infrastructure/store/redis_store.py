"""
Redis-backed collaborators of the rebuild.

- EnrichmentLookup: read-only view of per-entity data (image, variations)
  cached by the population job, one JSON value per entity id.
- PointerStore: the single key naming the live physical search index.
"""
import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from catalog_search.core.exceptions import PointerStoreError

logger = logging.getLogger(__name__)


class EnrichmentLookup:
    def __init__(self, client: Redis, key_prefix: str = "") -> None:
        self._client = client
        self._key_prefix = key_prefix

    def key(self, entity_id: str) -> str:
        return f"{self._key_prefix}{entity_id}"

    async def get(self, entity_id: str) -> dict[str, Any] | None:
        """Enrichment data for ``entity_id``, or None when no entry exists.

        Redis failures and undecodable values propagate: an unreadable entry is
        not the same thing as a missing one.
        """
        raw = await self._client.get(self.key(entity_id))
        if raw is None:
            return None
        value = json.loads(raw)
        if not isinstance(value, dict):
            raise ValueError(f"enrichment for {entity_id} is {type(value).__name__}, expected an object")
        return value


class PointerStore:
    def __init__(self, client: Redis, key: str) -> None:
        self._client = client
        self.key = key

    async def get(self) -> str | None:
        """Name of the live physical index, None before the first rebuild."""
        try:
            value = await self._client.get(self.key)
        except RedisError as e:
            raise PointerStoreError(f"Could not read {self.key}", e) from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value or None

    async def set(self, index_name: str) -> None:
        try:
            await self._client.set(self.key, index_name)
        except RedisError as e:
            raise PointerStoreError(f"Could not point {self.key} at {index_name}", e, index_name=index_name) from e
        logger.info("Pointer %s now references %s", self.key, index_name)
