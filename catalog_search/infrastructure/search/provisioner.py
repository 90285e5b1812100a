"""
Physical index lifecycle: create a freshly named, fully configured index and
delete superseded ones. Never touches the live index pointer.
"""
import logging
import time
from typing import Callable

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from catalog_search.core.exceptions import ConfigurationError, ReclaimError
from catalog_search.infrastructure.search.index_settings import INDEX_SETTINGS, MAPPING_PROPERTIES

logger = logging.getLogger(__name__)


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class IndexProvisioner:
    def __init__(
        self,
        client: AsyncElasticsearch,
        prefix: str,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._client = client
        self._prefix = prefix
        self._clock = clock
        self._last_suffix = 0

    def next_index_name(self) -> str:
        """``<prefix>-<epoch ms>``, strictly increasing within this process."""
        suffix = max(self._clock(), self._last_suffix + 1)
        self._last_suffix = suffix
        return f"{self._prefix}-{suffix}"

    async def provision(self) -> str:
        """Create a new index with analysis settings, then define its mappings."""
        index_name = self.next_index_name()
        try:
            await self._client.indices.create(index=index_name, settings=INDEX_SETTINGS)
            logger.info("Created index %s", index_name)
            await self._client.indices.put_mapping(index=index_name, properties=MAPPING_PROPERTIES)
            logger.info("Defined mappings on %s", index_name)
        except (ApiError, TransportError) as e:
            raise ConfigurationError(index_name, e) from e
        return index_name

    async def delete(self, index_name: str) -> None:
        try:
            await self._client.indices.delete(index=index_name)
        except (ApiError, TransportError) as e:
            raise ReclaimError(index_name, e) from e
        logger.info("Deleted index %s", index_name)
