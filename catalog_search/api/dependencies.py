from typing import AsyncIterator

from fastapi import Depends

from catalog_search.core.config import Settings, get_settings
from catalog_search.infrastructure.clients import get_redis_client
from catalog_search.infrastructure.store.redis_store import PointerStore


async def get_pointer_store(settings: Settings = Depends(get_settings)) -> AsyncIterator[PointerStore]:
    """Request-scoped pointer store; the live index is resolved per request, never cached."""
    redis = get_redis_client(settings)
    try:
        yield PointerStore(redis, settings.SEARCH_INDEX_POINTER_KEY)
    finally:
        await redis.aclose()
