from elasticsearch import AsyncElasticsearch
from redis.asyncio import Redis

from catalog_search.core.config import Settings


def get_elasticsearch_client(settings: Settings) -> AsyncElasticsearch:
    """Create the Elasticsearch client from settings."""
    api_key = settings.ELASTICSEARCH_API_KEY
    return AsyncElasticsearch(
        settings.ELASTICSEARCH_URL,
        api_key=api_key.get_secret_value() if api_key else None,
        request_timeout=settings.ELASTICSEARCH_REQUEST_TIMEOUT,
    )


def get_redis_client(settings: Settings) -> Redis:
    """Create the Redis client from settings."""
    return Redis.from_url(settings.REDIS_URL, decode_responses=True)
