import logging

from elasticsearch import ApiError, TransportError
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from catalog_search.core.config import Settings, get_settings
from catalog_search.infrastructure.clients import get_elasticsearch_client, get_redis_client

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "healthy", "service": "catalog-search"},
    )


@router.get("/health/live")
async def liveness_check() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "alive"},
    )


@router.get("/health/ready")
async def readiness_check(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """Ready when both Elasticsearch and Redis answer a ping."""
    checks = {"elasticsearch": False, "redis": False}

    es = get_elasticsearch_client(settings)
    try:
        checks["elasticsearch"] = bool(await es.ping())
    except (ApiError, TransportError) as e:
        logger.warning("Elasticsearch ping failed: %s", e)
    finally:
        await es.close()

    redis = get_redis_client(settings)
    try:
        checks["redis"] = bool(await redis.ping())
    except RedisError as e:
        logger.warning("Redis ping failed: %s", e)
    finally:
        await redis.aclose()

    ready = all(checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "unavailable", "checks": checks},
    )
