import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import JSONResponse

from catalog_search.api.dependencies import get_pointer_store
from catalog_search.core.config import get_settings
from catalog_search.core.exceptions import PointerStoreError
from catalog_search.infrastructure.store.redis_store import PointerStore
from catalog_search.services.rebuild import run_rebuild

router = APIRouter(prefix="/api/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


@router.get("", summary="Admin endpoint info")
async def admin_info() -> dict:
    return {
        "service": "Catalog Search (admin)",
        "search_index": "GET /api/admin/search-index",
        "reindex": "POST /api/admin/reindex",
    }


@router.get("/search-index", summary="Name of the live search index")
async def current_search_index(pointer: PointerStore = Depends(get_pointer_store)) -> JSONResponse:
    try:
        name = await pointer.get()
    except PointerStoreError as e:
        logger.warning("Pointer lookup failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Pointer store unavailable"},
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"key": pointer.key, "index": name},
    )


async def background_rebuild() -> None:
    """Background task wrapper: the outcome only reaches the logs."""
    try:
        logger.info("Starting background search index rebuild...")
        result = await run_rebuild(get_settings())
        logger.info("Rebuild success: index=%s counts=%s", result.index_name, result.counts)
    except Exception:
        logger.exception("Search index rebuild failed")


@router.post(
    "/reindex",
    summary="Start a full search index rebuild (async)",
    status_code=status.HTTP_202_ACCEPTED,
)
async def reindex(background_tasks: BackgroundTasks) -> JSONResponse:
    background_tasks.add_task(background_rebuild)

    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content={
            "status": "accepted",
            "message": "Search index rebuild started in background. Check logs for progress.",
        },
    )
