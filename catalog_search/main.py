"""
HTTP surface of the search maintenance service: health checks, the live
index name, and a background rebuild trigger. Run with
``uvicorn catalog_search.main:app``.
"""
from fastapi import FastAPI

from catalog_search.api.routes import admin, health
from catalog_search.core.config import get_settings
from catalog_search.core.log import configure_logging

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Elasticsearch index rebuild-and-swap for the villager and item catalog",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.include_router(health.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }
