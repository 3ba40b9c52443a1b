"""FastAPI app entry: config, logging, storage setup, health, error mapping and graceful shutdown."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from opensearchpy.exceptions import OpenSearchException
from pymongo.errors import PyMongoError

from media_catalog.config.logging import configure_logging, get_logger
from media_catalog.config.settings import get_settings
from media_catalog.config.storage.opensearch import get_indexing_config
from media_catalog.controllers.dependencies import get_catalog_service, get_embedding_service
from media_catalog.controllers.routes.media import router as media_router
from media_catalog.controllers.routes.recommendations import router as recommendations_router
from media_catalog.resources.mongo.client import close_mongo_client, get_database
from media_catalog.resources.mongo.health import ping_mongo
from media_catalog.resources.mongo.indexes import create_indexes
from media_catalog.resources.opensearch.client import close_opensearch_client
from media_catalog.resources.opensearch.health import ping_opensearch
from media_catalog.resources.opensearch.index_manager import ensure_index
from media_catalog.services.embedder.pipeline import run_backfill
from media_catalog.services.errors import (
    CatalogError,
    InvalidInputError,
    MissingEmbeddingError,
    NotFoundError,
    ProviderError,
)

logger = get_logger(__name__)


async def _prepare_external_storage(dimension: int) -> None:
    """Create Mongo indexes and the vector index. Failures are logged; /ready reports the outage."""
    try:
        await create_indexes(get_database())
    except PyMongoError as e:
        logger.error("Failed to create MongoDB indexes on startup", extra={"error_type": type(e).__name__})
    try:
        await ensure_index(get_indexing_config(dimension))
    except (OpenSearchException, ValueError) as e:
        logger.error("Failed to ensure vector index on startup", extra={"error_type": type(e).__name__})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging, storage setup, optional backfill. Shutdown: close MongoDB and OpenSearch clients."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "Application starting",
        extra={"app_name": settings.app_name, "environment": settings.environment, "storage": settings.storage_backend},
    )
    external = settings.storage_backend == "mongo_opensearch"
    embedder = get_embedding_service()
    if external:
        await _prepare_external_storage(embedder.dimension)
    if settings.auto_backfill_on_startup:
        try:
            report = await run_backfill(get_catalog_service(), embedder.config.rate_limit_delay_ms)
            logger.info("Startup backfill finished", extra={"embedded": report.embedded, "failed": report.failed})
        except ProviderError as e:
            logger.error("Startup backfill aborted", extra={"error": e.message})
    yield
    logger.info("Application shutting down")
    if external:
        close_mongo_client()
        await close_opensearch_client()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Media Catalog",
    description="Semantic search, fuzzy search and recommendations over a media catalog",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(media_router)
app.include_router(recommendations_router)


def _health_response(ok: bool, mongo: dict[str, Any], opensearch: dict[str, Any]) -> dict[str, Any]:
    return {
        "status": "ok" if ok else "degraded",
        "mongo": {"ok": mongo.get("ok", False), "error": mongo.get("error")},
        "opensearch": {"ok": opensearch.get("ok", False), "error": opensearch.get("error")},
    }


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up. Does not check dependencies."""
    return {"status": "ok"}


@app.get("/ready")
async def ready() -> JSONResponse:
    """Readiness: verifies MongoDB and OpenSearch connectivity (always ready with the memory backend)."""
    if get_settings().storage_backend == "memory":
        return JSONResponse(content={"status": "ok", "storage": "memory"}, status_code=200)
    mongo = await ping_mongo()
    opensearch = await ping_opensearch()
    ok = mongo.get("ok", False) and opensearch.get("ok", False)
    return JSONResponse(content=_health_response(ok, mongo, opensearch), status_code=200 if ok else 503)


_STATUS_BY_ERROR: tuple[tuple[type[CatalogError], int], ...] = (
    (NotFoundError, 404),
    (MissingEmbeddingError, 400),
    (InvalidInputError, 400),
    (ProviderError, 503),
)


@app.exception_handler(CatalogError)
async def catalog_exception_handler(_request: Request, exc: CatalogError):
    """Domain errors carry caller-safe messages, except provider failures which get a generic one."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = 500
    if status_code == 503:
        logger.warning("Dependency failure", extra={"error": exc.message})
        detail = "A dependency is temporarily unavailable. Please retry later."
    elif status_code == 500:
        logger.error("Unmapped catalog error", extra={"error_type": type(exc).__name__})
        detail = "An internal error occurred."
    else:
        detail = exc.message
    return JSONResponse(content={"detail": detail}, status_code=status_code)


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Last resort: never leak stack traces or internal details to the client."""
    logger.exception("Unhandled error", extra={"error_type": type(exc).__name__})
    return JSONResponse(content={"detail": "An internal error occurred."}, status_code=500)
