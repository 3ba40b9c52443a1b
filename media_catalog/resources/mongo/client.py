"""Shared Motor client and catalog database handle. Closed by the app lifespan."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from media_catalog.config.logging import get_logger
from media_catalog.config.settings import get_settings
from media_catalog.config.storage.mongo import get_mongo_config

logger = get_logger(__name__)

_client: AsyncIOMotorClient | None = None
_catalog_db: AsyncIOMotorDatabase | None = None


def get_mongo_client() -> AsyncIOMotorClient:
    """Return the shared async MongoDB client. Datetimes come back timezone-aware (UTC)."""
    global _client
    if _client is None:
        cfg = get_mongo_config()
        _client = AsyncIOMotorClient(
            cfg["uri"],
            appname=get_settings().app_name,
            tz_aware=True,
            connectTimeoutMS=cfg["connect_timeout_ms"],
            serverSelectionTimeoutMS=cfg["server_selection_timeout_ms"],
            maxPoolSize=cfg["max_pool_size"],
        )
        logger.info("Catalog MongoDB client ready", extra={"database": cfg["database"]})
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Return the catalog database."""
    global _catalog_db
    if _catalog_db is None:
        _catalog_db = get_mongo_client()[get_mongo_config()["database"]]
    return _catalog_db


def close_mongo_client() -> None:
    """Release pooled connections. Safe to call when no client was created."""
    global _client, _catalog_db
    if _client is None:
        return
    _client.close()
    _client = None
    _catalog_db = None
    logger.info("Catalog MongoDB client closed")
