"""MongoDB indexes for the media collection. Created once at startup; create_index is idempotent."""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from media_catalog.config.logging import get_logger
from media_catalog.config.storage.mongo import media_collection_name

logger = get_logger(__name__)


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    name = media_collection_name()
    media = db[name]
    try:
        await media.create_index([("media_id", ASCENDING)], unique=True)
        await media.create_index([("created_at", DESCENDING)])
        await media.create_index([("type", ASCENDING)])
        logger.info("MongoDB indexes ensured", extra={"collection": name})
    except Exception as e:
        logger.error("Failed to create MongoDB indexes", extra={"error_type": type(e).__name__})
        raise
