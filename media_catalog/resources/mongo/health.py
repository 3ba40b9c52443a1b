"""MongoDB reachability check for /ready."""

from typing import Any

from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from media_catalog.config.logging import get_logger
from media_catalog.resources.mongo.client import get_mongo_client

logger = get_logger(__name__)


async def ping_mongo() -> dict[str, Any]:
    """Returns {'ok': bool, 'error'?: str}; never raises and never leaks server details."""
    try:
        await get_mongo_client().admin.command("ping")
        return {"ok": True}
    except ServerSelectionTimeoutError as e:
        logger.warning("MongoDB ping timeout", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_timeout"}
    except PyMongoError as e:
        logger.warning("MongoDB ping failed", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_failed"}
