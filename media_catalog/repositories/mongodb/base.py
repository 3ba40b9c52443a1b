"""Shared async MongoDB access patterns and error translation."""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from media_catalog.config.logging import get_logger
from media_catalog.config.storage.mongo import media_collection_name
from media_catalog.repositories.base import RepositoryError
from media_catalog.resources.mongo.client import get_database

logger = get_logger(__name__)

# Documents whose embedding is a non-empty array.
HAS_EMBEDDING: dict[str, Any] = {"embedding": {"$type": "array", "$ne": []}}
LACKS_EMBEDDING: dict[str, Any] = {"$or": [{"embedding": None}, {"embedding": []}]}


def _translate_pymongo_error(e: PyMongoError, context: str) -> RepositoryError:
    """Wrap PyMongo errors into a non-leaking RepositoryError."""
    logger.warning(
        "MongoDB operation failed",
        extra={"context": context, "error_type": type(e).__name__},
    )
    return RepositoryError(f"Dependency temporarily unavailable: {context}", cause=e)


def media_collection() -> AsyncIOMotorCollection:
    return get_database()[media_collection_name()]
