"""Async record store over the media_items collection. `media_id` is the business key."""

from typing import Any, Sequence

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from media_catalog.config.logging import get_logger
from media_catalog.models.media import MediaRecord
from media_catalog.repositories.base import RecordStore
from media_catalog.repositories.mongodb.base import (
    HAS_EMBEDDING,
    LACKS_EMBEDDING,
    _translate_pymongo_error,
    media_collection,
)
from media_catalog.utils.time import utc_now

logger = get_logger(__name__)


class MongoRecordStore(RecordStore):
    def __init__(self, collection: AsyncIOMotorCollection | None = None):
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self._collection is None:
            self._collection = media_collection()
        return self._collection

    async def create(self, record: MediaRecord) -> MediaRecord:
        try:
            await self.collection.insert_one(record.to_document())
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "create media record") from e
        return record

    async def get(self, record_id: str) -> MediaRecord | None:
        try:
            doc = await self.collection.find_one({"media_id": record_id})
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "get media record") from e
        return MediaRecord.from_document(doc) if doc else None

    async def get_many(self, record_ids: Sequence[str]) -> list[MediaRecord]:
        ids = list(dict.fromkeys(record_ids))
        if not ids:
            return []
        try:
            docs = [doc async for doc in self.collection.find({"media_id": {"$in": ids}})]
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "get media records by ids") from e
        by_id = {d["media_id"]: MediaRecord.from_document(d) for d in docs}
        return [by_id[rid] for rid in ids if rid in by_id]

    async def _find(self, query: dict[str, Any], limit: int | None, context: str) -> list[MediaRecord]:
        try:
            cursor = self.collection.find(query).sort("created_at", DESCENDING)
            if limit:
                cursor = cursor.limit(limit)
            return [MediaRecord.from_document(doc) async for doc in cursor]
        except PyMongoError as e:
            raise _translate_pymongo_error(e, context) from e

    async def list_all(self, limit: int | None = None) -> list[MediaRecord]:
        return await self._find({}, limit, "list media records")

    async def delete(self, record_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"media_id": record_id})
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "delete media record") from e
        return result.deleted_count > 0

    async def set_embedding(self, record_id: str, embedding: list[float]) -> None:
        try:
            await self.collection.update_one(
                {"media_id": record_id},
                {"$set": {"embedding": list(embedding), "updated_at": utc_now()}},
            )
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "store embedding") from e

    async def count(self) -> int:
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "count media records") from e

    async def count_embedded(self) -> int:
        try:
            return await self.collection.count_documents(HAS_EMBEDDING)
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "count embedded media records") from e

    async def list_without_embedding(self) -> list[MediaRecord]:
        records = await self._find(LACKS_EMBEDDING, None, "list records without embedding")
        logger.debug("Records pending embedding", extra={"count": len(records)})
        return records
