"""Record ingestion and lifecycle: create, embed, fetch, delete, embedding statistics."""

from media_catalog.config.logging import get_logger, log_extra
from media_catalog.models.media import MediaRecord
from media_catalog.models.results import EmbeddingStats
from media_catalog.repositories.base import RecordStore, VectorCandidateStore
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.errors import NotFoundError, ProviderError
from media_catalog.services.media.metadata import build_embedding_text

logger = get_logger(__name__)


class CatalogService:
    def __init__(self, records: RecordStore, vectors: VectorCandidateStore, embedder: EmbeddingService):
        self._records = records
        self._vectors = vectors
        self._embedder = embedder

    @property
    def records(self) -> RecordStore:
        return self._records

    async def attach_embedding(self, record: MediaRecord) -> MediaRecord:
        """Embed the record's text and store the vector on the record and in the vector store."""
        text = build_embedding_text(record)
        vector = await self._embedder.embed(text)
        # A record is marked embedded only after its vector is stored.
        await self._vectors.upsert(record.id, vector, record.type.value)
        await self._records.set_embedding(record.id, vector)
        return record.model_copy(update={"embedding": vector})

    async def create(self, record: MediaRecord) -> MediaRecord:
        """
        Persist a record, then embed it. If embedding fails the record is kept without one;
        a later backfill picks it up.
        """
        saved = await self._records.create(record)
        try:
            saved = await self.attach_embedding(saved)
        except ProviderError as e:
            logger.warning(
                "Record saved without embedding",
                **log_extra({"media_id": saved.id, "error": e.message}),
            )
        logger.info(
            "Media record created",
            **log_extra({"media_id": saved.id, "type": saved.type.value, "embedded": saved.has_embedding}),
        )
        return saved

    async def get(self, record_id: str) -> MediaRecord:
        record = await self._records.get(record_id)
        if record is None:
            raise NotFoundError(f"Media item not found: {record_id}")
        return record

    async def list_records(self, limit: int | None = None) -> list[MediaRecord]:
        return await self._records.list_all(limit)

    async def delete(self, record_id: str) -> None:
        """Remove the record and its vector."""
        if not await self._records.delete(record_id):
            raise NotFoundError(f"Media item not found: {record_id}")
        await self._vectors.delete(record_id)
        logger.info("Media record deleted", **log_extra({"media_id": record_id}))

    async def stats(self) -> EmbeddingStats:
        total = await self._records.count()
        embedded = await self._records.count_embedded()
        percentage = round(embedded / total * 100, 2) if total else 0.0
        return EmbeddingStats(
            total_items=total,
            items_with_embeddings=embedded,
            items_without_embeddings=total - embedded,
            percentage_with_embeddings=percentage,
        )
