"""In-process record store. Used for tests and the `memory` storage backend."""

from typing import Sequence

from media_catalog.models.media import MediaRecord
from media_catalog.repositories.base import RecordStore
from media_catalog.utils.time import utc_now


class InMemoryRecordStore(RecordStore):
    def __init__(self) -> None:
        self._records: dict[str, MediaRecord] = {}

    async def create(self, record: MediaRecord) -> MediaRecord:
        self._records[record.id] = record
        return record

    async def get(self, record_id: str) -> MediaRecord | None:
        return self._records.get(record_id)

    async def get_many(self, record_ids: Sequence[str]) -> list[MediaRecord]:
        return [self._records[rid] for rid in dict.fromkeys(record_ids) if rid in self._records]

    async def list_all(self, limit: int | None = None) -> list[MediaRecord]:
        records = sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
        return records[:limit] if limit else records

    async def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    async def set_embedding(self, record_id: str, embedding: list[float]) -> None:
        record = self._records.get(record_id)
        if record is not None:
            self._records[record_id] = record.model_copy(
                update={"embedding": list(embedding), "updated_at": utc_now()}
            )

    async def count(self) -> int:
        return len(self._records)

    async def count_embedded(self) -> int:
        return sum(1 for r in self._records.values() if r.has_embedding)

    async def list_without_embedding(self) -> list[MediaRecord]:
        return [r for r in self._records.values() if not r.has_embedding]
