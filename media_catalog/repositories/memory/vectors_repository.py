"""In-process vector store with exact (brute-force) distance under the requested metric."""

from typing import Sequence

from media_catalog.config.engine.models import DistanceMetric
from media_catalog.repositories.base import VectorCandidateStore
from media_catalog.services.search.metrics import vector_distance


class InMemoryVectorStore(VectorCandidateStore):
    def __init__(self) -> None:
        self._vectors: dict[str, list[float]] = {}

    async def query(
        self,
        vector: list[float],
        limit: int,
        exclude_ids: Sequence[str] = (),
        metric: DistanceMetric = "cosine",
    ) -> list[tuple[str, float]]:
        if not self._vectors or limit <= 0:
            return []
        excluded = set(exclude_ids)
        scored = [
            (record_id, vector_distance(vector, stored, metric))
            for record_id, stored in self._vectors.items()
            if record_id not in excluded and len(stored) == len(vector)
        ]
        scored.sort(key=lambda pair: pair[1])
        return scored[:limit]

    async def upsert(self, record_id: str, vector: list[float], media_type: str) -> None:
        self._vectors[record_id] = list(vector)

    async def delete(self, record_id: str) -> None:
        self._vectors.pop(record_id, None)
