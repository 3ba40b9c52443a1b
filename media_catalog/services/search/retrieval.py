"""Shared candidate retrieval: vector store lookup hydrated into scored records."""

from typing import Sequence

from media_catalog.config.engine.models import DistanceMetric
from media_catalog.config.logging import get_logger
from media_catalog.models.results import ScoredCandidate
from media_catalog.repositories.base import RecordStore, VectorCandidateStore
from media_catalog.services.search.metrics import distance_to_similarity

logger = get_logger(__name__)


class CandidateRetriever:
    def __init__(self, vectors: VectorCandidateStore, records: RecordStore):
        self._vectors = vectors
        self._records = records

    async def find_similar(
        self,
        vector: list[float],
        limit: int,
        exclude_ids: Sequence[str] = (),
        metric: DistanceMetric = "cosine",
    ) -> list[ScoredCandidate]:
        """
        Nearest records to `vector`, ascending by distance. Hits whose record no longer exists
        or has lost its embedding are dropped.
        """
        hits = await self._vectors.query(vector, limit, exclude_ids, metric)
        if not hits:
            return []
        records = {r.id: r for r in await self._records.get_many([rid for rid, _ in hits])}
        candidates: list[ScoredCandidate] = []
        for record_id, distance in hits:
            record = records.get(record_id)
            if record is None or not record.has_embedding:
                logger.debug("Dropping stale vector hit", extra={"record_id": record_id})
                continue
            candidates.append(
                ScoredCandidate(
                    record=record,
                    distance=distance,
                    similarity=distance_to_similarity(distance, metric),
                )
            )
        return candidates
