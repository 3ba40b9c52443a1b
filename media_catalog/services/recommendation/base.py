"""Recommendation strategy contract and the scoring steps every strategy shares."""

from abc import ABC, abstractmethod
from typing import Callable, NamedTuple, Sequence

from pydantic import BaseModel, Field

from media_catalog.config.engine.models import EngineConfig, HybridWeights
from media_catalog.models.media import MediaRecord
from media_catalog.models.results import (
    RecommendationMetadata,
    RecommendationResponse,
    RecommendationResult,
    ScoredCandidate,
)
from media_catalog.repositories.base import RecordStore
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.errors import MissingEmbeddingError, NotFoundError
from media_catalog.services.ranking.relaxation import RelaxationPolicy, relax
from media_catalog.services.search.retrieval import CandidateRetriever


class RecommendationRequest(BaseModel):
    item_ids: list[str] = Field(default_factory=list)
    query: str | None = None
    limit: int | None = None
    min_similarity: float | None = None
    exclude_ids: list[str] = Field(default_factory=list)
    weights: HybridWeights | None = None


class RecommendationContext(NamedTuple):
    retriever: CandidateRetriever
    records: RecordStore
    embedder: EmbeddingService
    config: EngineConfig


class BaseRecommendationStrategy(ABC):
    """A named way of choosing a source vector and explaining why candidates were picked."""

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Registry key, e.g. 'item-based'."""
        ...

    @abstractmethod
    async def recommend(self, request: RecommendationRequest, ctx: RecommendationContext) -> RecommendationResponse:
        ...


def resolve_limit(request: RecommendationRequest, config: EngineConfig) -> int:
    return config.validate_limit(request.limit or config.recommendations.default_limit)


def resolve_min_similarity(request: RecommendationRequest, config: EngineConfig) -> float:
    value = request.min_similarity
    if value is None:
        value = config.recommendations.default_min_similarity
    return config.validate_similarity(value)


async def load_embedded_record(record_id: str, records: RecordStore) -> MediaRecord:
    """Fetch a record that must exist and carry an embedding."""
    record = await records.get(record_id)
    if record is None:
        raise NotFoundError(f"Source item not found: {record_id}")
    if not record.has_embedding:
        raise MissingEmbeddingError(f"Source item {record_id} does not have an embedding")
    return record


def build_metadata(
    results: Sequence[RecommendationResult], total_candidates: int, effective: float | None
) -> RecommendationMetadata:
    sims = [r.similarity for r in results]
    return RecommendationMetadata(
        total_candidates=total_candidates,
        filtered_results=len(results),
        average_similarity=sum(sims) / len(sims) if sims else 0.0,
        min_similarity=min(sims) if sims else 0.0,
        max_similarity=max(sims) if sims else 0.0,
        effective_min_similarity=effective,
    )


async def score_vector(
    strategy: str,
    vector: list[float],
    request: RecommendationRequest,
    ctx: RecommendationContext,
    exclude_ids: Sequence[str],
    reason: Callable[[ScoredCandidate], str],
    source_items: list[str] | None = None,
    source_query: str | None = None,
) -> RecommendationResponse:
    """
    Retrieve candidates for `vector`, relax the similarity bar until `limit` results are found,
    and tag each result with a reason. Score equals similarity.
    """
    cfg = ctx.config
    limit = resolve_limit(request, cfg)
    min_similarity = resolve_min_similarity(request, cfg)
    candidates = await ctx.retriever.find_similar(
        vector, limit * cfg.recommendations.candidate_multiplier, exclude_ids=exclude_ids
    )
    excluded = set(exclude_ids)
    candidates = [c for c in candidates if c.record.id not in excluded]
    relaxation = relax(
        candidates,
        min_similarity,
        cfg.recommendations.progressive_thresholds,
        limit,
        RelaxationPolicy.FILL_TARGET,
    )
    results = [
        RecommendationResult(
            record=c.record,
            similarity=c.similarity,
            distance=c.distance,
            recommendation_score=c.similarity,
            reason=reason(c),
        )
        for c in relaxation.results[:limit]
    ]
    return RecommendationResponse(
        strategy=strategy,
        source_items=source_items,
        source_query=source_query,
        recommendations=results,
        metadata=build_metadata(results, len(candidates), relaxation.effective_threshold),
    )
