"""Request/response schemas for POST /recommendations/{strategy}."""

from pydantic import BaseModel, Field

from media_catalog.config.engine.models import HybridWeights
from media_catalog.controllers.schema.media import MediaItemOut
from media_catalog.models.results import RecommendationMetadata, RecommendationResponse
from media_catalog.services.recommendation.base import RecommendationRequest


class RecommendationBody(BaseModel):
    item_ids: list[str] = Field(default_factory=list, description="Source items (item-based, multi-item, hybrid)")
    query: str | None = Field(default=None, description="Interest text (content-based, hybrid)")
    limit: int | None = Field(default=None, ge=1)
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)
    exclude_ids: list[str] = Field(default_factory=list)
    weights: HybridWeights | None = Field(default=None, description="Hybrid source weights")

    def to_request(self) -> RecommendationRequest:
        return RecommendationRequest(**self.model_dump(exclude={"weights"}), weights=self.weights)


class RecommendationOut(BaseModel):
    item: MediaItemOut
    similarity: float
    distance: float
    recommendation_score: float
    reason: str


class RecommendationResponseOut(BaseModel):
    strategy: str
    source_items: list[str] | None = None
    source_query: str | None = None
    recommendations: list[RecommendationOut]
    metadata: RecommendationMetadata

    @classmethod
    def from_response(cls, response: RecommendationResponse) -> "RecommendationResponseOut":
        return cls(
            strategy=response.strategy,
            source_items=response.source_items,
            source_query=response.source_query,
            recommendations=[
                RecommendationOut(
                    item=MediaItemOut.from_record(r.record),
                    similarity=r.similarity,
                    distance=r.distance,
                    recommendation_score=r.recommendation_score,
                    reason=r.reason,
                )
                for r in response.recommendations
            ],
            metadata=response.metadata,
        )
