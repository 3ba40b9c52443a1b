"""Derived, never-persisted result shapes produced by the ranking and recommendation engine."""

from pydantic import BaseModel, ConfigDict, Field

from media_catalog.models.media import MediaRecord


class ScoredCandidate(BaseModel):
    """A record returned by the vector store for a query vector, before ranking."""

    model_config = ConfigDict(frozen=True)

    record: MediaRecord
    distance: float
    similarity: float


class RankedResult(BaseModel):
    record: MediaRecord
    similarity: float
    distance: float
    relevance_score: float
    semantic_match: bool = False
    boost_trace: list[tuple[str, float]] = Field(default_factory=list)


class SemanticSearchMetadata(BaseModel):
    total_candidates: int = 0
    filtered_results: int = 0
    average_similarity: float = 0.0
    search_type: str = "semantic"
    effective_min_similarity: float | None = None


class SemanticSearchResponse(BaseModel):
    query: str
    results: list[RankedResult] = Field(default_factory=list)
    related_concepts: list[str] | None = None
    diagnostic_message: str | None = None
    metadata: SemanticSearchMetadata = Field(default_factory=SemanticSearchMetadata)


class FuzzyMatch(BaseModel):
    record: MediaRecord
    fuzzy_score: float
    matched_field: str
    matched_text: str | None = None


class RecommendationResult(BaseModel):
    record: MediaRecord
    similarity: float
    distance: float
    recommendation_score: float
    reason: str = ""


class RecommendationMetadata(BaseModel):
    total_candidates: int = 0
    filtered_results: int = 0
    average_similarity: float = 0.0
    min_similarity: float = 0.0
    max_similarity: float = 0.0
    effective_min_similarity: float | None = None


class RecommendationResponse(BaseModel):
    strategy: str
    source_items: list[str] | None = None
    source_query: str | None = None
    recommendations: list[RecommendationResult] = Field(default_factory=list)
    metadata: RecommendationMetadata = Field(default_factory=RecommendationMetadata)


class EmbeddingStats(BaseModel):
    total_items: int
    items_with_embeddings: int
    items_without_embeddings: int
    percentage_with_embeddings: float
