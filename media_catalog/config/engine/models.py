"""Ranking engine configuration models. Read-only; no business logic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DistanceMetric = Literal["cosine", "l2", "inner_product"]
StrictnessLevel = Literal["strict", "moderate", "default", "permissive", "very-permissive"]


def _strictly_decreasing(values: tuple[float, ...]) -> tuple[float, ...]:
    for prev, cur in zip(values, values[1:]):
        if cur >= prev:
            raise ValueError(f"relaxation sequence must be strictly decreasing, got {list(values)}")
    return values


class SimilaritySettings(BaseModel):
    """Similarity thresholds and the semantic-search relaxation sequence."""

    model_config = ConfigDict(frozen=True)

    default_min_similarity: float = Field(default=0.3, ge=0.0, le=1.0)
    strict_min_similarity: float = Field(default=0.7, ge=0.0, le=1.0)
    moderate_min_similarity: float = Field(default=0.5, ge=0.0, le=1.0)
    permissive_min_similarity: float = Field(default=0.1, ge=0.0, le=1.0)
    very_permissive_min_similarity: float = Field(default=0.0, ge=0.0, le=1.0)
    strong_match_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    progressive_thresholds: tuple[float, ...] = Field(default=(0.2, 0.1, 0.05, 0.0))

    @field_validator("progressive_thresholds")
    @classmethod
    def check_sequence(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        return _strictly_decreasing(v)


class DistanceSettings(BaseModel):
    """Per-metric default max distances."""

    model_config = ConfigDict(frozen=True)

    cosine_max_distance: float = Field(default=0.5, ge=0.0, le=2.0)
    l2_max_distance: float = Field(default=1.0, ge=0.0)
    inner_product_max_distance: float = Field(default=0.5)
    semantic_adaptive_threshold: float = Field(default=1.0, ge=0.0, le=2.0)


class LimitSettings(BaseModel):
    """Result limits and candidate multipliers."""

    model_config = ConfigDict(frozen=True)

    default_search_limit: int = Field(default=10, ge=1)
    default_similar_limit: int = Field(default=10, ge=1)
    min_limit: int = Field(default=1, ge=1)
    max_limit: int = Field(default=100, ge=1)
    candidate_multiplier: int = Field(default=2, ge=1)
    semantic_candidate_multiplier: int = Field(default=5, ge=1)


class SemanticSearchSettings(BaseModel):
    """Semantic search defaults, context-boost bonuses and diagnostics."""

    model_config = ConfigDict(frozen=True)

    default_min_similarity: float = Field(default=0.3, ge=0.0, le=1.0)
    include_related: bool = Field(default=True)
    context_boost: bool = Field(default=True)
    title_match_boost: float = Field(default=0.1, ge=0.0)
    partial_word_match_boost: float = Field(default=0.05, ge=0.0)
    description_match_boost: float = Field(default=0.05, ge=0.0)
    low_confidence_threshold: float = Field(default=0.2, ge=0.0, le=1.0)
    related_concepts_limit: int = Field(default=5, ge=0)
    related_source_results: int = Field(default=5, ge=0)


class HybridWeights(BaseModel):
    """Per-source weights for hybrid recommendations. Need not sum to 1."""

    model_config = ConfigDict(frozen=True)

    item_based: float = Field(default=0.5, ge=0.0)
    content_based: float = Field(default=0.5, ge=0.0)


class RecommendationSettings(BaseModel):
    """Recommendation defaults and relaxation sequence."""

    model_config = ConfigDict(frozen=True)

    default_min_similarity: float = Field(default=0.5, ge=0.0, le=1.0)
    default_limit: int = Field(default=6, ge=1)
    candidate_multiplier: int = Field(default=2, ge=1)
    hybrid_weights: HybridWeights = Field(default_factory=HybridWeights)
    progressive_thresholds: tuple[float, ...] = Field(default=(0.4, 0.3, 0.2, 0.1, 0.05, 0.0))

    @field_validator("progressive_thresholds")
    @classmethod
    def check_sequence(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        return _strictly_decreasing(v)


class BoostSettings(BaseModel):
    """Relevance booster factor multipliers and caps."""

    model_config = ConfigDict(frozen=True)

    combination: Literal["multiplicative", "additive"] = Field(default="multiplicative")
    boosted_types: tuple[str, ...] = Field(default=("audio", "video"))
    min_similarity_for_boost: float = Field(default=0.1, ge=0.0, le=1.0)
    max_total_boost: float = Field(default=1.5, ge=1.0)

    type_match_boost: float = Field(default=1.15, ge=1.0)
    platform_match_boost: float = Field(default=1.1, ge=1.0)
    title_match_boost: float = Field(default=1.2, ge=1.0)
    description_match_boost: float = Field(default=1.1, ge=1.0)
    partial_field_ratio: float = Field(default=0.9, gt=0.0, le=1.0)
    metadata_match_boost: float = Field(default=1.05, ge=1.0)
    keywords_boost: float = Field(default=1.1, ge=1.0)
    intent_match_boost: float = Field(default=1.1, ge=1.0)
    transcription_match_boost: float = Field(default=1.15, ge=1.0)
    phrase_match_boost: float = Field(default=1.25, ge=1.0)

    recency_boost_enabled: bool = Field(default=True)
    recency_boost_max_days: float = Field(default=30.0, gt=0.0)
    recency_boost_multiplier: float = Field(default=1.05, ge=1.0)


class FuzzySearchSettings(BaseModel):
    """Fuzzy search defaults."""

    model_config = ConfigDict(frozen=True)

    default_limit: int = Field(default=10, ge=1)
    default_min_score: float = Field(default=0.3, ge=0.0, le=1.0)
    default_fields: tuple[Literal["title", "description", "content"], ...] = Field(
        default=("title", "description", "content")
    )
    snippet_length: int = Field(default=100, ge=1)


class EngineConfig(BaseModel):
    """Every tunable of the ranking and recommendation engine. Immutable; pass by value."""

    model_config = ConfigDict(frozen=True)

    similarity: SimilaritySettings = Field(default_factory=SimilaritySettings)
    distance: DistanceSettings = Field(default_factory=DistanceSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)
    semantic: SemanticSearchSettings = Field(default_factory=SemanticSearchSettings)
    recommendations: RecommendationSettings = Field(default_factory=RecommendationSettings)
    boosts: BoostSettings = Field(default_factory=BoostSettings)
    fuzzy: FuzzySearchSettings = Field(default_factory=FuzzySearchSettings)

    def similarity_threshold(self, level: StrictnessLevel) -> float:
        """Return the min similarity for a strictness level. Unknown levels map to default."""
        s = self.similarity
        return {
            "strict": s.strict_min_similarity,
            "moderate": s.moderate_min_similarity,
            "permissive": s.permissive_min_similarity,
            "very-permissive": s.very_permissive_min_similarity,
        }.get(level, s.default_min_similarity)

    def max_distance(self, metric: DistanceMetric) -> float:
        """Return the default max distance for a metric. Unknown metrics fall back to cosine."""
        d = self.distance
        return {
            "l2": d.l2_max_distance,
            "inner_product": d.inner_product_max_distance,
        }.get(metric, d.cosine_max_distance)

    def validate_limit(self, limit: int) -> int:
        """Clamp limit into [min_limit, max_limit]."""
        return max(self.limits.min_limit, min(self.limits.max_limit, limit))

    @staticmethod
    def validate_similarity(similarity: float) -> float:
        """Clamp a similarity threshold into [0, 1]."""
        return max(0.0, min(1.0, similarity))
