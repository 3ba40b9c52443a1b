"""Weighted merge of item-driven and query-driven recommendations."""

from media_catalog.config.logging import get_logger
from media_catalog.models.results import RecommendationResponse, RecommendationResult
from media_catalog.services.errors import InvalidInputError, MissingEmbeddingError, NotFoundError
from media_catalog.services.recommendation.base import (
    BaseRecommendationStrategy,
    RecommendationContext,
    RecommendationRequest,
    build_metadata,
    resolve_limit,
)
from media_catalog.services.recommendation.strategies.content_based import ContentBasedStrategy
from media_catalog.services.recommendation.strategies.item_based import ItemBasedStrategy
from media_catalog.services.recommendation.strategies.multi_item import MultiItemStrategy

logger = get_logger(__name__)


def merge_weighted(
    item_results: list[RecommendationResult],
    content_results: list[RecommendationResult],
    w_item: float,
    w_content: float,
) -> list[RecommendationResult]:
    """
    Merge by record id. In both sources: s_i * w_i + s_c * w_c; in one: s * w.
    Reasons are joined with '; ' and similarity is the larger of the two.
    """
    merged: dict[str, RecommendationResult] = {}
    for rec in item_results:
        merged[rec.record.id] = rec.model_copy(update={"recommendation_score": rec.recommendation_score * w_item})
    for rec in content_results:
        existing = merged.get(rec.record.id)
        if existing is None:
            merged[rec.record.id] = rec.model_copy(
                update={"recommendation_score": rec.recommendation_score * w_content}
            )
            continue
        merged[rec.record.id] = existing.model_copy(
            update={
                "recommendation_score": existing.recommendation_score + rec.recommendation_score * w_content,
                "reason": f"{existing.reason}; {rec.reason}",
                "similarity": max(existing.similarity, rec.similarity),
                "distance": min(existing.distance, rec.distance),
            }
        )
    return sorted(merged.values(), key=lambda r: r.recommendation_score, reverse=True)


class HybridStrategy(BaseRecommendationStrategy):
    @property
    def strategy_name(self) -> str:
        return "hybrid"

    async def recommend(self, request: RecommendationRequest, ctx: RecommendationContext) -> RecommendationResponse:
        query = (request.query or "").strip()
        if not request.item_ids and not query:
            raise InvalidInputError("Either itemIds or query must be provided for hybrid recommendations")

        cfg = ctx.config
        limit = resolve_limit(request, cfg)
        weights = request.weights or cfg.recommendations.hybrid_weights
        sub_request = request.model_copy(update={"limit": cfg.validate_limit(limit * 2)})

        item_side: RecommendationResponse | None = None
        if request.item_ids:
            item_strategy = ItemBasedStrategy() if len(request.item_ids) == 1 else MultiItemStrategy()
            try:
                item_side = await item_strategy.recommend(sub_request, ctx)
            except (NotFoundError, MissingEmbeddingError) as e:
                if not query:
                    raise
                logger.info(
                    "Hybrid item side unavailable, using query only",
                    extra={"item_ids": request.item_ids, "error": e.message},
                )

        content_side: RecommendationResponse | None = None
        if query:
            content_side = await ContentBasedStrategy().recommend(sub_request, ctx)

        merged = merge_weighted(
            item_side.recommendations if item_side else [],
            content_side.recommendations if content_side else [],
            weights.item_based,
            weights.content_based,
        )
        results = merged[:limit]
        thresholds = [
            side.metadata.effective_min_similarity
            for side in (item_side, content_side)
            if side is not None and side.metadata.effective_min_similarity is not None
        ]
        return RecommendationResponse(
            strategy=self.strategy_name,
            source_items=list(request.item_ids) or None,
            source_query=query or None,
            recommendations=results,
            metadata=build_metadata(results, len(merged), min(thresholds) if thresholds else None),
        )
