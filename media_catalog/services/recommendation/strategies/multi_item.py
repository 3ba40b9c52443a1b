from media_catalog.config.logging import get_logger
from media_catalog.models.results import RecommendationResponse
from media_catalog.services.errors import InvalidInputError, MissingEmbeddingError, NotFoundError
from media_catalog.services.recommendation.base import (
    BaseRecommendationStrategy,
    RecommendationContext,
    RecommendationRequest,
    score_vector,
)
from media_catalog.services.recommendation.centroid import centroid

logger = get_logger(__name__)


def preferences_reason(titles: list[str]) -> str:
    if len(titles) == 1:
        return f'Similar to "{titles[0]}"'
    return f"Similar to your preferences ({', '.join(titles[:3])})"


class MultiItemStrategy(BaseRecommendationStrategy):
    """Neighbours of the centroid of several records' embeddings."""

    @property
    def strategy_name(self) -> str:
        return "multi-item"

    async def recommend(self, request: RecommendationRequest, ctx: RecommendationContext) -> RecommendationResponse:
        if not request.item_ids:
            raise InvalidInputError("At least one source item id is required")
        sources = await ctx.records.get_many(request.item_ids)
        if not sources:
            raise NotFoundError("No source items found")
        embedded = [s for s in sources if s.has_embedding]
        if not embedded:
            raise MissingEmbeddingError("None of the source items have embeddings")
        if len(embedded) < len(request.item_ids):
            logger.info(
                "Some source items skipped for centroid",
                extra={"requested": len(request.item_ids), "used": len(embedded)},
            )

        vector = centroid([s.embedding for s in embedded])
        reason = preferences_reason([s.title for s in embedded])
        return await score_vector(
            self.strategy_name,
            vector,
            request,
            ctx,
            exclude_ids=[*request.item_ids, *request.exclude_ids],
            reason=lambda _: reason,
            source_items=list(request.item_ids),
        )
