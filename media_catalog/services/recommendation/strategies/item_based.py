from media_catalog.models.results import RecommendationResponse
from media_catalog.services.errors import InvalidInputError
from media_catalog.services.recommendation.base import (
    BaseRecommendationStrategy,
    RecommendationContext,
    RecommendationRequest,
    load_embedded_record,
    score_vector,
)


class ItemBasedStrategy(BaseRecommendationStrategy):
    """Neighbours of one record's own embedding."""

    @property
    def strategy_name(self) -> str:
        return "item-based"

    async def recommend(self, request: RecommendationRequest, ctx: RecommendationContext) -> RecommendationResponse:
        if not request.item_ids:
            raise InvalidInputError("An item id is required for item-based recommendations")
        item_id = request.item_ids[0]
        source = await load_embedded_record(item_id, ctx.records)
        reason = f'Similar to "{source.title}"'
        return await score_vector(
            self.strategy_name,
            source.embedding,
            request,
            ctx,
            exclude_ids=[item_id, *request.exclude_ids],
            reason=lambda _: reason,
            source_items=[item_id],
        )
