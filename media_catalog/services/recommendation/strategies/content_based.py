from media_catalog.models.results import RecommendationResponse
from media_catalog.services.errors import InvalidInputError
from media_catalog.services.recommendation.base import (
    BaseRecommendationStrategy,
    RecommendationContext,
    RecommendationRequest,
    score_vector,
)


class ContentBasedStrategy(BaseRecommendationStrategy):
    """Neighbours of an ad hoc query embedding."""

    @property
    def strategy_name(self) -> str:
        return "content-based"

    async def recommend(self, request: RecommendationRequest, ctx: RecommendationContext) -> RecommendationResponse:
        query = (request.query or "").strip()
        if not query:
            raise InvalidInputError("Query is required for content-based recommendations")
        vector = await ctx.embedder.embed(query)
        reason = f'Matches your interest: "{query}"'
        return await score_vector(
            self.strategy_name,
            vector,
            request,
            ctx,
            exclude_ids=list(request.exclude_ids),
            reason=lambda _: reason,
            source_query=query,
        )
