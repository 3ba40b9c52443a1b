"""Entry point for recommendations: dispatches to a named strategy."""

from media_catalog.config.engine.models import EngineConfig
from media_catalog.config.logging import get_logger
from media_catalog.models.results import RecommendationResponse
from media_catalog.repositories.base import RecordStore
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.errors import InvalidInputError
from media_catalog.services.recommendation.base import RecommendationContext, RecommendationRequest
from media_catalog.services.recommendation.strategies import STRATEGY_REGISTRY, get_recommendation_strategy
from media_catalog.services.search.retrieval import CandidateRetriever

logger = get_logger(__name__)


class RecommendationService:
    def __init__(
        self,
        retriever: CandidateRetriever,
        records: RecordStore,
        embedder: EmbeddingService,
        config: EngineConfig,
    ):
        self._ctx = RecommendationContext(retriever, records, embedder, config)

    async def recommend(self, strategy: str, request: RecommendationRequest) -> RecommendationResponse:
        impl = get_recommendation_strategy(strategy)
        if impl is None:
            raise InvalidInputError(
                f"Unknown recommendation strategy: {strategy!r}. Use one of {sorted(STRATEGY_REGISTRY)}."
            )
        response = await impl.recommend(request, self._ctx)
        logger.info(
            "Recommendations computed",
            extra={
                "strategy": strategy,
                "results": len(response.recommendations),
                "effective_min_similarity": response.metadata.effective_min_similarity,
            },
        )
        return response
