"""POST /recommendations/{strategy}: item-based, multi-item, content-based or hybrid."""

from fastapi import APIRouter, Depends

from media_catalog.controllers.dependencies import get_recommendation_service
from media_catalog.controllers.schema.recommendations import RecommendationBody, RecommendationResponseOut
from media_catalog.services.recommendation.service import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("/{strategy}", response_model=RecommendationResponseOut)
async def recommend(
    strategy: str,
    body: RecommendationBody,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationResponseOut:
    """Unknown strategies and missing inputs are 400; unknown or unembedded source items 404/400."""
    response = await service.recommend(strategy, body.to_request())
    return RecommendationResponseOut.from_response(response)
