"""Recommendation strategies by name."""

from media_catalog.services.recommendation.base import BaseRecommendationStrategy
from media_catalog.services.recommendation.strategies.content_based import ContentBasedStrategy
from media_catalog.services.recommendation.strategies.hybrid import HybridStrategy
from media_catalog.services.recommendation.strategies.item_based import ItemBasedStrategy
from media_catalog.services.recommendation.strategies.multi_item import MultiItemStrategy

STRATEGY_REGISTRY: dict[str, type[BaseRecommendationStrategy]] = {
    "item-based": ItemBasedStrategy,
    "multi-item": MultiItemStrategy,
    "content-based": ContentBasedStrategy,
    "hybrid": HybridStrategy,
}


def get_recommendation_strategy(strategy_name: str) -> BaseRecommendationStrategy | None:
    """Return an instance of the recommendation strategy for the given name, or None."""
    cls = STRATEGY_REGISTRY.get(strategy_name)
    if cls is None:
        return None
    return cls()
