"""Embedding providers by profile `strategy` name. Every provider yields vectors of the profile dimension D."""

from media_catalog.services.embedder.base import BaseEmbeddingStrategy
from media_catalog.services.embedder.strategies.bedrock_strategy import BedrockEmbeddingStrategy
from media_catalog.services.embedder.strategies.mock_strategy import MockEmbeddingStrategy
from media_catalog.services.embedder.strategies.openai_strategy import OpenAIEmbeddingStrategy
from media_catalog.services.embedder.strategies.sentence_transformers_strategy import (
    SentenceTransformersEmbeddingStrategy,
)

STRATEGY_REGISTRY: dict[str, type[BaseEmbeddingStrategy]] = {
    "openai": OpenAIEmbeddingStrategy,
    "sentence_transformers": SentenceTransformersEmbeddingStrategy,
    "bedrock": BedrockEmbeddingStrategy,
    "mock": MockEmbeddingStrategy,
}


def get_embedding_strategy(strategy_name: str) -> BaseEmbeddingStrategy | None:
    """Fresh provider instance for a profile strategy name, or None if no provider is registered."""
    cls = STRATEGY_REGISTRY.get(strategy_name)
    return cls() if cls is not None else None
