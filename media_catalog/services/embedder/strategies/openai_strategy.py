"""OpenAI Embedding API strategy."""

from openai import OpenAI

from media_catalog.config.embedding.models import EmbeddingConfig
from media_catalog.config.settings import get_settings
from media_catalog.services.embedder.base import BaseEmbeddingStrategy


class OpenAIEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    OpenAI Embeddings API. text-embedding-3 models are asked for `config.dimension` components.
    API key from config.api_key or settings.openai_api_key.
    """

    @property
    def strategy_name(self) -> str:
        return "openai"

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        if not texts:
            return []
        api_key = config.api_key or get_settings().openai_api_key or None
        if not api_key:
            raise ValueError("OpenAI API key is required (set in config or OPENAI_API_KEY)")
        client = OpenAI(api_key=api_key)
        extra = {"dimensions": config.dimension} if config.model.startswith("text-embedding-3") else {}
        batch_size = min(config.batch_size, 2048)  # API limit per request
        all_embeddings: list[list[float]] = []
        for i in range(0, len(texts), batch_size):
            batch = texts[i : i + batch_size]
            response = client.embeddings.create(model=config.model, input=batch, **extra)
            by_index = {e.index: e.embedding for e in response.data}
            all_embeddings.extend([by_index[j] for j in range(len(batch))])
        return all_embeddings
