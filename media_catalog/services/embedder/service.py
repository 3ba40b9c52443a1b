"""Embedding provider facade: text in, D-dimensional vector out, failures as ProviderError."""

from media_catalog.config.embedding.models import EmbeddingConfig
from media_catalog.config.logging import get_logger
from media_catalog.services.embedder.base import BaseEmbeddingStrategy
from media_catalog.services.embedder.preprocessing import preprocess_text, preprocess_texts
from media_catalog.services.embedder.strategies import STRATEGY_REGISTRY, get_embedding_strategy
from media_catalog.services.errors import ProviderError

logger = get_logger(__name__)


class EmbeddingService:
    def __init__(self, config: EmbeddingConfig, strategy: BaseEmbeddingStrategy | None = None):
        strategy = strategy or get_embedding_strategy(config.strategy)
        if strategy is None:
            raise ValueError(
                f"Unknown embedding strategy: {config.strategy!r}. Use one of {sorted(STRATEGY_REGISTRY)}."
            )
        self._config = config
        self._strategy = strategy

    @property
    def config(self) -> EmbeddingConfig:
        return self._config

    @property
    def dimension(self) -> int:
        return self._config.dimension

    def _check(self, vectors: list[list[float]], expected: int) -> list[list[float]]:
        if len(vectors) != expected:
            raise ProviderError(f"Embedding provider returned {len(vectors)} vectors, expected {expected}")
        for vec in vectors:
            if len(vec) != self._config.dimension:
                raise ProviderError(
                    f"Embedding dimension {len(vec)} does not match configured dimension {self._config.dimension}"
                )
        return vectors

    def _call(self, texts: list[str]) -> list[list[float]]:
        try:
            vectors = self._strategy.embed(texts, self._config)
        except ProviderError:
            raise
        except Exception as e:
            logger.warning(
                "Embedding provider call failed",
                extra={"strategy": self._strategy.strategy_name, "error_type": type(e).__name__},
            )
            raise ProviderError(f"Embedding provider '{self._strategy.strategy_name}' failed", cause=e) from e
        return self._check(vectors, len(texts))

    async def embed(self, text: str) -> list[float]:
        """Embed one text after preprocessing."""
        return self._call([preprocess_text(text, self._config.preprocessing)])[0]

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return self._call(preprocess_texts(texts, self._config.preprocessing))
