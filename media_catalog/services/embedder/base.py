"""Base embedding strategy and contract."""

from abc import ABC, abstractmethod

from media_catalog.config.embedding.models import EmbeddingConfig


class BaseEmbeddingStrategy(ABC):
    """
    Abstract embedding strategy. Each strategy produces vectors of `config.dimension` components;
    the embedding service checks the dimension and wraps failures.
    """

    @abstractmethod
    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        """
        Embed a list of texts. Returns one vector per text in the same order.
        Caller is responsible for preprocessing.
        """
        ...

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Strategy identifier, e.g. 'openai', 'sentence_transformers'."""
        ...
