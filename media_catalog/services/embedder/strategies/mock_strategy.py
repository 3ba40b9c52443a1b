"""Mock embedding strategy for tests and offline runs. Produces deterministic vectors."""

import hashlib
import math
import re

from media_catalog.config.embedding.models import EmbeddingConfig
from media_catalog.services.embedder.base import BaseEmbeddingStrategy

_TOKEN = re.compile(r"[a-z0-9]+")


def _bucket(token: str, dim: int) -> int:
    digest = hashlib.sha256(token.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % dim


class MockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Hashed bag-of-words: each lowercased token adds 1.0 to a hash bucket, then the vector is
    L2-normalized. Texts sharing words land close under cosine distance, which is enough for
    ranking tests without a model.
    """

    @property
    def strategy_name(self) -> str:
        return "mock"

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        dim = config.dimension
        result: list[list[float]] = []
        for text in texts:
            vec = [0.0] * dim
            for token in _TOKEN.findall(text.lower()):
                vec[_bucket(token, dim)] += 1.0
            norm = math.sqrt(sum(x * x for x in vec))
            if norm == 0:
                # Empty text: a fixed unit vector keeps cosine distance defined.
                vec[0] = 1.0
                norm = 1.0
            result.append([x / norm for x in vec])
        return result
