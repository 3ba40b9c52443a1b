"""Element-wise mean of embedding vectors."""

from typing import Sequence

from media_catalog.services.errors import InvalidInputError


def centroid(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Per-dimension arithmetic mean. All vectors must share one dimension; nothing is normalized."""
    if not vectors:
        raise InvalidInputError("Cannot compute a centroid of zero vectors")
    dimension = len(vectors[0])
    for vec in vectors[1:]:
        if len(vec) != dimension:
            raise InvalidInputError(
                f"Embedding dimension mismatch: expected {dimension}, got {len(vec)}"
            )
    count = len(vectors)
    return [sum(vec[i] for vec in vectors) / count for i in range(dimension)]
