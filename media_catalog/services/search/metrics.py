"""Distance/similarity conversions per metric."""

import math
from typing import Sequence

from media_catalog.config.engine.models import DistanceMetric

# OpenSearch k-NN space_type per metric
METRIC_TO_SPACE_TYPE: dict[str, str] = {
    "cosine": "cosinesimil",
    "l2": "l2",
    "inner_product": "innerproduct",
}


def distance_to_similarity(distance: float, metric: DistanceMetric = "cosine") -> float:
    """cosine: 1 - d; l2: 1 / (1 + d); inner product: -d (stores report the negated product)."""
    if metric == "l2":
        return 1.0 / (1.0 + distance)
    if metric == "inner_product":
        return -distance
    return 1.0 - distance


def knn_score_to_distance(score: float, metric: DistanceMetric = "cosine") -> float:
    """
    Invert the OpenSearch knn_score script score into a raw distance.
    cosinesimil scores 1 + cos; l2 scores 1 / (1 + d^2); innerproduct scores 1 + dot for
    dot >= 0, else 1 / (1 - dot).
    """
    if metric == "l2":
        if score <= 0:
            return math.inf
        return math.sqrt(max(0.0, 1.0 / score - 1.0))
    if metric == "inner_product":
        dot = score - 1.0 if score >= 1.0 else 1.0 - 1.0 / score
        return -dot
    return 2.0 - score


def vector_distance(a: Sequence[float], b: Sequence[float], metric: DistanceMetric = "cosine") -> float:
    """Exact distance between two vectors of equal length."""
    if metric == "l2":
        return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))
    dot = sum(x * y for x, y in zip(a, b))
    if metric == "inner_product":
        return -dot
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 1.0
    return 1.0 - dot / (norm_a * norm_b)
