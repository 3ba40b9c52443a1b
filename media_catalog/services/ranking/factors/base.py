"""Inputs shared by every boost factor."""

from datetime import datetime
from typing import Callable, NamedTuple, Optional

from media_catalog.config.engine.models import BoostSettings
from media_catalog.models.media import MediaRecord


class BoostContext(NamedTuple):
    record: MediaRecord
    query: str  # lowercased query text
    query_words: list[str]  # stop-word filtered, length > 2
    now: datetime


Factor = tuple[str, float]
FactorFn = Callable[[BoostContext, BoostSettings], Optional[Factor]]


def scaled(boost: float, strength: float) -> float:
    """Scale the excess of a boost multiplier by a match strength in (0, 1]; never below 1.0."""
    return 1.0 + (boost - 1.0) * strength


def word_coverage(text: str, words: list[str]) -> tuple[int, float]:
    """Number of `words` contained in `text` and the covered ratio."""
    if not words:
        return 0, 0.0
    hits = sum(1 for w in words if w in text)
    return hits, hits / len(words)
