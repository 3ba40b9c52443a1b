"""
Relevance booster: folds independent (name, multiplier) factors over a retrieved candidate and
applies the product to its base similarity, capped by max_total_boost and by 1.0.
"""

from datetime import datetime
from typing import Callable, NamedTuple, Optional, Sequence

from media_catalog.config.engine.models import BoostSettings
from media_catalog.models.media import MediaRecord
from media_catalog.services.ranking.factors import FACTOR_REGISTRY, BoostContext, Factor, FactorFn
from media_catalog.services.ranking.text import meaningful_words
from media_catalog.utils.time import utc_now

BoostSink = Callable[[MediaRecord, float, float, list[Factor]], None]


class BoostOutcome(NamedTuple):
    similarity: float
    trace: list[Factor]


def combine(base: float, multiplier: float, cfg: BoostSettings) -> float:
    """Apply a folded multiplier to `base` in the configured mode, then cap."""
    if cfg.combination == "additive":
        boosted = base + (multiplier - 1.0) * base
    else:
        boosted = base * multiplier
    boosted = min(boosted, base * cfg.max_total_boost)
    return min(1.0, boosted)


def boost(
    record: MediaRecord,
    query: str,
    base_similarity: float,
    cfg: BoostSettings,
    now: datetime | None = None,
    sink: Optional[BoostSink] = None,
    factors: Sequence[FactorFn] = FACTOR_REGISTRY,
) -> BoostOutcome:
    """
    Boost one candidate. Returns `base_similarity` unchanged when it is below
    min_similarity_for_boost or the record's type is not boosted.
    """
    if base_similarity < cfg.min_similarity_for_boost:
        return BoostOutcome(base_similarity, [])
    if record.type.value not in cfg.boosted_types:
        return BoostOutcome(base_similarity, [])

    query_l = query.lower().strip()
    ctx = BoostContext(record, query_l, meaningful_words(query_l), now or utc_now())

    trace: list[Factor] = []
    multiplier = 1.0
    for factor_fn in factors:
        factor = factor_fn(ctx, cfg)
        if factor is None:
            continue
        trace.append(factor)
        multiplier *= factor[1]

    final = combine(base_similarity, multiplier, cfg) if trace else base_similarity
    if sink is not None and trace:
        sink(record, base_similarity, final, trace)
    return BoostOutcome(final, trace)
