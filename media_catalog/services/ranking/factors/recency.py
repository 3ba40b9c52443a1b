from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor
from media_catalog.utils.time import age_in_days


def recency_multiplier(age_days: float, cfg: BoostSettings) -> float:
    """Linear decay from the full multiplier at age 0 to 1.0 at the end of the window."""
    if age_days >= cfg.recency_boost_max_days:
        return 1.0
    ratio = 1.0 - age_days / cfg.recency_boost_max_days
    return 1.0 + (cfg.recency_boost_multiplier - 1.0) * ratio


def recency_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    if not cfg.recency_boost_enabled:
        return None
    factor = recency_multiplier(age_in_days(ctx.record.created_at, ctx.now), cfg)
    if factor <= 1.0:
        return None
    return "recency", factor
