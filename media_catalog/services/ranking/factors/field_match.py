"""Title and description matching. Title carries the larger multiplier."""

from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor, scaled, word_coverage

MOST_WORDS_RATIO = 0.6


def match_tier(field_text: str, query: str, query_words: list[str]) -> tuple[str, bool] | None:
    """
    Classify how `query` matches a field: (tier, full_strength) or None.
    Exact phrase and all-words are full strength; most-words and some-words are partial.
    """
    text = field_text.lower()
    if query and query in text:
        return "exact_phrase", True
    hits, ratio = word_coverage(text, query_words)
    if hits and hits == len(query_words):
        return "all_words", True
    if ratio >= MOST_WORDS_RATIO and len(query_words) > 1:
        return "most_words", False
    if hits:
        return "some_words", False
    return None


def _field_factor(name: str, text: str | None, boost: float, ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    if not text or not ctx.query.strip():
        return None
    tier = match_tier(text, ctx.query, ctx.query_words)
    if tier is None:
        return None
    label, full = tier
    return f"{name}:{label}", boost if full else scaled(boost, cfg.partial_field_ratio)


def title_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    return _field_factor("title", ctx.record.title, cfg.title_match_boost, ctx, cfg)


def description_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    return _field_factor("description", ctx.record.description, cfg.description_match_boost, ctx, cfg)
