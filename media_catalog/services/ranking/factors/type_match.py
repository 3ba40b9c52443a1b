from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor

TYPE_SYNONYMS: dict[str, tuple[str, ...]] = {
    "audio": ("sound", "podcast", "music", "song", "track", "recording"),
    "video": ("movie", "clip", "film", "recording", "stream", "playback"),
}


def type_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    """Query names the record's media type, or one of its synonyms."""
    type_name = ctx.record.type.value
    if type_name in ctx.query:
        return "type:exact", cfg.type_match_boost
    if any(term in ctx.query for term in TYPE_SYNONYMS.get(type_name, ())):
        return "type:synonym", cfg.type_match_boost
    return None
