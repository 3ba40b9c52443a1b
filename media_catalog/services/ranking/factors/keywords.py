from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor, scaled

MEDIA_KEYWORDS: dict[str, tuple[str, ...]] = {
    "audio": (
        "audio", "sound", "recording", "podcast", "music", "song", "track",
        "audio file", "sound file", "audio recording", "music track",
        "podcast episode", "audio clip", "sound clip", "audio stream",
        "mp3", "wav", "flac", "aac", "ogg",
    ),
    "video": (
        "video", "movie", "clip", "film", "recording", "stream", "playback",
        "video file", "video clip", "video recording", "movie clip",
        "film clip", "video stream", "online video", "video link",
        "mp4", "webm", "mov", "avi", "youtube", "vimeo",
    ),
}


def keyword_strength(matched: int) -> float:
    return min(1.0, 0.8 + 0.05 * matched)


def keyword_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    """Query uses type-specific keywords; more distinct keywords means a stronger match."""
    keywords = MEDIA_KEYWORDS.get(ctx.record.type.value, ())
    matched = [k for k in keywords if k in ctx.query]
    if not matched:
        return None
    return f"keywords:{len(matched)}", scaled(cfg.keywords_boost, keyword_strength(len(matched)))
