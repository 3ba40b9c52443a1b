from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor

# (intent, trigger phrases, media types it applies to; None means any)
INTENTS: tuple[tuple[str, tuple[str, ...], tuple[str, ...] | None], ...] = (
    ("tutorial", ("tutorial", "how to", "learn", "guide", "course", "lesson", "teach", "explain", "walkthrough"), None),
    ("review", ("review", "opinion", "thoughts", "rating", "critique", "analysis", "evaluation"), None),
    ("music", ("music", "song", "track", "album", "artist", "musician", "band", "lyrics", "melody"), ("audio",)),
    ("interview", ("interview", "conversation", "discussion", "talk", "chat", "q&a", "qa"), None),
    ("lecture", ("lecture", "presentation", "talk", "speech", "seminar", "webinar"), None),
    ("demo", ("demo", "demonstration", "example", "sample", "showcase", "preview"), None),
    ("news", ("news", "report", "update", "breaking", "latest", "current events"), None),
)


def detect_intent(query: str, media_type: str) -> str | None:
    """First intent whose trigger phrases appear in the query and that applies to the media type."""
    for name, triggers, types in INTENTS:
        if types is not None and media_type not in types:
            continue
        if any(t in query for t in triggers):
            return name
    return None


def intent_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    intent = detect_intent(ctx.query, ctx.record.type.value)
    if intent is None:
        return None
    return f"intent:{intent}", cfg.intent_match_boost
