"""Match against transcribed speech stored in the record content."""

from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor, scaled, word_coverage

TRANSCRIPTION_MARKER = "transcription:"

# tier -> (match strength, uses the phrase boost constant)
TIERS: dict[str, tuple[float, bool]] = {
    "exact_phrase": (1.0, True),
    "phrase": (0.9, True),
    "all_words": (0.85, False),
    "most_words": (0.7, False),
    "some_words": (0.5, False),
}


def transcription_text(content: str | None) -> str | None:
    """Lowercased transcript: the text after a `transcription:` marker, else the whole content."""
    if not content:
        return None
    text = content.lower()
    if TRANSCRIPTION_MARKER in text:
        tail = text.split(TRANSCRIPTION_MARKER, 1)[1].strip()
        return tail or text
    return text


def transcription_tier(text: str, query: str, query_words: list[str]) -> str | None:
    if query and query in text:
        return "exact_phrase"
    for first, second in zip(query_words, query_words[1:]):
        if f"{first} {second}" in text:
            return "phrase"
    hits, ratio = word_coverage(text, query_words)
    if hits and hits == len(query_words):
        return "all_words"
    if ratio >= 0.6 and len(query_words) > 1:
        return "most_words"
    if hits:
        return "some_words"
    return None


def transcription_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    text = transcription_text(ctx.record.content)
    if text is None or not ctx.query.strip():
        return None
    tier = transcription_tier(text, ctx.query, ctx.query_words)
    if tier is None:
        return None
    strength, phrase = TIERS[tier]
    boost = cfg.phrase_match_boost if phrase else cfg.transcription_match_boost
    return f"transcription:{tier}", scaled(boost, strength)
