import re

from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor

# Format names as users write them, and the MIME types they correspond to.
FORMATS: tuple[tuple[tuple[str, ...], re.Pattern[str]], ...] = (
    (("mp3", "mpeg"), re.compile(r"audio/mpeg|audio/mp3", re.I)),
    (("mp4", "mpeg4"), re.compile(r"video/mp4", re.I)),
    (("wav", "wave"), re.compile(r"audio/wav|audio/wave", re.I)),
    (("webm",), re.compile(r"video/webm|audio/webm", re.I)),
    (("ogg", "ogv"), re.compile(r"audio/ogg|video/ogg", re.I)),
    (("flac",), re.compile(r"audio/flac", re.I)),
    (("aac",), re.compile(r"audio/aac", re.I)),
    (("mov", "quicktime"), re.compile(r"video/quicktime|video/mov", re.I)),
    (("avi",), re.compile(r"video/x-msvideo|video/avi", re.I)),
)


def format_name(mime_type: str | None, url: str | None = None) -> str | None:
    """Canonical format name from a MIME type, else from a URL extension."""
    for names, pattern in FORMATS:
        if mime_type and pattern.search(mime_type):
            return names[0]
    if url:
        url_l = url.lower()
        for names, _ in FORMATS:
            if any(f".{n}" in url_l for n in names):
                return names[0]
    return None


def format_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    """Record's MIME type or URL extension maps to a format the query mentions."""
    record = ctx.record
    url = (record.source_url or record.source_path or "").lower()
    for names, pattern in FORMATS:
        if not any(n in ctx.query for n in names):
            continue
        if record.mime_type and pattern.search(record.mime_type):
            return f"format:{names[0]}", cfg.metadata_match_boost
        if url and any(f".{n}" in url for n in names):
            return f"format:{names[0]}", cfg.metadata_match_boost
    return None
