import re

from media_catalog.config.engine.models import BoostSettings
from media_catalog.services.ranking.factors.base import BoostContext, Factor

# (name, aliases mentioned in queries, pattern matched against the source URL)
PLATFORMS: tuple[tuple[str, tuple[str, ...], re.Pattern[str]], ...] = (
    ("youtube", ("youtube", "yt", "youtu.be"), re.compile(r"youtube|youtu\.be", re.I)),
    ("vimeo", ("vimeo",), re.compile(r"vimeo", re.I)),
    ("dailymotion", ("dailymotion", "dailymo"), re.compile(r"dailymotion", re.I)),
    ("tiktok", ("tiktok", "tik tok"), re.compile(r"tiktok", re.I)),
    ("instagram", ("instagram", "ig"), re.compile(r"instagram", re.I)),
)


def detect_platform(url: str | None) -> str | None:
    """Name of the hosting platform for a URL, if known."""
    if not url:
        return None
    for name, _, pattern in PLATFORMS:
        if pattern.search(url):
            return name
    return None


def platform_factor(ctx: BoostContext, cfg: BoostSettings) -> Factor | None:
    """Record is hosted on a platform that the query mentions."""
    url = ctx.record.source_url
    if not url:
        return None
    for name, aliases, pattern in PLATFORMS:
        if pattern.search(url) and any(alias in ctx.query for alias in aliases):
            return f"platform:{name}", cfg.platform_match_boost
    return None
