"""
Embedding text for media records. Audio and video items get type, format and platform context
so queries like "youtube tutorial video" land near them; no file is ever opened here.
"""

import re
from pathlib import PurePosixPath
from typing import NamedTuple
from urllib.parse import urlparse

from media_catalog.models.media import MediaRecord, MediaType
from media_catalog.services.ranking.factors.platform import detect_platform

CODEC_BY_MIME: dict[str, str] = {
    "audio/mpeg": "MP3",
    "audio/mp3": "MP3",
    "audio/wav": "WAV",
    "audio/ogg": "OGG",
    "audio/aac": "AAC",
    "audio/flac": "FLAC",
    "video/mp4": "MP4",
    "video/webm": "WEBM",
    "video/ogg": "OGG",
    "video/quicktime": "MOV",
    "video/x-msvideo": "AVI",
}

PLATFORM_LABELS: dict[str, str] = {
    "youtube": "YouTube",
    "vimeo": "Vimeo",
    "dailymotion": "Dailymotion",
    "tiktok": "TikTok",
    "instagram": "Instagram",
}

_YOUTUBE_ID = re.compile(r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/|v/)|youtu\.be/)([A-Za-z0-9_-]{11})")


class MediaMetadata(NamedTuple):
    format: str | None
    codec: str | None
    platform: str | None
    video_id: str | None


def extract_youtube_id(url: str) -> str | None:
    match = _YOUTUBE_ID.search(url)
    return match.group(1) if match else None


def _extension(value: str | None) -> str | None:
    if not value:
        return None
    path = urlparse(value).path if "://" in value else value
    suffix = PurePosixPath(path).suffix
    return suffix[1:].upper() if suffix else None


def extract_metadata(record: MediaRecord) -> MediaMetadata:
    """Format and codec from the MIME type (else the file/URL extension), and the hosting platform."""
    mime = (record.mime_type or "").lower()
    fmt = mime.split("/", 1)[1].upper() if "/" in mime else None
    fmt = fmt or _extension(record.source_path) or _extension(record.source_url)
    platform = detect_platform(record.source_url)
    video_id = extract_youtube_id(record.source_url) if platform == "youtube" and record.source_url else None
    return MediaMetadata(fmt, CODEC_BY_MIME.get(mime), platform, video_id)


def build_embedding_text(record: MediaRecord) -> str:
    """Text to embed for a record: title, description, media context, then content."""
    parts: list[str] = [record.title]
    if record.description:
        parts.append(record.description)

    if record.type in (MediaType.AUDIO, MediaType.VIDEO):
        kind = record.type.value
        meta = extract_metadata(record)
        parts += [f"{kind} file", f"{kind} recording"]
        if meta.format:
            parts += [f"{meta.format} {kind}", f"{meta.format} format"]
        if meta.codec:
            parts.append(f"{meta.codec} codec")
        if record.type is MediaType.VIDEO and record.source_url:
            parts += ["video link", "online video"]
        if meta.platform:
            label = PLATFORM_LABELS[meta.platform]
            parts += [f"{label} {kind}", label]
        if meta.video_id:
            parts.append(f"video ID {meta.video_id}")

    if record.content:
        parts.append(record.content)
    return " ".join(parts)
