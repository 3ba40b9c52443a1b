"""Media record model shared by the stores, the engine and the API."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from media_catalog.utils.ids import generate_media_id
from media_catalog.utils.time import utc_now


class MediaType(str, Enum):
    TEXT = "text"
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"


class MediaRecord(BaseModel):
    """
    One catalog item. `embedding`, when present, has exactly D components; records
    without one never come back from vector retrieval but are still fuzzy-searchable.
    """

    id: str = Field(default_factory=generate_media_id)
    title: str = Field(..., min_length=1, max_length=255)
    type: MediaType
    content: str | None = Field(default=None, description="Text body or transcription")
    description: str | None = None
    source_path: str | None = Field(default=None, description="Path of an uploaded file")
    source_url: str | None = Field(default=None, description="Link for external media")
    mime_type: str | None = None
    embedding: list[float] | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def to_document(self) -> dict[str, Any]:
        """MongoDB document shape: `media_id` is the business key, `_id` stays Mongo's."""
        doc = self.model_dump(mode="python", exclude={"id"})
        doc["type"] = self.type.value
        doc["media_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "MediaRecord":
        data = {k: v for k, v in doc.items() if k not in ("_id", "media_id")}
        data["id"] = doc["media_id"]
        return cls.model_validate(data)
