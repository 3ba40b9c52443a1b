"""Request/response schemas for the /media routes. Embedding vectors are never returned."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from media_catalog.models.media import MediaRecord, MediaType
from media_catalog.models.results import (
    FuzzyMatch,
    RankedResult,
    SemanticSearchMetadata,
    SemanticSearchResponse,
)


class MediaItemOut(BaseModel):
    id: str
    title: str
    type: MediaType
    content: str | None = None
    description: str | None = None
    source_path: str | None = None
    source_url: str | None = None
    mime_type: str | None = None
    has_embedding: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: MediaRecord) -> "MediaItemOut":
        return cls(
            **record.model_dump(exclude={"embedding"}),
            has_embedding=record.has_embedding,
        )


class CreateMediaRequest(BaseModel):
    """POST /media body. Files are referenced by path or URL; nothing is uploaded."""

    title: str = Field(..., min_length=1, max_length=255)
    type: MediaType
    content: str | None = Field(default=None, description="Text body or transcription")
    description: str | None = None
    source_path: str | None = None
    source_url: str | None = None
    mime_type: str | None = None

    def to_record(self) -> MediaRecord:
        return MediaRecord(**self.model_dump())


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int | None = Field(default=None, ge=1)
    max_distance: float | None = Field(default=None, ge=0.0)
    metric: Literal["cosine", "l2", "inner_product"] = "cosine"


class SemanticSearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int | None = Field(default=None, ge=1)
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)
    include_related: bool | None = None
    context_boost: bool | None = None


class FuzzySearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int | None = Field(default=None, ge=1)
    min_score: float | None = Field(default=None, ge=0.0, le=1.0)
    fields: list[Literal["title", "description", "content"]] | None = None


class RankedItemOut(BaseModel):
    item: MediaItemOut
    similarity: float
    distance: float
    relevance_score: float
    semantic_match: bool = False
    boost_trace: list[tuple[str, float]] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: RankedResult) -> "RankedItemOut":
        return cls(
            item=MediaItemOut.from_record(result.record),
            **result.model_dump(exclude={"record"}),
        )


class SemanticSearchOut(BaseModel):
    query: str
    results: list[RankedItemOut]
    related_concepts: list[str] | None = None
    diagnostic_message: str | None = None
    metadata: SemanticSearchMetadata

    @classmethod
    def from_response(cls, response: SemanticSearchResponse) -> "SemanticSearchOut":
        return cls(
            query=response.query,
            results=[RankedItemOut.from_result(r) for r in response.results],
            related_concepts=response.related_concepts,
            diagnostic_message=response.diagnostic_message,
            metadata=response.metadata,
        )


class FuzzyMatchOut(BaseModel):
    item: MediaItemOut
    fuzzy_score: float
    matched_field: str
    matched_text: str | None = None

    @classmethod
    def from_match(cls, match: FuzzyMatch) -> "FuzzyMatchOut":
        return cls(
            item=MediaItemOut.from_record(match.record),
            fuzzy_score=match.fuzzy_score,
            matched_field=match.matched_field,
            matched_text=match.matched_text,
        )
