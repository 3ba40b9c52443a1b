"""Vector index configuration models. Read-only; no business logic."""

from typing import Any

from pydantic import BaseModel, Field


class HNSWConfig(BaseModel):
    """HNSW tuning parameters for the k-NN vector field."""

    m: int = Field(default=16, ge=1)
    ef_construction: int = Field(default=200, ge=1)


class IndexingConfig(BaseModel):
    """Layout of the OpenSearch index holding one vector per media record."""

    index_name: str = Field(..., min_length=1, max_length=255)
    dimension: int = Field(..., ge=1, description="Vector dimension D")
    similarity: str = Field(default="cosine", description="cosine|l2|inner_product (index-time space)")
    hnsw_config: HNSWConfig = Field(default_factory=HNSWConfig)
    index_settings: dict[str, Any] = Field(
        default_factory=lambda: {"number_of_shards": 1, "number_of_replicas": 1}
    )
