"""Embedding configuration models. Read-only; no business logic."""

from pydantic import BaseModel, Field


class EmbeddingPreprocessing(BaseModel):
    """Text preprocessing applied before a strategy is called."""

    collapse_whitespace: bool = Field(default=True)
    lowercase: bool = Field(default=False)
    remove_punctuation: bool = Field(default=False)
    max_length: int = Field(default=8192, ge=1)


class EmbeddingConfig(BaseModel):
    """Embedding strategy and parameters. Every vector in the corpus has `dimension` components."""

    strategy: str = Field(..., description="openai|sentence_transformers|bedrock|mock")
    model: str = Field(..., description="Model identifier")
    dimension: int = Field(default=768, ge=1, description="Vector dimension D for the whole corpus")
    preprocessing: EmbeddingPreprocessing = Field(default_factory=EmbeddingPreprocessing)
    batch_size: int = Field(default=100, ge=1)
    rate_limit_delay_ms: int = Field(default=100, ge=0, description="Delay between calls during backfill")
    api_key: str | None = Field(default=None, description="OpenAI API key when strategy is openai")
    region: str | None = Field(default=None, description="AWS region when strategy is bedrock")
