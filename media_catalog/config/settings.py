"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="media-catalog", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode (logs boost traces)")
    log_level: str = Field(default="INFO", description="Log level name")

    # Server
    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")

    # Storage backend: MongoDB records + OpenSearch vectors, or in-process memory
    storage_backend: Literal["mongo_opensearch", "memory"] = Field(
        default="mongo_opensearch", description="Record/vector store backend"
    )

    # MongoDB (see config/storage/mongo for connection semantics)
    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI",
    )
    mongo_database: str = Field(default="media_catalog", description="Default database name")
    mongo_media_collection: str = Field(default="media_items", description="Collection holding media records")
    mongo_connect_timeout_ms: int = Field(default=5000, ge=100, description="Connection timeout (ms)")
    mongo_server_selection_timeout_ms: int = Field(
        default=5000, ge=100, description="Server selection timeout (ms)"
    )
    mongo_max_pool_size: int = Field(default=50, ge=1, le=500, description="Max connection pool size")

    # Embedding provider
    embedding_profile: str = Field(default="active", description="Embedding profile name in static.json")
    openai_api_key: str = Field(default="", description="OpenAI API key for embeddings")
    aws_region: str = Field(default="us-east-1", description="AWS region for Bedrock")
    auto_backfill_on_startup: bool = Field(
        default=False, description="Embed records missing an embedding when the app starts"
    )

    # Ranking engine
    engine_profile: str = Field(default="active", description="Engine tuning profile in static.json")

    # OpenSearch
    opensearch_host: str = Field(default="http://localhost:9200", description="OpenSearch base URL")
    opensearch_username: str = Field(default="admin", description="OpenSearch username")
    opensearch_password: str = Field(default="admin", description="OpenSearch password")
    opensearch_use_ssl: bool = Field(default=True, description="Use HTTPS to OpenSearch")
    opensearch_verify_certs: bool = Field(default=False, description="Verify TLS certificates")
    opensearch_timeout: int = Field(default=30, ge=1, description="Request timeout (seconds)")
    opensearch_index: str = Field(default="media-vectors", description="k-NN index holding record vectors")
    opensearch_hnsw_m: int = Field(default=16, ge=1, description="HNSW graph degree")
    opensearch_hnsw_ef_construction: int = Field(default=200, ge=1, description="HNSW build-time ef")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
