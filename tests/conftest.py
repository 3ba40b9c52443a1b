"""Shared fixtures: in-memory stores, the deterministic mock embedder and default engine config."""

import os
from datetime import timedelta

import pytest

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["EMBEDDING_PROFILE"] = "mock"
os.environ["ENGINE_PROFILE"] = "default"

from media_catalog.config.embedding.models import EmbeddingConfig  # noqa: E402
from media_catalog.config.embedding.static import resolve_embedding_config  # noqa: E402
from media_catalog.config.engine.models import EngineConfig  # noqa: E402
from media_catalog.config.settings import get_settings  # noqa: E402
from media_catalog.controllers.dependencies import reset_dependencies  # noqa: E402
from media_catalog.models.media import MediaRecord, MediaType  # noqa: E402
from media_catalog.repositories.memory.records_repository import InMemoryRecordStore  # noqa: E402
from media_catalog.repositories.memory.vectors_repository import InMemoryVectorStore  # noqa: E402
from media_catalog.services.catalog import CatalogService  # noqa: E402
from media_catalog.services.embedder.base import BaseEmbeddingStrategy  # noqa: E402
from media_catalog.services.embedder.service import EmbeddingService  # noqa: E402
from media_catalog.services.recommendation.service import RecommendationService  # noqa: E402
from media_catalog.services.search.ranker import SemanticRanker  # noqa: E402
from media_catalog.services.search.retrieval import CandidateRetriever  # noqa: E402
from media_catalog.utils.time import utc_now  # noqa: E402


class FailingEmbeddingStrategy(BaseEmbeddingStrategy):
    """Simulates a provider outage."""

    @property
    def strategy_name(self) -> str:
        return "failing"

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        raise ConnectionError("provider unreachable")


def make_record(
    title: str,
    media_type: MediaType = MediaType.TEXT,
    description: str | None = None,
    content: str | None = None,
    source_url: str | None = None,
    mime_type: str | None = None,
    age_days: float = 0.0,
    embedding: list[float] | None = None,
) -> MediaRecord:
    created = utc_now() - timedelta(days=age_days)
    return MediaRecord(
        title=title,
        type=media_type,
        description=description,
        content=content,
        source_url=source_url,
        mime_type=mime_type,
        embedding=embedding,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture(autouse=True)
def fresh_app_state():
    """Every test gets fresh settings and service singletons."""
    get_settings.cache_clear()
    reset_dependencies()
    yield
    reset_dependencies()


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def embedder() -> EmbeddingService:
    return EmbeddingService(resolve_embedding_config("mock"))


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def catalog(record_store, vector_store, embedder) -> CatalogService:
    return CatalogService(record_store, vector_store, embedder)


@pytest.fixture
def retriever(record_store, vector_store) -> CandidateRetriever:
    return CandidateRetriever(vector_store, record_store)


@pytest.fixture
def ranker(embedder, retriever, record_store, engine_config) -> SemanticRanker:
    return SemanticRanker(embedder, retriever, record_store, engine_config)


@pytest.fixture
def recommender(retriever, record_store, embedder, engine_config) -> RecommendationService:
    return RecommendationService(retriever, record_store, embedder, engine_config)


@pytest.fixture
async def law_catalog(catalog) -> dict[str, MediaRecord]:
    """Three contract-law records and one property-law record, all embedded."""
    records = {
        "basics": make_record("Contract Law Basics", description="Requirements for a valid contract"),
        "breach": make_record("Breach of Contract", description="Remedies when a contract is broken"),
        "formation": make_record(
            "Contract Formation", description="Offer acceptance and consideration form a contract"
        ),
        "property": make_record("Property Law Overview", description="Ownership of land and real estate rights"),
    }
    return {key: await catalog.create(record) for key, record in records.items()}
