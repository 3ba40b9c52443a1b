"""Process-wide service wiring, chosen by settings.storage_backend. Cached for the app lifetime."""

from functools import lru_cache

from media_catalog.config.embedding.static import resolve_embedding_config
from media_catalog.config.engine.models import EngineConfig
from media_catalog.config.engine.static import resolve_engine_config
from media_catalog.config.logging import get_logger
from media_catalog.config.settings import get_settings
from media_catalog.models.media import MediaRecord
from media_catalog.repositories.base import RecordStore, VectorCandidateStore
from media_catalog.repositories.memory.records_repository import InMemoryRecordStore
from media_catalog.repositories.memory.vectors_repository import InMemoryVectorStore
from media_catalog.repositories.mongodb.media_repository import MongoRecordStore
from media_catalog.repositories.opensearch.vectors_repository import OpenSearchVectorStore
from media_catalog.services.catalog import CatalogService
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.ranking.booster import BoostSink
from media_catalog.services.recommendation.service import RecommendationService
from media_catalog.services.search.ranker import SemanticRanker
from media_catalog.services.search.retrieval import CandidateRetriever

logger = get_logger(__name__)


def log_boost_trace(record: MediaRecord, base: float, final: float, trace: list[tuple[str, float]]) -> None:
    logger.debug(
        "Relevance boost applied",
        extra={
            "media_id": record.id,
            "base_similarity": round(base, 4),
            "final_similarity": round(final, 4),
            "factors": [f"{name}={factor:.3f}" for name, factor in trace],
        },
    )


@lru_cache
def get_engine_config() -> EngineConfig:
    return resolve_engine_config(get_settings().engine_profile)


@lru_cache
def get_embedding_service() -> EmbeddingService:
    return EmbeddingService(resolve_embedding_config(get_settings().embedding_profile))


@lru_cache
def get_record_store() -> RecordStore:
    if get_settings().storage_backend == "memory":
        return InMemoryRecordStore()
    return MongoRecordStore()


@lru_cache
def get_vector_store() -> VectorCandidateStore:
    settings = get_settings()
    if settings.storage_backend == "memory":
        return InMemoryVectorStore()
    return OpenSearchVectorStore(settings.opensearch_index)


@lru_cache
def get_catalog_service() -> CatalogService:
    return CatalogService(get_record_store(), get_vector_store(), get_embedding_service())


def _retriever() -> CandidateRetriever:
    return CandidateRetriever(get_vector_store(), get_record_store())


@lru_cache
def get_ranker() -> SemanticRanker:
    sink: BoostSink | None = log_boost_trace if get_settings().debug else None
    return SemanticRanker(
        get_embedding_service(), _retriever(), get_record_store(), get_engine_config(), boost_sink=sink
    )


@lru_cache
def get_recommendation_service() -> RecommendationService:
    return RecommendationService(_retriever(), get_record_store(), get_embedding_service(), get_engine_config())


def reset_dependencies() -> None:
    """Drop every cached service (and the stores they share). Used when settings change."""
    for builder in (
        get_engine_config,
        get_embedding_service,
        get_record_store,
        get_vector_store,
        get_catalog_service,
        get_ranker,
        get_recommendation_service,
    ):
        builder.cache_clear()
