"""OpenSearch connection and index config (read from settings). Read-only; no business logic."""

from media_catalog.config.indexing.models import HNSWConfig, IndexingConfig
from media_catalog.config.settings import get_settings


def get_opensearch_config() -> dict:
    """Return OpenSearch connection parameters from settings for use by resources."""
    s = get_settings()
    return {
        "host": s.opensearch_host,
        "username": s.opensearch_username,
        "password": s.opensearch_password,
        "use_ssl": s.opensearch_use_ssl,
        "verify_certs": s.opensearch_verify_certs,
        "timeout": s.opensearch_timeout,
    }


def get_indexing_config(dimension: int) -> IndexingConfig:
    """Return the vector index layout for a corpus of `dimension`-sized embeddings."""
    s = get_settings()
    return IndexingConfig(
        index_name=s.opensearch_index,
        dimension=dimension,
        hnsw_config=HNSWConfig(m=s.opensearch_hnsw_m, ef_construction=s.opensearch_hnsw_ef_construction),
    )
