"""
Create the k-NN index that holds one vector per media record. Index-time space type only
affects the HNSW graph; queries pick their own metric through the knn_score script.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import OpenSearchException, RequestError

from media_catalog.config.indexing.models import IndexingConfig
from media_catalog.config.logging import get_logger
from media_catalog.resources.opensearch.client import get_opensearch_client
from media_catalog.services.search.metrics import METRIC_TO_SPACE_TYPE

logger = get_logger(__name__)

VECTOR_FIELD_NAME = "embedding_vector"


def space_type(metric: str) -> str:
    """Map a distance metric to the OpenSearch space_type."""
    st = METRIC_TO_SPACE_TYPE.get(metric)
    if st is None:
        raise ValueError(f"Unsupported metric: {metric!r}. Use cosine, l2, or inner_product.")
    return st


def build_index_body(config: IndexingConfig) -> dict[str, Any]:
    """Index settings and mappings: an HNSW knn_vector plus keyword fields for filtering."""
    hnsw = config.hnsw_config
    return {
        "settings": {
            "index": {
                "knn": True,
                "number_of_shards": config.index_settings.get("number_of_shards", 1),
                "number_of_replicas": config.index_settings.get("number_of_replicas", 1),
            }
        },
        "mappings": {
            "properties": {
                VECTOR_FIELD_NAME: {
                    "type": "knn_vector",
                    "dimension": config.dimension,
                    "method": {
                        "name": "hnsw",
                        "space_type": space_type(config.similarity),
                        "engine": "nmslib",
                        "parameters": {"ef_construction": hnsw.ef_construction, "m": hnsw.m},
                    },
                },
                "record_id": {"type": "keyword"},
                "media_type": {"type": "keyword"},
            }
        },
    }


async def _existing_dimension(client: AsyncOpenSearch, index_name: str) -> int | None:
    mapping = await client.indices.get_mapping(index=index_name)
    props = mapping.get(index_name, {}).get("mappings", {}).get("properties", {})
    return props.get(VECTOR_FIELD_NAME, {}).get("dimension")


async def ensure_index(config: IndexingConfig, client: AsyncOpenSearch | None = None) -> bool:
    """
    Create the index if it does not exist. An existing index with another vector dimension is
    dropped and recreated; records then need a backfill. Returns True if an index was created.
    Raises ValueError if OpenSearch rejects the index definition.
    """
    client = client or get_opensearch_client()
    index_name = config.index_name
    if await client.indices.exists(index=index_name):
        existing = await _existing_dimension(client, index_name)
        if existing is None or existing == config.dimension:
            logger.debug("Vector index ready", extra={"index_name": index_name, "dimension": existing})
            return False
        logger.warning(
            "Vector index dimension changed; recreating",
            extra={"index_name": index_name, "existing_dimension": existing, "new_dimension": config.dimension},
        )
        await client.indices.delete(index=index_name)

    try:
        await client.indices.create(index=index_name, body=build_index_body(config))
    except RequestError as e:
        reason = str(e)
        if isinstance(getattr(e, "info", None), dict):
            error_info = e.info.get("error", {})
            if isinstance(error_info, dict) and "reason" in error_info:
                reason = error_info["reason"]
        logger.error("Failed to create vector index", extra={"index_name": index_name, "error": reason})
        raise ValueError(f"Failed to create index '{index_name}': {reason}") from e
    except OpenSearchException as e:
        logger.error(
            "OpenSearch error during index creation",
            extra={"index_name": index_name, "error_type": type(e).__name__},
        )
        raise ValueError(f"OpenSearch error while creating index '{index_name}'") from e
    logger.info("Vector index created", extra={"index_name": index_name, "dimension": config.dimension})
    return True
