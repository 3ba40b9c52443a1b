"""
Vector candidate store on OpenSearch. Queries use an exact knn_score script so each call can pick
its own metric; scores are converted back to raw distances.
"""

from typing import Any, Sequence

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import NotFoundError as OSNotFoundError
from opensearchpy.exceptions import OpenSearchException

from media_catalog.config.engine.models import DistanceMetric
from media_catalog.config.logging import get_logger
from media_catalog.repositories.base import RepositoryError, VectorCandidateStore
from media_catalog.resources.opensearch.client import get_opensearch_client
from media_catalog.resources.opensearch.index_manager import VECTOR_FIELD_NAME, space_type
from media_catalog.services.search.metrics import knn_score_to_distance

logger = get_logger(__name__)


def _translate_opensearch_error(e: OpenSearchException, context: str) -> RepositoryError:
    """Wrap OpenSearch errors into a non-leaking RepositoryError."""
    logger.warning(
        "OpenSearch operation failed",
        extra={"context": context, "error_type": type(e).__name__},
    )
    return RepositoryError(f"Dependency temporarily unavailable: {context}", cause=e)


def build_knn_query(
    vector: list[float], limit: int, exclude_ids: Sequence[str], metric: DistanceMetric
) -> dict[str, Any]:
    """Exact k-NN over documents that have a vector, minus excluded ids."""
    bool_query: dict[str, Any] = {"filter": [{"exists": {"field": VECTOR_FIELD_NAME}}]}
    if exclude_ids:
        bool_query["must_not"] = [{"ids": {"values": list(exclude_ids)}}]
    return {
        "size": limit,
        "_source": False,
        "query": {
            "script_score": {
                "query": {"bool": bool_query},
                "script": {
                    "source": "knn_score",
                    "lang": "knn",
                    "params": {
                        "field": VECTOR_FIELD_NAME,
                        "query_value": vector,
                        "space_type": space_type(metric),
                    },
                },
            }
        },
    }


class OpenSearchVectorStore(VectorCandidateStore):
    def __init__(self, index_name: str, client: AsyncOpenSearch | None = None):
        self._index = index_name
        self._client = client

    @property
    def client(self) -> AsyncOpenSearch:
        if self._client is None:
            self._client = get_opensearch_client()
        return self._client

    async def query(
        self,
        vector: list[float],
        limit: int,
        exclude_ids: Sequence[str] = (),
        metric: DistanceMetric = "cosine",
    ) -> list[tuple[str, float]]:
        if limit <= 0:
            return []
        body = build_knn_query(vector, limit, exclude_ids, metric)
        try:
            response = await self.client.search(index=self._index, body=body)
        except OSNotFoundError:
            logger.info("Vector index missing; no candidates", extra={"index_name": self._index})
            return []
        except OpenSearchException as e:
            raise _translate_opensearch_error(e, "vector candidate query") from e
        hits = response.get("hits", {}).get("hits", [])
        pairs = [(hit["_id"], knn_score_to_distance(hit["_score"], metric)) for hit in hits]
        pairs.sort(key=lambda p: p[1])
        return pairs

    async def upsert(self, record_id: str, vector: list[float], media_type: str) -> None:
        doc = {VECTOR_FIELD_NAME: vector, "record_id": record_id, "media_type": media_type}
        try:
            await self.client.index(index=self._index, id=record_id, body=doc, refresh="wait_for")
        except OpenSearchException as e:
            raise _translate_opensearch_error(e, "upsert record vector") from e

    async def delete(self, record_id: str) -> None:
        try:
            await self.client.delete(index=self._index, id=record_id, refresh="wait_for")
        except OSNotFoundError:
            logger.debug("Vector already absent", extra={"record_id": record_id})
        except OpenSearchException as e:
            raise _translate_opensearch_error(e, "delete record vector") from e
