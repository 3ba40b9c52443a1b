"""Shared AsyncOpenSearch client. Closed by the app lifespan."""

from opensearchpy import AsyncOpenSearch

from media_catalog.config.logging import get_logger
from media_catalog.config.storage.opensearch import get_opensearch_config

logger = get_logger(__name__)

_client: AsyncOpenSearch | None = None


def get_opensearch_client() -> AsyncOpenSearch:
    """Return the shared async OpenSearch client. Creates it on first use."""
    global _client
    if _client is None:
        cfg = get_opensearch_config()
        _client = AsyncOpenSearch(
            hosts=[cfg["host"]],
            http_auth=(cfg["username"], cfg["password"]),
            use_ssl=cfg["use_ssl"],
            verify_certs=cfg["verify_certs"],
            ssl_show_warn=cfg["verify_certs"],
            timeout=cfg["timeout"],
        )
        logger.info("OpenSearch client ready", extra={"host": cfg["host"], "timeout": cfg["timeout"]})
    return _client


async def close_opensearch_client() -> None:
    """Close pooled connections. Safe to call when no client was created."""
    global _client
    if _client is None:
        return
    await _client.close()
    _client = None
    logger.info("OpenSearch client closed")
