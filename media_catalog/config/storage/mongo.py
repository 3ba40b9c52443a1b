"""MongoDB connection and collection config for the catalog (read from settings). Read-only; no business logic."""

from media_catalog.config.settings import get_settings


def get_mongo_config() -> dict:
    """Connection parameters plus the catalog database and media collection names."""
    s = get_settings()
    return {
        "uri": s.mongo_uri,
        "database": s.mongo_database,
        "media_collection": s.mongo_media_collection,
        "connect_timeout_ms": s.mongo_connect_timeout_ms,
        "server_selection_timeout_ms": s.mongo_server_selection_timeout_ms,
        "max_pool_size": s.mongo_max_pool_size,
    }


def media_collection_name() -> str:
    return get_mongo_config()["media_collection"]
