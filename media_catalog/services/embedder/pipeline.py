"""
Backfill: embed every record that has no embedding yet. Sequential, with a fixed delay between
provider calls to stay under rate limits. Per-record failures are collected, not raised.
"""

import asyncio
from typing import Any

from pydantic import BaseModel, Field

from media_catalog.config.logging import get_logger
from media_catalog.services.catalog import CatalogService
from media_catalog.services.errors import ProviderError

logger = get_logger(__name__)


class BackfillReport(BaseModel):
    total: int = 0
    embedded: int = 0
    failed: int = 0
    errors: list[dict[str, Any]] = Field(default_factory=list)


async def run_backfill(catalog: CatalogService, delay_ms: int = 100) -> BackfillReport:
    """Returns counts plus {item_id, error, error_code} for each record that could not be embedded."""
    pending = await catalog.records.list_without_embedding()
    report = BackfillReport(total=len(pending))
    if not pending:
        logger.info("Backfill: all records already have embeddings")
        return report

    logger.info("Backfill starting", extra={"pending": len(pending), "delay_ms": delay_ms})
    for i, record in enumerate(pending):
        try:
            await catalog.attach_embedding(record)
            report.embedded += 1
        except ProviderError as e:
            report.failed += 1
            report.errors.append({"item_id": record.id, "error": e.message, "error_code": "EMBEDDING_FAILED"})
            logger.warning("Backfill item failed", extra={"media_id": record.id, "error": e.message})
        if delay_ms > 0 and i < len(pending) - 1:
            await asyncio.sleep(delay_ms / 1000.0)

    logger.info(
        "Backfill completed",
        extra={"total": report.total, "embedded": report.embedded, "failed": report.failed},
    )
    return report
