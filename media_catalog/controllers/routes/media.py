"""/media routes: catalog CRUD, the three search modes, similar items and embedding backfill."""

from fastapi import APIRouter, Depends, Query, status

from media_catalog.controllers.dependencies import get_catalog_service, get_embedding_service, get_ranker
from media_catalog.controllers.schema.media import (
    CreateMediaRequest,
    FuzzyMatchOut,
    FuzzySearchRequest,
    MediaItemOut,
    RankedItemOut,
    SearchRequest,
    SemanticSearchOut,
    SemanticSearchRequest,
)
from media_catalog.models.results import EmbeddingStats
from media_catalog.services.catalog import CatalogService
from media_catalog.services.embedder.pipeline import BackfillReport, run_backfill
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.search.ranker import SemanticRanker

router = APIRouter(prefix="/media", tags=["media"])


@router.get("", response_model=list[MediaItemOut])
async def list_media(
    limit: int | None = Query(default=None, ge=1),
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[MediaItemOut]:
    """All records, newest first."""
    return [MediaItemOut.from_record(r) for r in await catalog.list_records(limit)]


@router.post("", response_model=MediaItemOut, status_code=status.HTTP_201_CREATED)
async def create_media(
    body: CreateMediaRequest,
    catalog: CatalogService = Depends(get_catalog_service),
) -> MediaItemOut:
    """Create a record and embed it. An embedding failure still returns the record, with has_embedding false."""
    return MediaItemOut.from_record(await catalog.create(body.to_record()))


@router.get("/stats/embeddings", response_model=EmbeddingStats)
async def embedding_stats(catalog: CatalogService = Depends(get_catalog_service)) -> EmbeddingStats:
    return await catalog.stats()


@router.post("/embeddings/backfill", response_model=BackfillReport)
async def backfill_embeddings(
    catalog: CatalogService = Depends(get_catalog_service),
    embedder: EmbeddingService = Depends(get_embedding_service),
) -> BackfillReport:
    """Embed every record that has no embedding yet. Per-item failures are reported in `errors`."""
    return await run_backfill(catalog, embedder.config.rate_limit_delay_ms)


@router.post("/search", response_model=list[RankedItemOut])
async def search_media(
    body: SearchRequest,
    ranker: SemanticRanker = Depends(get_ranker),
) -> list[RankedItemOut]:
    results = await ranker.search(body.query, body.limit, body.max_distance, body.metric)
    return [RankedItemOut.from_result(r) for r in results]


@router.post("/semantic-search", response_model=SemanticSearchOut)
async def semantic_search(
    body: SemanticSearchRequest,
    ranker: SemanticRanker = Depends(get_ranker),
) -> SemanticSearchOut:
    response = await ranker.semantic_search(
        body.query,
        body.limit,
        min_similarity=body.min_similarity,
        include_related=body.include_related,
        use_context_boost=body.context_boost,
    )
    return SemanticSearchOut.from_response(response)


@router.post("/fuzzy-search", response_model=list[FuzzyMatchOut])
async def fuzzy_search(
    body: FuzzySearchRequest,
    ranker: SemanticRanker = Depends(get_ranker),
) -> list[FuzzyMatchOut]:
    matches = await ranker.fuzzy_search(body.query, body.limit, body.min_score, body.fields)
    return [FuzzyMatchOut.from_match(m) for m in matches]


@router.get("/{media_id}", response_model=MediaItemOut)
async def get_media(media_id: str, catalog: CatalogService = Depends(get_catalog_service)) -> MediaItemOut:
    return MediaItemOut.from_record(await catalog.get(media_id))


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(media_id: str, catalog: CatalogService = Depends(get_catalog_service)) -> None:
    await catalog.delete(media_id)


@router.get("/{media_id}/similar", response_model=list[RankedItemOut])
async def similar_media(
    media_id: str,
    limit: int | None = Query(default=None, ge=1),
    max_distance: float | None = Query(default=None, ge=0.0),
    metric: str = Query(default="cosine", pattern="^(cosine|l2|inner_product)$"),
    ranker: SemanticRanker = Depends(get_ranker),
) -> list[RankedItemOut]:
    results = await ranker.find_similar(media_id, limit, max_distance, metric)
    return [RankedItemOut.from_result(r) for r in results]
