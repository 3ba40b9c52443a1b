"""Vector search, semantic search diagnostics, similar items and fuzzy search over the memory stores."""

import pytest

from media_catalog.config.embedding.models import EmbeddingConfig
from media_catalog.models.media import MediaType
from media_catalog.models.results import RankedResult
from media_catalog.services.embedder.base import BaseEmbeddingStrategy
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.errors import InvalidInputError, MissingEmbeddingError, NotFoundError
from media_catalog.services.search.ranker import (
    EMPTY_CATALOG_MESSAGE,
    NO_EMBEDDINGS_MESSAGE,
    SemanticRanker,
    context_boost,
    extract_related_concepts,
    normalize_query,
)
from tests.conftest import make_record


def _axis(index: int, dim: int) -> list[float]:
    vec = [0.0] * dim
    vec[index] = 1.0
    return vec


class AxisStrategy(BaseEmbeddingStrategy):
    """Embeds every text as the same unit axis vector."""

    def __init__(self, index: int):
        self._index = index

    @property
    def strategy_name(self) -> str:
        return "axis"

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        return [_axis(self._index, config.dimension) for _ in texts]


def test_normalize_query():
    assert normalize_query("  contract \t law\n ") == "contract law"


def test_context_boost_rewards_title_and_description(engine_config):
    record = make_record("Contract Law Basics", description="all about contract law")
    boosted = context_boost(record, "contract law", 0.5, engine_config)
    s = engine_config.semantic
    assert boosted == pytest.approx(0.5 + s.title_match_boost + s.partial_word_match_boost + s.description_match_boost)
    assert context_boost(record, "contract law", 0.99, engine_config) == 1.0


async def test_semantic_search_ranks_contract_records_first(ranker, law_catalog):
    response = await ranker.semantic_search("requirements for a valid contract")
    ids = [r.record.id for r in response.results]
    contract_ids = {law_catalog[k].id for k in ("basics", "breach", "formation")}
    assert ids[0] == law_catalog["basics"].id
    assert contract_ids <= set(ids)
    if law_catalog["property"].id in ids:
        assert ids.index(law_catalog["property"].id) == len(ids) - 1
    relevance = [r.relevance_score for r in response.results]
    assert relevance == sorted(relevance, reverse=True)
    assert response.metadata.search_type == "semantic"
    assert response.metadata.total_candidates == 4


async def test_semantic_search_reports_related_concepts(ranker, law_catalog):
    response = await ranker.semantic_search("valid contract")
    assert response.related_concepts is not None
    assert all("contract" not in concept for concept in response.related_concepts)


async def test_semantic_search_on_empty_catalog(ranker):
    response = await ranker.semantic_search("anything at all")
    assert response.results == []
    assert response.metadata.total_candidates == 0
    assert response.diagnostic_message == EMPTY_CATALOG_MESSAGE


async def test_semantic_search_without_embeddings(ranker, record_store):
    await record_store.create(make_record("Unembedded"))
    response = await ranker.semantic_search("unembedded")
    assert response.results == []
    assert response.diagnostic_message == NO_EMBEDDINGS_MESSAGE


async def test_semantic_search_relaxes_to_zero_with_low_confidence_message(
    embedder, retriever, record_store, vector_store, engine_config
):
    dim = embedder.dimension
    axis_embedder = EmbeddingService(embedder.config, AxisStrategy(0))
    ranker = SemanticRanker(axis_embedder, retriever, record_store, engine_config)
    record = await record_store.create(make_record("Gardening tips", embedding=_axis(1, dim)))
    await vector_store.upsert(record.id, record.embedding, record.type.value)

    response = await ranker.semantic_search("quantum chromodynamics")
    assert [r.record.id for r in response.results] == [record.id]
    assert response.metadata.effective_min_similarity == 0.0
    assert response.diagnostic_message.startswith("Found 1 results, but they have low similarity")


async def test_empty_query_is_rejected(ranker):
    with pytest.raises(InvalidInputError):
        await ranker.semantic_search("   ")
    with pytest.raises(InvalidInputError):
        await ranker.search("")


async def test_search_filters_by_max_distance(ranker, law_catalog):
    results = await ranker.search("requirements for a valid contract", max_distance=0.3)
    assert [r.record.id for r in results] == [law_catalog["basics"].id]
    assert results[0].relevance_score == results[0].similarity


async def test_search_on_empty_store(ranker):
    assert await ranker.search("contract") == []


async def test_find_similar_excludes_source(ranker, law_catalog):
    source = law_catalog["formation"]
    results = await ranker.find_similar(source.id, max_distance=2.0)
    ids = [r.record.id for r in results]
    assert source.id not in ids
    assert len(ids) == 3


async def test_find_similar_errors(ranker, record_store):
    with pytest.raises(NotFoundError):
        await ranker.find_similar("media_missing")
    bare = await record_store.create(make_record("No vector", MediaType.AUDIO))
    with pytest.raises(MissingEmbeddingError):
        await ranker.find_similar(bare.id)


async def test_fuzzy_search_tolerates_typos(ranker, law_catalog):
    matches = await ranker.fuzzy_search("Contarct", min_score=0.5, fields=["title"])
    titles = [m.record.title for m in matches]
    assert "Property Law Overview" not in titles
    assert {"Contract Law Basics", "Breach of Contract", "Contract Formation"} <= set(titles)
    assert all(m.matched_field == "title" for m in matches)


async def test_fuzzy_search_strict_threshold(ranker, record_store):
    await record_store.create(make_record("Property Rights"))
    assert await ranker.fuzzy_search("contarct", min_score=0.9) == []


async def test_fuzzy_search_includes_unembedded_records(ranker, record_store):
    await record_store.create(make_record("Jazz improvisation"))
    matches = await ranker.fuzzy_search("jazz")
    assert [m.record.title for m in matches] == ["Jazz improvisation"]


def test_related_concepts_skip_query_words(engine_config):
    record = make_record("Contract Negotiation Strategies", description="Leverage and bargaining power explained")
    result = RankedResult(record=record, similarity=0.8, distance=0.2, relevance_score=0.8)
    concepts = extract_related_concepts([result], "contract", engine_config)
    assert "contract" not in concepts
    assert concepts[:2] == ["negotiation", "strategies"]
    assert "leverage" in concepts


def _unit(cos: float, dim: int) -> list[float]:
    """Unit vector at cosine `cos` from axis 0."""
    vec = [0.0] * dim
    vec[0] = cos
    vec[1] = (1.0 - cos * cos) ** 0.5
    return vec


def _axis_ranker(embedder, retriever, record_store, engine_config) -> SemanticRanker:
    return SemanticRanker(EmbeddingService(embedder.config, AxisStrategy(0)), retriever, record_store, engine_config)


async def _store(record_store, vector_store, record):
    await record_store.create(record)
    await vector_store.upsert(record.id, record.embedding, record.type.value)
    return record


async def test_boosted_record_survives_a_small_limit(
    embedder, retriever, record_store, vector_store, engine_config
):
    dim = embedder.dimension
    ranker = _axis_ranker(embedder, retriever, record_store, engine_config)
    notes = await _store(record_store, vector_store, make_record("Gardening notes", embedding=_unit(0.60, dim)))
    lecture = await _store(
        record_store, vector_store, make_record("video lecture", MediaType.VIDEO, embedding=_unit(0.55, dim))
    )

    both = await ranker.semantic_search("video lecture", limit=2)
    assert [r.record.id for r in both.results] == [lecture.id, notes.id]

    top = await ranker.semantic_search("video lecture", limit=1)
    assert [r.record.id for r in top.results] == [lecture.id]
    assert top.results[0].relevance_score > 0.6
    assert top.metadata.filtered_results == 1


async def test_candidates_beyond_adaptive_distance_come_back_as_low_confidence(
    embedder, retriever, record_store, vector_store, engine_config
):
    ranker = _axis_ranker(embedder, retriever, record_store, engine_config)
    opposite = await _store(
        record_store, vector_store, make_record("Opposite", embedding=_unit(-0.5, embedder.dimension))
    )

    response = await ranker.semantic_search("anything")
    assert [r.record.id for r in response.results] == [opposite.id]
    assert response.results[0].distance == pytest.approx(1.5)
    assert response.metadata.effective_min_similarity == 0.0
    assert response.metadata.total_candidates == 1
    assert response.diagnostic_message.startswith("Found 1 results, but they have low similarity")


async def test_fuzzy_search_ignores_unsearchable_fields(ranker, record_store):
    await record_store.create(make_record("Jazz improvisation", embedding=[0.1, 0.2]))
    assert await ranker.fuzzy_search("jazz", fields=["embedding"]) == []
    matches = await ranker.fuzzy_search("jazz", fields=["embedding", "title"])
    assert [m.matched_field for m in matches] == ["title"]
