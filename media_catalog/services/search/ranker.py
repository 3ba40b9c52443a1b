"""
Semantic ranker: embedding-based retrieval, threshold relaxation, relevance boosting and
related-concept extraction over the candidate store.
"""

import re
from typing import Sequence

from media_catalog.config.engine.models import DistanceMetric, EngineConfig
from media_catalog.config.logging import get_logger
from media_catalog.models.media import MediaRecord
from media_catalog.models.results import (
    FuzzyMatch,
    RankedResult,
    ScoredCandidate,
    SemanticSearchMetadata,
    SemanticSearchResponse,
)
from media_catalog.repositories.base import RecordStore
from media_catalog.services.embedder.service import EmbeddingService
from media_catalog.services.errors import InvalidInputError, MissingEmbeddingError, NotFoundError
from media_catalog.services.matching.fuzzy import field_search
from media_catalog.services.ranking.booster import BoostSink, boost
from media_catalog.services.ranking.relaxation import RelaxationPolicy, RelaxationResult, relax
from media_catalog.services.ranking.text import is_stop_word
from media_catalog.services.search.retrieval import CandidateRetriever

logger = get_logger(__name__)

NO_EMBEDDINGS_MESSAGE = (
    "No items have embeddings. Please create items or run the backfill script to generate embeddings."
)
EMPTY_CATALOG_MESSAGE = "No items found in database. Please add some media items first."


def normalize_query(query: str) -> str:
    """Trim and collapse internal whitespace."""
    return re.sub(r"\s+", " ", query.strip())


def context_boost(record: MediaRecord, query: str, score: float, cfg: EngineConfig) -> float:
    """Additive bonuses for the query appearing in the title or description, capped at 1.0."""
    s = cfg.semantic
    query_l = query.lower()
    if record.title:
        title_l = record.title.lower()
        if query_l in title_l:
            score += s.title_match_boost
        query_words = query_l.split(" ")
        title_words = title_l.split(" ")
        matching = [qw for qw in query_words if any(tw in qw or qw in tw for tw in title_words)]
        if matching:
            score += len(matching) / len(query_words) * s.partial_word_match_boost
    if record.description and query_l in record.description.lower():
        score += s.description_match_boost
    return min(1.0, score)


def extract_related_concepts(results: Sequence[RankedResult], query: str, cfg: EngineConfig) -> list[str]:
    """
    Terms from the titles (all qualifying words) and descriptions (first three) of the top
    results, minus stop words and anything overlapping a query word.
    """
    concepts: dict[str, None] = {}
    for result in results[: cfg.semantic.related_source_results]:
        record = result.record
        if record.title:
            for word in record.title.lower().split():
                if len(word) > 3 and not is_stop_word(word):
                    concepts.setdefault(word, None)
        if record.description:
            words = [w for w in record.description.lower().split() if len(w) > 3 and not is_stop_word(w)]
            for word in words[:3]:
                concepts.setdefault(word, None)
    query_words = [w for w in query.lower().split() if w]
    related = [c for c in concepts if not any(qw in c or c in qw for qw in query_words)]
    return related[: cfg.semantic.related_concepts_limit]


class SemanticRanker:
    """Ranked search over the catalog. All tunables come from the EngineConfig it is built with."""

    def __init__(
        self,
        embedder: EmbeddingService,
        retriever: CandidateRetriever,
        records: RecordStore,
        config: EngineConfig,
        boost_sink: BoostSink | None = None,
    ):
        self._embedder = embedder
        self._retriever = retriever
        self._records = records
        self._config = config
        self._sink = boost_sink

    @property
    def config(self) -> EngineConfig:
        return self._config

    def _boost(self, candidate: ScoredCandidate, query: str) -> tuple[float, list[tuple[str, float]]]:
        outcome = boost(candidate.record, query, candidate.similarity, self._config.boosts, sink=self._sink)
        return outcome.similarity, outcome.trace

    async def _embed_query(self, query: str) -> tuple[str, list[float]]:
        text = normalize_query(query)
        if not text:
            raise InvalidInputError("Query must not be empty")
        return text, await self._embedder.embed(text)

    async def search(
        self,
        query: str,
        limit: int | None = None,
        max_distance: float | None = None,
        metric: DistanceMetric = "cosine",
    ) -> list[RankedResult]:
        """Plain vector search: nearest candidates within `max_distance`, unboosted."""
        cfg = self._config
        limit = cfg.validate_limit(limit or cfg.limits.default_search_limit)
        threshold = max_distance if max_distance is not None else cfg.max_distance(metric)
        _, vector = await self._embed_query(query)

        candidates = await self._retriever.find_similar(
            vector, limit * cfg.limits.candidate_multiplier, metric=metric
        )
        within = [c for c in candidates if c.distance <= threshold][:limit]
        logger.info(
            "Vector search completed",
            extra={"metric": metric, "candidates": len(candidates), "results": len(within), "max_distance": threshold},
        )
        return [
            RankedResult(
                record=c.record,
                similarity=c.similarity,
                distance=c.distance,
                relevance_score=c.similarity,
                semantic_match=c.similarity >= cfg.similarity.strong_match_threshold,
            )
            for c in within
        ]

    async def find_similar(
        self,
        record_id: str,
        limit: int | None = None,
        max_distance: float | None = None,
        metric: DistanceMetric = "cosine",
    ) -> list[RankedResult]:
        """Records nearest to an existing record's embedding, excluding the record itself."""
        cfg = self._config
        source = await self._records.get(record_id)
        if source is None:
            raise NotFoundError(f"Media item not found: {record_id}")
        if not source.has_embedding:
            raise MissingEmbeddingError(f"Media item {record_id} does not have an embedding")

        limit = cfg.validate_limit(limit or cfg.limits.default_similar_limit)
        threshold = max_distance if max_distance is not None else cfg.max_distance(metric)
        candidates = await self._retriever.find_similar(
            source.embedding, limit * cfg.limits.candidate_multiplier, exclude_ids=[record_id], metric=metric
        )
        results: list[RankedResult] = []
        for c in candidates:
            if c.distance > threshold or c.record.id == record_id:
                continue
            similarity, trace = self._boost(c, "")
            results.append(
                RankedResult(
                    record=c.record,
                    similarity=similarity,
                    distance=c.distance,
                    relevance_score=similarity,
                    semantic_match=similarity >= cfg.similarity.strong_match_threshold,
                    boost_trace=trace,
                )
            )
            if len(results) >= limit:
                break
        return results

    async def semantic_search(
        self,
        query: str,
        limit: int | None = None,
        min_similarity: float | None = None,
        include_related: bool | None = None,
        use_context_boost: bool | None = None,
    ) -> SemanticSearchResponse:
        """
        Meaning-oriented search. Zero matches is a normal outcome reported through
        `diagnostic_message`, never an exception.
        """
        cfg = self._config
        s = cfg.semantic
        limit = cfg.validate_limit(limit or cfg.limits.default_search_limit)
        min_similarity = cfg.validate_similarity(
            s.default_min_similarity if min_similarity is None else min_similarity
        )
        include_related = s.include_related if include_related is None else include_related
        use_context_boost = s.context_boost if use_context_boost is None else use_context_boost

        text = normalize_query(query)
        if not text:
            raise InvalidInputError("Query must not be empty")

        embedded = await self._records.count_embedded()
        if embedded == 0:
            total = await self._records.count()
            message = EMPTY_CATALOG_MESSAGE if total == 0 else NO_EMBEDDINGS_MESSAGE
            return SemanticSearchResponse(query=query, diagnostic_message=message)

        vector = await self._embedder.embed(text)
        candidates = await self._retriever.find_similar(
            vector, limit * cfg.limits.semantic_candidate_multiplier, metric="cosine"
        )
        pool = [c for c in candidates if c.distance <= cfg.distance.semantic_adaptive_threshold]
        if pool or not candidates:
            relaxation = relax(
                pool, min_similarity, cfg.similarity.progressive_thresholds, limit, RelaxationPolicy.NON_EMPTY
            )
        else:
            # Every candidate lies beyond the adaptive distance: return the closest ones as low-confidence.
            relaxation = RelaxationResult(candidates[:limit], 0.0, True, True)
        logger.info(
            "Semantic search candidates filtered",
            extra={
                "candidates": len(candidates),
                "within_adaptive_threshold": len(pool),
                "selected": len(relaxation.results),
                "effective_min_similarity": relaxation.effective_threshold,
                "fallback": relaxation.fallback,
            },
        )

        ranked: list[RankedResult] = []
        for c in relaxation.results:
            similarity, trace = self._boost(c, text)
            relevance = context_boost(c.record, text, similarity, cfg) if use_context_boost else similarity
            ranked.append(
                RankedResult(
                    record=c.record,
                    similarity=similarity,
                    distance=c.distance,
                    relevance_score=relevance,
                    semantic_match=similarity >= cfg.similarity.strong_match_threshold,
                    boost_trace=trace,
                )
            )
        ranked.sort(key=lambda r: r.relevance_score, reverse=True)
        ranked = ranked[:limit]

        average = sum(r.similarity for r in ranked) / len(ranked) if ranked else 0.0
        related = extract_related_concepts(ranked, text, cfg) if include_related and ranked else None

        return SemanticSearchResponse(
            query=query,
            results=ranked,
            related_concepts=related,
            diagnostic_message=self._diagnose(text, ranked, candidates, relaxation.effective_threshold, average),
            metadata=SemanticSearchMetadata(
                total_candidates=len(candidates),
                filtered_results=len(ranked),
                average_similarity=round(average, 3),
                effective_min_similarity=relaxation.effective_threshold,
            ),
        )

    def _diagnose(
        self,
        query: str,
        ranked: list[RankedResult],
        candidates: list[ScoredCandidate],
        effective_threshold: float,
        average: float,
    ) -> str | None:
        if not ranked:
            if candidates:
                closest = candidates[0]
                return (
                    f"No results found. Closest match has {closest.similarity * 100:.1f}% similarity "
                    f"(distance: {closest.distance:.3f}). The search is working, but the catalog may not "
                    f'have content related to "{query}". Try adding items about this topic, using fuzzy '
                    "search instead, or broader search terms."
                )
            return EMPTY_CATALOG_MESSAGE
        if effective_threshold == 0 and average < self._config.semantic.low_confidence_threshold:
            return (
                f"Found {len(ranked)} results, but they have low similarity (avg: {average * 100:.1f}%). "
                "These may not be very relevant to your query."
            )
        return None

    async def fuzzy_search(
        self,
        query: str,
        limit: int | None = None,
        min_score: float | None = None,
        fields: Sequence[str] | None = None,
    ) -> list[FuzzyMatch]:
        """Typo-tolerant text search over every record, embedded or not."""
        f = self._config.fuzzy
        if not query or not query.strip():
            return []
        records = await self._records.list_all()
        matches = field_search(
            records,
            query.strip(),
            min_score=f.default_min_score if min_score is None else min_score,
            fields=tuple(fields or f.default_fields),
            limit=self._config.validate_limit(limit or f.default_limit),
            snippet_length=f.snippet_length,
        )
        return [
            FuzzyMatch(record=m.record, fuzzy_score=m.score, matched_field=m.field, matched_text=m.snippet)
            for m in matches
        ]
