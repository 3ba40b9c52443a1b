"""
Typo-tolerant text matching over record fields. Used by fuzzy search; works on records with
or without embeddings.
"""

from typing import Iterable, NamedTuple, Sequence

from media_catalog.models.media import MediaRecord
from media_catalog.services.matching.levenshtein import fuzzy_similarity

PREFIX_MATCH_SCORE = 0.9
SEARCHABLE_FIELDS = ("title", "description", "content")


class FieldMatch(NamedTuple):
    record: MediaRecord
    score: float
    field: str
    snippet: str | None


def fuzzy_match(text: str, query: str, threshold: float = 0.3) -> float:
    """
    Score how well `query` matches `text` in [0, 1].
    Containment scores 1.0. Otherwise each query word takes its best score over the text words
    (0.9 when a text word starts with it, or its Levenshtein similarity if that reaches `threshold`) and the
    result is the average over all query words, so unmatched words pull the score down.
    """
    text_l = text.lower()
    query_l = query.lower()
    if query_l in text_l:
        return 1.0

    text_words = text_l.split()
    query_words = query_l.split()
    if not query_words or not text_words:
        return 0.0

    total = 0.0
    for qw in query_words:
        best = 0.0
        for tw in text_words:
            if tw.startswith(qw):
                best = max(best, PREFIX_MATCH_SCORE)
            sim = fuzzy_similarity(qw, tw)
            if sim >= threshold:
                best = max(best, sim)
        total += best
    return total / len(query_words)


def _snippet(field: str, value: str, snippet_length: int) -> str:
    if field == "title":
        return value
    return value[:snippet_length]


def best_field_match(
    record: MediaRecord, query: str, fields: Iterable[str], threshold: float, snippet_length: int
) -> tuple[float, str, str | None]:
    """Best (score, field, snippet) across the requested fields; missing fields are skipped."""
    best_score = 0.0
    best_field = ""
    best_snippet: str | None = None
    for field in fields:
        value = getattr(record, field, None)
        if not value:
            continue
        score = fuzzy_match(value, query, threshold)
        if score > best_score:
            best_score = score
            best_field = field
            best_snippet = _snippet(field, value, snippet_length)
    return best_score, best_field, best_snippet


def field_search(
    records: Iterable[MediaRecord],
    query: str,
    min_score: float,
    fields: Sequence[str],
    limit: int,
    snippet_length: int = 100,
) -> list[FieldMatch]:
    """
    Rank records by best fuzzy field match, keeping those scoring at least `min_score`.
    Only title, description and content are searched; other field names are ignored.
    """
    if not query or not query.strip():
        return []
    fields = [f for f in fields if f in SEARCHABLE_FIELDS]
    matches: list[FieldMatch] = []
    for record in records:
        score, field, snippet = best_field_match(record, query, fields, min_score, snippet_length)
        if score > 0 and score >= min_score:
            matches.append(FieldMatch(record, score, field, snippet))
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:limit]
