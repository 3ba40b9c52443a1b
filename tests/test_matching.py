"""Levenshtein similarity and field-level fuzzy matching."""

import pytest

from media_catalog.services.matching.fuzzy import PREFIX_MATCH_SCORE, field_search, fuzzy_match
from media_catalog.services.matching.levenshtein import fuzzy_similarity, levenshtein_distance
from tests.conftest import make_record

PAIRS = [
    ("kitten", "sitting"),
    ("database", "databse"),
    ("", "abc"),
    ("contract", "contarct"),
    ("Video", "video"),
]


def test_levenshtein_known_distances():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "abc") == 0


@pytest.mark.parametrize("a,b", PAIRS)
def test_similarity_is_symmetric_and_bounded(a, b):
    forward = fuzzy_similarity(a, b)
    assert forward == pytest.approx(fuzzy_similarity(b, a))
    assert 0.0 <= forward <= 1.0


def test_similarity_identity_and_case():
    assert fuzzy_similarity("", "") == 1.0
    assert fuzzy_similarity("Video", "video") == 1.0


def test_one_deletion_typo():
    assert fuzzy_similarity("database", "databse") == pytest.approx(0.875)


def test_containment_scores_one():
    assert fuzzy_match("Introduction to Contract Law", "contract law") == 1.0


def test_prefix_match_scores_high():
    # "zzzz" matches nothing, so the average is half the prefix score
    assert fuzzy_match("Photography basics", "photo zzzz") == pytest.approx(PREFIX_MATCH_SCORE / 2)


def test_unmatched_query_words_lower_the_average():
    full = fuzzy_match("Contract Law", "contract")
    partial = fuzzy_match("Contract Law", "contract zebra")
    assert partial < full


def test_typo_matches_at_a_lenient_threshold():
    record = make_record("Contract Law")
    matches = field_search([record], "contarct", min_score=0.7, fields=("title",), limit=10)
    assert len(matches) == 1
    assert matches[0].field == "title"
    assert matches[0].score == pytest.approx(0.75)


def test_strict_threshold_rejects_unrelated_title():
    record = make_record("Property Rights")
    assert field_search([record], "contarct", min_score=0.9, fields=("title",), limit=10) == []


def test_empty_query_returns_nothing():
    record = make_record("Anything")
    assert field_search([record], "   ", min_score=0.0, fields=("title",), limit=10) == []


def test_best_field_and_snippet_truncation():
    long_text = "negotiation " * 30
    record = make_record("Unrelated heading", description=long_text)
    matches = field_search(
        [record], "negotiation", min_score=0.3, fields=("title", "description"), limit=5, snippet_length=40
    )
    assert matches[0].field == "description"
    assert len(matches[0].snippet) == 40


def test_results_sorted_and_limited():
    records = [make_record("Contract Law"), make_record("Contracts"), make_record("Contrast study")]
    matches = field_search(records, "contract", min_score=0.3, fields=("title",), limit=2)
    assert len(matches) == 2
    assert matches[0].score >= matches[1].score
    assert matches[0].record.title == "Contract Law"


def test_field_search_skips_non_text_fields():
    record = make_record("Contract Law", embedding=[0.3, 0.4])
    matches = field_search([record], "contract", min_score=0.3, fields=("embedding", "id", "title"), limit=5)
    assert [m.field for m in matches] == ["title"]
    assert field_search([record], "contract", min_score=0.3, fields=("embedding",), limit=5) == []
