"""Progressive threshold relaxation."""

from typing import NamedTuple

import pytest

from media_catalog.services.ranking.relaxation import RelaxationPolicy, filter_by_similarity, relax


class Cand(NamedTuple):
    id: str
    similarity: float


SEMANTIC_STEPS = (0.2, 0.1, 0.05, 0.0)
RECOMMENDATION_STEPS = (0.4, 0.3, 0.2, 0.1, 0.05, 0.0)


def _cands(*sims: float) -> list[Cand]:
    return [Cand(f"c{i}", s) for i, s in enumerate(sims)]


def test_no_relaxation_when_initial_threshold_suffices():
    result = relax(_cands(0.8, 0.6, 0.2), 0.5, SEMANTIC_STEPS, 10)
    assert [c.id for c in result.results] == ["c0", "c1"]
    assert result.effective_threshold == 0.5
    assert not result.relaxed
    assert not result.fallback


def test_non_empty_stops_at_first_step_with_results():
    result = relax(_cands(0.15, 0.12, 0.01), 0.3, SEMANTIC_STEPS, 10, RelaxationPolicy.NON_EMPTY)
    assert result.effective_threshold == 0.1
    assert [c.id for c in result.results] == ["c0", "c1"]
    assert result.relaxed


def test_fill_target_walks_until_target_reached():
    result = relax(_cands(0.45, 0.35, 0.25, 0.15), 0.5, RECOMMENDATION_STEPS, 3, RelaxationPolicy.FILL_TARGET)
    assert result.effective_threshold == 0.2
    assert len(result.results) == 3


def test_fill_target_keeps_loosest_step_when_sequence_exhausted():
    result = relax(_cands(0.35, 0.25), 0.3, RECOMMENDATION_STEPS, 5, RelaxationPolicy.FILL_TARGET)
    assert result.effective_threshold == 0.0
    assert len(result.results) == 2
    assert not result.fallback


def test_steps_at_or_above_initial_threshold_are_skipped():
    result = relax(_cands(0.25), 0.3, RECOMMENDATION_STEPS, 1, RelaxationPolicy.FILL_TARGET)
    assert result.effective_threshold == 0.2


def test_fallback_returns_top_candidates_when_every_step_is_empty():
    result = relax(_cands(-0.5, -0.1, -0.3), 0.3, SEMANTIC_STEPS, 2)
    assert result.fallback
    assert result.effective_threshold == 0.0
    assert [c.similarity for c in result.results] == [-0.1, -0.3]


def test_no_candidates_gives_empty_result_without_fallback():
    result = relax([], 0.3, SEMANTIC_STEPS, 5)
    assert result.results == []
    assert not result.fallback
    assert not result.relaxed


def test_input_order_is_preserved():
    cands = _cands(0.1, 0.9, 0.5)
    result = relax(cands, 0.05, SEMANTIC_STEPS, 10)
    assert [c.id for c in result.results] == ["c0", "c1", "c2"]
    assert [c.id for c in cands] == ["c0", "c1", "c2"]


@pytest.mark.parametrize("threshold", [0.9, 0.5, 0.3, 0.1, 0.0])
def test_lower_thresholds_never_drop_results(threshold):
    cands = _cands(0.95, 0.7, 0.45, 0.2, 0.05)
    stricter = {c.id for c in filter_by_similarity(cands, threshold + 0.05)}
    looser = {c.id for c in filter_by_similarity(cands, threshold)}
    assert stricter <= looser
