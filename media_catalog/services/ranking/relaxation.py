"""
Progressive similarity-threshold relaxation. Pure functions over scored candidates:
only set membership changes; input order and scores are left as they are.
"""

from enum import Enum
from typing import NamedTuple, Protocol, Sequence, TypeVar


class _Scored(Protocol):
    @property
    def similarity(self) -> float: ...


T = TypeVar("T", bound=_Scored)


class RelaxationPolicy(str, Enum):
    NON_EMPTY = "non_empty"  # stop at the first step with any result
    FILL_TARGET = "fill_target"  # stop at the first step reaching target_count


class RelaxationResult(NamedTuple):
    results: list
    effective_threshold: float
    relaxed: bool
    fallback: bool


def filter_by_similarity(candidates: Sequence[T], threshold: float) -> list[T]:
    """Candidates with similarity >= threshold, in input order."""
    return [c for c in candidates if c.similarity >= threshold]


def _satisfied(count: int, target_count: int, policy: RelaxationPolicy) -> bool:
    if policy is RelaxationPolicy.FILL_TARGET:
        return count >= target_count
    return count > 0


def relax(
    candidates: Sequence[T],
    initial_threshold: float,
    sequence: Sequence[float],
    target_count: int,
    policy: RelaxationPolicy = RelaxationPolicy.NON_EMPTY,
) -> RelaxationResult:
    """
    Filter candidates at `initial_threshold`; if the policy is not satisfied and candidates remain
    below the bar, walk `sequence` (strictly decreasing, steps at or above the initial threshold
    are skipped) and stop at the first satisfying step. If every step leaves the set empty, fall
    back to the top `target_count` candidates by similarity with an effective threshold of 0.

    Under FILL_TARGET an exhausted sequence that found some results keeps the last, loosest step.
    """
    results = filter_by_similarity(candidates, initial_threshold)
    effective = initial_threshold
    relaxed = False

    if not _satisfied(len(results), target_count, policy) and len(results) < len(candidates):
        for step in sequence:
            if step >= initial_threshold:
                continue
            relaxed = True
            effective = step
            results = filter_by_similarity(candidates, step)
            if _satisfied(len(results), target_count, policy):
                break

    if not results and candidates:
        ranked = sorted(candidates, key=lambda c: c.similarity, reverse=True)
        return RelaxationResult(ranked[:target_count], 0.0, True, True)

    return RelaxationResult(results, effective, relaxed, False)
