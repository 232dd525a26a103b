"""
Hypothesis space over turret layouts.

A hypothesis is a triple of packed cell keys in row-major order. Each kill in
the dead history is reduced to its explainer set: the cells from which a
turret could have produced that kill. Because coverage is symmetric, the
explainers of (target, mode) are exactly `coverage_keys(target, mode)`, and
the target cell itself is never among them.
"""

from __future__ import annotations

from itertools import combinations
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from env.core.records import DeadEvent
from env.core.types import CENTER, GridPos, TURRET_COUNT
from env.mechanics.coverage import coverage_keys
from env.world import Grid

Hypothesis = Tuple[int, ...]


def enumerate_hypotheses(grid: Grid, dead_cells: Iterable[GridPos]) -> List[Hypothesis]:
    """All 3-combinations of live, non-center cells, in row-major order."""
    excluded = grid.keys(dead_cells) | {grid.key(CENTER)}
    live = [grid.key(c) for c in grid.cells() if grid.key(c) not in excluded]
    return list(combinations(live, TURRET_COUNT))


def explainer_sets(grid: Grid, dead_history: Sequence[DeadEvent]) -> List[FrozenSet[int]]:
    """Explainer set of each kill event."""
    return [coverage_keys(grid, event.target, event.mode) for event in dead_history]


def explains_all(hypothesis: Hypothesis, explainers: Sequence[FrozenSet[int]]) -> bool:
    return all(any(cell in cells for cell in hypothesis) for cells in explainers)


def filter_by_dead(hypotheses: Sequence[Hypothesis], explainers: Sequence[FrozenSet[int]]) -> List[Hypothesis]:
    """Keep hypotheses that explain every recorded kill."""
    return [h for h in hypotheses if explains_all(h, explainers)]


def filter_by_locks(hypotheses: Sequence[Hypothesis], lock_sets: Sequence[FrozenSet[int]]) -> List[Hypothesis]:
    """Drop hypotheses already tried (and refuted) as a lock set."""
    tried = set(lock_sets)
    return [h for h in hypotheses if frozenset(h) not in tried]


def filter_by_overlap(hypotheses: Sequence[Hypothesis], cells: FrozenSet[int]) -> List[Hypothesis]:
    """Keep hypotheses sharing at least one cell with `cells`."""
    return [h for h in hypotheses if any(c in cells for c in h)]


def score(hypothesis: Hypothesis, explainers: Sequence[FrozenSet[int]]) -> int:
    """Number of (kill, hypothesised turret) pairs where the turret could have fired the kill."""
    return sum(1 for cells in explainers for cell in hypothesis if cell in cells)


def best_hypothesis(hypotheses: Sequence[Hypothesis], explainers: Sequence[FrozenSet[int]]) -> Hypothesis:
    """Highest-scoring hypothesis; the earliest one wins ties."""
    return max(hypotheses, key=lambda h: score(h, explainers))


def first_non_empty(
    stages: Sequence[Tuple[str, Sequence[Hypothesis]]],
) -> Tuple[Optional[str], Sequence[Hypothesis]]:
    """Pick the first (label, pool) whose pool is non-empty."""
    for label, pool in stages:
        if pool:
            return label, pool
    return None, []
