"""
Deduction agent: Blue's strongest agent.

It keeps every turret layout consistent with the public record and locks the
most likely one:

1. Enumerate layouts over live, non-center cells.
2. Keep layouts explaining every kill.
3. Drop layouts already locked without winning.
4. If fewer kills landed this round than the token promised, some turret was
   probably locked, so keep layouts touching the last lock set.
5. Score by how many turrets could have fired each kill; lock the best.

When filtering leaves nothing, filters are relaxed in reverse order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from env.core.types import CENTER, GridPos, LOCK_COUNT, Team
from env.world import Grid, PublicState
from infra.logger import get_logger

from ..base_agent import BlueAgent
from ..registry import register_agent
from .hypotheses import (
    best_hypothesis,
    enumerate_hypotheses,
    explainer_sets,
    filter_by_dead,
    filter_by_locks,
    filter_by_overlap,
    first_non_empty,
)

log = get_logger(__name__)


def anomaly_detected(state: PublicState) -> bool:
    """
    Whether this round produced fewer kills than the last token allowed.

    Only meaningful once a token length is known and Blue has locked before.
    """
    token_len = state.last_used_token_len
    if token_len is None or not state.last_locks:
        return False
    new_kills = state.kills_in_round(state.round)
    return new_kills < max(0, token_len)


@register_agent("blue_deduction")
class DeductionAgent(BlueAgent):
    """Blue agent that locks the maximum-score consistent layout."""

    def __init__(self, team: Team = Team.BLUE, name: str = None):
        super().__init__(team, name)

    def get_actions(self, state: PublicState, **kwargs: Any) -> Tuple[List[GridPos], Dict[str, Any]]:
        grid = Grid(state.grid_size)
        explainers = explainer_sets(grid, state.dead_history)
        lock_sets = [frozenset(grid.keys(event.locks)) for event in state.locks_history]

        everything = enumerate_hypotheses(grid, state.dead_cells)
        by_dead = filter_by_dead(everything, explainers)
        by_locks = filter_by_locks(by_dead, lock_sets)

        anomaly = anomaly_detected(state)
        candidates = by_locks
        if anomaly:
            candidates = filter_by_overlap(by_locks, frozenset(grid.keys(state.last_locks)))

        stage, candidates = first_non_empty([
            ("filtered", candidates),
            ("locks_only", by_locks),
            ("dead_only", by_dead),
            ("no_filters", everything),
        ])

        if candidates:
            locks = [grid.pos(k) for k in best_hypothesis(candidates, explainers)]
        else:
            stage = "fill"
            locks = self._fill(grid, state)

        metadata = {
            "stage": stage,
            "anomaly": anomaly,
            "hypotheses_total": len(everything),
            "after_dead_filter": len(by_dead),
            "after_lock_filter": len(by_locks),
            "candidates": len(candidates),
        }
        log.debug("round %d locks %s (%s, %d candidates)", state.round, locks, stage, len(candidates))
        return locks, metadata

    @staticmethod
    def _fill(grid: Grid, state: PublicState) -> List[GridPos]:
        """Row-major pick used when fewer than three live cells remain."""
        dead = set(state.dead_cells)
        preferred = [c for c in grid.cells() if c not in dead and c != CENTER]
        others = [c for c in grid.cells() if c not in preferred]
        return (preferred + others)[:LOCK_COUNT]
