"""
Baseline agents for testing and comparison.

Both play by the rules but make no attempt to reason about the opponent.
"""

import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

from env.core.actions import KillAction
from env.core.types import AttackMode, CENTER, GridPos, LOCK_COUNT, Team, token_modes
from env.mechanics.coverage import sorted_coverage
from env.world import Grid, PublicState

from .base_agent import BlueAgent, RedAgent, RedDecision
from .registry import register_agent


@register_agent("red_simple")
class RedSimpleAgent(RedAgent):
    """
    Red agent firing every available turret at a random live cell.

    In token mode it plays the first remaining token and leaves modes unset,
    so the engine hands them out in token order.
    """

    def __init__(
        self,
        team: Team = Team.RED,
        name: str = None,
        seed: Optional[int] = None,
    ):
        super().__init__(team, name)
        self.rng = random.Random(seed)

    def _target(self, grid: Grid, turret: GridPos, mode: AttackMode, dead: set) -> GridPos:
        covered = sorted_coverage(turret, mode, grid)
        pool = [c for c in covered if c not in dead] or covered
        return self.rng.choice(pool)

    def get_actions(
        self,
        state: PublicState,
        turrets: Sequence[GridPos] = (),
        **kwargs: Any,
    ) -> Tuple[RedDecision, Dict[str, Any]]:
        turrets = self.require_turrets(state, turrets)
        grid = Grid(state.grid_size)
        dead = set(state.dead_cells)
        available = state.available_turrets()

        if state.strategy_tokens_remaining:
            token = state.strategy_tokens_remaining[0]
            actions = [
                KillAction(turret_index=i, target=self._target(grid, turrets[i], mode, dead))
                for i, mode in zip(available, token_modes(token))
            ]
            return RedDecision(actions=actions, strategy_token=token), {"strategy_token": token}

        actions: List[KillAction] = []
        for i in available:
            mode = self.rng.choice(list(AttackMode))
            actions.append(KillAction(turret_index=i, target=self._target(grid, turrets[i], mode, dead), mode=mode))
        if state.token_mode:
            # Inventory exhausted: only single shots remain.
            actions = actions[:1]
        return RedDecision(actions=actions), {"strategy_token": None}


@register_agent("blue_simple")
class BlueSimpleAgent(BlueAgent):
    """Blue agent locking the live cells with the most dead neighbours."""

    def get_actions(self, state: PublicState, **kwargs: Any) -> Tuple[List[GridPos], Dict[str, Any]]:
        grid = Grid(state.grid_size)
        dead = set(state.dead_cells)

        scores: Dict[GridPos, float] = {c: 0 for c in grid.cells()}
        for cell in state.dead_cells:
            for neighbour in [cell] + grid.get_neighbors(cell, include_diagonals=True):
                scores[neighbour] += 1
        for cell in dead | {CENTER}:
            scores[cell] = float("-inf")

        ranked = sorted(grid.cells(), key=lambda c: -scores[c])
        locks = [c for c in ranked if c not in dead and c != CENTER][:LOCK_COUNT]
        for cell in grid.cells():
            if len(locks) >= LOCK_COUNT:
                break
            if cell not in locks:
                locks.append(cell)
        return locks, {"scores": {f"{x},{y}": s for (x, y), s in scores.items() if s > 0}}
