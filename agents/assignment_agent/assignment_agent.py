"""
Assignment planner: Red's strongest agent.

Each round it picks a strategy token, shuffles the token's modes and assigns
them to available turrets so that as many turrets as possible fire at a legal
target. Without tokens it fires a single turret.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

from env.core.actions import KillAction
from env.core.types import AttackMode, GridPos, Team, token_modes
from env.mechanics.coverage import sorted_coverage
from env.world import Grid, PublicState
from infra.logger import get_logger

from ..base_agent import RedAgent, RedDecision
from ..registry import register_agent
from .matching import max_assignment

log = get_logger(__name__)


@register_agent("red_assignment")
class AssignmentAgent(RedAgent):
    """
    Red agent that maximises the number of shots per token.

    Legal targets of a turret in a mode are its coverage minus dead cells and
    minus turret cells. Cells Blue locked stay legal.
    """

    def __init__(
        self,
        team: Team = Team.RED,
        name: str = None,
        randomize_tokens: bool = False,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            team: Must be Team.RED
            name: Display name
            randomize_tokens: Pick a random remaining token instead of the first
            seed: Seed for the agent's random source
            rng: Random source (overrides seed)
        """
        super().__init__(team, name)
        self.randomize_tokens = randomize_tokens
        self.seed = seed
        self.rng = rng or random.Random(seed)

    def reset(self) -> None:
        if self.seed is not None:
            self.rng = random.Random(self.seed)

    def choose_strategy_token(self, state: PublicState) -> Optional[str]:
        """Pick the token to play, or None when there is none."""
        tokens = state.strategy_tokens_remaining
        if not tokens:
            return None
        if self.randomize_tokens:
            return self.rng.choice(tokens)
        return tokens[0]

    def get_actions(
        self,
        state: PublicState,
        turrets: Sequence[GridPos] = (),
        **kwargs: Any,
    ) -> Tuple[RedDecision, Dict[str, Any]]:
        turrets = self.require_turrets(state, turrets)
        grid = Grid(state.grid_size)
        forbidden = set(state.dead_cells) | set(turrets)
        available = state.available_turrets()

        def legal_targets(turret_index: int, mode: AttackMode) -> List[GridPos]:
            return [
                c for c in sorted_coverage(turrets[turret_index], mode, grid)
                if c not in forbidden
            ]

        token = self.choose_strategy_token(state)
        if token is not None:
            return self._plan_token(token, available, legal_targets)
        return self._plan_single(available, turrets, grid, legal_targets)

    # ------------------------------------------------------------------
    # Token play
    # ------------------------------------------------------------------
    def _plan_token(self, token, available, legal_targets) -> Tuple[RedDecision, Dict[str, Any]]:
        modes = token_modes(token)
        self.rng.shuffle(modes)

        legal: Dict[Tuple[int, int], List[GridPos]] = {}
        edges: Dict[int, List[int]] = {}
        for position, mode in enumerate(modes):
            for turret_index in available:
                targets = legal_targets(turret_index, mode)
                if targets:
                    legal[(position, turret_index)] = targets
                    edges.setdefault(position, []).append(turret_index)

        assignment = max_assignment(len(modes), edges, self.rng)

        actions: List[KillAction] = []
        for position, turret_index in assignment:
            target = self.rng.choice(legal[(position, turret_index)])
            actions.append(KillAction(turret_index=turret_index, target=target, mode=modes[position]))

        log.debug("token %s -> %d action(s) over %d available turret(s)", token, len(actions), len(available))
        metadata = {
            "strategy_token": token,
            "modes": [int(m) for m in modes],
            "available_turrets": list(available),
            "assignment": [list(pair) for pair in assignment],
            "fallback": None,
        }
        return RedDecision(actions=actions, strategy_token=token), metadata

    # ------------------------------------------------------------------
    # Single shot (token mode off or inventory empty)
    # ------------------------------------------------------------------
    def _plan_single(self, available, turrets, grid, legal_targets) -> Tuple[RedDecision, Dict[str, Any]]:
        viable = []
        for mode in AttackMode:
            for turret_index in available:
                targets = legal_targets(turret_index, mode)
                if targets:
                    viable.append((turret_index, mode, targets))

        fallback = "viable_pair"
        action: Optional[KillAction] = None
        if viable:
            turret_index, mode, targets = self.rng.choice(viable)
            action = KillAction(turret_index=turret_index, target=self.rng.choice(targets), mode=mode)
        else:
            fallback = "any_covered_cell"
            turret_cells = set(turrets)
            for turret_index in available:
                for mode in AttackMode:
                    cells = [c for c in sorted_coverage(turrets[turret_index], mode, grid) if c not in turret_cells]
                    if cells:
                        action = KillAction(turret_index=turret_index, target=self.rng.choice(cells), mode=mode)
                        break
                if action is not None:
                    break

        if action is None:
            fallback = "default"
            action = KillAction(turret_index=0, target=(0, 0), mode=AttackMode.CROSS)

        log.debug("single shot (%s): %s", fallback, action)
        metadata = {
            "strategy_token": None,
            "available_turrets": list(available),
            "fallback": fallback,
        }
        return RedDecision(actions=[action], strategy_token=None), metadata
