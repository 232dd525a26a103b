"""
Multi-game helpers: play seeded AI-vs-AI games and summarise outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from env.core.types import Team
from env.scenario import Scenario, create_default_scenario
from infra.logger import get_logger

from .runner import GameRunner

log = get_logger(__name__)


@dataclass
class GameSummary:
    """Outcome of one finished game."""
    seed: Optional[int]
    winner: Optional[Team]
    rounds: int
    kills: int
    reason: str


def run_single_game(scenario: Scenario, verbose: bool = False) -> GameSummary:
    """Play one game to the end."""
    runner = GameRunner(scenario)
    frames = runner.run_episode()
    if verbose:
        for frame in frames:
            print(f"round {frame.round}: events={frame.events}")

    state = runner.state
    return GameSummary(
        seed=scenario.seed,
        winner=state.winner,
        rounds=state.round,
        kills=len(state.dead_history),
        reason=runner.env.world.game_over_reason,
    )


def run_multiple_games(
    num_games: int,
    base_seed: int = 0,
    scenario_factory: Callable[[int], Scenario] | None = None,
) -> List[GameSummary]:
    """
    Play `num_games` games with seeds base_seed, base_seed + 1, ...

    Args:
        num_games: Number of games
        base_seed: First seed
        scenario_factory: seed -> Scenario (default AI-vs-AI setup when None)
    """
    factory = scenario_factory or (lambda seed: create_default_scenario(seed=seed))
    results = []
    for i in range(num_games):
        results.append(run_single_game(factory(base_seed + i)))
    log.info(
        "Played %d game(s): blue=%d red=%d",
        len(results),
        sum(1 for r in results if r.winner == Team.BLUE),
        sum(1 for r in results if r.winner == Team.RED),
    )
    return results
