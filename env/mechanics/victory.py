"""
Victory condition checking for the Hidden Stations game.

This module provides pure logic for determining the outcome of a monitor
phase:
- Lock match (Blue locked exactly the three turret cells)
- Round limit (Red survives the final round)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Dict, Any, Iterable

from ..core.types import Team, GameResult, GridPos, MAX_ROUNDS
from ..core.validation import validate_max_rounds

if TYPE_CHECKING:
    from ..world.world import WorldState


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        result: Game outcome (IN_PROGRESS, BLUE_WINS, RED_WINS)
        reason: Machine-readable explanation of the outcome
        winner: Winning team (None while in progress)
    """
    result: GameResult
    reason: str
    winner: Optional[Team] = None

    @property
    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.result != GameResult.IN_PROGRESS

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.result == GameResult.IN_PROGRESS:
            return "Game in progress"
        return f"{self.result}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize victory result to a plain dict."""
        return {
            "result": self.result.name,
            "reason": self.reason,
            "winner": self.winner.value if self.winner else None,
        }


class VictoryConditions:
    """
    Stateless checker for game victory conditions.

    Usage:
        checker = VictoryConditions(max_rounds=5)
        result = checker.check_monitor(world, locks)

        if result.is_game_over:
            print(f"Game Over: {result.reason}")
    """

    def __init__(self, max_rounds: int = MAX_ROUNDS):
        """
        Initialize victory condition checker.

        Args:
            max_rounds: Round after which an unmatched lock hands Red the win

        Raises:
            ValueError: If max_rounds is outside [1, MAX_ROUNDS]
        """
        self._max_rounds = validate_max_rounds(max_rounds)

    @property
    def max_rounds(self) -> int:
        return self._max_rounds

    def check_monitor(self, world: WorldState, locks: Iterable[GridPos]) -> VictoryResult:
        """
        Check the outcome of a lock attempt in priority order.

        1. Lock match (Blue wins)
        2. Round limit (Red wins)

        Args:
            world: Current world state (round counter and turrets)
            locks: The lock set just submitted

        Returns:
            VictoryResult indicating game outcome
        """
        result = self.check_lock_match(world, locks)
        if result.is_game_over:
            return result

        return self.check_round_limit(world.round)

    def check_lock_match(self, world: WorldState, locks: Iterable[GridPos]) -> VictoryResult:
        """Blue wins when the lock set equals the turret set (order-free)."""
        lock_keys = world.grid.keys(locks)
        if lock_keys == set(world.turret_keys):
            return VictoryResult(
                result=GameResult.BLUE_WINS,
                reason="blue_matched_all_turrets",
                winner=Team.BLUE,
            )
        return VictoryResult(result=GameResult.IN_PROGRESS, reason="locks_did_not_match")

    def check_round_limit(self, round_number: int) -> VictoryResult:
        """Red wins when the final round ends without a match."""
        if round_number >= self._max_rounds:
            return VictoryResult(
                result=GameResult.RED_WINS,
                reason="max_rounds_reached",
                winner=Team.RED,
            )
        return VictoryResult(result=GameResult.IN_PROGRESS, reason="next_round")
