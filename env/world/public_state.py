"""
PublicState - Immutable snapshot of everything both sides may see.

This is the only channel through which agents and drivers observe the game.
It never contains turret positions.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from ..core.types import GridPos, Team
from ..core.records import DeadEvent, LockEvent

if TYPE_CHECKING:
    from .world import WorldState


@dataclass(frozen=True)
class PublicState:
    """
    Read-only game snapshot.

    Attributes:
        grid_size: Board size
        round: Current round (1-based)
        last_locks: Blue's latest lock set (empty before the first monitor)
        dead_cells: Dead cells, row-major, center included
        game_over: Whether the game has ended
        winner: Winning team, if any
        strategy_tokens_remaining: Token inventory, None when token mode is off
        current_round_token: Initial token for this round if still unused
        turrets_locked: Per-turret lock flags (all False once the game is over)
        turrets_used_this_round: Per-turret fired-this-round flags
        dead_history: Successful kills in order
        locks_history: Submitted lock sets in order
        last_used_token_len: Length of the token (or shot count) used last
        kill_phase_closed: Whether this round's kill phase has closed
    """
    grid_size: int
    round: int
    last_locks: Tuple[GridPos, ...]
    dead_cells: Tuple[GridPos, ...]
    game_over: bool
    winner: Optional[Team]
    strategy_tokens_remaining: Optional[Tuple[str, ...]]
    current_round_token: Optional[str]
    turrets_locked: Tuple[bool, ...]
    turrets_used_this_round: Tuple[bool, ...]
    dead_history: Tuple[DeadEvent, ...]
    locks_history: Tuple[LockEvent, ...]
    last_used_token_len: Optional[int]
    kill_phase_closed: bool = False

    @classmethod
    def build(cls, world: WorldState) -> PublicState:
        """Take a snapshot of a world."""
        if world.game_over:
            turrets_locked = tuple(False for _ in world.turrets_used)
        else:
            turrets_locked = tuple(world.turrets_locked())

        remaining = world.strategy_tokens_remaining
        return cls(
            grid_size=world.grid.size,
            round=world.round,
            last_locks=tuple(world.last_locks),
            dead_cells=tuple(world.dead_cells),
            game_over=world.game_over,
            winner=world.winner,
            strategy_tokens_remaining=tuple(remaining) if remaining is not None else None,
            current_round_token=world.current_round_token(),
            turrets_locked=turrets_locked,
            turrets_used_this_round=tuple(world.turrets_used),
            dead_history=tuple(world.dead_history),
            locks_history=tuple(world.locks_history),
            last_used_token_len=world.last_used_token_len,
            kill_phase_closed=world.kill_phase_closed,
        )

    # ------------------------------------------------------------------
    # Convenience queries
    # ------------------------------------------------------------------
    @property
    def token_mode(self) -> bool:
        return self.strategy_tokens_remaining is not None

    def kills_in_round(self, round_number: int) -> int:
        """Number of successful kills recorded in a round."""
        return sum(1 for event in self.dead_history if event.round == round_number)

    def available_turrets(self) -> list[int]:
        """Indices of turrets that are neither locked nor already used this round."""
        return [
            i
            for i, (locked, used) in enumerate(zip(self.turrets_locked, self.turrets_used_this_round))
            if not locked and not used
        ]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "grid_size": self.grid_size,
            "round": self.round,
            "last_locks": [list(c) for c in self.last_locks],
            "dead_cells": [list(c) for c in self.dead_cells],
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
            "strategy_tokens_remaining": (
                list(self.strategy_tokens_remaining)
                if self.strategy_tokens_remaining is not None else None
            ),
            "current_round_token": self.current_round_token,
            "turrets_locked": list(self.turrets_locked),
            "turrets_used_this_round": list(self.turrets_used_this_round),
            "dead_history": [e.to_dict() for e in self.dead_history],
            "locks_history": [e.to_dict() for e in self.locks_history],
            "last_used_token_len": self.last_used_token_len,
            "kill_phase_closed": self.kill_phase_closed,
        }
