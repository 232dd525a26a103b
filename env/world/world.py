"""
WorldState - Central game state holder.

The WorldState is the heart of the simulation. It:
- Owns the hidden turret layout
- Tracks dead cells, the token inventory and the round counter
- Keeps the dead, lock and attack histories
- Tracks game over / winner

It does NOT enforce rules. Validation and phase transitions live in
HiddenStationsEnv; shot resolution lives in CombatResolver.
"""

from __future__ import annotations

import json
import random
from typing import Any, Dict, List, Optional, Sequence

from .grid import Grid
from ..core.types import CENTER, GridPos, Team, TURRET_COUNT
from ..core.records import AttackRecord, DeadEvent, LockEvent


class WorldState:
    """
    The central game state.

    WorldState manages:
    - The spatial grid
    - Turret positions (hidden from Blue)
    - Dead cells (packed keys), always including the center
    - Strategy token inventory (None when token mode is off)
    - Round counter, kill-phase flag and per-turret used flags
    - History logs
    """

    def __init__(
            self,
            turrets: Sequence[GridPos],
            strategy_tokens: Optional[Sequence[str]] = None,
            grid: Optional[Grid] = None,
            rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new world. Inputs are assumed to be validated.

        Args:
            turrets: Three turret positions
            strategy_tokens: Initial token list, or None to disable token mode
            grid: Board geometry (default 5x5)
            rng: Random source owned by this game
        """
        self.grid = grid or Grid()
        self.rng = rng or random.Random()

        self._turrets: List[GridPos] = [tuple(t) for t in turrets]
        self._turret_keys = frozenset(self.grid.key(t) for t in self._turrets)

        self._dead: set[int] = {self.grid.key(CENTER)}

        self.strategy_tokens_initial: Optional[List[str]] = (
            list(strategy_tokens) if strategy_tokens is not None else None
        )
        self.strategy_tokens_remaining: Optional[List[str]] = (
            list(strategy_tokens) if strategy_tokens is not None else None
        )

        # Round state
        self.round: int = 1
        self.kill_phase_closed: bool = False
        self.turrets_used: List[bool] = [False] * TURRET_COUNT
        self.last_used_token_len: Optional[int] = None

        # Blue's latest lock set, in submission order
        self.last_locks: List[GridPos] = []

        # Histories
        self.dead_history: List[DeadEvent] = []
        self.locks_history: List[LockEvent] = []
        self.attack_log: List[AttackRecord] = []

        # Outcome
        self.game_over: bool = False
        self.winner: Optional[Team] = None
        self.game_over_reason: str = ""

    # ========================================================================
    # TURRETS
    # ========================================================================

    @property
    def turrets(self) -> List[GridPos]:
        """Copy of the true turret positions (never hand this to Blue)."""
        return list(self._turrets)

    def turret(self, index: int) -> GridPos:
        return self._turrets[index]

    @property
    def turret_keys(self) -> frozenset[int]:
        return self._turret_keys

    def is_turret_locked(self, index: int) -> bool:
        """A turret is locked when its cell is in Blue's latest lock set."""
        return self._turrets[index] in self.last_locks

    def turrets_locked(self) -> List[bool]:
        return [self.is_turret_locked(i) for i in range(len(self._turrets))]

    # ========================================================================
    # DEAD CELLS
    # ========================================================================

    def is_dead(self, pos: GridPos) -> bool:
        return self.grid.key(pos) in self._dead

    def mark_dead(self, pos: GridPos) -> None:
        self._dead.add(self.grid.key(pos))

    @property
    def dead_cells(self) -> List[GridPos]:
        """Dead cells sorted row-major."""
        return self.grid.positions(self._dead)

    # ========================================================================
    # TOKENS
    # ========================================================================

    @property
    def token_mode(self) -> bool:
        """Token mode is on when the game was created with a token list."""
        return self.strategy_tokens_remaining is not None

    def remove_token(self, token: str) -> bool:
        """Remove one instance of `token` from the inventory."""
        if self.strategy_tokens_remaining is None or token not in self.strategy_tokens_remaining:
            return False
        self.strategy_tokens_remaining.remove(token)
        return True

    def current_round_token(self) -> Optional[str]:
        """
        Token nominally assigned to this round.

        This is the initial token at index round - 1, provided an instance of
        it is still unused.
        """
        initial = self.strategy_tokens_initial
        remaining = self.strategy_tokens_remaining
        if not initial or remaining is None or not 1 <= self.round <= len(initial):
            return None
        token = initial[self.round - 1]
        return token if token in remaining else None

    # ========================================================================
    # ROUND FLOW
    # ========================================================================

    def advance_round(self) -> None:
        """Move to the next round and reopen the kill phase."""
        self.round += 1
        self.kill_phase_closed = False
        self.turrets_used = [False] * len(self._turrets)

    def set_game_over(self, winner: Team, reason: str) -> None:
        self.game_over = True
        self.winner = winner
        self.game_over_reason = reason

    # ========================================================================
    # UTILITY
    # ========================================================================
    def to_dict(self, include_turrets: bool = False) -> Dict[str, Any]:
        """
        Serialize world state to dictionary.

        Args:
            include_turrets: Also include the hidden turret layout

        Returns:
            JSON-serializable dictionary
        """
        data: Dict[str, Any] = {
            "grid_size": self.grid.size,
            "round": self.round,
            "kill_phase_closed": self.kill_phase_closed,
            "turrets_used": list(self.turrets_used),
            "dead_cells": [list(c) for c in self.dead_cells],
            "last_locks": [list(c) for c in self.last_locks],
            "strategy_tokens_initial": self.strategy_tokens_initial,
            "strategy_tokens_remaining": self.strategy_tokens_remaining,
            "last_used_token_len": self.last_used_token_len,
            "dead_history": [e.to_dict() for e in self.dead_history],
            "locks_history": [e.to_dict() for e in self.locks_history],
            "attack_log": [r.to_dict() for r in self.attack_log],
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
            "game_over_reason": self.game_over_reason,
        }
        if include_turrets:
            data["turrets"] = [list(t) for t in self._turrets]
        return data

    def to_json(self, include_turrets: bool = False, indent: int = 2) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(include_turrets=include_turrets), indent=indent, ensure_ascii=True)

    def __str__(self) -> str:
        """String representation."""
        return f"WorldState(round={self.round}, dead={len(self._dead)}, grid={self.grid})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return (f"WorldState(grid={self.grid}, round={self.round}, "
                f"kill_phase_closed={self.kill_phase_closed}, game_over={self.game_over})")
