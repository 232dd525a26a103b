"""
Core type definitions for the Hidden Stations game.

This module contains all fundamental types, enums, and constants used
throughout the system. No logic, just pure data structures.
"""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import Tuple
from dataclasses import dataclass

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (x, y), both in [0, GRID_SIZE)
GridPos = Tuple[int, int]

GRID_SIZE = 5
CENTER: GridPos = (2, 2)  # permanent neutral zone, dead from the start


# ============================================================================
# RULE CONSTANTS
# ============================================================================

MAX_ROUNDS = 5
TURRET_COUNT = 3
STRATEGY_TOKEN_COUNT = 5
LOCK_COUNT = 3

# Token deck used by the default match setup
DEFAULT_STRATEGY_TOKENS: Tuple[str, ...] = ("110", "10", "11", "10", "00")


class Team(Enum):
    """Side of the table."""
    BLUE = "blue"
    RED = "red"

    def __str__(self) -> str:
        return self.value

    @property
    def opponent(self) -> Team:
        """Get the opposing team."""
        return Team.RED if self == Team.BLUE else Team.BLUE


# ============================================================================
# ATTACKS
# ============================================================================

class AttackMode(IntEnum):
    """
    Attack pattern fired by a turret.

    The integer value is the token character that selects it
    ('0' = CROSS, '1' = ROUND).
    """
    CROSS = 0  # Full row and column of the turret
    ROUND = 1  # 8-connected ring around the turret

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def token_char(self) -> str:
        """Character representing this mode inside a strategy token."""
        return str(self.value)

    @classmethod
    def from_token_char(cls, char: str) -> AttackMode:
        """Parse one strategy token character."""
        if char not in ("0", "1"):
            raise ValueError(f"Invalid strategy token character: {char!r}")
        return cls(int(char))

    @classmethod
    def parse(cls, raw: object) -> AttackMode | None:
        """
        Best-effort conversion of an external mode value.

        Accepts AttackMode, 0/1, "0"/"1" and "cross"/"round".
        Returns None when the value is not a valid mode.
        """
        if isinstance(raw, AttackMode):
            return raw
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return cls(raw) if raw in (0, 1) else None
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text in ("0", "1"):
                return cls(int(text))
            if text in ("cross", "round"):
                return cls[text.upper()]
        return None


def token_modes(token: str) -> list[AttackMode]:
    """Expand a strategy token into its ordered attack modes."""
    return [AttackMode.from_token_char(ch) for ch in token]


def is_valid_token(token: object) -> bool:
    """A strategy token is a non-empty string over the alphabet {'0', '1'}."""
    return isinstance(token, str) and len(token) > 0 and all(ch in "01" for ch in token)


# ============================================================================
# GAME RESULT
# ============================================================================

class GameResult(Enum):
    """Possible game outcomes."""
    IN_PROGRESS = "in_progress"
    BLUE_WINS = "blue_wins"
    RED_WINS = "red_wins"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


# ============================================================================
# ACTION VALIDATION
# ============================================================================

@dataclass
class ActionValidation:
    """
    Structured result of validating an engine request.

    Attributes:
        valid: Whether the request passed validation
        error_code: Machine-readable error code (None if valid)
        message: Human-readable message explaining the result

    Error codes:
        - "game_over": The game has already ended
        - "coordinate_out_of_bounds": A coordinate lies outside the grid
        - "turret_index_out_of_range": Turret index is not 0, 1 or 2
        - "turret_already_used_this_round": The turret has already fired this round
        - "turret_locked": The turret sits on a cell Blue locked last round
        - "kill_already_done_this_round": The kill phase is closed
        - "strategy_token_required": Token mode needs a token for batches
        - "strategy_token_not_available": Token is not in the remaining inventory
        - "invalid_strategy_token": Token is empty or not binary
        - "strategy_tokens_disabled": Token mode is not active
        - "invalid_mode": Attack mode is missing or not 0/1
        - "mode_exceeds_token_quota": Token has no copy of the requested mode left
        - "no_mode_left_in_token": Token modes are exhausted
        - "empty_actions": Batch contains no actions
        - "must_kill_before_monitor": Monitor requested before the kill phase closed
        - "locks_must_be_3": Lock set is not three distinct cells
    """
    valid: bool
    error_code: str | None = None
    message: str = ""

    @staticmethod
    def success(message: str = "") -> ActionValidation:
        """Create a validation success result."""
        return ActionValidation(valid=True, error_code=None, message=message)

    @staticmethod
    def fail(error_code: str, message: str) -> ActionValidation:
        """Create a validation failure result."""
        return ActionValidation(valid=False, error_code=error_code, message=message)
