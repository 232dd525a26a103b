"""
Core types and constants for the Hidden Stations game.
"""

# Instead of from env.core.types import GridPos, you can do: from env.core import GridPos
from .types import (
    GridPos,
    Team,
    AttackMode,
    GameResult,
    ActionValidation,
    GRID_SIZE,
    CENTER,
    MAX_ROUNDS,
    TURRET_COUNT,
    STRATEGY_TOKEN_COUNT,
    LOCK_COUNT,
    DEFAULT_STRATEGY_TOKENS,
    token_modes,
    is_valid_token,
)
from .actions import KillAction
from .records import AttackRecord, DeadEvent, LockEvent
from .results import (
    EngineResult,
    KillResult,
    BatchActionResult,
    KillBatchResult,
    MonitorResult,
)


__all__ = [
    "GridPos",
    "Team",
    "AttackMode",
    "GameResult",
    "ActionValidation",
    "GRID_SIZE",
    "CENTER",
    "MAX_ROUNDS",
    "TURRET_COUNT",
    "STRATEGY_TOKEN_COUNT",
    "LOCK_COUNT",
    "DEFAULT_STRATEGY_TOKENS",
    "token_modes",
    "is_valid_token",
    "KillAction",
    "AttackRecord",
    "DeadEvent",
    "LockEvent",
    "EngineResult",
    "KillResult",
    "BatchActionResult",
    "KillBatchResult",
    "MonitorResult",
]
