"""
Shared validation helpers.

Construction-time checks raise ValueError with a machine-readable message and
reject the game setup. Operation-time checks return an ActionValidation so the
engine can hand the caller a structured failure without mutating state.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence

from .types import (
    ActionValidation,
    CENTER,
    GridPos,
    LOCK_COUNT,
    MAX_ROUNDS,
    STRATEGY_TOKEN_COUNT,
    TURRET_COUNT,
    is_valid_token,
)

if TYPE_CHECKING:
    from ..world.grid import Grid


# ============================================================================
# CONSTRUCTION-TIME
# ============================================================================

def validate_turrets(grid: Grid, turrets: Sequence[Sequence[int]]) -> List[GridPos]:
    """
    Validate a turret layout.

    Returns:
        Normalised list of (x, y) tuples

    Raises:
        ValueError: On wrong count, out-of-bounds cell, center cell or duplicates
    """
    if len(turrets) != TURRET_COUNT:
        raise ValueError("turrets_must_be_length_3")

    normalised: List[GridPos] = []
    seen: set[int] = set()
    for raw in turrets:
        try:
            if len(raw) != 2:
                raise ValueError(raw)
            pos = (int(raw[0]), int(raw[1]))
        except (TypeError, ValueError) as exc:
            raise ValueError("coordinate_out_of_bounds") from exc
        if not grid.in_bounds(pos):
            raise ValueError("coordinate_out_of_bounds")
        if pos == CENTER:
            raise ValueError("turret_cannot_be_at_center")
        key = grid.key(pos)
        if key in seen:
            raise ValueError("turret_coordinates_must_be_unique")
        seen.add(key)
        normalised.append(pos)
    return normalised


def validate_max_rounds(max_rounds: int) -> int:
    """Reject a round limit outside [1, MAX_ROUNDS]; the token deck only covers that many rounds."""
    if isinstance(max_rounds, bool) or not isinstance(max_rounds, int):
        raise ValueError("max_rounds_out_of_range")
    if not 1 <= max_rounds <= MAX_ROUNDS:
        raise ValueError("max_rounds_out_of_range")
    return max_rounds


def validate_strategy_tokens(tokens: Iterable[str]) -> List[str]:
    """
    Validate the initial strategy token list.

    Raises:
        ValueError: On wrong count or a token that is empty or not binary
    """
    tokens = list(tokens)
    if len(tokens) != STRATEGY_TOKEN_COUNT:
        raise ValueError("strategy_tokens_must_be_length_5")
    for token in tokens:
        if not is_valid_token(token):
            raise ValueError("invalid_strategy_token_item")
    return tokens


# ============================================================================
# OPERATION-TIME
# ============================================================================

def check_coordinate(grid: Grid, pos: object) -> ActionValidation:
    """Check that `pos` is an in-bounds (x, y) integer pair."""
    if (
        not isinstance(pos, (tuple, list))
        or len(pos) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in pos)
        or not grid.in_bounds((pos[0], pos[1]))
    ):
        return ActionValidation.fail("coordinate_out_of_bounds", f"{pos!r} is not on the grid")
    return ActionValidation.success()


def check_turret_index(turret_index: object) -> ActionValidation:
    """Check that a turret index addresses one of the three turrets."""
    if (
        isinstance(turret_index, bool)
        or not isinstance(turret_index, int)
        or not 0 <= turret_index < TURRET_COUNT
    ):
        return ActionValidation.fail(
            "turret_index_out_of_range", f"turret index {turret_index!r} is not in [0, {TURRET_COUNT})"
        )
    return ActionValidation.success()


def check_token(remaining: Sequence[str], token: object) -> ActionValidation:
    """Check that a token is held in the remaining inventory and well formed."""
    if token not in remaining:
        return ActionValidation.fail("strategy_token_not_available", f"token {token!r} is not available")
    if not is_valid_token(token):
        return ActionValidation.fail("invalid_strategy_token", f"token {token!r} is not a binary string")
    return ActionValidation.success()


def check_locks(grid: Grid, locks: object) -> ActionValidation:
    """Check a Blue lock set: exactly three distinct in-bounds cells."""
    if not isinstance(locks, (list, tuple)) or len(locks) != LOCK_COUNT:
        return ActionValidation.fail("locks_must_be_3", "exactly 3 lock coordinates are required")
    for pos in locks:
        result = check_coordinate(grid, pos)
        if not result.valid:
            return result
    if len({(p[0], p[1]) for p in locks}) != LOCK_COUNT:
        return ActionValidation.fail("locks_must_be_3", "lock coordinates must be distinct")
    return ActionValidation.success()
