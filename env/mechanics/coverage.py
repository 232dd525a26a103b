"""
Coverage geometry - which cells an attack pattern reaches.

Pure functions shared by the engine and both agents:
- coverage(): cells a turret's pattern reaches
- is_hit(): the geometric hit test (inverse of coverage)
- resolve_hit(): hit test plus the no-self-harm / no-friendly-fire override

The hit relation is symmetric: `target in coverage(turret, mode)` exactly when
`turret in coverage(target, mode)`. The deduction agent relies on this to find
every cell that could have produced a kill.
"""

from __future__ import annotations
from functools import lru_cache
from typing import FrozenSet, Iterable, Set, Tuple

from ..core.types import AttackMode, GridPos, GRID_SIZE
from ..world.grid import Grid


def coverage(turret: GridPos, mode: AttackMode, grid: Grid | None = None) -> Set[GridPos]:
    """
    Cells reached by `turret` firing in `mode`.

    Args:
        turret: Firing position
        mode: CROSS (row + column) or ROUND (8-neighbourhood)
        grid: Board geometry (defaults to the standard 5x5 grid)

    Returns:
        Set of target cells; never contains the turret cell
    """
    grid = grid or Grid(GRID_SIZE)
    if AttackMode(mode) == AttackMode.CROSS:
        return set(grid.row_and_column(turret))
    return set(grid.get_neighbors(turret, include_diagonals=True))


def sorted_coverage(turret: GridPos, mode: AttackMode, grid: Grid | None = None) -> list[GridPos]:
    """coverage() as a list sorted by (x, y)."""
    return sorted(coverage(turret, mode, grid))


@lru_cache(maxsize=None)
def _coverage_keys(size: int, key: int, mode: int) -> FrozenSet[int]:
    grid = Grid(size)
    return frozenset(grid.key(p) for p in coverage(grid.pos(key), AttackMode(mode), grid))


def coverage_keys(grid: Grid, pos: GridPos, mode: AttackMode) -> FrozenSet[int]:
    """Packed-key coverage of a cell; cached per (grid size, cell, mode)."""
    return _coverage_keys(grid.size, grid.key(pos), int(mode))


def is_hit(turret: GridPos, target: GridPos, mode: AttackMode) -> bool:
    """
    Geometric hit test.

    CROSS hits when the target shares the turret's row or column; ROUND hits
    when the Chebyshev distance is exactly 1. No friendly-fire rule applied.
    """
    if AttackMode(mode) == AttackMode.CROSS:
        return turret[0] == target[0] or turret[1] == target[1]
    return max(abs(turret[0] - target[0]), abs(turret[1] - target[1])) == 1


def resolve_hit(
    turret: GridPos,
    target: GridPos,
    mode: AttackMode,
    turrets: Iterable[GridPos],
) -> Tuple[bool, str]:
    """
    Resolve a shot and explain the verdict.

    A geometric hit on the firing turret's own cell or on any turret cell is
    turned into a miss.

    Returns:
        (killed, rationale)
    """
    mode = AttackMode(mode)
    killed = is_hit(turret, target, mode)

    if mode == AttackMode.CROSS:
        same_row = turret[0] == target[0]
        same_col = turret[1] == target[1]
        reason = (
            f"cross: turret {turret} target {target} "
            f"same_row={same_row} same_col={same_col}"
        )
    else:
        dx = abs(turret[0] - target[0])
        dy = abs(turret[1] - target[1])
        reason = (
            f"round: turret {turret} target {target} "
            f"dx={dx} dy={dy} adjacent={max(dx, dy) == 1}"
        )

    if killed and tuple(target) == tuple(turret):
        killed = False
        reason += " -> own cell, hit cancelled"
    if killed and any(tuple(t) == tuple(target) for t in turrets):
        killed = False
        reason += " -> friendly turret cell, hit cancelled"

    return killed, reason
