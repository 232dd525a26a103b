"""
Grid - Spatial logic for the Hidden Stations board.

The Grid handles:
- Coordinate validation
- Packed integer keys for coordinate sets
- Distance calculations
- Neighbourhood and line queries

Coordinates are (x, y) pairs with 0 <= x, y < size. A cell's packed key is
`x * size + y`, which keeps set membership in hot loops cheap.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List

from ..core.types import GridPos, GRID_SIZE


class Grid:
    """
    A square grid of `size` x `size` cells.

    Provides spatial queries and calculations without game logic or state.

    Attributes:
        size: Number of cells along each axis
    """

    def __init__(self, size: int = GRID_SIZE):
        """
        Initialize a grid.

        Args:
            size: Grid size (must be positive)

        Raises:
            ValueError: If size is invalid
        """
        if size <= 0:
            raise ValueError(f"Grid size must be positive: {size}")

        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, pos: GridPos) -> bool:
        """
        Check if a position is within grid boundaries.

        Args:
            pos: Position to check (x, y)

        Returns:
            True if position is valid, False otherwise
        """
        x, y = pos
        return 0 <= x < self.size and 0 <= y < self.size

    # ------------------------------------------------------------------
    # Packed keys
    # ------------------------------------------------------------------
    def key(self, pos: GridPos) -> int:
        """Packed integer key of a cell."""
        return pos[0] * self.size + pos[1]

    def pos(self, key: int) -> GridPos:
        """Inverse of key()."""
        return divmod(key, self.size)

    def keys(self, positions: Iterable[GridPos]) -> set[int]:
        """Packed key set for a collection of positions."""
        return {self.key(p) for p in positions}

    def positions(self, keys: Iterable[int]) -> List[GridPos]:
        """Positions for a collection of keys, sorted row-major."""
        return [self.pos(k) for k in sorted(keys)]

    def cells(self) -> Iterator[GridPos]:
        """Iterate every cell in row-major (x, then y) order."""
        for x in range(self.size):
            for y in range(self.size):
                yield (x, y)

    # ------------------------------------------------------------------
    # Neighbourhoods
    # ------------------------------------------------------------------
    def get_neighbors(self, pos: GridPos, include_diagonals: bool = False) -> list[GridPos]:
        """
        Get neighboring positions (4 or 8 directions).

        Args:
            pos: Center position
            include_diagonals: If True, include diagonal neighbors (8 total)
                               If False, only cardinal directions (4 total)

        Returns:
            List of valid neighboring positions
        """
        x, y = pos

        # Cardinal directions
        candidates = [
            (x, y + 1),
            (x, y - 1),
            (x - 1, y),
            (x + 1, y),
        ]

        if include_diagonals:
            candidates.extend([
                (x - 1, y + 1),
                (x + 1, y + 1),
                (x - 1, y - 1),
                (x + 1, y - 1),
            ])

        # Filter to only valid positions
        neighbors = [pos for pos in candidates if self.in_bounds(pos)]
        return neighbors

    def row_and_column(self, pos: GridPos) -> list[GridPos]:
        """
        Get every other cell sharing the position's row or column.

        Args:
            pos: Center position

        Returns:
            List of 2 * size - 2 positions (the center itself excluded)
        """
        x, y = pos
        line = [(x, yy) for yy in range(self.size) if yy != y]
        line.extend((xx, y) for xx in range(self.size) if xx != x)
        return line

    def __str__(self) -> str:
        """String representation."""
        return f"Grid({self.size}x{self.size})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(size={self.size})"
