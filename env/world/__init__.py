"""
World state management for the Hidden Stations game.

This module provides:
- Grid: Spatial logic and geometry
- WorldState: Central game state holder
- PublicState: Immutable snapshot shared with agents
"""

from .grid import Grid
from .world import WorldState
from .public_state import PublicState

__all__ = [
    "Grid",
    "WorldState",
    "PublicState",
]
