"""
Hidden Stations game engine.

Usage:
    from env import HiddenStationsEnv, PublicState
"""

from .environment import HiddenStationsEnv
from .scenario import Scenario, create_default_scenario
from .world import Grid, PublicState, WorldState

__all__ = [
    "HiddenStationsEnv",
    "Scenario",
    "create_default_scenario",
    "Grid",
    "PublicState",
    "WorldState",
]
