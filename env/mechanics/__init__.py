"""
Mechanics module - Rule resolution systems.

This module provides:
- coverage / is_hit / resolve_hit: Attack pattern geometry
- CombatResolver: Applies turret shots to the world
- VictoryConditions: Checks game ending conditions

All resolvers are stateless - they take WorldState and return results
without modifying their own state.
"""

from .coverage import coverage, sorted_coverage, coverage_keys, is_hit, resolve_hit
from .combat import CombatResolver
from .victory import VictoryConditions, VictoryResult

__all__ = [
    "coverage",
    "sorted_coverage",
    "coverage_keys",
    "is_hit",
    "resolve_hit",
    "CombatResolver",
    "VictoryConditions",
    "VictoryResult",
]
