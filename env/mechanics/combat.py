"""
CombatResolver - Shot resolution.

This module handles:
- Applying the hit rule to a turret shot
- Marking dead cells and appending the dead history
- Producing the detailed attack log entry

Validation happens before the resolver is called; the resolver assumes the
shot is legal and only applies its consequences.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..core.types import AttackMode, GridPos
from ..core.records import AttackRecord, DeadEvent
from .coverage import resolve_hit

if TYPE_CHECKING:
    from ..world.world import WorldState


class CombatResolver:
    """
    Stateless resolver for turret shots.

    All methods are stateless - they mutate the WorldState passed in, never
    the resolver itself.
    """

    def resolve_shot(
        self,
        world: WorldState,
        turret_index: int,
        target: GridPos,
        mode: AttackMode,
    ) -> AttackRecord:
        """
        Fire one turret at one cell.

        The turret is marked used whether or not the shot kills. A kill marks
        the target dead and appends the dead history.

        Returns:
            The attack log entry (also appended to world.attack_log)
        """
        turret = world.turret(turret_index)
        killed, reason = resolve_hit(turret, target, mode, world.turrets)

        world.turrets_used[turret_index] = True
        if killed:
            world.mark_dead(target)
            world.dead_history.append(DeadEvent(round=world.round, target=target, mode=mode))

        record = AttackRecord(
            round=world.round,
            turret_index=turret_index,
            turret=turret,
            mode=mode,
            target=target,
            killed=killed,
            reason=reason,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        world.attack_log.append(record)
        return record
