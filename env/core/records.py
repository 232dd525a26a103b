"""
History records kept by the engine and exposed through snapshots.

All records are frozen so snapshots can share them safely.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .types import AttackMode, GridPos


@dataclass(frozen=True)
class DeadEvent:
    """A successful kill: the target cell died to a shot of `mode` in `round`."""
    round: int
    target: GridPos
    mode: AttackMode

    def to_dict(self) -> Dict[str, Any]:
        return {"round": self.round, "target": list(self.target), "mode": int(self.mode)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeadEvent":
        return cls(
            round=data["round"],
            target=tuple(data["target"]),
            mode=AttackMode(data["mode"]),
        )


@dataclass(frozen=True)
class LockEvent:
    """A lock set submitted by Blue in `round`, in submission order."""
    round: int
    locks: Tuple[GridPos, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"round": self.round, "locks": [list(c) for c in self.locks]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LockEvent":
        return cls(round=data["round"], locks=tuple(tuple(c) for c in data["locks"]))


@dataclass(frozen=True)
class AttackRecord:
    """
    Detailed log entry for one resolved shot (hit or miss).

    Attributes:
        round: Round in which the shot was fired
        turret_index: Index of the firing turret
        turret: Position of the firing turret
        mode: Attack pattern used
        target: Cell that was attacked
        killed: Whether the target died
        reason: Human-readable hit-test rationale
        timestamp: ISO-8601 UTC time of resolution
    """
    round: int
    turret_index: int
    turret: GridPos
    mode: AttackMode
    target: GridPos
    killed: bool
    reason: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "turret_index": self.turret_index,
            "turret": list(self.turret),
            "mode": int(self.mode),
            "target": list(self.target),
            "killed": self.killed,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }
