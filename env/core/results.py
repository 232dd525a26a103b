"""
Structured results returned by the engine's mutation API.

Expected rule violations never raise; they come back as a result with
`ok=False` and a machine-readable `reason` (see ActionValidation for codes).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .records import AttackRecord
from .types import AttackMode, GridPos, Team


@dataclass
class EngineResult:
    """Plain success/failure for operations without a payload."""
    ok: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "reason": self.reason}


@dataclass
class KillResult:
    """
    Result of a single `kill` call.

    Attributes:
        ok: Whether the shot was accepted
        killed: Whether the target died (False when rejected)
        reason: "killed" / "not_in_kill_condition" on success, error code otherwise
        record: Detailed attack log entry (None when rejected)
    """
    ok: bool
    killed: bool = False
    reason: Optional[str] = None
    record: Optional[AttackRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "killed": self.killed,
            "reason": self.reason,
            "record": self.record.to_dict() if self.record else None,
        }


@dataclass
class BatchActionResult:
    """Outcome of one action inside a `kill_batch`."""
    turret_index: int
    target: GridPos
    mode: AttackMode
    killed: bool
    turret: GridPos
    covered_targets: List[GridPos] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turret_index": self.turret_index,
            "target": list(self.target),
            "mode": int(self.mode),
            "killed": self.killed,
            "turret": list(self.turret),
            "covered_targets": [list(c) for c in self.covered_targets],
        }


@dataclass
class KillBatchResult:
    """Result of a `kill_batch` call; `actions` is empty when rejected."""
    ok: bool
    actions: List[BatchActionResult] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def kills(self) -> int:
        return sum(1 for a in self.actions if a.killed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "actions": [a.to_dict() for a in self.actions],
            "reason": self.reason,
        }


@dataclass
class MonitorResult:
    """
    Result of a `monitor` call.

    Attributes:
        ok: Whether the lock set was accepted
        winner: Winning team when this call ended the game
        round: Round counter after the call
        reason: "blue_matched_all_turrets", "max_rounds_reached", "next_round" or an error code
    """
    ok: bool
    winner: Optional[Team]
    round: int
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "winner": self.winner.value if self.winner else None,
            "round": self.round,
            "reason": self.reason,
        }
