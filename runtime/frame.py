from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from agents import RedDecision
from env.core.results import EngineResult, KillBatchResult, KillResult, MonitorResult
from env.core.types import GridPos
from env.world import PublicState


@dataclass
class RoundFrame:
    """
    Everything that happened in one round, ready for a UI or a log.

    `kill_results` holds one engine result per Red call (a batch, a token
    consumption or single shots). `locks`/`monitor` are empty when the game
    ended before Blue played.
    """
    round: int
    red_decision: Optional[RedDecision]
    kill_results: List[KillResult | KillBatchResult | EngineResult] = field(default_factory=list)
    locks: List[GridPos] = field(default_factory=list)
    monitor: Optional[MonitorResult] = None
    state: Optional[PublicState] = None
    events: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def done(self) -> bool:
        return bool(self.state and self.state.game_over)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "red_decision": self.red_decision.to_dict() if self.red_decision else None,
            "kill_results": [r.to_dict() for r in self.kill_results],
            "locks": [list(c) for c in self.locks],
            "monitor": self.monitor.to_dict() if self.monitor else None,
            "state": self.state.to_dict() if self.state else None,
            "events": self.events,
            "metadata": self.metadata,
            "done": self.done,
        }
