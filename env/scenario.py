"""
Scenario - Serializable match setup.

A scenario fixes everything needed to start a game and its agents:
turret layout (or None for a random draw), strategy tokens (or None to
disable token mode), seed, round limit and one AgentSpec per team.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.types import DEFAULT_STRATEGY_TOKENS, GridPos, MAX_ROUNDS, Team


@dataclass
class Scenario:
    """
    Match configuration.

    Attributes:
        turrets: Fixed turret layout, or None to draw one from the seed
        strategy_tokens: Red's token deck, or None to disable token mode
        seed: Seed for the engine and, by default, the agents
        max_rounds: Round limit (1 to MAX_ROUNDS, checked when the engine is built)
        agents: AgentSpec list (one per team)
    """
    turrets: Optional[List[GridPos]] = None
    strategy_tokens: Optional[List[str]] = field(default_factory=lambda: list(DEFAULT_STRATEGY_TOKENS))
    seed: Optional[int] = None
    max_rounds: int = MAX_ROUNDS
    agents: List[Any] = field(default_factory=list)

    def agent_for(self, team: Team):
        """Return the single AgentSpec for a team."""
        matches = [spec for spec in self.agents if spec.team == team]
        if not matches:
            raise ValueError(f"No AgentSpec found for team {team}")
        if len(matches) > 1:
            raise ValueError(f"Multiple AgentSpecs found for team {team}; expected exactly one.")
        return matches[0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "turrets": [list(t) for t in self.turrets] if self.turrets is not None else None,
            "strategy_tokens": list(self.strategy_tokens) if self.strategy_tokens is not None else None,
            "seed": self.seed,
            "max_rounds": self.max_rounds,
            "agents": [spec.to_dict() for spec in self.agents],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scenario":
        """Construct from a dict (e.g., loaded from JSON)."""
        from agents.spec import AgentSpec

        turrets = data.get("turrets")
        tokens = data.get("strategy_tokens", list(DEFAULT_STRATEGY_TOKENS))
        return cls(
            turrets=[tuple(t) for t in turrets] if turrets is not None else None,
            strategy_tokens=list(tokens) if tokens is not None else None,
            seed=data.get("seed"),
            max_rounds=data.get("max_rounds", MAX_ROUNDS),
            agents=[AgentSpec.from_dict(a) for a in data.get("agents", []) or []],
        )

    def save_json(self, path: str | Path) -> Path:
        """Write the scenario to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path

    @classmethod
    def load_json(cls, path: str | Path) -> "Scenario":
        """Read a scenario from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    def clone(self) -> "Scenario":
        """Independent copy."""
        return Scenario.from_dict(self.to_dict())


def create_default_scenario(seed: Optional[int] = None, randomize_tokens: bool = True) -> Scenario:
    """Standard AI-vs-AI setup: random turrets, default token deck."""
    from agents.spec import AgentSpec

    return Scenario(
        seed=seed,
        agents=[
            AgentSpec(
                type="red_assignment",
                team=Team.RED,
                name="Red Planner",
                init_params={"seed": seed, "randomize_tokens": randomize_tokens},
            ),
            AgentSpec(type="blue_deduction", team=Team.BLUE, name="Blue Deduction"),
        ],
    )
