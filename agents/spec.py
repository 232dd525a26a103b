from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from env.core.types import Team


def _parse_team(raw: Any) -> Team:
    if isinstance(raw, Team):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.upper() in Team.__members__:
            return Team[text.upper()]
        return Team(text.lower())
    raise ValueError(f"Unknown team {raw!r}")


@dataclass
class AgentSpec:
    """
    Serializable description of an agent.

    This is intended for configuration files (scenarios, API requests) so that
    agents can be instantiated dynamically by a factory/registry.
    """
    type: str
    team: Team
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)
    act_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "type": self.type,
            "team": self.team.name,
            "name": self.name,
            "init_params": self.init_params,
            "act_params": self.act_params,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentSpec":
        """Construct from a dict (e.g., loaded from JSON)."""
        team_raw = data.get("team")
        if team_raw is None:
            raise ValueError("AgentSpec requires 'team'")
        return cls(
            type=data["type"],
            team=_parse_team(team_raw),
            name=data.get("name"),
            init_params=data.get("init_params", {}) or {},
            act_params=data.get("act_params", {}) or {},
        )

    def with_team(self, team: Team) -> "AgentSpec":
        """Return a copy with the provided team."""
        return AgentSpec(
            type=self.type,
            team=team,
            name=self.name,
            init_params=self.init_params,
            act_params=self.act_params,
        )
