"""
Base agent interface for the Hidden Stations game.

All agents must implement this interface to interact with the engine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from env.core.actions import KillAction
from env.core.types import GridPos, Team
from env.world import PublicState


@dataclass
class RedDecision:
    """
    One round of Red play.

    - strategy_token set: submit `actions` through kill_batch with the token,
      or consume_token when `actions` is empty.
    - strategy_token None: fire a lone action through kill, several through
      kill_batch without a token (token mode off).
    """
    actions: List[KillAction] = field(default_factory=list)
    strategy_token: Optional[str] = None

    @property
    def is_batch(self) -> bool:
        return self.strategy_token is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actions": [a.to_dict() for a in self.actions],
            "strategy_token": self.strategy_token,
        }


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    Agents observe the public snapshot and produce one phase worth of play.
    Red agents additionally receive the true turret positions.

    Subclasses must implement:
    - get_actions(): Produce this phase's decision plus metadata

    Attributes:
        team: The team this agent controls (BLUE or RED)
        name: Agent name for logging/identification
    """

    team_required: Optional[Team] = None

    def __init__(self, team: Team, name: str = None):
        """
        Initialize the agent.

        Args:
            team: Team this agent controls
            name: Optional name for the agent (defaults to class name)

        Raises:
            ValueError: If the agent only plays one side and `team` is the other
        """
        if self.team_required is not None and team != self.team_required:
            raise ValueError(f"{self.__class__.__name__} can only play {self.team_required.name}")
        self.team = team
        self.name = name or self.__class__.__name__

    @abstractmethod
    def get_actions(self, state: PublicState, **kwargs: Any) -> Tuple[Any, Dict[str, Any]]:
        """
        Decide this phase.

        Args:
            state: Current public snapshot from the engine

        Returns:
            Tuple of (decision, metadata)
        """
        pass

    def reset(self) -> None:
        """
        Reset agent state between games.

        Override if your agent keeps internal state across rounds.
        """
        pass

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.team.name})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"{self.__class__.__name__}(team={self.team.name}, name='{self.name}')"


class RedAgent(BaseAgent):
    """Base class for Red agents: plays the kill phase."""

    team_required = Team.RED

    def __init__(self, team: Team = Team.RED, name: str = None):
        super().__init__(team, name)

    def require_turrets(self, state: PublicState, turrets: Sequence[GridPos]) -> List[GridPos]:
        """Normalise the true turret positions handed in by the driver."""
        if len(turrets) != len(state.turrets_locked):
            raise ValueError(f"{self.name} needs the true turret positions")
        return [tuple(t) for t in turrets]

    @abstractmethod
    def get_actions(
        self,
        state: PublicState,
        turrets: Sequence[GridPos] = (),
        **kwargs: Any,
    ) -> Tuple[RedDecision, Dict[str, Any]]:
        """
        Plan this round's attacks.

        Args:
            state: Current public snapshot
            turrets: True turret positions (Red's private knowledge)

        Returns:
            Tuple of (RedDecision, metadata)
        """
        pass


class BlueAgent(BaseAgent):
    """Base class for Blue agents: plays the monitor phase."""

    team_required = Team.BLUE

    def __init__(self, team: Team = Team.BLUE, name: str = None):
        super().__init__(team, name)

    @abstractmethod
    def get_actions(self, state: PublicState, **kwargs: Any) -> Tuple[List[GridPos], Dict[str, Any]]:
        """
        Choose this round's lock set.

        Args:
            state: Current public snapshot (no turret positions)

        Returns:
            Tuple of (three lock cells, metadata)
        """
        pass
