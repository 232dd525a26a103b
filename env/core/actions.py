"""
Action definitions and utilities.

A KillAction is one turret shot requested by the Red side. This module provides:
- KillAction dataclass
- Structural validation
- Serialization helpers
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional
import json

from .types import AttackMode, GridPos


@dataclass
class KillAction:
    """
    One turret shot: which turret fires, where, and with which pattern.

    `mode` may be left as None inside a token batch; the engine then takes
    the next mode from the token (FIFO).

    Rule checks (bounds, locks, token quota) belong to the engine; this class
    only rejects structurally malformed payloads.
    """

    turret_index: int
    target: GridPos
    mode: Optional[AttackMode] = None

    def __post_init__(self):
        """Normalise and validate fields after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate field types.

        Raises:
            ValueError: If a field is malformed
        """
        if isinstance(self.turret_index, bool) or not isinstance(self.turret_index, int):
            raise ValueError(f"'turret_index' must be an int, got {type(self.turret_index)}")

        target = self.target
        if not isinstance(target, (tuple, list)) or len(target) != 2:
            raise ValueError(f"'target' must be an (x, y) pair, got {target!r}")
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in target):
            raise ValueError(f"'target' coordinates must be ints, got {target!r}")
        self.target = (target[0], target[1])

        if self.mode is not None:
            mode = AttackMode.parse(self.mode)
            if mode is None:
                raise ValueError(f"'mode' must be 0/1 or cross/round, got {self.mode!r}")
            self.mode = mode

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert action to a JSON-serializable dictionary.

        Returns:
            Dictionary representation of the action
        """
        return {
            "turret_index": self.turret_index,
            "target": list(self.target),
            "mode": int(self.mode) if self.mode is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> KillAction:
        """
        Create an action from a dictionary.

        Args:
            data: Dictionary containing 'turret_index', 'target' and optional 'mode'

        Returns:
            KillAction instance

        Raises:
            ValueError: If dictionary format is invalid
        """
        if "turret_index" not in data or "target" not in data:
            raise ValueError("Kill action dictionary must contain 'turret_index' and 'target'")

        target = data["target"]
        if isinstance(target, list):
            target = tuple(target)
        return cls(turret_index=data["turret_index"], target=target, mode=data.get("mode"))

    def to_json(self) -> str:
        """Convert action to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> KillAction:
        """Create action from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        """Human-readable string representation."""
        mode = str(self.mode) if self.mode is not None else "token"
        return f"KILL turret={self.turret_index} mode={mode} target={self.target}"
