"""
Plain-text game log export.

The log reveals the turret layout, so it is meant for after the game (or for
debugging), never for Blue.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from env import HiddenStationsEnv
from infra.logger import get_logger
from infra.paths import GAME_LOG_DIR

log = get_logger(__name__)


def _cell(pos) -> str:
    return f"({pos[0]},{pos[1]})"


def export_game_log(env: HiddenStationsEnv) -> str:
    """Render the full game record as text."""
    state = env.get_public_state()
    tokens = env.strategy_tokens_initial

    lines: List[str] = [
        "=== Hidden Stations game log ===",
        f"Generated: {datetime.now(timezone.utc).isoformat()}",
        "Turrets: " + ", ".join(f"turret{i}={_cell(t)}" for i, t in enumerate(env.reveal_turrets())),
        "Initial strategy tokens: " + (", ".join(tokens) if tokens else "none"),
        "",
        "=== Attacks ===",
    ]
    for record in env.attack_log:
        lines.extend([
            f"[round {record.round}] {record.timestamp}",
            f"  turret{record.turret_index}{_cell(record.turret)} mode={record.mode} target={_cell(record.target)}",
            f"  hit: {str(record.killed).lower()}",
            f"  rationale: {record.reason}",
            "",
        ])

    lines.extend(["", "=== Dead history ==="])
    for event in state.dead_history:
        lines.append(f"round {event.round}: target {_cell(event.target)} mode={event.mode}")

    lines.extend(["", "=== Lock history ==="])
    for event in state.locks_history:
        lines.append(f"round {event.round}: " + ", ".join(_cell(c) for c in event.locks))

    lines.extend([
        "",
        "=== Result ===",
        f"Winner: {state.winner.value if state.winner else 'in progress'}",
        f"Rounds played: {state.round}",
    ])
    return "\n".join(lines)


def save_game_log(env: HiddenStationsEnv, directory: Optional[Path] = None) -> Path:
    """Write the game log to a timestamped file and return its path."""
    directory = Path(directory) if directory is not None else GAME_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%f")
    path = directory / f"hidden-stations-log-{stamp}.txt"
    path.write_text(export_game_log(env), encoding="utf-8")
    log.info("Game log saved to %s", path)
    return path
