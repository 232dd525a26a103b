"""
Environment-driven settings for scripts and the HTTP API.

Values are read from the process environment after loading an optional
`.env` file from the project root.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from infra.paths import PROJECT_ROOT

ENV_PREFIX = "HIDDEN_STATIONS_"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Attributes:
        log_level: Root logging level name
        log_json: Emit JSON log lines instead of the plain format
        seed: Default seed for new games (None = nondeterministic)
        randomize_tokens: Whether the Red planner draws its token at random
    """
    log_level: str = "INFO"
    log_json: bool = False
    seed: Optional[int] = None
    randomize_tokens: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from HIDDEN_STATIONS_* environment variables."""
        seed_raw = os.getenv(f"{ENV_PREFIX}SEED")
        return cls(
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", cls.log_level).upper(),
            log_json=_as_bool(os.getenv(f"{ENV_PREFIX}LOG_JSON"), cls.log_json),
            seed=int(seed_raw) if seed_raw not in (None, "") else None,
            randomize_tokens=_as_bool(
                os.getenv(f"{ENV_PREFIX}RANDOMIZE_TOKENS"), cls.randomize_tokens
            ),
        )


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUTHY


def load_settings(dotenv_path: str | os.PathLike | None = None) -> Settings:
    """Load `.env` (project root by default) and return the resulting settings."""
    load_dotenv(dotenv_path or PROJECT_ROOT / ".env")
    return Settings.from_env()
