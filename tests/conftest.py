from pathlib import Path
import sys

import pytest

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from env import HiddenStationsEnv  # noqa: E402
from env.core.types import DEFAULT_STRATEGY_TOKENS  # noqa: E402

# Layout used throughout the rule tests.
TURRETS = [(0, 0), (4, 4), (1, 3)]


@pytest.fixture
def turrets():
    return list(TURRETS)


@pytest.fixture
def token_env():
    return HiddenStationsEnv(turrets=TURRETS, strategy_tokens=list(DEFAULT_STRATEGY_TOKENS), seed=7)


@pytest.fixture
def plain_env():
    return HiddenStationsEnv(turrets=TURRETS, strategy_tokens=None, seed=7)
