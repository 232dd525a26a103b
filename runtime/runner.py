from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from agents import BaseAgent, PreparedAgent, RedDecision, create_agents_for_scenario
from env import HiddenStationsEnv
from env.core.results import EngineResult, KillBatchResult, KillResult, MonitorResult
from env.core.types import GridPos, Team
from env.scenario import Scenario
from env.world import PublicState
from infra.logger import get_logger

from .events import extract_events
from .frame import RoundFrame
from .game_log import export_game_log

log = get_logger(__name__)

RedResult = KillResult | KillBatchResult | EngineResult


def apply_red_decision(env: HiddenStationsEnv, decision: RedDecision) -> List[RedResult]:
    """
    Submit a Red decision to the engine.

    - token with actions: one kill_batch
    - token without actions: consume_token
    - no token, several actions: kill_batch (token mode off)
    - no token, one action: kill
    """
    if decision.strategy_token is not None:
        if decision.actions:
            return [env.kill_batch(decision.actions, strategy_token=decision.strategy_token)]
        return [env.consume_token(decision.strategy_token)]

    if len(decision.actions) > 1:
        return [env.kill_batch(decision.actions)]
    return [
        env.kill(action.mode, action.target, action.turret_index)
        for action in decision.actions
    ]


class GameRunner:
    """
    Round-by-round game runner that returns UI-friendly frames.

    Red plays the kill phase through `apply_red_decision`, then Blue submits
    its lock set through `monitor`.
    """

    def __init__(
        self,
        scenario: Scenario,
        env: Optional[HiddenStationsEnv] = None,
        agents: Optional[Dict[Team, PreparedAgent]] = None,
    ):
        self.scenario = scenario.clone()
        self.env = env or HiddenStationsEnv.from_scenario(self.scenario)

        prepared = agents or create_agents_for_scenario(self.scenario)
        self._red = prepared[Team.RED]
        self._blue = prepared[Team.BLUE]
        self.frames: List[RoundFrame] = []

        log.info(
            "GameRunner initialized: seed=%s red=%s blue=%s",
            self.scenario.seed, self._red.agent, self._blue.agent,
        )

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    @property
    def red_agent(self) -> BaseAgent:
        return self._red.agent

    @property
    def blue_agent(self) -> BaseAgent:
        return self._blue.agent

    @property
    def state(self) -> PublicState:
        return self.env.get_public_state()

    @property
    def done(self) -> bool:
        return self.env.is_game_over

    def play_red(self) -> Tuple[RedDecision, Dict[str, Any], List[RedResult]]:
        """Ask the Red agent for a decision and apply it."""
        decision, metadata = self._red.agent.get_actions(
            self.state,
            turrets=self.env.reveal_turrets(),
            **self._red.act_params,
        )
        results = apply_red_decision(self.env, decision)
        for result in results:
            if not result.ok:
                log.warning("Red decision rejected: %s", result.reason)
        return decision, metadata, results

    def play_blue(self) -> Tuple[List[GridPos], Dict[str, Any], MonitorResult]:
        """Ask the Blue agent for a lock set and submit it."""
        locks, metadata = self._blue.agent.get_actions(self.state, **self._blue.act_params)
        result = self.env.monitor(locks)
        if not result.ok:
            log.warning("Blue locks rejected: %s", result.reason)
        return locks, metadata, result

    def play_round(self) -> RoundFrame:
        """
        Play the rest of the current round.

        Red is skipped when the kill phase has already closed (e.g. a human
        fired through the API).
        """
        if self.done:
            raise RuntimeError("Game is already over")

        before = self.state
        frame = RoundFrame(round=before.round, red_decision=None)

        if not before.kill_phase_closed:
            decision, red_meta, results = self.play_red()
            frame.red_decision = decision
            frame.kill_results = results
            frame.metadata["red"] = red_meta

        if not self.done:
            locks, blue_meta, monitor = self.play_blue()
            frame.locks = list(locks)
            frame.monitor = monitor
            frame.metadata["blue"] = blue_meta

        frame.state = self.state
        frame.events = extract_events(prev_state=before, state=frame.state)
        self.frames.append(frame)

        kills = sum(1 for e in frame.events if e["type"] == "TARGET_KILLED")
        log.info(
            "Round %d: kills=%d locks=%s result=%s",
            frame.round, kills, frame.locks, frame.monitor.reason if frame.monitor else None,
        )
        return frame

    def run_episode(self) -> List[RoundFrame]:
        """Play until the game ends; stops early if a round makes no progress."""
        while not self.done:
            frame = self.play_round()
            if frame.monitor is None or not frame.monitor.ok:
                log.warning("Round %d did not complete; stopping episode", frame.round)
                break
        log.info("Episode finished: winner=%s after %d round(s)", self.env.winner, self.env.round)
        return list(self.frames)

    def export_log(self) -> str:
        return export_game_log(self.env)
