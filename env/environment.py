"""
HiddenStationsEnv - Main engine interface.

This is the authoritative state machine for a Hidden Stations game and the
only mutation API. Each round has a kill phase (Red fires) followed by a
monitor phase (Blue submits a lock set).

Usage:
    from env import HiddenStationsEnv

    env = HiddenStationsEnv(strategy_tokens=["110", "10", "11", "10", "00"], seed=7)

    while not env.is_game_over:
        state = env.get_public_state()
        env.kill_batch(red_actions(state), strategy_token=token)   # Red
        env.monitor(blue_locks(env.get_public_state()))            # Blue

    print(f"Winner: {env.winner}")

Rule violations never raise: every mutation returns a structured result
with `ok=False` and a reason code. Only malformed setup (turrets, token list)
raises ValueError at construction.

The engine expects a single sequential caller per game.
"""

from __future__ import annotations
import random
from typing import Any, List, Mapping, Optional, Sequence, Union, TYPE_CHECKING

from .core.types import (
    ActionValidation,
    AttackMode,
    CENTER,
    GridPos,
    GRID_SIZE,
    MAX_ROUNDS,
    TURRET_COUNT,
)
from .core.actions import KillAction
from .core.records import AttackRecord, LockEvent
from .core.results import (
    BatchActionResult,
    EngineResult,
    KillBatchResult,
    KillResult,
    MonitorResult,
)
from .core.validation import (
    check_coordinate,
    check_locks,
    check_token,
    check_turret_index,
    validate_strategy_tokens,
    validate_turrets,
)
from .mechanics import CombatResolver, VictoryConditions, sorted_coverage
from .world import Grid, PublicState, WorldState
from infra.logger import get_logger

if TYPE_CHECKING:
    from .core.types import Team
    from .scenario import Scenario

log = get_logger(__name__)

ActionLike = Union[KillAction, Mapping[str, Any]]


class HiddenStationsEnv:
    """
    Hidden Stations engine.

    The engine manages:
    - World state (turrets, dead cells, tokens, round, histories)
    - Rule validation for every mutation
    - Phase transitions (kill phase -> monitor phase -> next round)
    - Victory conditions

    Attributes:
        world: Current world state (holds hidden information; do not hand to Blue)
    """

    def __init__(
        self,
        turrets: Optional[Sequence[GridPos]] = None,
        strategy_tokens: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        max_rounds: int = MAX_ROUNDS,
    ):
        """
        Initialize the engine and start a game.

        Args:
            turrets: Three turret positions; drawn from the RNG when None
            strategy_tokens: Five strategy tokens; None disables token mode
            seed: Seed for a private random.Random (ignored when rng is given)
            rng: Explicit random source
            max_rounds: Round limit, between 1 and MAX_ROUNDS

        Raises:
            ValueError: If turrets, tokens or the round limit are malformed
        """
        self._combat = CombatResolver()
        self._victory_checker = VictoryConditions(max_rounds=max_rounds)
        self.world: WorldState
        self.reset(turrets=turrets, strategy_tokens=strategy_tokens, seed=seed, rng=rng)

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> HiddenStationsEnv:
        """Build an engine from a Scenario."""
        return cls(
            turrets=scenario.turrets,
            strategy_tokens=scenario.strategy_tokens,
            seed=scenario.seed,
            max_rounds=scenario.max_rounds,
        )

    def reset(
        self,
        turrets: Optional[Sequence[GridPos]] = None,
        strategy_tokens: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> PublicState:
        """
        Start a fresh game.

        Returns:
            Initial public snapshot

        Raises:
            ValueError: If turrets or tokens are malformed
        """
        grid = Grid(GRID_SIZE)
        rng = rng or random.Random(seed)

        if turrets is not None:
            layout = validate_turrets(grid, turrets)
        else:
            layout = self._random_turrets(grid, rng)

        tokens = validate_strategy_tokens(strategy_tokens) if strategy_tokens is not None else None

        self.world = WorldState(turrets=layout, strategy_tokens=tokens, grid=grid, rng=rng)
        log.info(
            "New game: token_mode=%s max_rounds=%d",
            self.world.token_mode,
            self._victory_checker.max_rounds,
        )
        return self.get_public_state()

    @staticmethod
    def _random_turrets(grid: Grid, rng: random.Random) -> List[GridPos]:
        cells = [c for c in grid.cells() if c != CENTER]
        return rng.sample(cells, TURRET_COUNT)

    # ========================================================================
    # KILL PHASE
    # ========================================================================

    def kill(
        self,
        mode: Any,
        target: GridPos,
        turret_index: int,
        strategy_token: Optional[str] = None,
    ) -> KillResult:
        """
        Fire one turret.

        With token mode on, supplying `strategy_token` spends it and closes the
        kill phase; omitting it fires one step of a multi-shot sequence and
        leaves the phase open. With token mode off, every shot closes the phase.
        The caller's `mode` is always the mode applied.

        Args:
            mode: AttackMode (or 0/1)
            target: Cell to attack; locked cells are legal targets
            turret_index: Firing turret (0-2)
            strategy_token: Token to spend with this shot

        Returns:
            KillResult with the hit flag and attack record
        """
        world = self.world
        if world.game_over:
            return self._reject_kill(ActionValidation.fail("game_over", "game is over"))

        stepwise = world.token_mode and not strategy_token
        if world.kill_phase_closed and not stepwise:
            return self._reject_kill(
                ActionValidation.fail("kill_already_done_this_round", "kill phase already closed")
            )

        for check in (check_coordinate(world.grid, target), check_turret_index(turret_index)):
            if not check.valid:
                return self._reject_kill(check)

        if world.turrets_used[turret_index]:
            return self._reject_kill(ActionValidation.fail(
                "turret_already_used_this_round", f"turret {turret_index} already fired this round"
            ))

        effective_mode = AttackMode.parse(mode)
        if world.token_mode:
            if strategy_token:
                check = check_token(world.strategy_tokens_remaining, strategy_token)
                if not check.valid:
                    return self._reject_kill(check)
                if effective_mode is None:
                    return self._reject_kill(ActionValidation.fail(
                        "mode_required_when_using_token", "a mode is required with a token"
                    ))
            elif effective_mode is None:
                return self._reject_kill(ActionValidation.fail(
                    "strategy_token_required_or_mode_required", "a token or a mode is required"
                ))
        elif effective_mode is None:
            return self._reject_kill(ActionValidation.fail("invalid_mode", f"invalid mode {mode!r}"))

        target = (target[0], target[1])
        record = self._combat.resolve_shot(world, turret_index, target, effective_mode)

        if world.token_mode and strategy_token:
            world.remove_token(strategy_token)
            world.last_used_token_len = len(strategy_token)
            world.kill_phase_closed = True
        elif not world.token_mode:
            world.last_used_token_len = 1
            world.kill_phase_closed = True
        else:
            # Step of a token sequence: phase stays open until a token is spent
            world.last_used_token_len = 1

        log.debug("kill: %s -> %s", record.reason, "killed" if record.killed else "miss")
        return KillResult(
            ok=True,
            killed=record.killed,
            reason="killed" if record.killed else "not_in_kill_condition",
            record=record,
        )

    def kill_batch(
        self,
        actions: Sequence[ActionLike],
        strategy_token: Optional[str] = None,
    ) -> KillBatchResult:
        """
        Fire several turrets at once for this round's kill phase.

        In token mode the token is mandatory and its characters form the mode
        pool: an action with a mode consumes that mode by value, an action
        without one takes the next mode in token order. The whole batch is
        validated before any shot resolves.

        Args:
            actions: KillAction objects (or dicts with turret_index/target/mode)
            strategy_token: Token to spend (required in token mode)

        Returns:
            KillBatchResult with one entry per action
        """
        world = self.world
        if world.game_over:
            return self._reject_batch(ActionValidation.fail("game_over", "game is over"))
        if world.kill_phase_closed:
            return self._reject_batch(
                ActionValidation.fail("kill_already_done_this_round", "kill phase already closed")
            )
        if not actions:
            return self._reject_batch(ActionValidation.fail("empty_actions", "no actions given"))

        mode_pool: Optional[List[AttackMode]] = None
        if world.token_mode:
            if not strategy_token:
                return self._reject_batch(
                    ActionValidation.fail("strategy_token_required", "token mode needs a token")
                )
            check = check_token(world.strategy_tokens_remaining, strategy_token)
            if not check.valid:
                return self._reject_batch(check)
            mode_pool = [AttackMode.from_token_char(ch) for ch in strategy_token]

        planned: List[KillAction] = []
        used = set(i for i, flag in enumerate(world.turrets_used) if flag)
        for raw in actions:
            try:
                action = raw if isinstance(raw, KillAction) else KillAction.from_dict(raw)
            except (TypeError, ValueError) as exc:
                return self._reject_batch(ActionValidation.fail("invalid_action_item", str(exc)))

            for check in (check_turret_index(action.turret_index), check_coordinate(world.grid, action.target)):
                if not check.valid:
                    return self._reject_batch(check)

            if world.is_turret_locked(action.turret_index):
                return self._reject_batch(ActionValidation.fail(
                    "turret_locked", f"turret {action.turret_index} is locked"
                ))
            if action.turret_index in used:
                return self._reject_batch(ActionValidation.fail(
                    "turret_already_used_this_round", f"turret {action.turret_index} fires twice"
                ))
            used.add(action.turret_index)

            mode = action.mode
            if mode_pool is None:
                if mode is None:
                    return self._reject_batch(ActionValidation.fail("invalid_mode", "mode is required"))
            elif mode is None:
                if not mode_pool:
                    return self._reject_batch(
                        ActionValidation.fail("no_mode_left_in_token", "token modes exhausted")
                    )
                mode = mode_pool.pop(0)
            else:
                if mode not in mode_pool:
                    return self._reject_batch(ActionValidation.fail(
                        "mode_exceeds_token_quota", f"token has no {mode} left"
                    ))
                mode_pool.remove(mode)

            planned.append(KillAction(turret_index=action.turret_index, target=action.target, mode=mode))

        results: List[BatchActionResult] = []
        for action in planned:
            record = self._combat.resolve_shot(world, action.turret_index, action.target, action.mode)
            results.append(BatchActionResult(
                turret_index=action.turret_index,
                target=action.target,
                mode=action.mode,
                killed=record.killed,
                turret=record.turret,
                covered_targets=sorted_coverage(record.turret, action.mode, world.grid),
            ))

        world.kill_phase_closed = True
        if world.token_mode:
            world.remove_token(strategy_token)
            world.last_used_token_len = len(strategy_token)
        else:
            world.last_used_token_len = len(results)

        log.debug(
            "kill_batch: round=%d token=%s shots=%d kills=%d",
            world.round, strategy_token, len(results), sum(r.killed for r in results),
        )
        return KillBatchResult(ok=True, actions=results)

    def consume_token(self, token: str) -> EngineResult:
        """
        Spend a token without firing, closing the kill phase.

        Used when no turret is available to fire.
        """
        world = self.world
        if world.game_over:
            return self._reject(ActionValidation.fail("game_over", "game is over"))
        if not world.token_mode:
            return self._reject(ActionValidation.fail("strategy_tokens_disabled", "token mode is off"))
        if world.kill_phase_closed:
            return self._reject(
                ActionValidation.fail("kill_already_done_this_round", "kill phase already closed")
            )
        if not world.remove_token(token):
            return self._reject(
                ActionValidation.fail("strategy_token_not_available", f"token {token!r} is not available")
            )

        world.last_used_token_len = len(token)
        world.kill_phase_closed = True
        log.debug("consume_token: round=%d token=%s", world.round, token)
        return EngineResult(ok=True)

    # ========================================================================
    # MONITOR PHASE
    # ========================================================================

    def monitor(self, locks: Sequence[GridPos]) -> MonitorResult:
        """
        Submit Blue's lock set and close the round.

        Args:
            locks: Three distinct cells

        Returns:
            MonitorResult; `winner` is set when this call ended the game
        """
        world = self.world
        if world.game_over:
            return self._reject_monitor(ActionValidation.fail("game_over", "game is over"))
        if not world.kill_phase_closed:
            return self._reject_monitor(
                ActionValidation.fail("must_kill_before_monitor", "kill phase is still open")
            )
        check = check_locks(world.grid, locks)
        if not check.valid:
            return self._reject_monitor(check)

        lock_cells = [(c[0], c[1]) for c in locks]
        world.last_locks = lock_cells
        world.locks_history.append(LockEvent(round=world.round, locks=tuple(lock_cells)))

        victory = self._victory_checker.check_monitor(world, lock_cells)
        if victory.is_game_over:
            world.set_game_over(victory.winner, victory.reason)
            log.info("Game over in round %d: %s", world.round, victory)
            return MonitorResult(ok=True, winner=victory.winner, round=world.round, reason=victory.reason)

        world.advance_round()
        log.info("Round %d begins", world.round)
        return MonitorResult(ok=True, winner=None, round=world.round, reason="next_round")

    # ========================================================================
    # OBSERVATION
    # ========================================================================

    def get_public_state(self) -> PublicState:
        """Immutable snapshot for agents and drivers; never includes turrets."""
        return PublicState.build(self.world)

    def reveal_turrets(self) -> List[GridPos]:
        """
        True turret positions.

        Debug/rendering accessor and Red's private knowledge; never pass the
        result to a Blue agent.
        """
        return self.world.turrets

    @property
    def attack_log(self) -> List[AttackRecord]:
        """Every resolved shot, hits and misses, in order."""
        return list(self.world.attack_log)

    @property
    def strategy_tokens_initial(self) -> Optional[List[str]]:
        initial = self.world.strategy_tokens_initial
        return list(initial) if initial is not None else None

    @property
    def max_rounds(self) -> int:
        return self._victory_checker.max_rounds

    @property
    def round(self) -> int:
        return self.world.round

    @property
    def is_game_over(self) -> bool:
        """Check if game is over."""
        return self.world.game_over

    @property
    def winner(self) -> Optional[Team]:
        """Get winner (None while in progress)."""
        return self.world.winner

    # ========================================================================
    # REJECTIONS
    # ========================================================================

    def _log_rejection(self, operation: str, validation: ActionValidation) -> None:
        log.debug("%s rejected: %s (%s)", operation, validation.error_code, validation.message)

    def _reject_kill(self, validation: ActionValidation) -> KillResult:
        self._log_rejection("kill", validation)
        return KillResult(ok=False, killed=False, reason=validation.error_code)

    def _reject_batch(self, validation: ActionValidation) -> KillBatchResult:
        self._log_rejection("kill_batch", validation)
        return KillBatchResult(ok=False, actions=[], reason=validation.error_code)

    def _reject_monitor(self, validation: ActionValidation) -> MonitorResult:
        self._log_rejection("monitor", validation)
        return MonitorResult(ok=False, winner=None, round=self.world.round, reason=validation.error_code)

    def _reject(self, validation: ActionValidation) -> EngineResult:
        self._log_rejection("consume_token", validation)
        return EngineResult(ok=False, reason=validation.error_code)

    def __repr__(self) -> str:
        return f"HiddenStationsEnv({self.world!r})"
