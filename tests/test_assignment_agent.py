import dataclasses
import random

import pytest

from agents import AssignmentAgent, RedDecision
from agents.assignment_agent import max_assignment
from env.core.types import AttackMode
from env.mechanics.coverage import coverage
from env.world import PublicState


def assert_legal(decision: RedDecision, state: PublicState, turrets):
    for action in decision.actions:
        assert action.target in coverage(turrets[action.turret_index], action.mode)
        assert action.target not in state.dead_cells
        assert action.target not in turrets


# ----------------------------------------------------------------------
# Matching
# ----------------------------------------------------------------------
def test_matching_finds_maximum():
    pairs = max_assignment(3, {0: [0], 1: [0], 2: [1]}, random.Random(0))
    assert len(pairs) == 2
    assert len({t for _, t in pairs}) == 2


def test_matching_routes_around_contention():
    for seed in range(20):
        pairs = max_assignment(2, {0: [0, 1], 1: [0]}, random.Random(seed))
        assert sorted(pairs) == [(0, 1), (1, 0)]


def test_matching_is_capped_by_turrets_and_positions():
    edges = {i: [0, 1, 2] for i in range(5)}
    assert len(max_assignment(5, edges, random.Random(1))) == 3
    assert len(max_assignment(2, edges, random.Random(1))) == 2
    assert max_assignment(3, {}, random.Random(1)) == []


# ----------------------------------------------------------------------
# Agent
# ----------------------------------------------------------------------
def test_first_token_fills_every_turret(token_env, turrets):
    agent = AssignmentAgent(seed=3)
    state = token_env.get_public_state()
    decision, meta = agent.get_actions(state, turrets=turrets)

    assert decision.strategy_token == "110"
    assert len(decision.actions) == 3
    assert len({a.turret_index for a in decision.actions}) == 3
    assert sorted(a.mode for a in decision.actions) == [AttackMode.CROSS, AttackMode.ROUND, AttackMode.ROUND]
    assert sorted(meta["modes"]) == [0, 1, 1]
    assert_legal(decision, state, turrets)

    result = token_env.kill_batch(decision.actions, strategy_token=decision.strategy_token)
    assert result.ok
    assert result.kills == 3


def test_locked_turret_is_left_out(token_env, turrets):
    token_env.consume_token("110")
    token_env.monitor([(0, 0), (3, 3), (3, 2)])
    state = token_env.get_public_state()

    decision, meta = AssignmentAgent(seed=5).get_actions(state, turrets=turrets)
    assert decision.strategy_token == "10"
    assert meta["available_turrets"] == [1, 2]
    assert {a.turret_index for a in decision.actions} == {1, 2}
    assert token_env.kill_batch(decision.actions, decision.strategy_token).ok


def test_no_available_turret_still_names_the_token(token_env, turrets):
    state = token_env.get_public_state()
    locked = dataclasses.replace(state, turrets_locked=(True, True, True))

    decision, meta = AssignmentAgent(seed=1).get_actions(locked, turrets=turrets)
    assert decision.actions == []
    assert decision.strategy_token == "110"
    assert meta["assignment"] == []


def test_without_tokens_fires_a_single_legal_shot(plain_env, turrets):
    state = plain_env.get_public_state()
    decision, meta = AssignmentAgent(seed=9).get_actions(state, turrets=turrets)

    assert decision.strategy_token is None
    assert len(decision.actions) == 1
    assert meta["fallback"] == "viable_pair"
    assert_legal(decision, state, turrets)

    action = decision.actions[0]
    result = plain_env.kill(action.mode, action.target, action.turret_index)
    assert result.ok and result.killed


def test_same_seed_same_plan(token_env, turrets):
    state = token_env.get_public_state()
    first, _ = AssignmentAgent(seed=42).get_actions(state, turrets=turrets)
    second, _ = AssignmentAgent(seed=42).get_actions(state, turrets=turrets)
    assert first.to_dict() == second.to_dict()


def test_random_token_pick_stays_in_inventory(token_env, turrets):
    state = token_env.get_public_state()
    agent = AssignmentAgent(seed=4, randomize_tokens=True)
    for _ in range(10):
        assert agent.choose_strategy_token(state) in state.strategy_tokens_remaining


def test_agent_needs_turrets(token_env):
    with pytest.raises(ValueError):
        AssignmentAgent().get_actions(token_env.get_public_state())
