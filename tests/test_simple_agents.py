from agents import BlueSimpleAgent, RedSimpleAgent
from env.core.types import CENTER


def test_red_simple_plays_first_token(token_env, turrets):
    state = token_env.get_public_state()
    decision, meta = RedSimpleAgent(seed=0).get_actions(state, turrets=turrets)

    assert decision.strategy_token == "110"
    assert meta["strategy_token"] == "110"
    assert [a.turret_index for a in decision.actions] == [0, 1, 2]
    assert all(a.mode is None for a in decision.actions)
    assert token_env.kill_batch(decision.actions, decision.strategy_token).ok


def test_red_simple_without_tokens_fires_every_turret(plain_env, turrets):
    state = plain_env.get_public_state()
    decision, _ = RedSimpleAgent(seed=0).get_actions(state, turrets=turrets)

    assert decision.strategy_token is None
    assert len(decision.actions) == 3
    assert all(a.mode is not None for a in decision.actions)
    assert plain_env.kill_batch(decision.actions).ok


def test_blue_simple_locks_next_to_dead_cells(plain_env):
    locks, _ = BlueSimpleAgent().get_actions(plain_env.get_public_state())
    assert locks == [(1, 1), (1, 2), (1, 3)]

    plain_env.kill(0, (0, 4), 0)
    locks, meta = BlueSimpleAgent().get_actions(plain_env.get_public_state())
    assert len(set(locks)) == 3
    assert CENTER not in locks and (0, 4) not in locks
    # (1,3) borders both dead cells
    assert locks == [(1, 3), (0, 3), (1, 1)]
