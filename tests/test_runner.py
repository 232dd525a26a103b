import pytest

from agents import AgentSpec, RedDecision
from env import HiddenStationsEnv
from env.core.types import Team
from env.scenario import Scenario, create_default_scenario
from runtime.batch import run_multiple_games
from runtime.events import extract_events
from runtime.game_log import export_game_log, save_game_log
from runtime.runner import GameRunner, apply_red_decision


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_default_episode_plays_to_the_end(seed):
    runner = GameRunner(create_default_scenario(seed=seed))
    frames = runner.run_episode()

    state = runner.state
    assert state.game_over
    assert state.winner in (Team.BLUE, Team.RED)
    assert len(frames) == state.round
    assert len(state.strategy_tokens_remaining) == 5 - state.round
    assert not set(state.dead_cells) & set(runner.env.reveal_turrets())

    for frame in frames:
        assert frame.monitor is not None and frame.monitor.ok
        decision = frame.red_decision
        assert len({a.turret_index for a in decision.actions}) == len(decision.actions)
        assert len(decision.actions) <= len(decision.strategy_token)
        assert all(r.ok for r in frame.kill_results)


def test_red_win_means_five_rounds():
    for seed in range(10):
        runner = GameRunner(create_default_scenario(seed=seed))
        runner.run_episode()
        if runner.env.winner == Team.RED:
            assert runner.env.round == 5
            assert len(runner.state.locks_history) == 5


def test_play_round_after_game_over_raises():
    runner = GameRunner(create_default_scenario(seed=5))
    runner.run_episode()
    with pytest.raises(RuntimeError):
        runner.play_round()


def test_frame_serialises():
    runner = GameRunner(create_default_scenario(seed=8))
    data = runner.play_round().to_dict()
    assert data["round"] == 1
    assert data["red_decision"]["strategy_token"] is not None
    assert "turrets" not in data["state"]
    assert any(e["type"] == "TOKEN_SPENT" for e in data["events"])


def test_simple_agents_from_specs():
    scenario = Scenario(
        turrets=[(0, 0), (4, 4), (1, 3)],
        seed=2,
        agents=[
            AgentSpec(type="red_simple", team=Team.RED, init_params={"seed": 2}),
            AgentSpec(type="blue_simple", team=Team.BLUE),
        ],
    )
    runner = GameRunner(scenario)
    runner.run_episode()
    assert runner.done
    assert runner.red_agent.name == "RedSimpleAgent"


def test_token_mode_off_episode():
    scenario = create_default_scenario(seed=6)
    scenario.strategy_tokens = None
    runner = GameRunner(scenario)
    frames = runner.run_episode()
    assert runner.done
    assert all(len(f.red_decision.actions) == 1 for f in frames)
    assert runner.state.strategy_tokens_remaining is None


def test_apply_red_decision_routes_calls(token_env, plain_env):
    results = apply_red_decision(token_env, RedDecision(actions=[], strategy_token="10"))
    assert results[0].ok
    assert token_env.get_public_state().kill_phase_closed

    results = apply_red_decision(plain_env, RedDecision(actions=[]))
    assert results == []


def test_extract_events_reports_kills_and_game_over(plain_env, turrets):
    before = plain_env.get_public_state()
    plain_env.kill(0, (0, 1), 0)
    plain_env.monitor(turrets)
    events = extract_events(prev_state=before, state=plain_env.get_public_state())
    kinds = [e["type"] for e in events]
    assert kinds == ["TARGET_KILLED", "LOCKS_SUBMITTED", "GAME_OVER"]
    assert events[-1]["winner"] == "blue"


def test_game_log_export_and_save(tmp_path):
    env = HiddenStationsEnv(turrets=[(0, 0), (4, 4), (1, 3)], strategy_tokens=["110", "10", "11", "10", "00"])
    env.kill_batch([{"turret_index": 0, "target": [0, 2], "mode": 0}], "110")
    env.monitor([(0, 0), (4, 4), (1, 3)])

    text = export_game_log(env)
    assert "Turrets: turret0=(0,0), turret1=(4,4), turret2=(1,3)" in text
    assert "Initial strategy tokens: 110, 10, 11, 10, 00" in text
    assert "target=(0,2)" in text
    assert "hit: true" in text
    assert "round 1: (0,0), (4,4), (1,3)" in text
    assert "Winner: blue" in text
    assert "Rounds played: 1" in text

    path = save_game_log(env, tmp_path)
    assert path.parent == tmp_path
    assert "Winner: blue" in path.read_text(encoding="utf-8")


def test_run_multiple_games():
    results = run_multiple_games(3, base_seed=10)
    assert [r.seed for r in results] == [10, 11, 12]
    assert all(r.winner is not None for r in results)
    assert all(1 <= r.rounds <= 5 for r in results)
