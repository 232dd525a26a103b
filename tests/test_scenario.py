import pytest

from agents import AgentSpec, AssignmentAgent, DeductionAgent, create_agent_from_spec, create_agents_for_scenario
from agents.registry import registered_agents, resolve_agent_class
from env import HiddenStationsEnv
from env.core.types import Team
from env.scenario import Scenario, create_default_scenario


def test_scenario_roundtrip_persist_and_load(tmp_path):
    scenario = Scenario(
        turrets=[(0, 0), (4, 4), (1, 3)],
        strategy_tokens=["1", "0", "11", "01", "00"],
        seed=123,
        max_rounds=5,
        agents=[
            AgentSpec(type="red_assignment", team=Team.RED, init_params={"seed": 123, "randomize_tokens": False}),
            AgentSpec(type="blue_deduction", team=Team.BLUE, name="Blue"),
        ],
    )
    path = scenario.save_json(tmp_path / "scenario.json")
    loaded = Scenario.load_json(path)

    assert loaded.to_dict() == scenario.to_dict()
    assert loaded.turrets == [(0, 0), (4, 4), (1, 3)]
    assert loaded.agent_for(Team.BLUE).name == "Blue"


def test_from_dict_accepts_lowercase_team_and_null_tokens():
    scenario = Scenario.from_dict({
        "strategy_tokens": None,
        "agents": [
            {"type": "red_simple", "team": "red"},
            {"type": "blue_simple", "team": "BLUE"},
        ],
    })
    assert scenario.strategy_tokens is None
    assert scenario.turrets is None
    assert [s.team for s in scenario.agents] == [Team.RED, Team.BLUE]

    env = HiddenStationsEnv.from_scenario(scenario)
    assert not env.get_public_state().token_mode


def test_clone_is_independent():
    scenario = create_default_scenario(seed=1)
    copy = scenario.clone()
    copy.strategy_tokens.append("1")
    assert len(scenario.strategy_tokens) == 5


def test_agent_for_requires_exactly_one_spec():
    with pytest.raises(ValueError):
        Scenario().agent_for(Team.RED)

    spec = AgentSpec(type="red_simple", team=Team.RED)
    with pytest.raises(ValueError):
        Scenario(agents=[spec, spec]).agent_for(Team.RED)


def test_default_scenario_builds_both_agents():
    agents = create_agents_for_scenario(create_default_scenario(seed=9, randomize_tokens=False))
    red = agents[Team.RED].agent
    assert isinstance(red, AssignmentAgent)
    assert red.seed == 9 and red.randomize_tokens is False
    assert isinstance(agents[Team.BLUE].agent, DeductionAgent)


def test_registry_resolves_keys_and_import_paths():
    assert {"red_assignment", "blue_deduction", "red_simple", "blue_simple"} <= set(registered_agents())
    assert resolve_agent_class("agents.deduction_agent.DeductionAgent") is DeductionAgent
    with pytest.raises(ValueError):
        resolve_agent_class("nope")


def test_agent_spec_team_mismatch_is_rejected():
    with pytest.raises(ValueError):
        create_agent_from_spec(AgentSpec(type="blue_deduction", team=Team.RED))
