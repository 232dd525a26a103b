from itertools import combinations, product

from agents import DeductionAgent
from agents.deduction_agent import anomaly_detected
from agents.deduction_agent.hypotheses import (
    enumerate_hypotheses,
    explainer_sets,
    filter_by_dead,
    filter_by_locks,
    first_non_empty,
    score,
)
from env import HiddenStationsEnv
from env.core.records import DeadEvent, LockEvent
from env.core.types import AttackMode, CENTER, Team
from env.world import Grid, PublicState

GRID = Grid(5)


def make_state(dead_history=(), locks_history=(), last_used_token_len=None, round_number=1):
    dead = sorted({CENTER} | {e.target for e in dead_history})
    last_locks = locks_history[-1].locks if locks_history else ()
    return PublicState(
        grid_size=5,
        round=round_number,
        last_locks=tuple(last_locks),
        dead_cells=tuple(dead),
        game_over=False,
        winner=None,
        strategy_tokens_remaining=None,
        current_round_token=None,
        turrets_locked=(False, False, False),
        turrets_used_this_round=(False, False, False),
        dead_history=tuple(dead_history),
        locks_history=tuple(locks_history),
        last_used_token_len=last_used_token_len,
        kill_phase_closed=True,
    )


def test_hypothesis_space_excludes_center_and_dead():
    hypotheses = enumerate_hypotheses(GRID, [CENTER, (0, 0)])
    assert len(hypotheses) == len(list(combinations(range(23), 3)))
    assert all(GRID.key((0, 0)) not in h and GRID.key(CENTER) not in h for h in hypotheses)
    assert hypotheses[0] == (GRID.key((0, 1)), GRID.key((0, 2)), GRID.key((0, 3)))


def test_dead_filter_keeps_only_explaining_layouts():
    event = DeadEvent(round=1, target=(0, 0), mode=AttackMode.ROUND)
    explainers = explainer_sets(GRID, [event])
    kept = filter_by_dead(enumerate_hypotheses(GRID, [CENTER, (0, 0)]), explainers)
    neighbours = {GRID.key(c) for c in [(0, 1), (1, 0), (1, 1)]}
    assert kept
    assert all(neighbours & set(h) for h in kept)


def test_lock_filter_is_order_free():
    hypotheses = [(1, 2, 3), (1, 2, 4)]
    assert filter_by_locks(hypotheses, [frozenset({3, 2, 1})]) == [(1, 2, 4)]


def test_score_counts_possible_shooters():
    events = [
        DeadEvent(round=1, target=(0, 2), mode=AttackMode.CROSS),
        DeadEvent(round=1, target=(3, 4), mode=AttackMode.ROUND),
    ]
    explainers = explainer_sets(GRID, events)
    layout = tuple(GRID.key(c) for c in [(0, 0), (2, 3), (4, 4)])
    # (0,0) can have fired the cross kill, (2,3) and (4,4) the round kill
    assert score(layout, explainers) == 3


def test_first_non_empty():
    assert first_non_empty([("a", []), ("b", [(1, 2, 3)]), ("c", [(4, 5, 6)])]) == ("b", [(1, 2, 3)])
    assert first_non_empty([("a", [])]) == (None, [])


def test_opening_guess_is_first_layout():
    locks, meta = DeductionAgent().get_actions(make_state())
    assert locks == [(0, 0), (0, 1), (0, 2)]
    assert meta["stage"] == "filtered"
    assert meta["hypotheses_total"] == 2024


def test_guess_explains_every_kill():
    env = HiddenStationsEnv(turrets=[(0, 0), (4, 4), (1, 3)], strategy_tokens=["110", "10", "11", "10", "00"])
    env.kill_batch(
        [
            {"turret_index": 0, "target": [0, 2], "mode": 0},
            {"turret_index": 1, "target": [3, 4], "mode": 1},
            {"turret_index": 2, "target": [2, 3], "mode": 1},
        ],
        strategy_token="110",
    )
    state = env.get_public_state()
    locks, meta = DeductionAgent().get_actions(state)

    assert len(set(locks)) == 3
    assert not set(locks) & set(state.dead_cells)
    explainers = explainer_sets(GRID, state.dead_history)
    assert all(GRID.keys(locks) & cells for cells in explainers)
    assert meta["after_dead_filter"] < meta["hypotheses_total"]


def test_refuted_lock_is_not_repeated_and_anomaly_prefers_overlap():
    env = HiddenStationsEnv(turrets=[(4, 0), (4, 4), (3, 1)], strategy_tokens=["110", "10", "11", "10", "00"])
    agent = DeductionAgent()

    env.consume_token("110")
    first, _ = agent.get_actions(env.get_public_state())
    assert env.monitor(first).winner is None

    env.consume_token("10")
    state = env.get_public_state()
    assert anomaly_detected(state)

    second, meta = agent.get_actions(state)
    assert set(second) != set(first)
    assert set(second) & set(first)
    assert second == [(0, 0), (0, 1), (0, 3)]
    assert meta["anomaly"] is True


def test_no_anomaly_without_previous_locks_or_token_length():
    assert not anomaly_detected(make_state(last_used_token_len=3))
    locks = (LockEvent(round=1, locks=((0, 0), (0, 1), (0, 2))),)
    assert not anomaly_detected(make_state(locks_history=locks, round_number=2))
    assert anomaly_detected(make_state(locks_history=locks, last_used_token_len=1, round_number=2))


def test_unexplainable_history_relaxes_to_full_space():
    # Four round kills in the corners need four distinct shooters.
    events = [
        DeadEvent(round=1, target=corner, mode=AttackMode.ROUND)
        for corner in [(0, 0), (0, 4), (4, 0), (4, 4)]
    ]
    state = make_state(dead_history=events, last_used_token_len=4)
    locks, meta = DeductionAgent().get_actions(state)

    assert meta["after_dead_filter"] == 0
    assert meta["stage"] == "no_filters"
    assert len(set(locks)) == 3
    assert not set(locks) & set(state.dead_cells)
    assert score(tuple(sorted(GRID.keys(locks))), explainer_sets(GRID, events)) == 3


def test_anomaly_with_dead_lock_cells_falls_back_to_lock_filter():
    # The refuted lock sits on cells that were killed, so no live layout overlaps it.
    events = [
        DeadEvent(round=1, target=cell, mode=AttackMode.ROUND)
        for cell in [(0, 0), (0, 1), (0, 2)]
    ]
    lock = LockEvent(round=1, locks=((0, 0), (0, 1), (0, 2)))
    state = make_state(dead_history=events, locks_history=(lock,), last_used_token_len=1, round_number=2)
    assert anomaly_detected(state)

    locks, meta = DeductionAgent().get_actions(state)

    assert meta["stage"] == "locks_only"
    assert meta["anomaly"] is True
    assert meta["after_lock_filter"] == meta["after_dead_filter"] > 0
    assert meta["candidates"] == meta["after_lock_filter"]
    assert not set(locks) & set(state.dead_cells)
    keys = set(GRID.keys(locks))
    assert all(keys & cells for cells in explainer_sets(GRID, events))


def test_every_consistent_layout_already_locked_falls_back_to_dead_filter():
    # Three round kills in separate corners: one shooter per corner neighbourhood.
    events = [
        DeadEvent(round=1, target=corner, mode=AttackMode.ROUND)
        for corner in [(0, 0), (0, 4), (4, 0)]
    ]
    neighbourhoods = [
        [(0, 1), (1, 0), (1, 1)],
        [(0, 3), (1, 3), (1, 4)],
        [(3, 0), (3, 1), (4, 1)],
    ]
    submitted = tuple(
        LockEvent(round=1, locks=layout) for layout in product(*neighbourhoods)
    )
    state = make_state(dead_history=events, locks_history=submitted, round_number=5)
    assert not anomaly_detected(state)

    locks, meta = DeductionAgent().get_actions(state)

    assert meta["after_dead_filter"] == 27
    assert meta["after_lock_filter"] == 0
    assert meta["stage"] == "dead_only"
    assert meta["candidates"] == 27
    assert locks == [(0, 1), (0, 3), (3, 0)]


def test_agent_is_blue_only():
    agent = DeductionAgent()
    assert agent.team == Team.BLUE
    try:
        DeductionAgent(team=Team.RED)
    except ValueError:
        pass
    else:
        raise AssertionError("DeductionAgent accepted the red team")
