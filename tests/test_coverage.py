import itertools

from env.core.types import AttackMode, CENTER
from env.mechanics.coverage import coverage, coverage_keys, is_hit, resolve_hit
from env.world import Grid

GRID = Grid(5)
CELLS = list(GRID.cells())


def test_cross_covers_row_and_column_without_turret_cell():
    cells = coverage((1, 3), AttackMode.CROSS)
    assert len(cells) == 8
    assert (1, 3) not in cells
    assert all(c[0] == 1 or c[1] == 3 for c in cells)


def test_round_covers_ring_clipped_at_edges():
    assert len(coverage(CENTER, AttackMode.ROUND)) == 8
    assert coverage((0, 0), AttackMode.ROUND) == {(0, 1), (1, 0), (1, 1)}
    assert len(coverage((0, 2), AttackMode.ROUND)) == 5


def test_hit_predicate_matches_coverage():
    for turret, target in itertools.product(CELLS, CELLS):
        if turret == target:
            continue
        for mode in AttackMode:
            assert is_hit(turret, target, mode) == (target in coverage(turret, mode))


def test_coverage_is_symmetric():
    for a, b in itertools.product(CELLS, CELLS):
        for mode in AttackMode:
            assert (b in coverage(a, mode)) == (a in coverage(b, mode))


def test_coverage_keys_match_coverage():
    for cell in CELLS:
        for mode in AttackMode:
            assert coverage_keys(GRID, cell, mode) == frozenset(GRID.key(c) for c in coverage(cell, mode))


def test_cross_on_own_cell_is_a_miss():
    assert is_hit((1, 1), (1, 1), AttackMode.CROSS)
    killed, reason = resolve_hit((1, 1), (1, 1), AttackMode.CROSS, [(1, 1)])
    assert not killed
    assert "own cell" in reason


def test_round_never_hits_own_cell():
    assert not is_hit((1, 1), (1, 1), AttackMode.ROUND)


def test_friendly_turret_cell_is_a_miss():
    turrets = [(0, 0), (0, 4), (3, 3)]
    killed, reason = resolve_hit((0, 0), (0, 4), AttackMode.CROSS, turrets)
    assert not killed
    assert "friendly" in reason


def test_resolve_hit_reports_geometry():
    killed, reason = resolve_hit((4, 4), (3, 4), AttackMode.ROUND, [(4, 4)])
    assert killed
    assert reason.startswith("round:")
    killed, reason = resolve_hit((0, 0), (3, 3), AttackMode.CROSS, [(0, 0)])
    assert not killed
    assert "same_row=False same_col=False" in reason
