import numpy as np
import pytest

from mnswpr.errors import InvalidCommand, MineCountUnsatisfiable, OutOfBounds
from mnswpr.generator import count_neighbor_mines, generate, place_mines, safe_zone
from mnswpr.grid import Grid, GenerationState, MINE


def mines_of(grid):
    return {pos for pos, c in grid.iter_cells() if c.is_mine}


def test_generate_places_exact_count_outside_safe_zone():
    g = Grid.create(9, 9, 10)
    generate(g, (4, 4), np.random.default_rng(1))
    assert g.generation_state is GenerationState.GENERATED
    assert g.placed_mine_count() == 10
    assert not mines_of(g) & safe_zone(g, (4, 4))
    assert g.cell_at((4, 4)).adjacent_mine_count == 0


def test_safe_zone_is_clamped_at_corner():
    g = Grid.create(9, 9, 10)
    assert safe_zone(g, (0, 0)) == {(0, 0), (1, 0), (0, 1), (1, 1)}
    assert len(safe_zone(g, (4, 0))) == 6
    assert len(safe_zone(g, (4, 4))) == 9


@pytest.mark.parametrize('seed', range(15))
def test_first_click_always_zero(seed):
    rng = np.random.default_rng(seed)
    g = Grid.create(8, 8, 30)
    origin = (int(rng.integers(8)), int(rng.integers(8)))
    generate(g, origin, rng)
    assert g.placed_mine_count() == 30
    assert not g.cell_at(origin).is_mine
    assert g.cell_at(origin).adjacent_mine_count == 0


def test_same_seed_same_layout():
    a = Grid.create(16, 16, 40)
    b = Grid.create(16, 16, 40)
    generate(a, (3, 3), np.random.default_rng(7))
    generate(b, (3, 3), np.random.default_rng(7))
    assert mines_of(a) == mines_of(b)


def test_dense_grid_falls_back_to_origin_only():
    g = Grid.create(3, 3, 5)
    generate(g, (1, 1), np.random.default_rng(0))
    assert g.placed_mine_count() == 5
    assert not g.cell_at((1, 1)).is_mine


def test_fully_packed_grid():
    g = Grid.create(2, 2, 3)
    generate(g, (0, 0), np.random.default_rng(0))
    assert mines_of(g) == {(1, 0), (0, 1), (1, 1)}
    assert g.cell_at((0, 0)).adjacent_mine_count == 3


def test_unsatisfiable_mine_count():
    g = Grid.create(2, 2, 3)
    g.mine_count = 4
    with pytest.raises(MineCountUnsatisfiable):
        generate(g, (0, 0), np.random.default_rng(0))
    assert g.generation_state is GenerationState.PENDING


def test_generate_only_once():
    g = Grid.create(5, 5, 3)
    generate(g, (0, 0), np.random.default_rng(0))
    with pytest.raises(InvalidCommand):
        generate(g, (0, 0), np.random.default_rng(0))


def test_generate_rejects_out_of_bounds_origin():
    g = Grid.create(5, 5, 3)
    with pytest.raises(OutOfBounds):
        generate(g, (5, 0), np.random.default_rng(0))


def test_zero_mines():
    g = Grid.create(4, 4, 0)
    generate(g, (2, 2), np.random.default_rng(0))
    assert g.is_generated
    assert all(c.adjacent_mine_count == 0 for _, c in g.iter_cells())


def test_place_mines_counts_and_sentinel():
    g = Grid.create(3, 3, 1)
    place_mines(g, [(2, 2)])
    assert g.cell_at((2, 2)).adjacent_mine_count == MINE
    assert g.cell_at((1, 1)).adjacent_mine_count == 1
    assert g.cell_at((2, 1)).adjacent_mine_count == 1
    assert g.cell_at((0, 0)).adjacent_mine_count == 0
    assert g.mine_count == 1


def test_count_neighbor_mines_excludes_self():
    mask = np.zeros((3, 3), dtype=bool)
    mask[1, 1] = True
    counts = count_neighbor_mines(mask)
    assert counts[1, 1] == 0
    assert counts.sum() == 8
    mask[0, 0] = True
    counts = count_neighbor_mines(mask)
    assert counts[1, 1] == 1
    assert counts[0, 1] == 2
    assert counts[2, 2] == 1
