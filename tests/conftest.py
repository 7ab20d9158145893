"""
Shared fixtures: seeded engines and boards with hand placed mines.
"""
import pytest

from mnswpr.engine import Engine, new_game
from mnswpr.generator import place_mines
from mnswpr.grid import Grid

# Column x=2 is a wall of mines on a 5x5 board
WALL = [(2, y) for y in range(5)]


@pytest.fixture
def make_grid():
    def _make(width, height, mines):
        grid = Grid.create(width, height, len(mines))
        place_mines(grid, mines)
        return grid
    return _make


@pytest.fixture
def wall_grid(make_grid) -> Grid:
    return make_grid(5, 5, WALL)


@pytest.fixture
def wall_engine() -> Engine:
    engine = Engine(5, 5, len(WALL), seed=0)
    place_mines(engine.grid, WALL)
    return engine


@pytest.fixture
def beginner_engine() -> Engine:
    """9x9 with 10 mines, seed 1."""
    return new_game(9, 9, 10, rng_seed=1)
