from __future__ import annotations
from typing import Iterable, Set

import numpy as np

from .errors import InvalidCommand, MineCountUnsatisfiable
from .grid import Grid, GenerationState, Position, MINE


def safe_zone(grid: Grid, origin: Position) -> Set[Position]:
    x, y = origin
    return {origin, *grid.neighbors(x, y)}


def count_neighbor_mines(mine_mask: np.ndarray) -> np.ndarray:
    rows, cols = mine_mask.shape
    padded = np.pad(mine_mask.astype(np.int8), 1)
    counts = np.zeros((rows, cols), dtype=np.int8)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            counts += padded[1 + dy:1 + dy + rows, 1 + dx:1 + dx + cols]
    return counts


def generate(grid: Grid, origin: Position, rng: np.random.Generator) -> None:
    """Place ``grid.mine_count`` mines away from ``origin`` and its neighbours.

    When the grid is too dense to keep the whole 3x3 zone clear only the
    origin itself is kept free. Counts are filled in afterwards and the
    grid becomes GENERATED.
    """
    if grid.generation_state is not GenerationState.PENDING:
        raise InvalidCommand('mines have already been placed on this grid')
    grid.cell_at(origin)

    excluded = safe_zone(grid, origin)
    if grid.size - len(excluded) < grid.mine_count:
        excluded = {origin}
    candidates = [p for p in grid.positions() if p not in excluded]
    if len(candidates) < grid.mine_count:
        raise MineCountUnsatisfiable(
            f'cannot place {grid.mine_count} mines on {len(candidates)} free cells')

    picks = rng.choice(len(candidates), size=grid.mine_count, replace=False) if grid.mine_count else []
    place_mines(grid, [candidates[int(i)] for i in picks])


def place_mines(grid: Grid, mines: Iterable[Position]) -> None:
    """Lay out mines at exact positions and compute every adjacency count."""
    mine_mask = np.zeros((grid.height, grid.width), dtype=bool)
    for pos in mines:
        grid.cell_at(pos)
        x, y = pos
        mine_mask[y, x] = True
    counts = count_neighbor_mines(mine_mask)
    for (x, y), c in grid.iter_cells():
        c.is_mine = bool(mine_mask[y, x])
        c.adjacent_mine_count = MINE if c.is_mine else int(counts[y, x])
    grid.mine_count = int(mine_mask.sum())
    grid.generation_state = GenerationState.GENERATED
