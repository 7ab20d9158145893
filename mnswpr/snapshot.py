from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from .grid import Grid, GenerationState
from .state import GameStatus


@dataclass(frozen=True)
class CellView:
    is_mine: bool
    is_flagged: bool
    is_revealed: bool
    adjacent_mine_count: int


@dataclass(frozen=True)
class Snapshot:
    width: int
    height: int
    mine_count: int
    status: GameStatus
    generation_state: GenerationState
    cells: Tuple[Tuple[CellView, ...], ...]
    flags_placed: int
    revealed_count: int
    can_undo: bool = False
    can_redo: bool = False

    @property
    def mines_remaining(self) -> int:
        # Negative only when the mine count was lowered under existing flags
        return self.mine_count - self.flags_placed

    def cell(self, x: int, y: int) -> CellView:
        return self.cells[y][x]

    def to_arrays(self) -> Dict[str, np.ndarray]:
        shape = (self.height, self.width)
        mines = np.zeros(shape, dtype=bool)
        flagged = np.zeros(shape, dtype=bool)
        revealed = np.zeros(shape, dtype=bool)
        adjacent = np.zeros(shape, dtype=np.int8)
        for y, row in enumerate(self.cells):
            for x, c in enumerate(row):
                mines[y, x] = c.is_mine
                flagged[y, x] = c.is_flagged
                revealed[y, x] = c.is_revealed
                adjacent[y, x] = c.adjacent_mine_count
        return {'mines': mines, 'flagged': flagged, 'revealed': revealed, 'adjacent': adjacent}


def take_snapshot(grid: Grid, status: GameStatus, can_undo: bool = False, can_redo: bool = False) -> Snapshot:
    cells = tuple(
        tuple(CellView(c.is_mine, c.is_flagged, c.is_revealed, c.adjacent_mine_count) for c in row)
        for row in grid.cells
    )
    return Snapshot(
        width=grid.width,
        height=grid.height,
        mine_count=grid.mine_count,
        status=status,
        generation_state=grid.generation_state,
        cells=cells,
        flags_placed=grid.flagged_count(),
        revealed_count=grid.revealed_count(),
        can_undo=can_undo,
        can_redo=can_redo,
    )


def render_ascii(snapshot: Snapshot) -> str:
    rows = []
    for row_cells in snapshot.cells:
        row = []
        for c in row_cells:
            if c.is_flagged:
                row.append('F')
            elif not c.is_revealed:
                row.append('#')
            elif c.is_mine:
                row.append('*')
            elif c.adjacent_mine_count == 0:
                row.append('.')
            else:
                row.append(str(c.adjacent_mine_count))
        rows.append(' '.join(row))
    return '\n'.join(rows)
