from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from .errors import InvalidCommand
from .grid import Grid, Position


@dataclass(frozen=True)
class RevealOutcome:
    revealed: Tuple[Position, ...] = ()
    hit_mine: bool = False


def reveal(grid: Grid, pos: Position) -> RevealOutcome:
    """Open ``pos`` and cascade through zero-count cells.

    Flagged and already open cells are left alone (empty outcome). The
    cascade uses an explicit stack, so board size never limits depth.
    """
    if not grid.is_generated:
        raise InvalidCommand('cannot reveal before mines are placed')
    start = grid.cell_at(pos)
    if start.is_flagged or start.is_revealed:
        return RevealOutcome()

    start.is_revealed = True
    if start.is_mine:
        return RevealOutcome(revealed=(pos,), hit_mine=True)

    revealed: List[Position] = [pos]
    stack = [pos] if start.adjacent_mine_count == 0 else []
    while stack:
        x, y = stack.pop()
        for nx, ny in grid.neighbors(x, y):
            c = grid.cells[ny][nx]
            if c.is_revealed or c.is_flagged:
                continue
            c.is_revealed = True
            revealed.append((nx, ny))
            if c.adjacent_mine_count == 0:
                stack.append((nx, ny))
    return RevealOutcome(revealed=tuple(revealed))


def all_safe_revealed(grid: Grid) -> bool:
    for row in grid.cells:
        for c in row:
            if not c.is_mine and not c.is_revealed:
                return False
    return True
