from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .grid import Grid, Position


@dataclass(frozen=True)
class RevealCell:
    pos: Position


@dataclass(frozen=True)
class ToggleFlag:
    pos: Position


@dataclass(frozen=True)
class ClearFlags:
    # Clears the flag on the current tile only
    pos: Position


@dataclass(frozen=True)
class Surrender:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int

    @classmethod
    def by(cls, grid: Grid, dx: int = 0, dy: int = 0) -> 'Resize':
        return cls(grid.width + dx, grid.height + dy)


def percent_step_target(mine_count: int, size: int, sign: int) -> int:
    """Mine count after one percent step up (``sign > 0``) or down.

    The step is one hundredth of the cell count (at least 1) and the result
    snaps to the next multiple of that step.
    """
    step = max(1, size // 100)
    if sign > 0:
        base = mine_count + 1
    else:
        base = max(0, mine_count - step)
    return -(-base // step) * step


@dataclass(frozen=True)
class ChangeMineCount:
    delta: int

    @classmethod
    def percent(cls, grid: Grid, sign: int) -> 'ChangeMineCount':
        target = percent_step_target(grid.mine_count, grid.size, sign)
        return cls(target - grid.mine_count)


@dataclass(frozen=True)
class Restart:
    pass


Command = Union[RevealCell, ToggleFlag, ClearFlags, Surrender, Resize, ChangeMineCount, Restart]

STRUCTURAL_COMMANDS = (Resize, ChangeMineCount, Restart)
