from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from .errors import InvalidDimensions, InvalidMineCount, OutOfBounds

Position = Tuple[int, int]

MIN_SIZE = 2
MAX_SIZE = 256
MAX_DENSITY = 0.9
# Adjacency count reported by a mine once generated
MINE = -1

# Fixed visiting order, row above first
DIRS_8: Tuple[Position, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class GenerationState(Enum):
    PENDING = 'pending'
    GENERATED = 'generated'


@dataclass
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mine_count: int = 0


def max_mines_for(width: int, height: int) -> int:
    size = width * height
    return max(0, min(size - 2, int(size * MAX_DENSITY)))


def check_dimensions(width: int, height: int) -> None:
    if not (MIN_SIZE <= width <= MAX_SIZE and MIN_SIZE <= height <= MAX_SIZE):
        raise InvalidDimensions(
            f'{width}x{height} is outside {MIN_SIZE}..{MAX_SIZE} in either direction')


class Grid:
    """Rows of cells plus the mine count they are (or will be) generated with.

    The grid owns its cells. Resizing swaps the cell rows in place so that
    anything holding the Grid keeps a valid reference; the mine layout is
    always discarded and the grid goes back to PENDING.
    """

    def __init__(self, width: int, height: int, mine_count: int):
        check_dimensions(width, height)
        if mine_count < 0 or mine_count >= width * height:
            raise InvalidMineCount(
                f'mine count {mine_count} must be in 0..{width * height - 1} for a {width}x{height} grid')
        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.generation_state = GenerationState.PENDING
        self.cells: List[List[Cell]] = [[Cell() for _ in range(width)] for _ in range(height)]

    @classmethod
    def create(cls, width: int, height: int, mine_count: int) -> 'Grid':
        return cls(width, height, mine_count)

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def max_mines(self) -> int:
        return max_mines_for(self.width, self.height)

    @property
    def is_generated(self) -> bool:
        return self.generation_state is GenerationState.GENERATED

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, pos: Position) -> Cell:
        x, y = pos
        if not self.in_bounds(x, y):
            raise OutOfBounds(f'{pos} is outside the {self.width}x{self.height} grid')
        return self.cells[y][x]

    def neighbors(self, x: int, y: int) -> List[Position]:
        coords = []
        for dx, dy in DIRS_8:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                coords.append((nx, ny))
        return coords

    def positions(self) -> Iterable[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def iter_cells(self) -> Iterable[Tuple[Position, Cell]]:
        for y, row in enumerate(self.cells):
            for x, c in enumerate(row):
                yield (x, y), c

    def flagged_count(self) -> int:
        return sum(1 for _, c in self.iter_cells() if c.is_flagged)

    def revealed_count(self) -> int:
        return sum(1 for _, c in self.iter_cells() if c.is_revealed)

    def placed_mine_count(self) -> int:
        return sum(1 for _, c in self.iter_cells() if c.is_mine)

    def reset(self, width: int, height: int, mine_count: int, keep_flags: bool = True) -> None:
        """Replace the cells with a fresh PENDING layout of the given shape.

        Flags inside the region shared by the old and new shape survive when
        ``keep_flags`` is set; everything else starts hidden and mine free.
        """
        check_dimensions(width, height)
        mine_count = max(0, min(mine_count, max_mines_for(width, height)))
        fresh = [[Cell() for _ in range(width)] for _ in range(height)]
        if keep_flags:
            for y in range(min(height, self.height)):
                for x in range(min(width, self.width)):
                    fresh[y][x].is_flagged = self.cells[y][x].is_flagged
        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.cells = fresh
        self.generation_state = GenerationState.PENDING
