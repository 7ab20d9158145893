from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from . import history as log
from .commands import Command
from .grid import Grid, Position
from .history import History
from .snapshot import Snapshot, take_snapshot
from .state import GameStatus


@dataclass(frozen=True)
class CommandEffect:
    changed: Tuple[Position, ...]
    status: GameStatus
    # Shape or mine layout was replaced; redraw everything
    reshaped: bool = False


class Engine:
    """Single-threaded board engine driven by one command at a time.

    All randomness comes from ``rng`` so a seeded engine replays exactly.
    Errors raised by a command leave the board untouched.
    """

    def __init__(self, width: int, height: int, mine_count: int,
                 seed: Optional[int] = None, rng: Optional[np.random.Generator] = None,
                 history_limit: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid = Grid.create(width, height, mine_count)
        self.status = GameStatus.NOT_STARTED
        self.history = History(limit=history_limit)

    def new_game(self, width: int, height: int, mine_count: int, seed: Optional[int] = None) -> Snapshot:
        grid = Grid.create(width, height, mine_count)
        if seed is not None:
            self.rng = np.random.default_rng(seed)
        self.grid = grid
        self.status = GameStatus.NOT_STARTED
        self.history.clear()
        return self.snapshot()

    def execute(self, command: Command) -> CommandEffect:
        entry, status = log.apply(self.grid, self.status, command, self.rng)
        self.status = status
        if entry is None:
            self.history.clear()
            return CommandEffect(changed=(), status=status, reshaped=True)
        self.history.record(entry)
        return CommandEffect(changed=entry.positions, status=status)

    def undo(self) -> CommandEffect:
        entry = self.history.peek_undo()
        self.status = log.undo(self.grid, self.history)
        return CommandEffect(changed=entry.positions, status=self.status)

    def redo(self) -> CommandEffect:
        entry = self.history.peek_redo()
        self.status = log.redo(self.grid, self.history)
        return CommandEffect(changed=entry.positions, status=self.status)

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.grid, self.status,
                             can_undo=self.history.can_undo, can_redo=self.history.can_redo)


def new_game(width: int, height: int, mine_count: int, rng_seed: Optional[int] = None) -> Engine:
    return Engine(width, height, mine_count, seed=rng_seed)
