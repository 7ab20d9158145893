from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

import numpy as np

from .commands import (
    STRUCTURAL_COMMANDS, Command, RevealCell, ToggleFlag, ClearFlags, Surrender, Resize, Restart,
)
from .errors import InvalidCommand, NothingToRedo, NothingToUndo
from .generator import generate
from .grid import Grid, Position
from .reveal import RevealOutcome, reveal
from .state import GameStatus, ensure_playable, status_after_reveal

# (is_flagged, is_revealed)
CellBits = Tuple[bool, bool]


@dataclass(frozen=True)
class CellChange:
    pos: Position
    before: CellBits
    after: CellBits


@dataclass(frozen=True)
class UndoEntry:
    command: Command
    changes: Tuple[CellChange, ...]
    status_before: GameStatus
    status_after: GameStatus

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(ch.pos for ch in self.changes)


class History:
    """Linear undo/redo stacks of UndoEntry.

    Recording a new entry drops anything that could have been redone. With a
    ``limit`` the oldest undo entries fall off once it is reached.
    """

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self._undo: Deque[UndoEntry] = deque(maxlen=limit)
        self._redo: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def peek_undo(self) -> Optional[UndoEntry]:
        return self._undo[-1] if self._undo else None

    def peek_redo(self) -> Optional[UndoEntry]:
        return self._redo[-1] if self._redo else None

    def record(self, entry: UndoEntry) -> None:
        self._undo.append(entry)
        self._redo.clear()

    def pop_undo(self) -> UndoEntry:
        if not self._undo:
            raise NothingToUndo('nothing to undo')
        entry = self._undo.pop()
        self._redo.append(entry)
        return entry

    def pop_redo(self) -> UndoEntry:
        if not self._redo:
            raise NothingToRedo('nothing to redo')
        entry = self._redo.pop()
        self._undo.append(entry)
        return entry

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


def _bits(grid: Grid, pos: Position) -> CellBits:
    c = grid.cell_at(pos)
    return (c.is_flagged, c.is_revealed)


def _write(grid: Grid, pos: Position, bits: CellBits) -> None:
    c = grid.cell_at(pos)
    c.is_flagged, c.is_revealed = bits


def _apply_reveal(grid: Grid, status: GameStatus, pos: Position, rng: np.random.Generator):
    target = grid.cell_at(pos)
    if target.is_flagged or target.is_revealed:
        outcome = RevealOutcome()
    else:
        if not grid.is_generated:
            generate(grid, pos, rng)
        outcome = reveal(grid, pos)
    changes = tuple(CellChange(p, (False, False), (False, True)) for p in outcome.revealed)
    return changes, status_after_reveal(grid, status, outcome)


def _apply_surrender(grid: Grid, status: GameStatus):
    if status is not GameStatus.IN_PROGRESS:
        raise InvalidCommand('there is no game in progress to surrender')
    changes = []
    for pos, c in grid.iter_cells():
        if c.is_revealed:
            continue
        changes.append(CellChange(pos, (c.is_flagged, False), (False, True)))
        c.is_flagged = False
        c.is_revealed = True
    return tuple(changes), GameStatus.SURRENDERED


def _apply_structural(grid: Grid, status: GameStatus, command: Command) -> GameStatus:
    keep_flags = not status.is_terminal
    if isinstance(command, Resize):
        grid.reset(command.width, command.height, grid.mine_count, keep_flags=keep_flags)
        return GameStatus.NOT_STARTED
    if isinstance(command, Restart):
        grid.reset(grid.width, grid.height, grid.mine_count, keep_flags=False)
        return GameStatus.NOT_STARTED
    target = max(0, min(grid.mine_count + command.delta, grid.max_mines))
    if grid.is_generated or status.is_terminal:
        grid.reset(grid.width, grid.height, target, keep_flags=keep_flags)
        return GameStatus.NOT_STARTED
    grid.mine_count = target
    return status


def apply(grid: Grid, status: GameStatus, command: Command,
          rng: np.random.Generator) -> Tuple[Optional[UndoEntry], GameStatus]:
    """Run ``command`` against ``grid``.

    Returns the entry that reverses it, or None for commands that reshape
    the board and therefore cannot be undone.
    """
    if isinstance(command, STRUCTURAL_COMMANDS):
        return None, _apply_structural(grid, status, command)

    ensure_playable(status)
    if isinstance(command, RevealCell):
        changes, new_status = _apply_reveal(grid, status, command.pos, rng)
    elif isinstance(command, ToggleFlag):
        flagged, revealed = _bits(grid, command.pos)
        if revealed:
            raise InvalidCommand(f'{command.pos} is already revealed')
        if not flagged and grid.flagged_count() >= grid.mine_count:
            raise InvalidCommand(f'all {grid.mine_count} flags are already placed')
        changes = (CellChange(command.pos, (flagged, False), (not flagged, False)),)
        _write(grid, command.pos, (not flagged, False))
        new_status = status
    elif isinstance(command, ClearFlags):
        flagged, revealed = _bits(grid, command.pos)
        changes = ()
        if flagged:
            changes = (CellChange(command.pos, (True, False), (False, False)),)
            _write(grid, command.pos, (False, False))
        new_status = status
    elif isinstance(command, Surrender):
        changes, new_status = _apply_surrender(grid, status)
    else:
        raise InvalidCommand(f'unknown command {command!r}')
    return UndoEntry(command, changes, status, new_status), new_status


def undo(grid: Grid, history: History) -> GameStatus:
    entry = history.pop_undo()
    for ch in reversed(entry.changes):
        _write(grid, ch.pos, ch.before)
    return entry.status_before


def redo(grid: Grid, history: History) -> GameStatus:
    entry = history.pop_redo()
    for ch in entry.changes:
        _write(grid, ch.pos, ch.after)
    return entry.status_after
