import numpy as np
import pytest

from mnswpr.commands import ClearFlags, RevealCell, ToggleFlag
from mnswpr.errors import InvalidCommand, NothingToRedo, NothingToUndo
from mnswpr.history import CellChange, History, UndoEntry, apply, redo, undo
from mnswpr.state import GameStatus

RNG = np.random.default_rng(0)


def bits(grid):
    return [(c.is_flagged, c.is_revealed) for _, c in grid.iter_cells()]


def entry(n):
    return UndoEntry(ToggleFlag((n, 0)), (), GameStatus.NOT_STARTED, GameStatus.NOT_STARTED)


def test_history_stacks_are_linear():
    h = History()
    assert not h.can_undo and not h.can_redo
    h.record(entry(0))
    h.record(entry(1))
    assert h.pop_undo() == entry(1)
    assert h.can_redo
    h.record(entry(2))
    assert not h.can_redo
    with pytest.raises(NothingToRedo):
        h.pop_redo()
    assert len(h) == 2


def test_history_limit_drops_oldest():
    h = History(limit=2)
    for n in range(3):
        h.record(entry(n))
    assert len(h) == 2
    assert h.pop_undo() == entry(2)
    assert h.pop_undo() == entry(1)
    with pytest.raises(NothingToUndo):
        h.pop_undo()


def test_reveal_entry_lists_opened_cells(wall_grid):
    e, status = apply(wall_grid, GameStatus.NOT_STARTED, RevealCell((0, 0)), RNG)
    assert status is GameStatus.IN_PROGRESS
    assert len(e.changes) == 10
    assert all(ch.before == (False, False) and ch.after == (False, True) for ch in e.changes)
    assert e.status_before is GameStatus.NOT_STARTED


def test_toggle_and_clear_flag_entries(wall_grid):
    e, _ = apply(wall_grid, GameStatus.NOT_STARTED, ToggleFlag((4, 4)), RNG)
    assert e.changes == (CellChange((4, 4), (False, False), (True, False)),)
    assert wall_grid.cell_at((4, 4)).is_flagged
    e, _ = apply(wall_grid, GameStatus.NOT_STARTED, ClearFlags((4, 4)), RNG)
    assert e.changes == (CellChange((4, 4), (True, False), (False, False)),)
    e, _ = apply(wall_grid, GameStatus.NOT_STARTED, ClearFlags((4, 4)), RNG)
    assert e.changes == ()


def test_flagging_revealed_cell_is_invalid(wall_grid):
    apply(wall_grid, GameStatus.NOT_STARTED, RevealCell((1, 1)), RNG)
    with pytest.raises(InvalidCommand):
        apply(wall_grid, GameStatus.IN_PROGRESS, ToggleFlag((1, 1)), RNG)


def test_undo_redo_restore_cells_and_status(wall_grid):
    h = History()
    before = bits(wall_grid)
    e, status = apply(wall_grid, GameStatus.NOT_STARTED, RevealCell((0, 0)), RNG)
    h.record(e)
    after = bits(wall_grid)

    assert undo(wall_grid, h) is GameStatus.NOT_STARTED
    assert bits(wall_grid) == before
    assert wall_grid.is_generated
    assert redo(wall_grid, h) is GameStatus.IN_PROGRESS
    assert bits(wall_grid) == after


def test_undo_on_empty_history(wall_grid):
    with pytest.raises(NothingToUndo):
        undo(wall_grid, History())
    with pytest.raises(NothingToRedo):
        redo(wall_grid, History())
