from __future__ import annotations
import argparse
import csv
import sys
from pathlib import Path
from typing import List, Optional, Union

from mnswpr.commands import (
    Command, RevealCell, ToggleFlag, ClearFlags, Surrender, Resize, ChangeMineCount, Restart,
)
from mnswpr.engine import Engine, new_game
from mnswpr.errors import EngineError, InvalidCommand
from mnswpr.grid import MIN_SIZE, MAX_SIZE, max_mines_for
from mnswpr.snapshot import render_ascii

HELP = """\
x y | o x y   reveal          f x y | z x y   toggle flag     c x y   clear flag
+ / -         mines +-1       n / p           mines +-1%      k       surrender
W / w         width +-1       H / h           height +-1      r       restart
u             undo            y               redo            q       quit"""

LOG_HEADER = ['step', 'input', 'status', 'revealed', 'width', 'height', 'mines', 'error']

Action = Union[Command, str]


def _coords(parts: List[str]) -> tuple:
    if len(parts) != 2:
        raise InvalidCommand('expected two coordinates: x y')
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise InvalidCommand(f'coordinates must be integers, got {" ".join(parts)}') from None


def parse_line(line: str, engine: Engine) -> Action:
    """Translate one input line into a Command or one of 'undo', 'redo', 'quit'."""
    parts = line.split()
    if not parts:
        raise InvalidCommand('empty input')
    key, rest = parts[0], parts[1:]
    grid = engine.grid
    if key.lstrip('-').isdigit():
        return RevealCell(_coords(parts))
    if key == 'o':
        return RevealCell(_coords(rest))
    if key in ('f', 'z'):
        return ToggleFlag(_coords(rest))
    if key == 'c':
        return ClearFlags(_coords(rest))
    if rest:
        raise InvalidCommand(f'{key!r} takes no arguments')
    simple = {
        'k': Surrender(),
        'r': Restart(),
        '+': ChangeMineCount(1),
        '-': ChangeMineCount(-1),
        'W': Resize.by(grid, dx=1),
        'w': Resize.by(grid, dx=-1),
        'H': Resize.by(grid, dy=1),
        'h': Resize.by(grid, dy=-1),
    }
    if key in simple:
        return simple[key]
    if key == 'n':
        return ChangeMineCount.percent(grid, 1)
    if key == 'p':
        return ChangeMineCount.percent(grid, -1)
    if key in ('u', 'y', 'q'):
        return {'u': 'undo', 'y': 'redo', 'q': 'quit'}[key]
    raise InvalidCommand(f'unknown input {line.strip()!r}')


def clamp_args(width: int, height: int, mines: int) -> tuple:
    width = max(MIN_SIZE, min(width, MAX_SIZE))
    height = max(MIN_SIZE, min(height, MAX_SIZE))
    mines = max(0, min(mines, max_mines_for(width, height)))
    return width, height, mines


def append_csv_row(csv_path: Path, row: dict, header_order: list[str]):
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not csv_path.exists()
    with csv_path.open('a', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=header_order)
        if write_header:
            writer.writeheader()
        writer.writerow(row)


def step(engine: Engine, line: str) -> Optional[str]:
    """Run one input line. Returns 'quit' when the session should end."""
    action = parse_line(line, engine)
    if action == 'quit':
        return action
    if action == 'undo':
        effect = engine.undo()
    elif action == 'redo':
        effect = engine.redo()
    else:
        effect = engine.execute(action)
    return 'reshaped' if effect.reshaped else None


def main(argv=None):
    parser = argparse.ArgumentParser(description='Command line minesweeper')
    parser.add_argument('--width', type=int, default=32)
    parser.add_argument('--height', type=int, default=16)
    parser.add_argument('--mines', type=int, default=100)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--log_csv', type=str, default='', help='Append one row per input to this CSV file')
    args = parser.parse_args(argv)

    width, height, mines = clamp_args(args.width, args.height, args.mines)
    if (width, height, mines) != (args.width, args.height, args.mines):
        print(f"[play] Clamped board to {width}x{height} with {mines} mines")
    engine = new_game(width, height, mines, rng_seed=(None if args.seed < 0 else args.seed))
    log_path = Path(args.log_csv) if args.log_csv else None

    print(HELP)
    print()
    print(render_ascii(engine.snapshot()))
    n = 0
    for line in sys.stdin:
        if not line.strip():
            continue
        n += 1
        error = ''
        try:
            result = step(engine, line)
        except EngineError as e:
            result = None
            error = str(e)
            print(f"[play] {type(e).__name__}: {e}")
        snap = engine.snapshot()
        if log_path is not None:
            append_csv_row(log_path, {
                'step': n, 'input': line.strip(), 'status': snap.status.value,
                'revealed': snap.revealed_count, 'width': snap.width, 'height': snap.height,
                'mines': snap.mine_count, 'error': error,
            }, LOG_HEADER)
        if result == 'quit':
            break
        if result == 'reshaped':
            print(f"[play] Board is now {snap.width}x{snap.height} with {snap.mine_count} mines")
        print(render_ascii(snap))
        print(f"[play] {snap.status.value} | mines left {snap.mines_remaining} | flags {snap.flags_placed}")
        print()

    print(engine.status.value.upper())


if __name__ == '__main__':
    main()
