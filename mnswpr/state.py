from __future__ import annotations
from enum import Enum

from .errors import GameOver
from .grid import Grid
from .reveal import RevealOutcome, all_safe_revealed


class GameStatus(Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    WON = 'won'
    LOST = 'lost'
    SURRENDERED = 'surrendered'

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST, GameStatus.SURRENDERED)


def ensure_playable(status: GameStatus) -> None:
    if status.is_terminal:
        raise GameOver(f'game is {status.value}; start a new game')


def status_after_reveal(grid: Grid, status: GameStatus, outcome: RevealOutcome) -> GameStatus:
    if outcome.hit_mine:
        return GameStatus.LOST
    if all_safe_revealed(grid):
        return GameStatus.WON
    if status is GameStatus.NOT_STARTED and not outcome.revealed:
        # Clicking a flagged tile does not start the game
        return status
    return GameStatus.IN_PROGRESS
