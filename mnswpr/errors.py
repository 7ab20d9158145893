from __future__ import annotations


class EngineError(Exception):
    """Base class for every recoverable board engine failure."""


class InvalidDimensions(EngineError, ValueError):
    pass


class InvalidMineCount(EngineError, ValueError):
    pass


class MineCountUnsatisfiable(EngineError, ValueError):
    pass


class OutOfBounds(EngineError, IndexError):
    pass


class InvalidCommand(EngineError):
    pass


class GameOver(EngineError):
    pass


class NothingToUndo(EngineError):
    pass


class NothingToRedo(EngineError):
    pass
