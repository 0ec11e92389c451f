"""Exceptions raised by the engine. Game-flow failures (illegal or rejected moves) are NOT exceptions: they resolve to False."""


class ChessError(Exception):
    """Base class for all errors raised by this package."""


class InvalidPositionError(ChessError):
    """A square name or coordinate that does not exist on the board."""


class GameStateError(ChessError):
    """Operation requested in a state of the game that does not allow it."""


class PromotionError(GameStateError):
    """No pawn is waiting for promotion, or the requested piece type is not an option."""


class ConfigError(ChessError):
    """Settings could not be parsed from the environment."""
