"""
Custom exceptions.

GameError (and its subclasses) are the "problems" a player can cause. Their message is echoed back to the player as-is,
so keep them short and readable.

GameDefectError is different: it means the engine itself is in a state that should be impossible. Nothing catches it.
"""


class GameError(Exception):
    """Base class for anything a player did wrong. Only carries a message."""


class InvalidMoveError(GameError):
    """Could not make sense of the move text (or of a square / cell in it)."""


class NotYourTurnError(GameError):
    """Move submitted while the other side is to move."""


class NotYourPieceError(GameError):
    """Trying to move a piece that belongs to the opponent, or playing in a game you are not part of."""


class IllegalMoveError(GameError):
    """Parsed fine, but the rules do not allow it."""


class GameOverError(GameError):
    """The game already finished."""


class UnknownGameError(GameError):
    """No game registered under the requested id."""


class GameDefectError(Exception):
    """Internal invariant got violated. Should abort the current request rather than being shown to a player."""
